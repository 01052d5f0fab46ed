import logging
from typing import List, Tuple
from maze_animator.core.grid import Grid, Position
from maze_animator.core.disjoint_set import DisjointSet
from maze_animator.core.errors import GroupBookkeepingError
from maze_animator.algo.base import Generator, StepResult, GROWING, COMPLETE

logger = logging.getLogger(__name__)

class RandomizedKruskal(Generator):
    name = "kruskal"

    def __init__(self, grid: Grid, seed: int = None, rng=None):
        super().__init__(grid, seed, rng)
        self.walls: List[Position] = []
        self.sets = DisjointSet()
        self.rooms = 0
        self.skipped_walls = 0

    @property
    def groups(self) -> int:
        return self.sets.groups

    def initialize(self):
        grid = self.grid
        grid.fill(Grid.BLOCKED)
        self.sets = DisjointSet()
        self.walls = []
        self.step_count = 0
        self.carved = 0
        self.skipped_walls = 0

        group_id = 0
        for y in range(0, grid.height, 2):
            for x in range(0, grid.width, 2):
                grid.set_status(x, y, Grid.PASSAGE)
                grid.set_group(x, y, group_id)
                self.sets.add(group_id)
                group_id += 1

                # Walls to the east and south, only between two rooms
                if x + 2 < grid.width:
                    self.walls.append((x + 1, y))
                if y + 2 < grid.height:
                    self.walls.append((x, y + 1))
        self.rooms = group_id

        # random.shuffle is Fisher-Yates
        self.rng.shuffle(self.walls)

        self.state = GROWING if self.walls and self.groups > 1 else COMPLETE
        logger.debug(f"Kruskal init: {self.rooms} rooms, {len(self.walls)} walls")

    @staticmethod
    def flanking_rooms(wall: Position) -> Tuple[Position, Position]:
        x, y = wall
        if x % 2 != 0:
            return (x - 1, y), (x + 1, y)
        return (x, y - 1), (x, y + 1)

    def step(self, chunk_size: int = 1) -> StepResult:
        self._begin_step(chunk_size)
        if self.state == COMPLETE:
            return StepResult(True)

        count = 0
        while count < chunk_size and self.walls and self.groups > 1:
            count += 1
            wall = self.walls.pop()
            self.step_count += 1

            (ax, ay), (bx, by) = self.flanking_rooms(wall)
            if not (self.grid.is_in_bounds(ax, ay) and self.grid.is_in_bounds(bx, by)):
                continue

            try:
                group_a = self.grid.get_group(ax, ay)
                group_b = self.grid.get_group(bx, by)
                if group_a == Grid.NO_GROUP or group_b == Grid.NO_GROUP:
                    raise GroupBookkeepingError(f"Room next to wall {wall} has no group")
                joined = self.sets.connected(group_a, group_b)
            except GroupBookkeepingError as e:
                self.skipped_walls += 1
                logger.warning(f"Skipping wall {wall}: {e}")
                continue

            if not joined:
                self.grid.set_status(wall[0], wall[1], Grid.PASSAGE)
                self.sets.union(group_a, group_b)
                self.carved += 1

        if not self.walls or self.groups <= 1:
            self.state = COMPLETE
            logger.info(f"Kruskal complete: {self.carved} walls carved, {self.groups} group(s) left")
        return StepResult(self.state == COMPLETE)
