import logging
from typing import List, Optional
from maze_animator.core.grid import Grid, Position
from maze_animator.algo.base import Generator, StepResult, GROWING, COMPLETE

logger = logging.getLogger(__name__)

class RandomizedPrim(Generator):
    """
    Randomized Prim on a room/wall lattice: rooms sit two cells apart and
    the cell between two rooms is carved when they are joined.
    """
    name = "prim"

    def __init__(self, grid: Grid, seed: int = None, rng=None, start: Optional[Position] = None):
        super().__init__(grid, seed, rng)
        self.start = start
        self.frontier: List[Position] = []

    def random_start(self) -> Position:
        # Odd coordinate on each axis, clamped for tiny grids
        def rand_odd(limit: int) -> int:
            if limit // 2 == 0:
                return 0
            return min(self.rng.randrange(limit // 2) * 2 + 1, limit - 1)
        return rand_odd(self.grid.width), rand_odd(self.grid.height)

    def initialize(self):
        self.grid.fill(Grid.BLOCKED)
        self.frontier = []
        self.step_count = 0
        self.carved = 0

        if self.start is None:
            self.start = self.random_start()
        sx, sy = self.start
        self.grid.set_status(sx, sy, Grid.PASSAGE)
        self.add_frontier(sx, sy)

        self.state = GROWING if self.frontier else COMPLETE
        logger.debug(f"Prim start {self.start}, frontier {len(self.frontier)}")

    def add_frontier(self, x: int, y: int):
        # Marking as FRONTIER keeps a cell from being queued twice
        for nx, ny in self.grid.get_neighbors(x, y, step=2):
            if self.grid.get_status(nx, ny) == Grid.BLOCKED:
                self.grid.set_status(nx, ny, Grid.FRONTIER)
                self.frontier.append((nx, ny))

    def passage_neighbors(self, x: int, y: int) -> List[Position]:
        return [(nx, ny) for nx, ny in self.grid.get_neighbors(x, y, step=2)
                if self.grid.get_status(nx, ny) == Grid.PASSAGE]

    def pop_random(self) -> Position:
        # Swap remove for O(1)
        idx = self.rng.randrange(len(self.frontier))
        cell = self.frontier[idx]
        self.frontier[idx] = self.frontier[-1]
        self.frontier.pop()
        return cell

    def step(self, chunk_size: int = 1) -> StepResult:
        self._begin_step(chunk_size)
        if self.state == COMPLETE:
            return StepResult(True)

        count = 0
        while count < chunk_size and self.frontier:
            count += 1
            cx, cy = self.pop_random()
            self.step_count += 1

            neighbors = self.passage_neighbors(cx, cy)
            if not neighbors:
                # Not reachable from the maze any more, drop it
                if self.grid.get_status(cx, cy) == Grid.FRONTIER:
                    self.grid.set_status(cx, cy, Grid.BLOCKED)
                continue

            nx, ny = self.rng.choice(neighbors)
            self.grid.set_status((cx + nx) // 2, (cy + ny) // 2, Grid.PASSAGE)
            self.grid.set_status(cx, cy, Grid.PASSAGE)
            self.carved += 1
            self.add_frontier(cx, cy)

        if not self.frontier:
            self.state = COMPLETE
            logger.info(f"Prim complete: {self.carved} walls carved in {self.step_count} steps")
        return StepResult(self.state == COMPLETE)
