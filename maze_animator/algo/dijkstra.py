import heapq
import logging
from array import array
from typing import Iterator, List, Tuple
from maze_animator.core.grid import Grid, Position
from maze_animator.core.errors import SearchStateError
from maze_animator.algo.base import StepResult, check_chunk

logger = logging.getLogger(__name__)

IDLE = "idle"
SEARCHING = "searching"
PATH_FOUND = "pathFound"
NO_PATH = "noPath"

# Dense arrays: -1 stands for infinite distance / no predecessor
UNREACHED = -1
NO_PREDECESSOR = -1

class DijkstraSearch:
    """
    Unit-weight Dijkstra over PASSAGE/TARGET cells, advanced in chunks.

    idle --begin()--> searching --step()--> pathFound | noPath
    reset() returns to idle from any state.
    """
    TRAVERSABLE = (Grid.PASSAGE, Grid.TARGET)

    def __init__(self, grid: Grid, source: Position, target: Position):
        for name, pos in (("source", source), ("target", target)):
            if not grid.is_in_bounds(*pos):
                raise IndexError(f"{name} {pos} out of bounds")
            if grid.get_status(*pos) == Grid.BLOCKED:
                raise ValueError(f"{name} {pos} is on a blocked cell")

        self.grid = grid
        self.source = tuple(source)
        self.target = tuple(target)
        self.state = IDLE
        self.queue: List[Tuple[int, int, int]] = []
        self.distances = array('i')
        self.visited = array('B')
        self.predecessors = array('i')
        self.visited_count = 0
        self.pops = 0

    @property
    def done(self) -> bool:
        return self.state in (PATH_FOUND, NO_PATH)

    @property
    def found(self) -> bool:
        return self.state == PATH_FOUND

    def reset(self):
        self.state = IDLE
        self.queue = []
        self.distances = array('i')
        self.visited = array('B')
        self.predecessors = array('i')
        self.visited_count = 0
        self.pops = 0

    def begin(self):
        size = self.grid.width * self.grid.height
        self.distances = array('i', [UNREACHED] * size)
        self.visited = array('B', [0] * size)
        self.predecessors = array('i', [NO_PREDECESSOR] * size)
        self.visited_count = 0
        self.pops = 0

        src_idx = self.grid.get_index(*self.source)
        self.distances[src_idx] = 0
        self.predecessors[src_idx] = src_idx
        self.queue = [(0, self.source[0], self.source[1])]
        self.state = SEARCHING

    def distance_to(self, pos: Position) -> int:
        if self.state == IDLE:
            raise SearchStateError("Search has not begun")
        return self.distances[self.grid.get_index(*pos)]

    def is_visited(self, pos: Position) -> bool:
        if self.state == IDLE:
            return False
        return bool(self.visited[self.grid.get_index(*pos)])

    def step(self, chunk_size: int = 1) -> StepResult:
        check_chunk(chunk_size)
        if self.state == IDLE:
            raise SearchStateError("step() called before begin()")
        if self.done:
            return StepResult(True, self.found)

        grid = self.grid
        target_idx = grid.get_index(*self.target)
        markers = (self.source, self.target)

        count = 0
        while count < chunk_size and self.queue:
            count += 1
            dist, cx, cy = heapq.heappop(self.queue)
            self.pops += 1
            curr_idx = cy * grid.width + cx

            # Lazy deletion of stale entries
            if self.visited[curr_idx]:
                continue
            self.visited[curr_idx] = 1
            self.visited_count += 1
            if (cx, cy) not in markers:
                grid.set_status(cx, cy, Grid.VISITED)

            curr_d = self.distances[curr_idx]
            for nx, ny in grid.get_neighbors(cx, cy):
                n_idx = ny * grid.width + nx
                if self.visited[n_idx] or grid.cells[n_idx] not in self.TRAVERSABLE:
                    continue
                new_d = curr_d + 1
                old_d = self.distances[n_idx]
                if old_d == UNREACHED or new_d < old_d:
                    self.distances[n_idx] = new_d
                    self.predecessors[n_idx] = curr_idx
                    heapq.heappush(self.queue, (new_d, nx, ny))

            if curr_idx == target_idx:
                break

        if self.visited[target_idx]:
            self.state = PATH_FOUND
            logger.info(f"Path found: distance {self.distances[target_idx]}, {self.visited_count} cells visited")
        elif not self.queue:
            self.state = NO_PATH
            logger.info(f"No path from {self.source} to {self.target} ({self.visited_count} cells visited)")
        return StepResult(self.done, self.found)

    def run(self, chunk_size: int = 100) -> Iterator[str]:
        if self.state == IDLE:
            self.begin()
        while not self.step(chunk_size).done:
            yield f"Visited: {self.visited_count}"
        yield "Solved" if self.found else "No Path"

    def reconstruct_path(self) -> List[Position]:
        """Ordered source -> target cells, empty if the target was never reached."""
        if self.state == IDLE:
            return []
        grid = self.grid
        target_idx = grid.get_index(*self.target)
        src_idx = grid.get_index(*self.source)
        if not self.visited[target_idx]:
            return []

        path = []
        idx = target_idx
        # A predecessor chain can never be longer than the grid
        for _ in range(grid.width * grid.height):
            path.append(grid.position_of(idx))
            if idx == src_idx:
                break
            idx = self.predecessors[idx]
            if idx == NO_PREDECESSOR:
                raise SearchStateError(f"Broken predecessor chain at {path[-1]}")
        path.reverse()
        return path

    def reveal(self) -> "PathReveal":
        return PathReveal(self.grid, self.reconstruct_path())

class PathReveal:
    """
    Lazily colours the interior of a path, one cell per pull.
    cancel() stops it before the next pull; endpoints keep their markers.
    """
    def __init__(self, grid: Grid, path: List[Position]):
        self.grid = grid
        self.path = path
        self.cells = path[1:-1]
        self.index = 0
        self.cancelled = False

    @property
    def done(self) -> bool:
        return self.cancelled or self.index >= len(self.cells)

    def cancel(self):
        self.cancelled = True

    def __iter__(self):
        return self

    def __next__(self) -> Position:
        if self.done:
            raise StopIteration
        x, y = self.cells[self.index]
        self.index += 1
        self.grid.set_status(x, y, Grid.SHORTEST_PATH)
        return (x, y)

def init_search(grid: Grid, source: Position, target: Position) -> DijkstraSearch:
    search = DijkstraSearch(grid, source, target)
    search.begin()
    return search

def reconstruct_path(search: DijkstraSearch, source: Position = None, target: Position = None) -> List[Position]:
    if source is not None and tuple(source) != search.source:
        raise ValueError(f"Search was run from {search.source}, not {source}")
    if target is not None and tuple(target) != search.target:
        raise ValueError(f"Search was run to {search.target}, not {target}")
    return search.reconstruct_path()
