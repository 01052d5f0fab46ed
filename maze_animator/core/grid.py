from array import array
from typing import Callable, Iterable, Iterator, List, Tuple

Position = Tuple[int, int]
StatusListener = Callable[[int, int, int], None]

class Grid:
    # Cell status codes (exactly one per cell)
    BLOCKED       = 0
    PASSAGE       = 1
    FRONTIER      = 2
    VISITED       = 3
    SOURCE        = 4
    TARGET        = 5
    SHORTEST_PATH = 6

    STATUS_NAMES = {
        BLOCKED: "blocked",
        PASSAGE: "passage",
        FRONTIER: "frontier",
        VISITED: "visited",
        SOURCE: "source",
        TARGET: "target",
        SHORTEST_PATH: "shortestPath",
    }

    # One character per status for text dumps
    STATUS_CHARS = {
        BLOCKED: "#",
        PASSAGE: ".",
        FRONTIER: "f",
        VISITED: "v",
        SOURCE: "S",
        TARGET: "T",
        SHORTEST_PATH: "*",
    }

    # Direction helpers, ordered west, east, north, south
    DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

    NO_GROUP = -1

    __slots__ = ('width', 'height', 'cells', 'group_ids', 'listeners', 'event_writer')

    def __init__(self, width: int, height: int, initial_status: int = BLOCKED, event_writer=None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if initial_status not in self.STATUS_NAMES:
            raise ValueError(f"Unknown cell status {initial_status}")

        self.width = width
        self.height = height
        # 'B' (unsigned char) -> 1 byte per cell
        self.cells = array('B', [initial_status] * (width * height))
        # Disjoint-set membership, only meaningful for Kruskal rooms
        self.group_ids = array('i', [self.NO_GROUP] * (width * height))
        self.listeners: List[StatusListener] = []
        self.event_writer = event_writer

        if self.event_writer:
            self.event_writer.write_header(width, height)
            self.subscribe(self.event_writer.log_status)

    @property
    def rows(self) -> int:
        return self.height

    @property
    def cols(self) -> int:
        return self.width

    def subscribe(self, listener: StatusListener):
        self.listeners.append(listener)

    def unsubscribe(self, listener: StatusListener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def position_of(self, idx: int) -> Position:
        return (idx % self.width, idx // self.width)

    def get_status(self, x: int, y: int) -> int:
        return self.cells[self.get_index(x, y)]

    def set_status(self, x: int, y: int, status: int):
        """
        Sets a single cell and notifies every listener once.
        Rendering happens in the listeners, the grid only stores statuses.
        """
        if status not in self.STATUS_NAMES:
            raise ValueError(f"Unknown cell status {status}")
        idx = self.get_index(x, y)
        self.cells[idx] = status
        for listener in self.listeners:
            listener(x, y, status)

    def get_group(self, x: int, y: int) -> int:
        return self.group_ids[self.get_index(x, y)]

    def set_group(self, x: int, y: int, group_id: int):
        self.group_ids[self.get_index(x, y)] = group_id

    def is_traversable(self, x: int, y: int) -> bool:
        status = self.cells[self.get_index(x, y)]
        return status != self.BLOCKED

    def get_neighbors(self, x: int, y: int, step: int = 1) -> Iterator[Position]:
        """
        Yields (nx, ny) for in-bounds cells 'step' cells away along each axis.
        Does NOT check statuses.
        """
        for dx, dy in self.DIRECTIONS:
            nx, ny = x + dx * step, y + dy * step
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield (nx, ny)

    def fill(self, status: int):
        for y in range(self.height):
            for x in range(self.width):
                self.set_status(x, y, status)
        self.group_ids = array('i', [self.NO_GROUP] * (self.width * self.height))

    def replace(self, old_statuses: Iterable[int], new_status: int) -> int:
        """Rewrites every cell whose status is in old_statuses. Returns how many changed."""
        old = set(old_statuses)
        changed = 0
        for idx, status in enumerate(self.cells):
            if status in old:
                x, y = self.position_of(idx)
                self.set_status(x, y, new_status)
                changed += 1
        return changed

    def count(self, status: int) -> int:
        return self.cells.count(status)

    def positions(self, status: int) -> List[Position]:
        return [self.position_of(i) for i, s in enumerate(self.cells) if s == status]

    def paint_line(self, start: Position, end: Position, status: int) -> List[Position]:
        """
        Paints every cell on the Bresenham line from start to end (inclusive).
        Cells off the grid are skipped. Returns the painted cells in order.
        """
        x0, y0 = start
        x1, y1 = end
        dx = abs(x1 - x0)
        sx = 1 if x0 < x1 else -1
        dy = -abs(y1 - y0)
        sy = 1 if y0 < y1 else -1
        error = dx + dy

        painted = []
        while True:
            if self.is_in_bounds(x0, y0):
                self.set_status(x0, y0, status)
                painted.append((x0, y0))
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * error
            if e2 >= dy:
                if x0 == x1: break
                error += dy
                x0 += sx
            if e2 <= dx:
                if y0 == y1: break
                error += dx
                y0 += sy
        return painted

    def rows_as_text(self) -> List[str]:
        lines = []
        for y in range(self.height):
            row = self.cells[y * self.width:(y + 1) * self.width]
            lines.append("".join(self.STATUS_CHARS[s] for s in row))
        return lines

def create_grid(rows: int, cols: int, initial_status: int = Grid.BLOCKED, event_writer=None) -> Grid:
    return Grid(cols, rows, initial_status, event_writer=event_writer)
