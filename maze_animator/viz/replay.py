from typing import Iterator
from maze_animator.core.grid import Grid
from maze_animator.core.events import EventReader, EVT_STATUS, EVT_RESET

class EventAdapter:
    """
    Replays a status event log onto a Grid, a chunk of events per step.
    Looks like a generator to the Renderer: step(chunk) -> done.
    """
    def __init__(self, reader: EventReader, grid: Grid = None):
        self.reader = reader
        if grid is None:
            width, height = reader.read_header()
            grid = Grid(width, height)
        self.grid = grid
        self.events = reader.stream_events()
        self.applied = 0
        self.resets = 0
        self.done = False

    def apply(self, type_code: int, data: tuple):
        if type_code == EVT_STATUS:
            x, y, status = data
            self.grid.set_status(x, y, status)
        elif type_code == EVT_RESET:
            width, height = data
            # Same-size resets reuse the grid object
            if (width, height) != (self.grid.width, self.grid.height):
                listeners = self.grid.listeners
                self.grid = Grid(width, height)
                self.grid.listeners = listeners
            else:
                self.grid.fill(Grid.BLOCKED)
            self.resets += 1
        self.applied += 1

    def step(self, chunk_size: int = 50) -> bool:
        if self.done:
            return True
        for _ in range(chunk_size):
            event = next(self.events, None)
            if event is None:
                self.done = True
                break
            self.apply(*event)
        return self.done

    def run(self, chunk_size: int = 50) -> Iterator[str]:
        while not self.step(chunk_size):
            yield "Replay"
        yield "Done"

    def run_all(self):
        for _ in self.run(1000):
            pass
