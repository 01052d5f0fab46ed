import logging
import random
from dataclasses import replace
from typing import Iterable, List, Optional
from maze_animator.config import AnimatorConfig
from maze_animator.core.grid import Grid, Position, StatusListener
from maze_animator.algo.base import Generator, StepResult
from maze_animator.algo.prim import RandomizedPrim
from maze_animator.algo.kruskal import RandomizedKruskal
from maze_animator.algo.dijkstra import DijkstraSearch, PathReveal, init_search
from maze_animator.algo.chunking import StepLoop, chunk_size, PLAY

logger = logging.getLogger(__name__)

GENERATORS = {
    "prim": RandomizedPrim,
    "kruskal": RandomizedKruskal,
}

PAINT_MODES = ("blocked", "passage")
MARKER_MODES = ("source", "target")

def init_generator(rows: int, cols: int, algo: str = "prim", seed: int = None,
                   rng: random.Random = None, listeners: Iterable[StatusListener] = ()) -> Generator:
    """Creates a fresh grid and an initialized generator growing on it."""
    if algo not in GENERATORS:
        raise ValueError(f"Unknown generator '{algo}', expected one of {tuple(GENERATORS)}")
    grid = Grid(cols, rows, Grid.BLOCKED)
    for listener in listeners:
        grid.subscribe(listener)
    generator = GENERATORS[algo](grid, seed=seed, rng=rng)
    generator.initialize()
    return generator

class Session:
    """
    Everything one visualizer page owns: the grid, the active generator,
    source/target markers, the search and the path reveal.
    A UI calls the methods below and tick() once per frame.
    """
    def __init__(self, config: AnimatorConfig = None, event_writer=None, rng: random.Random = None):
        self.config = config or AnimatorConfig()
        self.event_writer = event_writer
        self.rng = rng

        self.grid: Optional[Grid] = None
        self.generator: Optional[Generator] = None
        self.gen_loop: Optional[StepLoop] = None
        self.search: Optional[DijkstraSearch] = None
        self.search_loop: Optional[StepLoop] = None
        self.reveal: Optional[PathReveal] = None
        self.search_paused = False
        self.no_path = False

        self.source: Optional[Position] = None
        self.target: Optional[Position] = None
        self.drawing_mode = "source"

        if self.event_writer:
            self.event_writer.write_header(self.config.cols, self.config.rows)
        self.clear()

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def draw_mode(self) -> bool:
        return self.config.algo == "draw"

    def _listeners(self) -> List[StatusListener]:
        return [self.event_writer.log_status] if self.event_writer else []

    # ==== Grid lifecycle ====

    def clear(self):
        """Drops markers and search state and rebuilds the grid from scratch."""
        self._cancel_reveal()
        if self.event_writer and self.grid is not None:
            self.event_writer.log_reset(self.cols, self.rows)

        self.source = None
        self.target = None
        self.search = None
        self.search_loop = None
        self.search_paused = False
        self.no_path = False

        if self.draw_mode:
            self.grid = Grid(self.cols, self.rows, Grid.BLOCKED)
            for listener in self._listeners():
                self.grid.subscribe(listener)
            self.grid.fill(Grid.PASSAGE)
            self.generator = None
            self.gen_loop = None
            self.drawing_mode = "blocked"
        else:
            self.generator = init_generator(self.rows, self.cols, self.config.algo,
                                            seed=self.config.seed, rng=self.rng,
                                            listeners=self._listeners())
            self.grid = self.generator.grid
            divisor = self.config.prim_divisor if self.config.algo == "prim" else self.config.kruskal_divisor
            self.gen_loop = StepLoop(self.generator.step, chunk_size(PLAY, self.rows, self.cols, divisor),
                                     name=self.config.algo)
            self.drawing_mode = "source"

        logger.debug(f"Session cleared: {self.rows}x{self.cols} {self.config.algo}")

    def resize(self, rows: int, cols: int):
        self.config = replace(self.config, rows=rows, cols=cols)
        self.clear()

    # ==== Generation ====

    @property
    def generation_done(self) -> bool:
        return self.generator is None or self.generator.done

    def step_generator(self) -> StepResult:
        if self.gen_loop is None:
            return StepResult(True)
        return self.gen_loop.step_once()

    def play_generator(self):
        if self.gen_loop:
            self.gen_loop.play()

    def stop_generator(self):
        if self.gen_loop:
            self.gen_loop.stop()

    def run_generator_to_end(self) -> StepResult:
        if self.gen_loop is None:
            return StepResult(True)
        return self.gen_loop.run_to_end()

    def toggle_generator(self):
        if self.gen_loop and self.gen_loop.running:
            self.stop_generator()
        else:
            self.play_generator()

    # ==== Markers and edits ====

    def place_source(self, x: int, y: int) -> bool:
        return self._place_marker("source", x, y)

    def place_target(self, x: int, y: int) -> bool:
        return self._place_marker("target", x, y)

    def _place_marker(self, role: str, x: int, y: int) -> bool:
        if not self.generation_done:
            logger.debug(f"Cannot place {role} on ({x}, {y}): maze still generating")
            return False
        if self.grid.get_status(x, y) != Grid.PASSAGE:
            logger.debug(f"Cannot place {role} on ({x}, {y}): not a passage")
            return False

        self.clear_search_results()
        status = Grid.SOURCE if role == "source" else Grid.TARGET
        previous = getattr(self, role)
        if previous is not None:
            self.grid.set_status(previous[0], previous[1], Grid.PASSAGE)
        self.grid.set_status(x, y, status)
        setattr(self, role, (x, y))
        return True

    def paint(self, x: int, y: int, mode: str) -> bool:
        return self.paint_line((x, y), (x, y), mode)

    def paint_line(self, start: Position, end: Position, mode: str) -> bool:
        if mode not in PAINT_MODES:
            raise ValueError(f"Can only paint {PAINT_MODES}, got '{mode}'")
        if not self.generation_done:
            logger.debug("Paint ignored: maze still generating")
            return False
        self.clear_search_results()
        status = Grid.BLOCKED if mode == "blocked" else Grid.PASSAGE
        painted = self.grid.paint_line(start, end, status)
        if self.source in painted:
            self.source = None
        if self.target in painted:
            self.target = None
        return True

    def click(self, x: int, y: int) -> bool:
        """Applies the current drawing mode to a cell, as a pointer press would."""
        if not self.grid.is_in_bounds(x, y):
            return False
        mode = self.drawing_mode
        if mode in PAINT_MODES:
            return self.paint(x, y, mode)
        if mode == "source":
            placed = self.place_source(x, y)
        else:
            placed = self.place_target(x, y)
        # Maze pages alternate source -> target -> source
        if placed and not self.draw_mode:
            self.drawing_mode = "target" if mode == "source" else "source"
        return placed

    def drag(self, start: Position, end: Position):
        if self.drawing_mode in PAINT_MODES:
            self.paint_line(start, end, self.drawing_mode)

    def set_drawing_mode(self, mode: str):
        allowed = PAINT_MODES + MARKER_MODES if self.draw_mode else MARKER_MODES
        if mode not in allowed:
            raise ValueError(f"Drawing mode '{mode}' not available, expected one of {allowed}")
        self.drawing_mode = mode

    # ==== Search ====

    @property
    def search_ready(self) -> bool:
        return self.generation_done and self.source is not None and self.target is not None

    def _prepare_search(self):
        self.search = init_search(self.grid, self.source, self.target)
        play_chunk = chunk_size(PLAY, self.rows, self.cols, self.config.dijkstra_divisor)
        self.search_loop = StepLoop(self.search.step, play_chunk, name="dijkstra")
        self.no_path = False

    def step_search(self) -> StepResult:
        if not self.search_ready:
            logger.debug("Search step ignored: maze unfinished or markers missing")
            return StepResult(False, False)
        if self.search is None:
            self._prepare_search()
        result = self.search_loop.step_once()
        self._after_search_step(result)
        return result

    def play_search(self):
        if not self.search_ready:
            logger.debug("Search play ignored: maze unfinished or markers missing")
            return
        if not self.search_paused or self.search is None:
            self.clear_search_results()
            self._prepare_search()
        self.search_paused = False
        self.search_loop.play()

    def stop_search(self):
        if self.search_loop:
            self.search_loop.stop()
            self.search_paused = True

    def toggle_search(self):
        if self.search_loop and self.search_loop.running:
            self.stop_search()
        else:
            self.play_search()

    def run_search_to_end(self) -> StepResult:
        """Headless search: runs every chunk and reveals the whole path at once."""
        if not self.search_ready:
            return StepResult(False, False)
        if self.search is None:
            self._prepare_search()
        result = self.search_loop.run_to_end()
        self._after_search_step(result)
        if self.reveal:
            for _ in self.reveal:
                pass
            self.reveal = None
        return result

    def _after_search_step(self, result: StepResult):
        if not result.done:
            return
        if result.found:
            self._start_reveal()
        elif not self.no_path:
            self.no_path = True
            logger.info("No path exists between source and target")

    def _start_reveal(self):
        self._cancel_reveal()
        self.reveal = self.search.reveal()

    def _cancel_reveal(self):
        if self.reveal:
            self.reveal.cancel()
            self.reveal = None

    def clear_search_results(self):
        self._cancel_reveal()
        if self.search_loop:
            self.search_loop.stop()
        self.search = None
        self.search_loop = None
        self.search_paused = False
        self.no_path = False
        if self.grid is None:
            return

        self.grid.replace((Grid.VISITED, Grid.SHORTEST_PATH), Grid.PASSAGE)
        if self.source:
            self.grid.set_status(self.source[0], self.source[1], Grid.SOURCE)
        if self.target:
            self.grid.set_status(self.target[0], self.target[1], Grid.TARGET)

    def shortest_path(self) -> List[Position]:
        return self.search.reconstruct_path() if self.search else []

    # ==== Frame pacing ====

    def tick(self):
        """One animation frame: a generator chunk, a search chunk, one revealed path cell."""
        if self.gen_loop and self.gen_loop.running:
            self.gen_loop.tick()
        if self.search_loop and self.search_loop.running:
            self._after_search_step(self.search_loop.tick())
        if self.reveal:
            if next(self.reveal, None) is None:
                self.reveal = None

    @property
    def busy(self) -> bool:
        return bool((self.gen_loop and self.gen_loop.running)
                    or (self.search_loop and self.search_loop.running)
                    or self.reveal)

    def status_text(self) -> str:
        if not self.generation_done:
            return "Generating" if self.gen_loop.running else "Generation paused"
        if not self.search_ready:
            return "Place source" if self.source is None else "Place target"
        if self.search is None:
            return "Ready"
        if self.search.found:
            return f"Path length {len(self.search.reconstruct_path()) - 1}"
        if self.no_path:
            return "No path exists"
        return "Searching" if self.search_loop.running else "Search paused"
