import logging
from typing import Callable
from maze_animator.algo.base import StepResult

logger = logging.getLogger(__name__)

MANUAL = "manual"
PLAY = "play"

# (rows + cols) // divisor cells of work per animation frame
PRIM_DIVISOR = 40
PRIM_FAST_DIVISOR = 20
KRUSKAL_DIVISOR = 4
DIJKSTRA_DIVISOR = 16

def chunk_size(mode: str, rows: int, cols: int, divisor: int) -> int:
    """
    Work budget for one step call. Manual stepping is always a single pop;
    play mode scales with the grid so a full run takes similar wall-clock time.
    """
    if mode == MANUAL:
        return 1
    if mode != PLAY:
        raise ValueError(f"Unknown step mode '{mode}'")
    if divisor <= 0:
        raise ValueError(f"divisor must be positive, got {divisor}")
    return max(1, (rows + cols) // divisor)

class StepLoop:
    """
    Pacing wrapper around a stepper(chunk_size) -> StepResult.
    An external clock calls tick() once per frame; play()/stop() flip the
    running flag, which is only checked between chunks.
    """
    def __init__(self, stepper: Callable[[int], StepResult], play_chunk: int, name: str = "loop"):
        self.stepper = stepper
        self.play_chunk = max(1, play_chunk)
        self.name = name
        self.running = False
        self.last: StepResult = StepResult(False)
        self.calls = 0

    @property
    def finished(self) -> bool:
        return self.last.done

    def play(self):
        if self.finished:
            return
        self.running = True
        logger.debug(f"{self.name}: play (chunk {self.play_chunk})")

    def stop(self):
        self.running = False

    def advance(self, chunk: int) -> StepResult:
        self.last = self.stepper(chunk)
        self.calls += 1
        if self.last.done:
            self.running = False
        return self.last

    def step_once(self) -> StepResult:
        return self.advance(1)

    def tick(self) -> StepResult:
        if not self.running:
            return self.last
        return self.advance(self.play_chunk)

    def run_to_end(self) -> StepResult:
        """Runs play-sized chunks until the stepper reports done."""
        while not self.advance(self.play_chunk).done:
            pass
        return self.last
