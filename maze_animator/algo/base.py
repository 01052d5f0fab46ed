import random
from abc import ABC, abstractmethod
from typing import Iterator, NamedTuple
from maze_animator.core.grid import Grid
from maze_animator.core.errors import GeneratorStateError

class StepResult(NamedTuple):
    done: bool
    found: bool = False

UNINITIALIZED = "uninitialized"
GROWING = "growing"
COMPLETE = "complete"

def check_chunk(chunk_size: int) -> int:
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    return chunk_size

class Generator(ABC):
    """
    Resumable maze generator. initialize() builds the starting grid,
    step(chunk_size) advances by at most chunk_size primitive pops.
    """
    name = "generator"

    def __init__(self, grid: Grid, seed: int = None, rng: random.Random = None):
        self.grid = grid
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.state = UNINITIALIZED
        self.step_count = 0
        self.carved = 0

    @property
    def done(self) -> bool:
        return self.state == COMPLETE

    def _begin_step(self, chunk_size: int):
        check_chunk(chunk_size)
        if self.state == UNINITIALIZED:
            raise GeneratorStateError(f"{self.name} stepped before initialize()")

    @abstractmethod
    def initialize(self):
        pass

    @abstractmethod
    def step(self, chunk_size: int = 1) -> StepResult:
        pass

    def run(self, chunk_size: int = 100) -> Iterator[str]:
        """
        Yields a status string after every chunk.
        The actual grid modifications happen in-place on self.grid.
        """
        if self.state == UNINITIALIZED:
            self.initialize()
        while not self.step(chunk_size).done:
            yield f"{self.name}: {self.step_count} steps"
        yield "Done"

    def run_all(self, chunk_size: int = 100):
        """Helper to run the generator to completion."""
        for _ in self.run(chunk_size):
            pass
