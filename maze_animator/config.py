from dataclasses import dataclass, asdict
from typing import Optional
from maze_animator.algo.chunking import PRIM_DIVISOR, KRUSKAL_DIVISOR, DIJKSTRA_DIVISOR

ALGORITHMS = ("prim", "kruskal", "draw")

@dataclass
class AnimatorConfig:
    rows: int = 99
    cols: int = 99
    algo: str = "prim"
    seed: Optional[int] = None
    prim_divisor: int = PRIM_DIVISOR
    kruskal_divisor: int = KRUSKAL_DIVISOR
    dijkstra_divisor: int = DIJKSTRA_DIVISOR
    window_width: int = 1280
    window_height: int = 720
    fps: int = 60

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid size must be positive, got {self.rows}x{self.cols}")
        if self.algo not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm '{self.algo}', expected one of {ALGORITHMS}")
        for name in ("prim_divisor", "kruskal_divisor", "dijkstra_divisor", "fps"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    @property
    def has_even_size(self) -> bool:
        return self.rows % 2 == 0 or self.cols % 2 == 0

    @classmethod
    def from_args(cls, args) -> "AnimatorConfig":
        """Builds a config from an argparse namespace, ignoring missing options."""
        values = {}
        for name in cls.__dataclass_fields__:
            value = getattr(args, name, None)
            if value is not None:
                values[name] = value
        return cls(**values)

    def to_dict(self):
        return asdict(self)
