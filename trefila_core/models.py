"""Domain models for wire-drawing schedule computations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal, Optional, Tuple

DrawingMode = Literal["progressive", "uniform"]
PassStatus = Literal["OK", "High", "Low", "Critical"]

DRAWING_MODES: Tuple[str, ...] = ("progressive", "uniform")


class InvalidSpec(ValueError):
    """Raised when a drawing spec cannot produce a valid die schedule."""


@dataclass(frozen=True)
class DrawingSpec:
    """Input of a scheduling run. Diameters in millimetres."""

    entry_diameter: float
    exit_diameter: float
    pass_count: int
    mode: DrawingMode = "progressive"

    def validate(self) -> None:
        if self.mode not in DRAWING_MODES:
            raise InvalidSpec(f"Unsupported drawing mode: {self.mode}")
        if self.pass_count <= 0:
            raise InvalidSpec(f"Pass count must be positive, got {self.pass_count}.")
        if self.entry_diameter <= 0 or self.exit_diameter <= 0:
            raise InvalidSpec("Entry and exit diameters must be greater than zero.")
        if self.entry_diameter <= self.exit_diameter:
            raise InvalidSpec(
                f"Entry diameter ({self.entry_diameter} mm) must exceed "
                f"exit diameter ({self.exit_diameter} mm); drawing only reduces the wire."
            )


@dataclass(frozen=True)
class DieSchedule:
    """Diameter after each pass; the last entry is the exit diameter."""

    diameters: Tuple[float, ...]

    def __len__(self) -> int:
        return len(self.diameters)

    def __iter__(self) -> Iterator[float]:
        return iter(self.diameters)

    @property
    def final_diameter(self) -> float:
        return self.diameters[-1]


@dataclass(frozen=True)
class PassReduction:
    """Area reduction of a single pass."""

    pass_index: int  # 1-based
    reduction_percent: float


@dataclass(frozen=True)
class Recipe:
    """Named, dated snapshot of a spec and its die diameters."""

    name: str
    date: str
    entry_diameter: float
    exit_diameter: float
    pass_count: int
    diameters: Tuple[float, ...] = field(default_factory=tuple)
    id: Optional[str] = None

    def spec(self, mode: DrawingMode = "progressive") -> DrawingSpec:
        return DrawingSpec(
            entry_diameter=self.entry_diameter,
            exit_diameter=self.exit_diameter,
            pass_count=self.pass_count,
            mode=mode,
        )
