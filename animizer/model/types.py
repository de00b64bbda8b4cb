"""Animation set data model."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Frame:
    """One still of an animation.

    The frame points at a rectangular region of a source image (usually a
    sprite sheet) and is shown for ``time_frames / time_rate`` time units.
    """
    center_x: float
    center_y: float
    size_x: float
    size_y: float
    time_frames: float
    time_rate: float
    image: str

    @property
    def center(self) -> Tuple[float, float]:
        return (self.center_x, self.center_y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.size_x, self.size_y)

    @property
    def duration(self) -> float:
        """Display time in the consumer's time unit."""
        return self.time_frames / self.time_rate


@dataclass
class Animation:
    """Named, ordered list of frames."""
    name: str
    frames: List[Frame] = field(default_factory=list)


# Animation name -> Animation
AnimationSet = Dict[str, Animation]
