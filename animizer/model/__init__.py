"""Animation set model and timing queries."""

from animizer.model.types import Frame, Animation, AnimationSet
from animizer.model.timing import (
    frame_durations,
    frame_start_times,
    total_duration,
    frame_index_at,
)

__all__ = [
    "Frame",
    "Animation",
    "AnimationSet",
    "frame_durations",
    "frame_start_times",
    "total_duration",
    "frame_index_at",
]
