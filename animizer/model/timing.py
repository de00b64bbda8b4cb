"""Playback timing queries for animations."""

import numpy as np
from animizer.model.types import Animation


def frame_durations(animation: Animation) -> np.ndarray:
    """Compute the display time of every frame.

    Args:
        animation: Animation to inspect

    Returns:
        Array of ``time_frames / time_rate`` per frame, in playback order

    Raises:
        ValueError: If a frame has a non-positive time rate
    """
    frames = np.array([f.time_frames for f in animation.frames], dtype=float)
    rates = np.array([f.time_rate for f in animation.frames], dtype=float)

    if np.any(rates <= 0):
        bad = int(np.argmax(rates <= 0))
        raise ValueError(
            f"Frame {bad} of animation '{animation.name}' has non-positive timeRate {rates[bad]}"
        )

    return frames / rates


def frame_start_times(animation: Animation) -> np.ndarray:
    """Offsets at which each frame starts, first frame at 0."""
    durations = frame_durations(animation)
    if durations.size == 0:
        return durations
    return np.concatenate(([0.0], np.cumsum(durations)[:-1]))


def total_duration(animation: Animation) -> float:
    """Length of one pass through the animation."""
    return float(frame_durations(animation).sum())


def frame_index_at(animation: Animation, time: float, loop: bool = True) -> int:
    """Find the frame shown at a given time.

    Args:
        animation: Animation to sample
        time: Time since playback start
        loop: Wrap time around the total duration. When False, time is
            clamped and the last frame holds once playback ends.

    Returns:
        Index into ``animation.frames``
    """
    durations = frame_durations(animation)
    if durations.size == 0:
        raise ValueError(f"Animation '{animation.name}' has no frames")

    ends = np.cumsum(durations)
    total = ends[-1]

    if loop and total > 0:
        time = time % total
    else:
        time = min(max(time, 0.0), total)

    index = int(np.searchsorted(ends, time, side='right'))
    return min(index, durations.size - 1)
