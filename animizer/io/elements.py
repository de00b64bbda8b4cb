"""Element kinds of the .animset document."""

from enum import Enum
from typing import Optional


class ElementKind(Enum):
    """Recognized element tags."""
    ANIMSET = "animset"
    IMAGES = "images"
    IMAGE = "image"
    ANIM = "anim"
    FRAME = "frame"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["ElementKind"]:
        """Map a tag name to its kind, or None for unknown tags."""
        try:
            return cls(tag)
        except ValueError:
            return None


# Attribute names
ATTR_ID = "id"
ATTR_SOURCE = "source"
ATTR_CENTER = "center"
ATTR_SIZE = "size"
ATTR_TIME_FRAMES = "timeFrames"
ATTR_TIME_RATE = "timeRate"
ATTR_IMAGE_ID = "imageid"
