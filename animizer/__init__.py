"""
Animizer - sprite animation sets packed into human-readable .animset files.

Features:
- Named animations made of frames on sprite sheets or single images
- Image paths stored once per file and referenced by id
- Relative image paths that survive moving the file with its images
- Playback timing queries
- CLI for inspecting and relocating .animset files
"""

__version__ = "0.1.0"

from animizer.model.types import Frame, Animation, AnimationSet
from animizer.io.codec import encode, decode
from animizer.utils.paths import relative_path

__all__ = [
    "Frame",
    "Animation",
    "AnimationSet",
    "encode",
    "decode",
    "relative_path",
]
