"""Exceptions raised while packing and unpacking animation sets.

File system failures are not wrapped: ``OSError`` reaches the caller as is.
"""


class AnimSetError(Exception):
    """Base class for animation set errors."""


class EncodeError(AnimSetError):
    """An animation set cannot be written (bad name, number or image path)."""


class DecodeError(AnimSetError):
    """A document cannot be turned back into an animation set."""


class StructuralError(DecodeError):
    """Elements appear in an order the format does not allow."""


class FormatError(DecodeError):
    """An attribute is missing or its value does not parse."""


class ImageReferenceError(DecodeError):
    """A frame points at an image id that is not in the images table."""


class DuplicateKeyError(DecodeError):
    """An image id (or animation name, when rejected by config) repeats."""
