"""Reading and writing .animset files."""

from animizer.io.codec import (
    FILE_EXTENSION,
    encode,
    decode,
    dumps,
    loads,
    image_table,
    normalize_filename,
)
from animizer.io.errors import (
    AnimSetError,
    EncodeError,
    DecodeError,
    StructuralError,
    FormatError,
    ImageReferenceError,
    DuplicateKeyError,
)

__all__ = [
    "FILE_EXTENSION",
    "encode",
    "decode",
    "dumps",
    "loads",
    "image_table",
    "normalize_filename",
    "AnimSetError",
    "EncodeError",
    "DecodeError",
    "StructuralError",
    "FormatError",
    "ImageReferenceError",
    "DuplicateKeyError",
]
