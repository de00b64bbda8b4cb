"""Relative path computation for image sources."""

import os
import posixpath
from pathlib import Path
from urllib.parse import unquote, urlsplit


def relative_path(target: str, reference_dir: str) -> str:
    """Express a file path relative to a directory.

    Both paths are made absolute (against the working directory when they
    are relative) and compared as file URIs, so any characters the URI form
    percent-encodes are decoded again in the result.

    Args:
        target: Path of the file
        reference_dir: Directory the result is relative to. A trailing
            separator is optional.

    Returns:
        Relative path using the platform separator. When the two paths live
        on different drives no relative form exists and the absolute target
        is returned.
    """
    target = os.fspath(target)
    reference_dir = os.fspath(reference_dir)

    # Directories must end in a separator
    if not reference_dir.endswith((os.sep, '/')):
        reference_dir += os.sep

    target_abs = os.path.abspath(target)
    folder_abs = os.path.abspath(reference_dir)

    if os.path.splitdrive(target_abs)[0].lower() != os.path.splitdrive(folder_abs)[0].lower():
        return target_abs

    target_uri = urlsplit(Path(target_abs).as_uri()).path
    folder_uri = urlsplit(Path(folder_abs).as_uri()).path

    relative = posixpath.relpath(target_uri, folder_uri)
    return unquote(relative).replace('/', os.sep)
