"""Packing and unpacking of .animset documents.

An .animset file is XML. All image paths used by any frame are listed once
in an ``<images>`` table and frames refer to them by integer id::

    <animset>
      <images>
        <image id="0" source="sheets/hero.png"/>
      </images>
      <anim id="walk">
        <frame center="0,0" size="16,16" timeFrames="4" timeRate="60" imageid="0"/>
      </anim>
    </animset>
"""

import io
import os
import logging
import re
import math
import numbers
import warnings
import xml.etree.ElementTree as ET
from typing import Dict, IO, List, Optional, Tuple

from animizer.model.types import Animation, AnimationSet, Frame
from animizer.io.elements import (
    ElementKind,
    ATTR_ID,
    ATTR_SOURCE,
    ATTR_CENTER,
    ATTR_SIZE,
    ATTR_TIME_FRAMES,
    ATTR_TIME_RATE,
    ATTR_IMAGE_ID,
)
from animizer.io.errors import (
    EncodeError,
    FormatError,
    StructuralError,
    ImageReferenceError,
    DuplicateKeyError,
)
from animizer.utils.config import CodecConfig, PathProfile
from animizer.utils.paths import relative_path

logger = logging.getLogger(__name__)

FILE_EXTENSION = ".animset"

_FRAME_FIELDS = ("center_x", "center_y", "size_x", "size_y", "time_frames", "time_rate")

# Code points XML 1.0 cannot carry, even escaped
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")

_INT_TOKEN = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_TOKEN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def normalize_filename(filename: str, extension: str = FILE_EXTENSION) -> str:
    """Append the extension to a file name unless it is already there."""
    if not filename.endswith(extension):
        filename += extension
    return filename


def _image_key(frame: Frame, anim_name: str, index: int) -> str:
    image = frame.image
    if isinstance(image, os.PathLike):
        image = os.fspath(image)
    if not isinstance(image, str) or not image:
        raise EncodeError(
            f"Frame {index} of animation '{anim_name}' has no image path (got {image!r})"
        )
    if _XML_ILLEGAL.search(image):
        raise EncodeError(
            f"Image path of frame {index} in animation '{anim_name}' has characters XML cannot store: {image!r}"
        )
    return image


def image_table(animations: AnimationSet) -> List[str]:
    """Collect the distinct image paths used by an animation set.

    Paths are compared as strings, so two spellings of the same file get two
    entries. The position of a path in the returned list is its image id.

    Args:
        animations: Animation name -> Animation

    Returns:
        Image paths in the order they are first used (animations in mapping
        order, frames in playback order)
    """
    images: List[str] = []
    seen = set()
    for name, anim in animations.items():
        for index, frame in enumerate(anim.frames):
            image = _image_key(frame, name, index)
            if image not in seen:
                seen.add(image)
                images.append(image)
    return images


def _format_number(value) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _format_pair(a, b) -> str:
    return f"{_format_number(a)},{_format_number(b)}"


def _check_frame(frame: Frame, anim_name: str, index: int):
    for field_name in _FRAME_FIELDS:
        value = getattr(frame, field_name)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise EncodeError(
                f"Frame {index} of animation '{anim_name}': "
                f"{field_name} must be a number, got {value!r}"
            )
        if not math.isfinite(value):
            raise EncodeError(
                f"Frame {index} of animation '{anim_name}': "
                f"{field_name} must be finite, got {value!r}"
            )


def _source_for(image: str, reference_dir: Optional[str], config: CodecConfig) -> str:
    if config.profile is PathProfile.WORKING_DIR:
        return relative_path(image, os.getcwd())
    if reference_dir is None:
        return image
    return relative_path(image, reference_dir)


def _build_tree(animations: AnimationSet, reference_dir: Optional[str],
                config: CodecConfig) -> ET.ElementTree:
    root = ET.Element(ElementKind.ANIMSET.value)

    images = image_table(animations)
    image_ids = {image: index for index, image in enumerate(images)}
    logger.debug("Image table has %d entries", len(images))

    images_elem = ET.SubElement(root, ElementKind.IMAGES.value)
    for index, image in enumerate(images):
        ET.SubElement(images_elem, ElementKind.IMAGE.value, {
            ATTR_ID: str(index),
            ATTR_SOURCE: _source_for(image, reference_dir, config),
        })

    for name, anim in animations.items():
        if not isinstance(name, str):
            raise EncodeError(f"Animation names must be strings, got {name!r}")
        if _XML_ILLEGAL.search(name):
            raise EncodeError(f"Animation name has characters XML cannot store: {name!r}")
        if anim.name != name:
            warnings.warn(
                f"Animation stored under '{name}' is named '{anim.name}'; writing '{name}'",
                stacklevel=3
            )

        anim_elem = ET.SubElement(root, ElementKind.ANIM.value, {ATTR_ID: name})
        for index, frame in enumerate(anim.frames):
            _check_frame(frame, name, index)
            ET.SubElement(anim_elem, ElementKind.FRAME.value, {
                ATTR_CENTER: _format_pair(frame.center_x, frame.center_y),
                ATTR_SIZE: _format_pair(frame.size_x, frame.size_y),
                ATTR_TIME_FRAMES: _format_number(frame.time_frames),
                ATTR_TIME_RATE: _format_number(frame.time_rate),
                ATTR_IMAGE_ID: str(image_ids[_image_key(frame, name, index)]),
            })

    tree = ET.ElementTree(root)
    ET.indent(tree, space=config.indent)
    return tree


def dumps(animations: AnimationSet, reference_dir: Optional[str] = None,
          config: Optional[CodecConfig] = None) -> str:
    """Render an animation set as .animset text.

    Args:
        animations: Animation name -> Animation
        reference_dir: Directory image sources are made relative to (the
            directory the text will be saved in). None keeps paths as given.
            Ignored by the working-directory path profile.
        config: Codec configuration

    Returns:
        Document text
    """
    config = config or CodecConfig()
    tree = _build_tree(animations, reference_dir, config)
    buffer = io.BytesIO()
    tree.write(buffer, encoding=config.encoding, xml_declaration=config.xml_declaration)
    return buffer.getvalue().decode(config.encoding)


def encode(animations: AnimationSet, directory: str, filename: str,
           config: Optional[CodecConfig] = None) -> str:
    """Write an animation set to ``directory/filename``.

    The extension is appended to ``filename`` when missing. An existing file
    is overwritten; missing directories are not created.

    Args:
        animations: Animation name -> Animation
        directory: Output directory
        filename: Output file name, with or without extension
        config: Codec configuration

    Returns:
        Path of the written file
    """
    config = config or CodecConfig()
    directory = os.fspath(directory)
    path = os.path.join(directory, normalize_filename(filename, config.extension))

    # Validate everything before the file is opened
    tree = _build_tree(animations, directory, config)
    with open(path, 'wb') as f:
        tree.write(f, encoding=config.encoding, xml_declaration=config.xml_declaration)

    logger.debug("Wrote %d animations to %s", len(animations), path)
    return path


def _require(elem: ET.Element, attr: str, context: str) -> str:
    value = elem.get(attr)
    if value is None:
        raise FormatError(f"Missing attribute '{attr}' on <{elem.tag}> {context}")
    return value.strip()


def _parse_int(elem: ET.Element, attr: str, context: str) -> int:
    token = _require(elem, attr, context)
    if not _INT_TOKEN.fullmatch(token):
        raise FormatError(
            f"Attribute '{attr}' on <{elem.tag}> {context} is not an integer: {token!r}"
        )
    return int(token)


def _parse_float(elem: ET.Element, attr: str, context: str, token: Optional[str] = None) -> float:
    if token is None:
        token = _require(elem, attr, context)
    if not _FLOAT_TOKEN.fullmatch(token):
        raise FormatError(
            f"Attribute '{attr}' on <{elem.tag}> {context} is not a number: {token!r}"
        )
    return float(token)


def _parse_pair(elem: ET.Element, attr: str, context: str) -> Tuple[float, float]:
    parts = _require(elem, attr, context).split(',')
    if len(parts) != 2:
        raise FormatError(
            f"Attribute '{attr}' on <{elem.tag}> {context} needs two comma-separated "
            f"numbers, got {len(parts)}: {elem.get(attr)!r}"
        )
    return (
        _parse_float(elem, attr, context, parts[0].strip()),
        _parse_float(elem, attr, context, parts[1].strip()),
    )


def _resolve_source(source: str, base_dir: str, config: CodecConfig) -> str:
    if config.profile is PathProfile.WORKING_DIR:
        return source
    return os.path.abspath(os.path.join(base_dir, source))


class _Decoder:
    """Per-call decode state: image table, open animation and output."""

    def __init__(self, base_dir: str, config: CodecConfig):
        self.base_dir = base_dir
        self.config = config
        self.images: Dict[int, str] = {}
        self.current: Optional[Animation] = None
        self.output: AnimationSet = {}
        self.root_seen = False

    def start(self, elem: ET.Element):
        kind = ElementKind.from_tag(elem.tag)

        if not self.root_seen:
            if kind is not ElementKind.ANIMSET:
                raise StructuralError(f"Root element must be <animset>, got <{elem.tag}>")
            self.root_seen = True
            return

        if kind is ElementKind.IMAGE:
            self._image(elem)
        elif kind is ElementKind.ANIM:
            self._anim(elem)
        elif kind is ElementKind.FRAME:
            self._frame(elem)
        elif kind is None:
            logger.debug("Ignoring unknown element <%s>", elem.tag)

    def end(self, elem: ET.Element):
        if ElementKind.from_tag(elem.tag) is not ElementKind.ANIM or self.current is None:
            return

        anim = self.current
        self.current = None
        if anim.name in self.output:
            if self.config.duplicate_animations == "reject":
                raise DuplicateKeyError(f"Animation '{anim.name}' is defined more than once")
            logger.debug("Animation '%s' redefined; keeping the last definition", anim.name)
            del self.output[anim.name]
        self.output[anim.name] = anim
        logger.debug("Read animation '%s' with %d frames", anim.name, len(anim.frames))

    def _image(self, elem: ET.Element):
        context = "in <images>"
        image_id = _parse_int(elem, ATTR_ID, context)
        source = elem.get(ATTR_SOURCE)
        if source is None:
            raise FormatError(f"Missing attribute '{ATTR_SOURCE}' on <image> with id {image_id}")
        if image_id in self.images:
            raise DuplicateKeyError(f"Image id {image_id} is defined more than once")
        self.images[image_id] = _resolve_source(source, self.base_dir, self.config)

    def _anim(self, elem: ET.Element):
        if self.current is not None:
            raise StructuralError(
                f"<anim> opened inside animation '{self.current.name}'"
            )
        name = elem.get(ATTR_ID)
        if name is None:
            raise FormatError(f"Missing attribute '{ATTR_ID}' on <anim>")
        self.current = Animation(name=name, frames=[])

    def _frame(self, elem: ET.Element):
        if self.current is None:
            raise StructuralError("<frame> found outside of an <anim> element")

        context = f"{len(self.current.frames)} in animation '{self.current.name}'"
        center_x, center_y = _parse_pair(elem, ATTR_CENTER, context)
        size_x, size_y = _parse_pair(elem, ATTR_SIZE, context)
        time_frames = _parse_float(elem, ATTR_TIME_FRAMES, context)
        time_rate = _parse_float(elem, ATTR_TIME_RATE, context)
        image_id = _parse_int(elem, ATTR_IMAGE_ID, context)

        try:
            image = self.images[image_id]
        except KeyError:
            raise ImageReferenceError(
                f"<frame> {context} references image id {image_id}, which is not defined"
            ) from None

        self.current.frames.append(Frame(
            center_x=center_x,
            center_y=center_y,
            size_x=size_x,
            size_y=size_y,
            time_frames=time_frames,
            time_rate=time_rate,
            image=image,
        ))


def _read(stream: IO, base_dir: str, config: CodecConfig) -> AnimationSet:
    decoder = _Decoder(base_dir, config)
    try:
        for event, elem in ET.iterparse(stream, events=("start", "end")):
            if event == "start":
                decoder.start(elem)
            else:
                decoder.end(elem)
                if elem.tag == ElementKind.ANIM.value:
                    elem.clear()
    except ET.ParseError as e:
        line, column = e.position
        raise FormatError(f"Malformed document at line {line}, column {column}: {e}") from e
    except LookupError as e:
        raise FormatError(f"Document declares an unsupported encoding: {e}") from e

    return decoder.output


def loads(text: str, base_dir: str = ".", config: Optional[CodecConfig] = None) -> AnimationSet:
    """Parse .animset text.

    Args:
        text: Document text
        base_dir: Directory relative image sources are resolved against
        config: Codec configuration

    Returns:
        Animation name -> Animation
    """
    config = config or CodecConfig()
    return _read(io.StringIO(text), os.fspath(base_dir), config)


def decode(directory: str, filename: str, config: Optional[CodecConfig] = None) -> AnimationSet:
    """Read an animation set from ``directory/filename``.

    The file name is used as given. Nothing is returned unless the whole
    document parses.

    Args:
        directory: Input directory, also the base for relative image sources
        filename: Input file name
        config: Codec configuration

    Returns:
        Animation name -> Animation

    Raises:
        StructuralError: Elements out of order
        FormatError: Missing or unparseable attributes, malformed XML
        ImageReferenceError: Frame references an undefined image id
        DuplicateKeyError: Repeated image id or rejected animation name
    """
    config = config or CodecConfig()
    directory = os.fspath(directory)
    path = os.path.join(directory, filename)

    with open(path, 'rb') as f:
        animations = _read(f, directory, config)

    logger.debug("Read %d animations from %s", len(animations), path)
    return animations
