"""
Stream Link Decoder - Tolerant decoding of the upstream stream-link field.

The stream endpoint has been observed to return the playable file URL in
three different shapes. Each shape is modelled as its own strict pydantic
model and the shapes are tried in a fixed priority order; the first one that
validates completely wins.

    (a) {"streamingLink": {"link": {"file": "<url>"}}}
    (b) {"streamingLink": "<url>"}
    (c) {"link": {"file": "<url>"}}

Shape (a) must be tried before (b): a document carrying both a nested
``streamingLink`` object and other keys would otherwise be read through a
looser interpretation.
"""

import json
import logging
from typing import Any, Callable, List, Tuple, Type, Union

from pydantic import BaseModel, StrictStr, ValidationError

from webplayer.core.exceptions import DecodeError, DecodeErrorKind
from webplayer.core.models import StreamLink


logger = logging.getLogger(__name__)

STREAM_FIELD = "streamingLink"


class _FileObject(BaseModel):
    file: StrictStr


class _StreamingLinkObject(BaseModel):
    link: _FileObject


class NestedStreamingLinkShape(BaseModel):
    """Shape (a): streamingLink -> link -> file."""

    streamingLink: _StreamingLinkObject


class StringStreamingLinkShape(BaseModel):
    """Shape (b): streamingLink is the file URL itself."""

    streamingLink: StrictStr


class DirectLinkShape(BaseModel):
    """Shape (c): top-level link -> file."""

    link: _FileObject


# Priority order matters; see module docstring.
SHAPES: List[Tuple[str, Type[BaseModel], Callable[[Any], str]]] = [
    ("nested_streaming_link", NestedStreamingLinkShape, lambda m: m.streamingLink.link.file),
    ("string_streaming_link", StringStreamingLinkShape, lambda m: m.streamingLink),
    ("direct_link", DirectLinkShape, lambda m: m.link.file),
]


def decode_stream_payload(payload: Any) -> StreamLink:
    """
    Decode an already-parsed JSON value into a StreamLink.

    Args:
        payload: Parsed JSON value (normally the ``data`` member of the
            API envelope)

    Returns:
        StreamLink holding the file URL exactly as sent upstream

    Raises:
        DecodeError: If no known shape matches
    """
    if isinstance(payload, dict):
        for shape_name, model, extract in SHAPES:
            try:
                parsed = model.model_validate(payload)
            except ValidationError:
                continue
            logger.debug(f"Stream link decoded using shape '{shape_name}'")
            return StreamLink(file=extract(parsed))

    logger.warning(f"Could not resolve '{STREAM_FIELD}' in any known format")
    raise DecodeError(
        f"Could not find a valid '{STREAM_FIELD}' in any known format",
        kind=DecodeErrorKind.NO_MATCHING_SHAPE,
        field_name=STREAM_FIELD,
    )


def decode_stream_link(raw: Union[bytes, str]) -> StreamLink:
    """
    Decode raw JSON bytes into a StreamLink.

    Args:
        raw: Raw response body

    Returns:
        StreamLink holding the file URL exactly as sent upstream

    Raises:
        DecodeError: If the body is not JSON or matches no known shape
    """
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise DecodeError(
            f"Stream response is not valid JSON: {e}",
            kind=DecodeErrorKind.INVALID_JSON,
            field_name=STREAM_FIELD,
            details=str(e),
        )

    return decode_stream_payload(payload)


__all__ = [
    "STREAM_FIELD",
    "SHAPES",
    "decode_stream_payload",
    "decode_stream_link",
]
