"""services/encoder.py — Turn uploaded videos into inline Gemini media payloads.

A payload is the file's declared MIME type plus its bytes as base64 text,
which is what goes into the `inline_data` part of a generate_content request.

    payload = await encode_upload(upload_file)
    payload.mime_type   # "video/mp4"
    payload.data        # "AAAAIGZ0eXBpc29t..."

Nothing here inspects or transcodes the video.
"""

from __future__ import annotations

import asyncio
import base64
import inspect
import logging
import mimetypes
from pathlib import Path
from typing import Any, Optional

from core.exceptions import EncodingError
from schemas.analysis import MediaPayload

logger = logging.getLogger(__name__)


def encode_bytes(data: bytes, mime_type: Optional[str]) -> MediaPayload:
    """Base64-encode raw bytes into a MediaPayload.

    Raises:
        EncodingError: if there is no declared media type, or `data` is not bytes.
    """
    if not mime_type:
        raise EncodingError("File has no declared media type.")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise EncodingError(
            f"Expected file contents as bytes, got {type(data).__name__}."
        )
    encoded = base64.b64encode(bytes(data)).decode("ascii")
    return MediaPayload(mime_type=mime_type, data=encoded)


async def encode_upload(source: Any) -> MediaPayload:
    """Read a binary file handle and encode it.

    `source` is anything with a `read()` method (sync, or async like
    fastapi.UploadFile) and a `content_type` attribute. The handle is left
    open; closing it is the caller's job.

    Raises:
        EncodingError: if the read fails or the file cannot be encoded.
    """
    filename = getattr(source, "filename", None)
    try:
        data = source.read()
        if inspect.isawaitable(data):
            data = await data
    except Exception as exc:
        logger.warning(
            "failed to read upload",
            extra={"upload_filename": filename, "error": str(exc)},
        )
        raise EncodingError(f"Could not read file {filename or ''}: {exc}".strip()) from exc

    payload = encode_bytes(data, getattr(source, "content_type", None))
    logger.debug(
        "upload encoded",
        extra={
            "upload_filename": filename,
            "mime_type": payload.mime_type,
            "size_bytes": len(data),
        },
    )
    return payload


async def encode_path(path: str | Path, mime_type: Optional[str] = None) -> MediaPayload:
    """Read a local video file off the event loop and encode it.

    The media type is `mime_type` if given, otherwise guessed from the file name.
    """
    path = Path(path)
    declared = mime_type or mimetypes.guess_type(path.name)[0]
    try:
        data = await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise EncodingError(f"Could not read file {path}: {exc}") from exc
    return encode_bytes(data, declared)
