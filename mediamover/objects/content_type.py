"""Content type inference from object names.

Uses a static extension table for the media the site stores, then falls back
to the standard library's strict MIME table, then to a generic binary type.
"""

import mimetypes
import os
from typing import Dict

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: Dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".svg": "image/svg+xml",
    ".ico": "image/vnd.microsoft.icon",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".heic": "image/heic",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".pdf": "application/pdf",
    ".json": "application/json",
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".html": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".zip": "application/zip",
}


def infer_content_type(object_name: str) -> str:
    """Infer the MIME type of an object from its file extension.

    Args:
        object_name: Object name or path, e.g. "posters/hamlet.JPG"

    Returns:
        MIME type string, DEFAULT_CONTENT_TYPE when the extension is unknown

    Example:
        >>> infer_content_type("cat.png")
        'image/png'
        >>> infer_content_type("README")
        'application/octet-stream'
    """
    _, extension = os.path.splitext(object_name)
    extension = extension.lower()
    if not extension:
        return DEFAULT_CONTENT_TYPE

    if extension in CONTENT_TYPES:
        return CONTENT_TYPES[extension]

    guessed, _ = mimetypes.guess_type(f"file{extension}", strict=True)
    return guessed or DEFAULT_CONTENT_TYPE
