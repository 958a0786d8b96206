"""MIME type lookup by file extension."""

import mimetypes

# Checked before the platform mimetypes database, which varies between systems
_KNOWN_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".json": "application/json",
    ".svg": "image/svg+xml",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".txt": "text/plain",
}


def mime_for_extension(ext: str) -> str | None:
    """Return MIME type for a file extension.

    Args:
        ext: Extension with or without the leading dot (e.g., ".css", "css")

    Returns:
        MIME type string, or None if the extension is unknown
    """
    if not ext:
        return None
    ext = ext.lower()
    if not ext.startswith("."):
        ext = f".{ext}"

    known = _KNOWN_TYPES.get(ext)
    if known is not None:
        return known

    mime, _ = mimetypes.guess_type(f"file{ext}", strict=False)
    return mime
