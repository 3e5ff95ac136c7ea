"""Document lifecycle: extension validation, concurrent uploads, session sync."""

from versepoint.documents.manager import ALLOWED_EXTENSIONS, DocumentManager, is_supported

__all__ = ["ALLOWED_EXTENSIONS", "DocumentManager", "is_supported"]
