"""
Helpers for hierarchical document store paths.

Paths alternate collection and document segments, e.g.
``services/hotels/items/abc123``: an odd number of segments names a
collection, an even number names a document.
"""

from typing import List, Tuple

from catalog_service.utils.exceptions import ValidationException


def split_path(path: str) -> List[str]:
    """Split a slash-separated store path into non-empty segments."""
    segments = (path or "").strip("/").split("/")
    if not segments or any(not segment.strip() for segment in segments):
        raise ValidationException(
            message=f"Invalid store path: '{path}'",
            details={"path": path}
        )
    return segments


def join_path(*segments: str) -> str:
    """Join segments into a store path, rejecting empty or slash-bearing segments."""
    for segment in segments:
        if not segment or "/" in segment:
            raise ValidationException(
                message=f"Invalid path segment: '{segment}'",
                details={"segment": segment}
            )
    return "/".join(segments)


def collection_parts(collection_path: str) -> Tuple[str, str]:
    """
    Split a collection path into its parent document path and leaf name.

    Args:
        collection_path: e.g. ``services`` or ``services/hotels/items``

    Returns:
        (parent_document_path, collection_name); the parent is ``""`` at the root

    Raises:
        ValidationException: If the path does not name a collection
    """
    segments = split_path(collection_path)
    if len(segments) % 2 != 1:
        raise ValidationException(
            message=f"Path does not name a collection: '{collection_path}'",
            details={"path": collection_path}
        )
    return "/".join(segments[:-1]), segments[-1]


def document_parts(document_path: str) -> Tuple[str, str]:
    """
    Split a document path into its collection path and document id.

    Raises:
        ValidationException: If the path does not name a document
    """
    segments = split_path(document_path)
    if len(segments) % 2 != 0:
        raise ValidationException(
            message=f"Path does not name a document: '{document_path}'",
            details={"path": document_path}
        )
    return "/".join(segments[:-1]), segments[-1]


def normalize_path(path: str) -> str:
    """Canonical form of a store path: no leading, trailing or doubled slashes."""
    return "/".join(split_path(path))
