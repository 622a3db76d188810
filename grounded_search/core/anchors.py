"""
Footnote anchor naming.

Anchors combine the request id with the 1-based footnote label so footnotes
from different requests never collide on a shared page.

Dependencies: None
System role: Anchor naming contract for presentation layers
"""

DEFAULT_ANCHOR_PREFIX = "footnote"


def footnote_number(ordinal: int) -> int:
    """Rendered 1-based footnote number for a source ordinal."""
    return ordinal + 1


def footnote_label(ordinal: int) -> str:
    return f"[{footnote_number(ordinal)}]"


def footnote_anchor(
    request_id: int,
    ordinal: int,
    prefix: str = DEFAULT_ANCHOR_PREFIX,
) -> str:
    """
    Build the anchor id for a source of a given request.

    Args:
        request_id: Session-scoped request identifier
        ordinal: 0-based source ordinal
        prefix: Anchor prefix

    Returns:
        str: Anchor id such as "footnote-3-1"
    """
    return f"{prefix}-{request_id}-{footnote_number(ordinal)}"
