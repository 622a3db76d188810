"""
Line splitter.

Breaks a text slice into text segments and line breaks.

Dependencies: grounded_search.models
System role: Text segmentation helper for the render planner
"""

import re

from grounded_search.models.render import LineBreak, RenderUnit, TextSegment

LINE_SEPARATOR = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[RenderUnit]:
    """
    Split text on line separators.

    Each separator becomes one LineBreak carrying the separator itself, so the
    units reproduce the input exactly. Empty lines never produce a TextSegment.

    Args:
        text: Text slice to split

    Returns:
        list[RenderUnit]: TextSegment and LineBreak units, left to right
    """
    units: list[RenderUnit] = []
    position = 0

    for match in LINE_SEPARATOR.finditer(text):
        if match.start() > position:
            units.append(TextSegment(text=text[position:match.start()]))
        units.append(LineBreak(separator=match.group()))
        position = match.end()

    if position < len(text):
        units.append(TextSegment(text=text[position:]))

    return units
