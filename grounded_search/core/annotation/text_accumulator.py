"""
Text accumulator.

Concatenates streamed text fragments into one logical document.

Dependencies: None
System role: Per-request answer text buffer
"""


class TextAccumulator:
    """Growing answer text built from stream fragments."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0
        self._text: str | None = ""

    def append(self, fragment: str | None) -> int:
        """
        Append a text fragment.

        Args:
            fragment: Incremental text, None or empty when the chunk carried none

        Returns:
            int: Accumulated length after appending
        """
        if fragment:
            self._parts.append(fragment)
            self._length += len(fragment)
            self._text = None
        return self._length

    @property
    def text(self) -> str:
        if self._text is None:
            self._text = "".join(self._parts)
        return self._text

    @property
    def length(self) -> int:
        return self._length

    @property
    def chunk_count(self) -> int:
        """Number of non-empty fragments received."""
        return len(self._parts)

    def char_offset(self, byte_offset: int) -> int:
        """
        Convert a UTF-8 byte offset into the accumulated text to a character offset.

        Offsets that land inside a multi-byte character resolve to the start of
        that character; offsets past the end resolve to the text length.
        """
        encoded = self.text.encode("utf-8")
        return len(encoded[: max(byte_offset, 0)].decode("utf-8", errors="ignore"))
