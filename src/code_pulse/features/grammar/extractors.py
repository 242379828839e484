"""Function-body extraction strategies.

Brace languages delimit bodies with ``{ ... }``, Python with indentation. Each
grammar carries one extractor, picked when the grammar is built.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BlockSpan:
    """Offsets of a function body. ``end`` is exclusive and covers the closer."""

    body_start: int
    body_end: int
    end: int


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def find_matching_brace(text: str, open_index: int) -> Optional[int]:
    """Return the index of the brace closing the one at ``open_index``.

    Args:
        text: Source text
        open_index: Index of an opening ``{``

    Returns:
        Index of the matching ``}``, or None if the braces never balance
    """
    depth = 0
    for i in range(open_index, len(text)):
        char = text[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


class BlockExtractor(ABC):
    """Locates the body that follows a function signature."""

    @abstractmethod
    def extract(self, text: str, signature_start: int, signature_end: int) -> BlockSpan:
        """Find the body for the signature spanning ``[signature_start, signature_end)``."""


class BraceDelimited(BlockExtractor):
    """Bodies enclosed in balanced braces, plus arrow/lambda expression bodies."""

    def extract(self, text: str, signature_start: int, signature_end: int) -> BlockSpan:
        pos = _skip_whitespace(text, signature_end)

        if text.startswith("=>", pos):
            pos = _skip_whitespace(text, pos + 2)
            if not text.startswith("{", pos):
                return self._expression_body(text, pos)
        elif text[max(signature_start, signature_end - 2):signature_end] == "=>" and not text.startswith("{", pos):
            return self._expression_body(text, pos)

        open_index = self._find_open_brace(text, signature_end)
        if open_index is None:
            return BlockSpan(signature_end, signature_end, signature_end)

        close_index = find_matching_brace(text, open_index)
        if close_index is None:
            return BlockSpan(open_index + 1, len(text), len(text))
        return BlockSpan(open_index + 1, close_index, close_index + 1)

    @staticmethod
    def _find_open_brace(text: str, start: int) -> Optional[int]:
        # A ';' before any '{' means a bodiless declaration (overload, abstract, interface member)
        for i in range(start, len(text)):
            if text[i] == "{":
                return i
            if text[i] == ";":
                return None
        return None

    @staticmethod
    def _expression_body(text: str, pos: int) -> BlockSpan:
        stop = len(text)
        for terminator in (";", "\n"):
            idx = text.find(terminator, pos)
            if idx != -1:
                stop = min(stop, idx)
        end = stop + 1 if stop < len(text) and text[stop] == ";" else stop
        return BlockSpan(pos, stop, end)


class IndentationDelimited(BlockExtractor):
    """Bodies made of the lines indented deeper than the signature."""

    def extract(self, text: str, signature_start: int, signature_end: int) -> BlockSpan:
        line_start = text.rfind("\n", 0, signature_start) + 1
        first_eol = text.find("\n", line_start)
        signature_indent = _indent_width(text[line_start:len(text) if first_eol == -1 else first_eol])

        eol = text.find("\n", signature_end)
        if eol == -1:
            eol = len(text)

        rest = text[signature_end:eol]
        inline = rest.strip()
        if inline and not inline.startswith("#"):
            return BlockSpan(signature_end + len(rest) - len(rest.lstrip()), eol, eol)

        block_indent: Optional[int] = None
        last_content_end: Optional[int] = None
        pos = eol + 1
        while pos < len(text):
            newline = text.find("\n", pos)
            line_end = len(text) if newline == -1 else newline
            line = text[pos:line_end]
            if line.strip():
                indent = _indent_width(line)
                if block_indent is None:
                    if indent <= signature_indent:
                        break
                    block_indent = indent
                elif indent < block_indent:
                    break
                last_content_end = line_end
            pos = line_end + 1

        if last_content_end is None:
            return BlockSpan(signature_end, signature_end, eol)
        return BlockSpan(eol + 1, last_content_end, last_content_end)


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))
