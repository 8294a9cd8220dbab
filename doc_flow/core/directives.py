"""
Parser for the executable-comment mini-language used in ``@examples`` and
``@benchmarks`` tags::

    clone([1, 2, 3]) // => [1, 2, 3]

    var user = getUser(1);
    user.name
    // => 'Dan'

    getUser(1) // => {
      name: 'Dan'
    }

Each matched line becomes a ``Pair`` of (left, right). Lines before the first
pair form the preamble, shared setup code for every pair in the block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Pattern, Sequence

from .models import DirectiveBlock, Pair

_PAIR_RE = re.compile(r"^\s*(.*)\s*//\s*(=>)?\s*(\S.*)$")
_COMMENT_LINE_RE = re.compile(r"^\s*//")
_INDENT_RE = re.compile(r"^[ \t]*")


@dataclass
class _PairMatch:
    left: str
    right: str
    has_arrow: bool


def parse_pair(line: str, handler_patterns: Sequence[Pattern] = ()) -> Optional[Pair]:
    """
    Given a line like ``left // => right``, parses it into a pair.

    The ``=>`` is optional when ``left`` is present on the same line, or when
    ``right`` matches one of ``handler_patterns``.

    >>> parse_pair('foo(bar)//=>5')
    Pair(left='foo(bar)', right='5', line_number=0, is_multiline=False)
    >>> parse_pair('// bar') is None
    True
    """
    match = _match_pair(line, handler_patterns)
    if match is None:
        return None
    return Pair(left=match.left, right=match.right, line_number=0)


def _match_pair(line: str, handler_patterns: Sequence[Pattern]) -> Optional[_PairMatch]:
    parts = _PAIR_RE.match(line)
    if not parts:
        return None
    left = parts.group(1).strip()
    right = parts.group(3).strip()
    has_arrow = parts.group(2) is not None
    if not left and not has_arrow:
        if not any(pattern.search(right) for pattern in handler_patterns):
            return None
    return _PairMatch(left=left, right=right, has_arrow=has_arrow)


def _indentation(line: str) -> int:
    return len(_INDENT_RE.match(line).group(0).expandtabs(4))


@dataclass
class _OpenPair:
    pair: Pair
    indent: int
    closed: bool = False


@dataclass
class DirectiveParser:
    """
    Splits a tag body into preamble and pairs.

    ``handler_patterns`` are the custom example-handler patterns; they only
    decide whether an arrow-less ``// something`` line counts as a pair.
    """
    handler_patterns: List[Pattern] = field(default_factory=list)

    def parse(self, text: str) -> DirectiveBlock:
        lines = text.split("\n")
        preamble: List[str] = []
        pairs: List[Pair] = []
        current: Optional[_OpenPair] = None
        last_consumed = -1  # Index of the last line owned by a pair

        for index, line in enumerate(lines):
            match = _match_pair(line, self.handler_patterns)

            if match is None:
                if current is not None and not current.closed:
                    if self._continues(current, line):
                        current.pair.right += "\n" + self._relative(line, current.indent)
                        current.pair.is_multiline = True
                        last_consumed = index
                        continue
                    if current.pair.is_multiline and line.strip():
                        current.pair.right += "\n" + self._relative(line, current.indent)
                        last_consumed = index
                    current.closed = True
                    continue
                if not pairs:
                    preamble.append(line)
                continue

            left = match.left
            if not left:
                left, taken = self._collect_left(lines, index, last_consumed)
                if not pairs and taken:
                    del preamble[len(preamble) - taken:]

            pair = Pair(left=left, right=match.right, line_number=index)
            pairs.append(pair)
            current = _OpenPair(pair=pair, indent=_indentation(line))
            last_consumed = index

        return DirectiveBlock(
            content=text,
            preamble="\n".join(preamble).rstrip(),
            pairs=pairs,
        )

    def _continues(self, current: _OpenPair, line: str) -> bool:
        return bool(line.strip()) and _indentation(line) > current.indent

    def _relative(self, line: str, indent: int) -> str:
        expanded = line.expandtabs(4)
        return expanded[indent:] if expanded[:indent].strip() == "" else expanded.lstrip()

    def _collect_left(self, lines: List[str], index: int, boundary: int):
        """
        Rebuilds an empty left side from the lines above a ``// => expected``
        line, up to the first blank line or the previous pair. Returns the text
        and how many lines (comment lines included) were taken.
        """
        collected: List[str] = []
        cursor = index - 1
        while cursor > boundary and lines[cursor].strip():
            if not _COMMENT_LINE_RE.match(lines[cursor]):
                collected.append(lines[cursor].strip())
            cursor -= 1
        collected.reverse()
        return "\n".join(collected), index - 1 - cursor


def extract_pairs(text: str, handler_patterns: Iterable[Pattern] = ()) -> DirectiveBlock:
    """Parses a tag body into ``DirectiveBlock(content, preamble, pairs)``."""
    return DirectiveParser(list(handler_patterns)).parse(text)
