"""
JSDoc-style doc comment parser.

Turns the body of a ``/** ... */`` comment into a ``Doclet``: the free text
description followed by its ``@tags``. Tags whose bodies hold code
(``@examples``, ``@benchmarks``) keep their lines verbatim so the directive
parser can rely on line offsets and relative indentation.
"""

from __future__ import annotations

import re
import textwrap
from typing import Iterable, List, Optional, Tuple, Union

from .errors import CommentParseError
from .models import Doclet, Tag
from .type_expressions import OptionalType, parse_type

_UNWRAP_RE = re.compile(r"^[ \t]*\*?[ \t]?")
_TAG_RE = re.compile(r"^\s*@([^\s{]*)\s*(.*)$")
_TITLE_RE = re.compile(r"^[A-Za-z_][\w]*$")

PARAM_TITLES = frozenset({"param", "arg", "argument", "property", "prop"})
RETURN_TITLES = frozenset({"returns", "return"})
VERBATIM_TITLES = frozenset({"examples", "example", "benchmarks"})
NAME_PATH_TITLES = frozenset({"memberOf", "memberof"})
CANONICAL_TITLES = {
    "arg": "param",
    "argument": "param",
    "prop": "property",
    "return": "returns",
    "memberof": "memberOf",
}


def unwrap_comment(value: str) -> List[str]:
    """Strips the leading ``*`` gutter (and one following space) from every line."""
    return [_UNWRAP_RE.sub("", line, count=1) for line in value.split("\n")]


def parse_comment(value: str, unwrap: bool = True) -> Doclet:
    """
    Parses a comment body (the text between ``/*`` and ``*/``).

    Raises:
        CommentParseError: when a tag has no title or carries a malformed type.
    """
    lines = unwrap_comment(value) if unwrap else value.split("\n")

    tag_starts = [index for index, line in enumerate(lines) if _TAG_RE.match(line)]
    first_tag = tag_starts[0] if tag_starts else len(lines)
    description = "\n".join(lines[:first_tag]).strip()

    tags: List[Tag] = []
    boundaries = tag_starts + [len(lines)]
    for start, end in zip(boundaries, boundaries[1:]):
        tags.append(_parse_tag(lines, start, end))

    return Doclet(description=description, tags=tags)


def _parse_tag(lines: List[str], start: int, end: int) -> Tag:
    match = _TAG_RE.match(lines[start])
    title, rest = match.group(1), match.group(2)
    if not _TITLE_RE.match(title):
        raise CommentParseError(f"Missing or invalid tag title on comment line {start + 1}: {lines[start].strip()!r}")

    body = [rest] + lines[start + 1:end]
    canonical = CANONICAL_TITLES.get(title, title)

    if title in VERBATIM_TITLES:
        return _verbatim_tag(title, body, start)

    text = "\n".join(body).strip()
    tag = Tag(title=canonical, line_number=start, description_line=start)

    if title in PARAM_TITLES:
        tag.type, text = _take_type(text)
        name, text, tag.optional, tag.default = _take_name(text)
        tag.name = name
        if tag.optional and tag.type is not None:
            tag.type = OptionalType(tag.type)
        tag.description = _strip_hyphen(text)
    elif title in RETURN_TITLES:
        tag.type, text = _take_type(text)
        tag.description = text
    elif title == "typedef":
        tag.type, text = _take_type(text)
        name, text, _, _ = _take_name(text)
        tag.name = name
        tag.description = text
    elif title in NAME_PATH_TITLES:
        tag.name = text.split()[0] if text else None
        tag.description = text
    else:
        tag.description = text
    return tag


def _verbatim_tag(title: str, body: List[str], start: int) -> Tag:
    offset = 0
    if not body[0].strip():
        body = body[1:]
        offset = 1
    while body and not body[0].strip():
        body = body[1:]
        offset += 1
    text = textwrap.dedent("\n".join(body)).rstrip()
    return Tag(title=title, description=text, line_number=start, description_line=start + offset)


def _take_type(text: str):
    """Splits a leading ``{type}`` off ``text``; returns (type or None, remainder)."""
    if not text.startswith("{"):
        return None, text
    depth = 0
    for index, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return parse_type(text[1:index].strip()), text[index + 1:].strip()
    raise CommentParseError(f"Unterminated type expression: {text.splitlines()[0]!r}")


def _take_name(text: str) -> Tuple[Optional[str], str, bool, Optional[str]]:
    """Splits the name (``foo`` or ``[foo=default]``) off ``text``."""
    if not text:
        return None, "", False, None
    if text.startswith("["):
        close = text.find("]")
        if close == -1:
            raise CommentParseError(f"Unterminated optional parameter name: {text.splitlines()[0]!r}")
        inner = text[1:close].strip()
        name, _, default = inner.partition("=")
        return name.strip(), text[close + 1:].strip(), True, (default.strip() or None)
    parts = text.split(None, 1)
    return parts[0], (parts[1].strip() if len(parts) > 1 else ""), False, None


def _strip_hyphen(text: str) -> str:
    return text[1:].lstrip() if text.startswith("-") else text


def has_tag(doc: Doclet, title: str) -> bool:
    """Simply determines whether a doclet has a tag or doesn't."""
    return any(tag.title == title for tag in doc.tags)


def find_tag(doc: Doclet, titles: Union[str, Iterable[str]]) -> Optional[Tag]:
    """Returns the first tag matching the first title (in order) that is present."""
    if isinstance(titles, str):
        titles = [titles]
    for title in titles:
        for tag in doc.tags:
            if tag.title == title:
                return tag
    return None


def find_tags(doc: Doclet, titles: Union[str, Iterable[str]]) -> List[Tag]:
    """Returns every tag with one of ``titles``, in comment order."""
    if isinstance(titles, str):
        titles = [titles]
    wanted = set(titles)
    return [tag for tag in doc.tags if tag.title in wanted]


def get_tag_description(doc: Doclet, titles: Union[str, Iterable[str]]) -> str:
    tag = find_tag(doc, titles)
    return tag.description if tag is not None else ""
