"""
Example handlers: patterns that recognise an example's expected value as
something other than a plain equality check, e.g. ``// => throws`` or
``// =~ [1, 2, ...]``.

Caller-supplied handlers are tried before the defaults, so a caller can
override any of them. The first handler whose pattern matches wins.
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Match, Optional, Pattern, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_COUNT_WORDS = {
    "one": 1, "once": 1,
    "two": 2, "twice": 2,
    "three": 3, "thrice": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}


def get_count(word: str) -> Optional[int]:
    """Maps ``'twice'``, ``'3'`` or ``'ten'`` to an integer; unknown words give None."""
    word = word.strip().lower()
    if word.isdigit():
        return int(word)
    return _COUNT_WORDS.get(word)


class ExampleHandler:
    """
    A single handler. Exactly one of ``template`` (the name of a template the
    renderer knows) or ``test`` (inline verification logic) is required.
    ``data`` turns the regex match into template data.
    """

    def __init__(self,
                 pattern: Union[str, Pattern],
                 template: Optional[str] = None,
                 test: Optional[Callable[..., Any]] = None,
                 data: Optional[Callable[[Match], Dict[str, Any]]] = None):
        if template is None and test is None:
            raise ConfigurationError(
                f"Example handler for pattern {getattr(pattern, 'pattern', pattern)!r} "
                "must provide either a test function or a template name"
            )
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern)
            except re.error as e:
                raise ConfigurationError(f"Invalid example handler pattern {pattern!r}: {e}") from e
        self.pattern = pattern
        self.template = template
        self.test = test
        self.data = data

    def match(self, expected: str) -> Optional[Match]:
        return self.pattern.search(expected)

    def build_data(self, match: Match) -> Dict[str, Any]:
        if self.data is not None:
            return self.data(match)
        return {"match": [match.group(0)] + list(match.groups())}

    def __repr__(self) -> str:
        target = f"template={self.template!r}" if self.template else "test=..."
        return f"ExampleHandler({self.pattern.pattern!r}, {target})"


def _groups(**names: int) -> Callable[[Match], Dict[str, Any]]:
    return lambda match: {key: match.group(index) for key, index in names.items()}


def _calls(match: Match) -> Dict[str, Any]:
    return {"callback": match.group(1), "count": get_count(match.group(2))}


DEFAULT_EXAMPLE_HANDLERS: List[ExampleHandler] = [
    ExampleHandler(r"^(\w[\w.()\[\]'\"]*)\s*===?\s*(.*)$", "equality", data=_groups(left=1, right=2)),
    ExampleHandler(r"^(\w[\w.()\[\]'\"]*)\s*!==?\s*(.*)$", "inequality", data=_groups(left=1, right=2)),
    ExampleHandler(r"^instanceof (.*)$", "instanceof", data=_groups(type=1)),
    ExampleHandler(r"^NaN$", "nan"),
    ExampleHandler(r"^throws$", "throws"),
    ExampleHandler(r"^calls\s+(\w+)\s+(\w+)(?:\s+times?)?$", "calls", data=_calls),
    ExampleHandler(r"^calls\s+(\w+)\s+(\w+)\s+times? asynchronously$", "calls_async", data=_calls),
    ExampleHandler(r"^=~\s+/(.*)/$", "string_proximity", data=_groups(pattern=1)),
    ExampleHandler(r"^=~\s+\[(.*),?\s*\.\.\.\s*\]$", "array_inclusion", data=_groups(elements=1)),
    ExampleHandler(r"^one of (.*)$", "array_membership", data=_groups(values=1)),
    ExampleHandler(r"^=~\s+\[(.*)\]$", "array_proximity", data=_groups(elements=1)),
    ExampleHandler(r"^\[(.*),?\s*\.\.\.\s*\]$", "array_head", data=_groups(head=1)),
    ExampleHandler(r"^\[\s*\.\.\.,?\s*(.*)\]$", "array_tail", data=_groups(tail=1)),
    ExampleHandler(r"\{([\s\S]*),?\s*\.\.\.\s*\}", "object_proximity", data=_groups(properties=1)),
]


def build_handler(entry: Union[ExampleHandler, Mapping[str, Any]]) -> ExampleHandler:
    """Builds a handler from a config mapping like ``{pattern: '^even$', template: 'even'}``."""
    if isinstance(entry, ExampleHandler):
        return entry
    if not isinstance(entry, Mapping) or "pattern" not in entry:
        raise ConfigurationError(f"Example handler entries need a 'pattern': {entry!r}")
    return ExampleHandler(
        entry["pattern"],
        template=entry.get("template"),
        test=entry.get("test"),
        data=entry.get("data"),
    )


def build_handlers(entries: Iterable[Union[ExampleHandler, Mapping[str, Any]]] = (),
                   include_defaults: bool = True) -> List[ExampleHandler]:
    """Caller handlers first, then (optionally) the defaults."""
    handlers = [build_handler(entry) for entry in entries]
    if handlers:
        logger.debug(f"Registered {len(handlers)} custom example handler(s)")
    if include_defaults:
        handlers.extend(DEFAULT_EXAMPLE_HANDLERS)
    return handlers


def find_handler(handlers: List[ExampleHandler], expected: str):
    """Returns ``(index, handler, match)`` for the first handler that matches, else None."""
    for index, handler in enumerate(handlers):
        match = handler.match(expected)
        if match:
            return index, handler, match
    return None
