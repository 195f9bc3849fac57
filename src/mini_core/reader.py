"""Reader layer: turns MINI source lines into a section tree."""

from __future__ import annotations

import logging

from .errors import ErrorKind, MiniError
from .lexical import first_index_of, is_name_valid, split_by_delimiter, split_in_two, trim
from .options import DEFAULT_OPTIONS, Options
from .section import Section
from .values import Value, parse_value

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line handling
# ---------------------------------------------------------------------------

def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only; a trailing ``\\r`` (CRLF input) is dropped."""
    return [line.removesuffix("\r") for line in text.split("\n")]


def classify_line(line: str) -> str:
    """Classify an already-trimmed line.

    Returns one of ``'empty'``, ``'comment'``, ``'section'`` or
    ``'key_value'``.
    """
    if not line:
        return "empty"
    if line[0] == "#":
        return "comment"
    if line[0] == "[":
        return "section"
    return "key_value"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

def parse_section_path(line: str) -> list[str]:
    """``[a.b.c]`` → ``["a", "b", "c"]``."""
    if not line.endswith("]"):
        raise MiniError(ErrorKind.SECTION_EXPECTED_CLOSING_BRACKET, "expected ']' at the end of the line")
    path = trim(line[1:-1])
    if not path:
        raise MiniError(ErrorKind.EMPTY_SECTION_NAME, "expected section path, found '[]'")

    names = split_by_delimiter(path, ".")
    for name in names:
        if not is_name_valid(name):
            raise MiniError(
                ErrorKind.INVALID_NAME,
                f"invalid section name {name!r}: only [a-zA-Z0-9_] allowed",
            )
    return names


def open_section(root: Section, names: list[str]) -> Section:
    """Create (or walk through) every section along *names*.

    Intermediate sections may already exist from earlier headers; only
    the last segment must be new.
    """
    section = root
    last = len(names) - 1
    for i, name in enumerate(names):
        try:
            section.set_subsection(name)
        except MiniError:
            if i == last:
                raise MiniError(
                    ErrorKind.SECTION_ALREADY_PRESENT,
                    f"section [{'.'.join(names)}] is defined twice",
                ) from None
        section = section.subsections[name]
    return section


def parse_key_value(line: str) -> tuple[str, Value]:
    """``key = value`` → ``(key, Value)``; splits at the first ``=``."""
    index = first_index_of(line, "=")
    if index == -1:
        raise MiniError(ErrorKind.EXPECTED_KEY_VALUE_PAIR, "expected '=' in line")

    key, raw = split_in_two(line, index)
    key = trim(key)
    raw = trim(raw)
    if not key:
        raise MiniError(ErrorKind.KEY_EMPTY, "expected key before '='")
    if not is_name_valid(key):
        raise MiniError(ErrorKind.INVALID_NAME, f"invalid key {key!r}: only [a-zA-Z0-9_] allowed")
    if not raw:
        raise MiniError(ErrorKind.VALUE_EMPTY, f"no value for key {key!r}")
    return key, parse_value(raw)


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

def read_into(root: Section, text: str, options: Options = DEFAULT_OPTIONS) -> list[str]:
    """Parse *text* into *root* and return the comments left after the last statement.

    Stops at the first error; the raised :class:`MiniError` carries the
    1-based line number.  *root* is left partially filled in that case.
    """
    current: Section | None = None
    pending: list[str] = []

    for lineno, raw_line in enumerate(split_lines(text), 1):
        line = trim(raw_line)
        kind = classify_line(line)
        if options.debug:
            log.debug("%d [%s] %s", lineno, kind, line)

        try:
            if kind == "empty":
                continue

            if kind == "comment":
                pending.append(line)
                continue

            if kind == "section":
                current = open_section(root, parse_section_path(line))
                current.comments = pending
                pending = []
                continue

            if current is None:
                raise MiniError(
                    ErrorKind.KEY_VALUE_PAIR_NOT_IN_SECTION,
                    "expected a section header before the first key-value pair",
                )
            key, value = parse_key_value(line)
            value.comments = pending
            pending = []
            current.set_value(key, value)
        except MiniError as exc:
            exc.line = lineno
            log.debug("%d: %s <- HERE (%s)", lineno, line, exc.kind.name)
            raise

    return pending
