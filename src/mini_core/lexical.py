"""String-level helpers shared by the reader, writer and value parsers."""

from __future__ import annotations


_NAME_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789_"
)


def trim(s: str) -> str:
    """Strip surrounding spaces and tabs (only horizontal whitespace)."""
    return s.strip(" \t")


def split_by_delimiter(s: str, delimiter: str) -> list[str]:
    return s.split(delimiter)


def split_in_two(s: str, index: int) -> tuple[str, str]:
    """Split *s* around the character at *index*, dropping that character."""
    return s[:index], s[index + 1:]


def is_name_valid(name: str) -> bool:
    """Names are non-empty runs of ASCII letters, digits and ``_``."""
    return bool(name) and all(c in _NAME_CHARS for c in name)


def first_index_of(s: str, c: str) -> int:
    return s.find(c)


def last_index_of(s: str, c: str) -> int:
    return s.rfind(c)


def remove_all(s: str, c: str) -> str:
    return s.replace(c, "")


def is_integer_decimal(s: str) -> bool:
    # ASCII digits only
    return bool(s) and all("0" <= c <= "9" for c in s)
