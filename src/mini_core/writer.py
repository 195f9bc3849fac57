"""Writer layer: renders a section tree back to MINI text."""

from __future__ import annotations

import logging
from typing import Iterable, TypeVar

from .errors import ErrorKind, MiniError
from .lexical import is_name_valid
from .options import DEFAULT_OPTIONS, Options
from .section import Section

log = logging.getLogger(__name__)

T = TypeVar("T")


def _ordered(mapping: dict[str, T], options: Options) -> Iterable[tuple[str, T]]:
    if options.sort_keys:
        return sorted(mapping.items())
    return mapping.items()


def _check_name(name: str, what: str) -> None:
    if not is_name_valid(name):
        log.debug("invalid name for %s: %r", what, name)
        raise MiniError(ErrorKind.INVALID_NAME, f"invalid {what} name: {name!r}")


def write_section(
    section: Section,
    out: list[str],
    path: str = "",
    options: Options = DEFAULT_OPTIONS,
) -> None:
    """Append the lines for *section* and its descendants to *out*.

    *path* is the dotted path of *section* (empty for the root).  Headers
    are always written with the full path.
    """
    if section.values:
        for key, value in _ordered(section.values, options):
            _check_name(key, "key")
            out.extend(value.comments)
            out.append(f"{key} = {value.format()}")
        out.append("")

    prefix = f"{path}." if path else ""
    for name, child in _ordered(section.subsections, options):
        _check_name(name, "section")
        full_path = prefix + name
        if options.debug:
            log.debug("writing [%s]", full_path)
        out.extend(child.comments)
        out.append(f"[{full_path}]")
        write_section(child, out, full_path, options)


def render(
    root: Section,
    trailing_comments: list[str] | None = None,
    options: Options = DEFAULT_OPTIONS,
) -> str:
    """Render the whole tree under *root* as text."""
    lines: list[str] = []
    try:
        write_section(root, lines, "", options)
    except MiniError as exc:
        log.debug("write failed after %d lines: %s", len(lines), exc)
        raise
    if trailing_comments:
        lines.extend(trailing_comments)
    return "".join(line + "\n" for line in lines)
