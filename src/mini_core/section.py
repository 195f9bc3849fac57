"""Section: a node of the configuration tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, TypeVar

from .errors import ErrorKind, MiniError
from .values import Value

log = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass
class Section:
    """Named child sections, keyed values and the comments above the header.

    A section does not know its own name; the parent's ``subsections``
    mapping does.  Dotted paths (``"a.b.c"``) are resolved relative to this
    section.
    """

    values: dict[str, Value] = field(default_factory=dict)
    subsections: dict[str, Section] = field(default_factory=dict)
    comments: list[str] = field(default_factory=list)

    # -- Sub-sections ---------------------------------------------------

    def get_subsection(self, path: str) -> Section:
        """Resolve ``"a.b"`` one segment at a time.

        Raises ``SECTION_NOT_PRESENT`` at the first missing segment.
        """
        section = self
        for name in path.split("."):
            child = section.subsections.get(name)
            if child is None:
                log.debug("sub-section not found: %s (in %s)", name, path)
                raise MiniError(ErrorKind.SECTION_NOT_PRESENT, f"section not found: {path}")
            section = child
        return section

    def set_subsection(
        self,
        name: str,
        section: Section | None = None,
        allow_overwrite: bool = False,
    ) -> bool:
        """Insert *section* (a fresh one by default) under *name*.

        *name* is a single segment.  Returns ``True`` when an existing child
        was replaced.
        """
        exists = name in self.subsections
        if exists and not allow_overwrite:
            raise MiniError(ErrorKind.SECTION_ALREADY_PRESENT, f"section already present: {name}")
        self.subsections[name] = section if section is not None else Section()
        return exists

    def has_subsection(self, path: str) -> bool:
        try:
            self.get_subsection(path)
        except MiniError:
            return False
        return True

    # -- Values ---------------------------------------------------------

    def get_value(self, path: str, expected: type[V] | None = None) -> V:
        """Look up ``"a.b.key"``: every segment but the last names a section.

        When *expected* is given (e.g. ``IntValue``) a stored value of any
        other kind raises ``INVALID_DATA_TYPE``.
        """
        section_path, _, key = path.rpartition(".")
        section = self.get_subsection(section_path) if section_path else self

        value = section.values.get(key)
        if value is None:
            raise MiniError(ErrorKind.KEY_NOT_PRESENT, f"key not found: {path}")
        if expected is not None and not isinstance(value, expected):
            raise MiniError(
                ErrorKind.INVALID_DATA_TYPE,
                f"{path} is {value.kind.name}, not {expected.__name__}",
            )
        return value

    def set_value(self, name: str, value: Value, allow_overwrite: bool = False) -> bool:
        """Store *value* under the single-segment key *name*.

        Returns ``True`` when an existing value was replaced.
        """
        exists = name in self.values
        if exists and not allow_overwrite:
            raise MiniError(ErrorKind.KEY_ALREADY_PRESENT, f"key already present: {name}")
        self.values[name] = value
        return exists

    def get_value_or_default(self, path: str, expected: type, default: Any = None) -> Any:
        """Payload of the value at *path*, or *default* if any step fails."""
        try:
            return self.get_value(path, expected).value
        except MiniError:
            return default

    def has_value(self, path: str) -> bool:
        try:
            self.get_value(path)
        except MiniError:
            return False
        return True
