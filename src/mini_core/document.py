"""Document: the root of a parsed MINI file."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from .options import DEFAULT_OPTIONS, Options
from .reader import read_into
from .section import Section
from .values import Value
from .writer import render


@dataclass
class Document:
    """Owns the root section and, through it, every section and value.

    The root holds only sub-sections when produced by :meth:`parse`.  Values
    stored directly on it are still written, but without a header, so that
    text does not parse back: the reader rejects it with
    ``KEY_VALUE_PAIR_NOT_IN_SECTION``.
    """

    root: Section = field(default_factory=Section)
    trailing_comments: list[str] = field(default_factory=list)

    # -- Parsing / writing ----------------------------------------------

    @classmethod
    def from_text(cls, text: str, options: Options = DEFAULT_OPTIONS) -> Document:
        doc = cls()
        doc.parse(text, options=options)
        return doc

    def parse(self, text: str, additional: bool = False, options: Options = DEFAULT_OPTIONS) -> None:
        """Parse *text* into this document.

        - ``additional=False``: the current tree is replaced
        - ``additional=True``: *text* is merged into the current tree; the
          usual duplicate-section and duplicate-key rules apply against it

        All-or-nothing: on :class:`MiniError` the document is unchanged.
        """
        root = copy.deepcopy(self.root) if additional else Section()
        trailing = read_into(root, text, options)
        self.root = root
        if additional:
            self.trailing_comments = self.trailing_comments + trailing
        else:
            self.trailing_comments = trailing

    def write(self, options: Options = DEFAULT_OPTIONS) -> str:
        return render(self.root, self.trailing_comments, options)

    # -- Convenience accessors ------------------------------------------

    @property
    def sections(self) -> dict[str, Section]:
        return self.root.subsections

    def get_subsection(self, path: str) -> Section:
        return self.root.get_subsection(path)

    def get_value(self, path: str, expected: type | None = None) -> Value:
        return self.root.get_value(path, expected)

    def get_value_or_default(self, path: str, expected: type, default: Any = None) -> Any:
        return self.root.get_value_or_default(path, expected, default)


def loads(text: str, options: Options = DEFAULT_OPTIONS) -> Document:
    """Parse MINI *text* into a new :class:`Document`."""
    return Document.from_text(text, options)


def dumps(doc: Document, options: Options = DEFAULT_OPTIONS) -> str:
    """Render *doc* as MINI text."""
    return doc.write(options)
