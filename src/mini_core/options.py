"""Options threaded through parse and write."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Options:
    """Per-call engine configuration.

    - ``debug``: trace classified lines and emitted headers at DEBUG level
    - ``sort_keys``: write keys and child sections sorted by name instead of
      in insertion order
    """

    debug: bool = False
    sort_keys: bool = False


DEFAULT_OPTIONS = Options()
