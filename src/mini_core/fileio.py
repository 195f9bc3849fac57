"""File helpers around :func:`loads` / :func:`dumps`."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile

from .document import Document, dumps, loads
from .errors import ErrorKind, MiniError
from .options import DEFAULT_OPTIONS, Options

log = logging.getLogger(__name__)


def load(path: str | os.PathLike[str], options: Options = DEFAULT_OPTIONS) -> Document:
    """Read and parse the UTF-8 file at *path*."""
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        log.debug("cannot read %s: %s", path, exc)
        raise MiniError(ErrorKind.FILE_IO_ERROR, f"cannot read {path}: {exc}") from exc
    return loads(text, options)


def _default_mode() -> int:
    # os.umask() can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def dump(doc: Document, path: str | os.PathLike[str], options: Options = DEFAULT_OPTIONS) -> None:
    """Write *doc* to *path*.

    The text is rendered before the file is touched, then written to a
    temporary file next to *path* and moved into place, so a failed write
    never leaves a half-written file behind.  An existing file keeps its
    permission bits; a new one gets the usual umask-derived mode.
    """
    text = dumps(doc, options)
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".mini-", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, _default_mode())
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as exc:
        log.debug("cannot write %s: %s", path, exc)
        raise MiniError(ErrorKind.FILE_IO_ERROR, f"cannot write {path}: {exc}") from exc
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
