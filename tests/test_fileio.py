"""Tests for load / dump."""

import os
import stat

import pytest

from mini_core import ArrayValue, ErrorKind, MiniError, StringValue, dump, load, loads


def test_load(tmp_path):
    path = tmp_path / "settings.mini"
    path.write_text('[app]\ntitle = "hello"\n', encoding="utf-8")
    doc = load(path)
    assert doc.get_value("app.title").value == "hello"

def test_load_missing_file(tmp_path):
    with pytest.raises(MiniError) as e:
        load(tmp_path / "missing.mini")
    assert e.value.kind is ErrorKind.FILE_IO_ERROR

def test_load_parse_error_keeps_line(tmp_path):
    path = tmp_path / "bad.mini"
    path.write_text("[app]\nx = \n", encoding="utf-8")
    with pytest.raises(MiniError) as e:
        load(path)
    assert e.value.kind is ErrorKind.VALUE_EMPTY
    assert e.value.line == 2

def test_dump_then_load(tmp_path):
    doc = loads("[app]\nvalues = [1h, 2h]\n")
    path = tmp_path / "out.mini"
    dump(doc, path)
    assert path.read_text(encoding="utf-8") == "[app]\nvalues = [1h, 2h]\n\n"
    assert load(path) == doc
    assert os.listdir(tmp_path) == ["out.mini"]

def test_dump_failure_keeps_existing_file(tmp_path):
    path = tmp_path / "out.mini"
    path.write_text("old\n", encoding="utf-8")
    doc = loads("[app]\n")
    doc.get_subsection("app").set_value("mixed", ArrayValue([StringValue("a"), ArrayValue()]))
    with pytest.raises(MiniError) as e:
        dump(doc, path)
    assert e.value.kind is ErrorKind.ARRAY_DATA_TYPE_INCONSISTENCY
    assert path.read_text(encoding="utf-8") == "old\n"
    assert os.listdir(tmp_path) == ["out.mini"]

def test_dump_missing_directory(tmp_path):
    with pytest.raises(MiniError) as e:
        dump(loads("[a]\n"), tmp_path / "nope" / "out.mini")
    assert e.value.kind is ErrorKind.FILE_IO_ERROR

def test_load_invalid_utf8(tmp_path):
    path = tmp_path / "latin.mini"
    path.write_bytes(b'[app]\nx = "\xff\xfe"\n')
    with pytest.raises(MiniError) as e:
        load(path)
    assert e.value.kind is ErrorKind.FILE_IO_ERROR

@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_dump_keeps_existing_mode(tmp_path):
    path = tmp_path / "shared.mini"
    path.write_text("[a]\n", encoding="utf-8")
    os.chmod(path, 0o644)
    dump(loads("[a]\nx = 1\n"), path)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o644
    os.chmod(path, 0o640)
    dump(loads("[a]\nx = 2\n"), path)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o640

@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_dump_new_file_uses_umask(tmp_path):
    umask = os.umask(0o022)
    try:
        path = tmp_path / "new.mini"
        dump(loads("[a]\n"), path)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o644
    finally:
        os.umask(umask)
