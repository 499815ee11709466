import pytest

from lambda_builder.memory_fs import MemoryFileSystem, bundle_path


def test_write_and_read():
    fs = MemoryFileSystem()
    fs.write_file("/foo.js", b"code")

    assert fs.read_file("/foo.js") == b"code"
    assert fs.exists("/foo.js")
    assert len(fs) == 1


def test_paths_are_normalized():
    fs = MemoryFileSystem()
    fs.write_file("/out/../foo.js", b"code")

    assert fs.read_file("/foo.js") == b"code"
    assert fs.listdir() == ["/foo.js"]


def test_overwrite_replaces_content():
    fs = MemoryFileSystem()
    fs.write_file("/foo.js", b"v1")
    fs.write_file("/foo.js", b"v2")

    assert fs.read_file("/foo.js") == b"v2"


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        MemoryFileSystem().read_file("/nope.js")


def test_relative_paths_rejected():
    with pytest.raises(ValueError):
        MemoryFileSystem().write_file("foo.js", b"")


def test_clear():
    fs = MemoryFileSystem()
    fs.write_file("/a.js", b"")
    fs.clear()

    assert list(fs) == []


def test_bundle_path():
    assert bundle_path("foo") == "/foo.js"
    assert bundle_path("v1.orders") == "/v1.orders.js"
