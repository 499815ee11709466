"""
Unit tests for the packaging stage.

Verifies the artifacts a deployment expects:
- <name>.zip with exactly one entry, lambda.js
- <name>.json equal to JSON.stringify(metadata)
- Re-running against an existing output directory works
"""
import json
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from lambda_builder.core.exceptions import PackagingError
from lambda_builder.memory_fs import MemoryFileSystem, bundle_path
from lambda_builder.packager import ensure_output_dir, package_function, serialize_metadata

BUNDLE = b'"use strict";exports.handler=async()=>({statusCode:200});'


@pytest.fixture
def build_output():
    fs = MemoryFileSystem()
    fs.write_file("/foo.js", BUNDLE)
    return fs


class TestPackageFunction:

    def test_writes_zip_with_single_entry(self, build_output, tmp_path):
        output_dir = tmp_path / "dist"

        zip_path = package_function(build_output, "foo", {}, output_dir)

        assert zip_path == output_dir / "foo.zip"
        with zipfile.ZipFile(zip_path) as zf:
            assert zf.namelist() == ["lambda.js"]
            assert zf.read("lambda.js") == BUNDLE

    def test_writes_metadata_sidecar(self, build_output, tmp_path):
        metadata = {"memorySize": 128, "nodeExternals": ["sharp"], "description": "Grüße"}

        package_function(build_output, "foo", metadata, tmp_path)

        written = (tmp_path / "foo.json").read_text(encoding="utf-8")
        assert written == '{"memorySize":128,"nodeExternals":["sharp"],"description":"Grüße"}'
        assert json.loads(written) == metadata

    def test_existing_output_dir(self, build_output, tmp_path):
        """Packaging twice into the same directory must not fail."""
        output_dir = tmp_path / "dist"
        output_dir.mkdir()

        package_function(build_output, "foo", {}, output_dir)
        package_function(build_output, "foo", {}, output_dir)

        assert sorted(p.name for p in output_dir.iterdir()) == ["foo.json", "foo.zip"]

    def test_only_two_artifacts(self, build_output, tmp_path):
        build_output.write_file("/bar.js", b"bar")

        package_function(build_output, "foo", {}, tmp_path)

        assert sorted(p.name for p in tmp_path.iterdir()) == ["foo.json", "foo.zip"]

    def test_missing_bundle(self, tmp_path):
        with pytest.raises(PackagingError) as exc:
            package_function(MemoryFileSystem(), "foo", {}, tmp_path)

        assert exc.value.function_name == "foo"
        assert not (tmp_path / "foo.zip").exists()

    def test_logs_elapsed_time(self, build_output, tmp_path, caplog):
        with caplog.at_level("INFO", logger="lambda_builder"):
            package_function(build_output, "foo", {}, tmp_path)

        assert 'Compressed "foo" in' in caplog.text


class TestEnsureOutputDir:

    def test_creates_nested(self, tmp_path):
        target = tmp_path / "a" / "b"
        ensure_output_dir(target)
        assert target.is_dir()

    def test_other_errors_are_logged_not_raised(self, tmp_path, caplog):
        with patch.object(Path, "mkdir", side_effect=PermissionError("denied")):
            with caplog.at_level("WARNING", logger="lambda_builder"):
                ensure_output_dir(tmp_path / "dist")

        assert "Could not create output directory" in caplog.text


def test_serialize_metadata_is_compact():
    assert serialize_metadata({"a": [1, 2], "b": {"c": None}}) == '{"a":[1,2],"b":{"c":null}}'


def test_serialize_metadata_writes_integral_floats_as_integers():
    metadata = {"timeout": 3.0, "ratio": 1e2, "nested": [2.0, 1.5], "big": 1e21}

    assert serialize_metadata(metadata) == '{"timeout":3,"ratio":100,"nested":[2,1.5],"big":1e+21}'


def test_sidecar_float_matches_javascript(build_output, tmp_path):
    package_function(build_output, "foo", {"timeout": 3.0}, tmp_path)

    assert (tmp_path / "foo.json").read_text(encoding="utf-8") == '{"timeout":3}'


def test_reads_bundle_from_shared_path(tmp_path):
    fs = MemoryFileSystem()
    fs.write_file(bundle_path("v1.orders"), BUNDLE)

    zip_path = package_function(fs, "v1.orders", {}, tmp_path)

    with zipfile.ZipFile(zip_path) as zf:
        assert zf.read("lambda.js") == BUNDLE
