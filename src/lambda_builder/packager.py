"""
Packaging stage.

Turns the compiled bundle of one function into the deployable artifacts:

    dist/<name>.zip    # single entry: lambda.js
    dist/<name>.json   # the function's metadata
"""

import json
import logging
import time
import zipfile
from pathlib import Path
from typing import Any, Dict

from lambda_builder import constants as CONSTANTS
from lambda_builder.core.exceptions import PackagingError
from lambda_builder.memory_fs import MemoryFileSystem, bundle_path

logger = logging.getLogger(__name__)


# JSON.stringify switches to exponent notation from here on
_JS_EXPONENT_THRESHOLD = 1e21


def _js_numbers(value: Any) -> Any:
    """Integral floats become ints, as JavaScript prints 3.0 as 3."""
    if isinstance(value, float) and value.is_integer() and abs(value) < _JS_EXPONENT_THRESHOLD:
        return int(value)
    if isinstance(value, dict):
        return {key: _js_numbers(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_js_numbers(item) for item in value]
    return value


def serialize_metadata(metadata: Dict[str, Any]) -> str:
    """Compact JSON, byte-compatible with JavaScript's JSON.stringify."""
    return json.dumps(_js_numbers(metadata), separators=(",", ":"), ensure_ascii=False)


def ensure_output_dir(output_dir: Path) -> None:
    """
    Create the output directory if needed.

    Several packaging runs may call this for the same directory. Failures
    other than "already exists" are logged only; writing the artifacts
    afterwards reports the real problem.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Could not create output directory {output_dir}: {e}")


def package_function(
    fs: MemoryFileSystem,
    function_name: str,
    metadata: Dict[str, Any],
    output_dir: Path
) -> Path:
    """
    Write <name>.zip and <name>.json for one compiled function.

    Args:
        fs: Build output holding /<name>.js
        function_name: Function to package
        metadata: Metadata written next to the archive
        output_dir: Destination directory

    Returns:
        Path of the written zip file

    Raises:
        PackagingError: If the build output has no bundle for the function
    """
    start = time.perf_counter()
    output_dir = Path(output_dir)

    try:
        code = fs.read_file(bundle_path(function_name))
    except FileNotFoundError as e:
        raise PackagingError(str(e), function_name=function_name)

    ensure_output_dir(output_dir)

    zip_path = output_dir / f"{function_name}{CONSTANTS.ZIP_EXTENSION}"
    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(CONSTANTS.ARCHIVE_ENTRY_NAME, code)

    metadata_path = output_dir / f"{function_name}{CONSTANTS.METADATA_SUFFIX}"
    metadata_path.write_text(serialize_metadata(metadata), encoding="utf-8")

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.info(f'Compressed "{function_name}" in {elapsed_ms}ms')
    return zip_path
