"""
Function discovery.

A function is any <name>.json sidecar in the functions directory with an
entry module next to it:

    src/functions/
        foo.json          # metadata sidecar
        foo.ts            # entry module (or foo.js, foo/index.ts, foo/index.js)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from lambda_builder import constants as CONSTANTS
from lambda_builder.core.context import FunctionDescriptor
from lambda_builder.core.exceptions import ConfigurationError, FunctionNotFoundError

logger = logging.getLogger(__name__)


def discover_functions(functions_dir: Path) -> List[str]:
    """
    List function names by metadata sidecar presence.

    Names keep the directory's enumeration order; callers must not depend
    on it being sorted.

    Raises:
        FunctionNotFoundError: If the functions directory does not exist
    """
    functions_dir = Path(functions_dir)
    try:
        entries = os.listdir(functions_dir)
    except FileNotFoundError:
        raise FunctionNotFoundError(f"Functions directory not found: {functions_dir}")

    suffix = CONSTANTS.METADATA_SUFFIX
    return [name[:-len(suffix)] for name in entries if name.endswith(suffix)]


def resolve_entry(functions_dir: Path, function_name: str) -> Path:
    """
    Find the entry module for a function.

    Tries <name>.ts, <name>.js, then <name>/index.ts, <name>/index.js.

    Raises:
        FunctionNotFoundError: If no candidate exists
    """
    base = Path(functions_dir) / function_name
    candidates = [base.with_name(base.name + ext) for ext in CONSTANTS.ENTRY_EXTENSIONS]
    candidates += [base / f"{CONSTANTS.ENTRY_INDEX_NAME}{ext}" for ext in CONSTANTS.ENTRY_EXTENSIONS]

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    raise FunctionNotFoundError(
        f"No entry module found in {functions_dir}",
        function_name=function_name
    )


def load_metadata(functions_dir: Path, function_name: str) -> Dict[str, Any]:
    """
    Read a function's metadata sidecar from disk.

    The file is read on every call so watch mode picks up edits.

    Raises:
        FunctionNotFoundError: If <name>.json does not exist
        ConfigurationError: If the sidecar is not a UTF-8 JSON object
    """
    metadata_path = Path(functions_dir) / f"{function_name}{CONSTANTS.METADATA_SUFFIX}"
    if not metadata_path.exists():
        raise FunctionNotFoundError(
            f"Metadata file not found: {metadata_path.name}",
            function_name=function_name
        )

    try:
        with open(metadata_path, "r", encoding="utf-8") as f:
            metadata = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Invalid JSON in metadata file: {e}",
            config_file=str(metadata_path),
            function_name=function_name
        )

    if not isinstance(metadata, dict):
        raise ConfigurationError(
            "Metadata must be a JSON object",
            config_file=str(metadata_path),
            function_name=function_name
        )
    return metadata


def load_function(functions_dir: Path, function_name: str) -> FunctionDescriptor:
    """Resolve a function name into a descriptor with entry module and metadata."""
    functions_dir = Path(functions_dir)
    metadata = load_metadata(functions_dir, function_name)
    descriptor = FunctionDescriptor(
        name=function_name,
        entry_path=resolve_entry(functions_dir, function_name),
        metadata_path=functions_dir / f"{function_name}{CONSTANTS.METADATA_SUFFIX}",
        metadata=metadata,
    )
    logger.debug(f"Resolved {function_name} -> {descriptor.entry_path}")
    return descriptor
