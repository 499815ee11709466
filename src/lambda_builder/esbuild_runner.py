"""
esbuild CLI wrapper.

Bundles a single function entry module for the Node.js runtime. No output
file is passed, so esbuild writes the bundle to stdout and the runner stores
it in a MemoryFileSystem instead of on disk.

Usage:
    from lambda_builder.esbuild_runner import EsbuildRunner

    runner = EsbuildRunner(binary="esbuild", working_dir=project_root)
    output = await runner.bundle(descriptor, options)
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence

from lambda_builder import constants as CONSTANTS
from lambda_builder.core.context import FunctionDescriptor
from lambda_builder.core.exceptions import CompilationError, EsbuildError

logger = logging.getLogger(__name__)


@dataclass
class BundleOptions:
    """
    Bundler settings shared by every function of one build.

    Attributes:
        alias: Module specifier -> replacement path
        externals: Modules required at runtime instead of bundled
        logging: Value baked in for process.env.LOGGING
        pure_funcs: Calls the minifier may drop when their result is unused
        node_target: esbuild target, e.g. "node18"
        color: Colorize esbuild diagnostics
    """
    alias: Dict[str, str] = field(default_factory=dict)
    externals: List[str] = field(default_factory=list)
    logging: bool = False
    pure_funcs: Sequence[str] = ()
    node_target: str = CONSTANTS.DEFAULT_NODE_TARGET
    color: bool = True


@dataclass
class BundleOutput:
    """Result of bundling one function."""
    function_name: str
    code: bytes
    diagnostics: str
    duration_ms: int


class EsbuildRunner:
    """
    Runs the esbuild executable once per function entry.

    Attributes:
        binary: esbuild executable name or path
        working_dir: Directory esbuild runs in; relative alias paths resolve here
    """

    def __init__(self, binary: str, working_dir: Path):
        if not binary:
            raise ValueError("binary is required")

        self.binary = binary
        self.working_dir = Path(working_dir)

    def build_args(self, descriptor: FunctionDescriptor, options: BundleOptions) -> List[str]:
        """
        Build the esbuild argument vector for one function.

        Function-level nodeExternals are appended to the shared externals,
        keeping the first occurrence of each name.
        """
        args = [
            str(descriptor.entry_path),
            "--bundle",
            "--platform=node",
            f"--target={options.node_target}",
            "--format=cjs",
            "--minify",
            f"--resolve-extensions={','.join(CONSTANTS.ENTRY_EXTENSIONS)}",
        ]

        for specifier, replacement in options.alias.items():
            args.append(f"--alias:{specifier}={replacement}")

        externals = list(dict.fromkeys([*options.externals, *descriptor.node_externals]))
        for module in externals:
            args.append(f"--external:{module}")

        args.append(f"--define:{CONSTANTS.LOGGING_DEFINE}={'true' if options.logging else 'false'}")

        for call in options.pure_funcs:
            args.append(f"--pure:{call}")

        args.append("--log-level=warning")
        args.append(f"--color={'true' if options.color else 'false'}")
        return args

    async def bundle(self, descriptor: FunctionDescriptor, options: BundleOptions) -> BundleOutput:
        """
        Bundle one function and return the compiled code.

        Raises:
            EsbuildError: If esbuild exits with a non-zero status
            CompilationError: If the esbuild executable cannot be started
        """
        cmd = [self.binary] + self.build_args(descriptor, options)
        logger.debug(f"Running: {' '.join(cmd)}")

        start = time.perf_counter()
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(self.working_dir),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise CompilationError(
                f"esbuild executable not found: {self.binary}. "
                "Install it with 'npm install --save-dev esbuild' or set LAMBDA_BUILD_ESBUILD_BINARY.",
                function_name=descriptor.name
            )

        stdout, stderr = await process.communicate()
        duration_ms = int((time.perf_counter() - start) * 1000)
        diagnostics = stderr.decode("utf-8", errors="replace")

        if process.returncode != 0:
            raise EsbuildError(descriptor.name, process.returncode, diagnostics)

        return BundleOutput(
            function_name=descriptor.name,
            code=stdout,
            diagnostics=diagnostics,
            duration_ms=duration_ms,
        )
