"""
Compilation driver.

Compiles the requested functions with esbuild into a shared in-memory file
system, either once (run) or repeatedly on source changes (watch). Each
function is bundled by its own esbuild process; the processes of one build
run concurrently and a failing function never cancels the others.

Usage:
    compiler = Compiler(context, request, ["foo", "bar"])

    # One-shot
    result = await compiler.run()

    # Watch mode
    compiler.subscribe(lambda result: package_all(result))
    await compiler.watch()
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from colorlog.escape_codes import escape_codes

from lambda_builder import constants as CONSTANTS
from lambda_builder.core.context import BuildContext, BuildRequest, FunctionDescriptor
from lambda_builder.core.exceptions import BuildError, CompilationError
from lambda_builder.core.logging_policy import resolve_pure_funcs
from lambda_builder.discovery import load_function
from lambda_builder.esbuild_runner import BundleOptions, BundleOutput, EsbuildRunner
from lambda_builder.memory_fs import MemoryFileSystem, bundle_path
from lambda_builder.watcher import SourceWatcher

logger = logging.getLogger(__name__)


@dataclass
class CompilationStats:
    """Per-function outcome of one compilation, renderable as a report."""
    outputs: List[BundleOutput] = field(default_factory=list)
    errors: List[BuildError] = field(default_factory=list)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_string(self, colors: bool = False) -> str:
        def paint(text: str, color: str) -> str:
            if not colors:
                return text
            return f"{escape_codes[color]}{text}{escape_codes['reset']}"

        lines = []
        for output in self.outputs:
            lines.append(
                f"{paint(output.function_name + '.js', 'bold_green')}  "
                f"{len(output.code)} bytes  {output.duration_ms}ms"
            )
            if output.diagnostics.strip():
                lines.append(output.diagnostics.rstrip())
        for error in self.errors:
            lines.append(f"{paint('ERROR', 'bold_red')} {error}")

        total = len(self.outputs) + len(self.errors)
        summary = f"compiled {len(self.outputs)}/{total} function(s)"
        if self.errors:
            summary = paint(f"{summary} with {len(self.errors)} error(s)", "red")
        else:
            summary = paint(f"{summary} successfully", "green")
        lines.append(summary)
        return "\n".join(lines)


@dataclass
class CompilationResult:
    """In-memory output of a successful compilation."""
    fs: MemoryFileSystem
    stats: CompilationStats
    descriptors: List[FunctionDescriptor]


CompilationHandler = Callable[[CompilationResult], None]


def build_bundle_options(context: BuildContext, request: BuildRequest) -> BundleOptions:
    """Translate the build request and project config into bundler options."""
    return BundleOptions(
        alias=dict(context.config.alias),
        externals=list(context.config.externals),
        logging=request.logging,
        pure_funcs=resolve_pure_funcs(request.logging_level if request.logging else None),
        node_target=context.settings.node_target,
        color=context.settings.color,
    )


class Compiler:
    """
    Compiles a fixed set of functions.

    Attributes:
        context: Build context (paths, project config, settings)
        request: Parsed build request
        function_names: Functions compiled on every run
        runner: esbuild wrapper
    """

    def __init__(
        self,
        context: BuildContext,
        request: BuildRequest,
        function_names: List[str],
        runner: Optional[EsbuildRunner] = None
    ):
        self.context = context
        self.request = request
        self.function_names = list(function_names)
        self.options = build_bundle_options(context, request)
        self.runner = runner or EsbuildRunner(
            binary=context.settings.resolve_esbuild_binary(),
            working_dir=context.root_dir,
        )
        self.fs = MemoryFileSystem()
        self._handlers: List[CompilationHandler] = []

    # ==========================================
    # Compilation
    # ==========================================

    async def _bundle_one(self, function_name: str) -> Tuple[BundleOutput, FunctionDescriptor]:
        descriptor = load_function(self.context.functions_dir, function_name)
        return await self.runner.bundle(descriptor, self.options), descriptor

    async def compile(self) -> CompilationResult:
        """
        Compile every function once.

        All bundler runs settle before this returns. Output of successful
        runs is written to self.fs.

        Raises:
            CompilationError: If any function failed; lists every failure
        """
        results = await asyncio.gather(
            *(self._bundle_one(name) for name in self.function_names),
            return_exceptions=True
        )

        stats = CompilationStats()
        descriptors = []
        unexpected = []
        for function_name, result in zip(self.function_names, results):
            if isinstance(result, BuildError):
                stats.errors.append(result)
            elif isinstance(result, BaseException):
                unexpected.append(result)
            else:
                output, descriptor = result
                self.fs.write_file(bundle_path(function_name), output.code)
                stats.outputs.append(output)
                descriptors.append(descriptor)

        print(stats.to_string(colors=self.context.settings.color))

        if unexpected:
            raise unexpected[0]
        if stats.has_errors():
            failed = ", ".join(e.function_name or "?" for e in stats.errors)
            raise CompilationError(
                f"Failed to compile {len(stats.errors)} function(s): {failed}",
                failures=stats.errors
            )

        return CompilationResult(fs=self.fs, stats=stats, descriptors=descriptors)

    async def run(self) -> CompilationResult:
        """One-shot compilation."""
        return await self.compile()

    # ==========================================
    # Watch Mode
    # ==========================================

    def subscribe(self, handler: CompilationHandler) -> Callable[[], None]:
        """
        Register a handler called once per successful (re)compilation.

        Returns:
            Callable that removes the handler again
        """
        self._handlers.append(handler)

        def unsubscribe():
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def notify(self, result: CompilationResult) -> None:
        for handler in list(self._handlers):
            handler(result)

    async def rebuild(self) -> bool:
        """
        One watch iteration: compile and hand the output to subscribers.

        Build errors are logged, never raised, so the watch loop keeps going.

        Returns:
            True if compilation succeeded and subscribers were notified
        """
        try:
            result = await self.compile()
            self.notify(result)
        except BuildError as e:
            logger.error(f"Failed to compile: {e}")
            return False
        return True

    def watch_paths(self) -> list:
        """Sources, sidecars, the override config and local alias targets."""
        root = self.context.root_dir.resolve()
        paths = [
            self.context.root_dir / "src",
            self.context.functions_dir,
            self.context.root_dir / CONSTANTS.BUILD_CONFIG_FILE,
        ]
        # Package aliases ("lodash-es") never resolve to an existing local path
        for target in self.context.config.alias.values():
            candidate = (root / target).resolve()
            if candidate.exists() and candidate.is_relative_to(root) and candidate not in paths:
                paths.append(candidate)
        return paths

    async def watch(self, watcher: Optional[SourceWatcher] = None) -> None:
        """
        Rebuild whenever a watched source file changes.

        Runs until the process is interrupted.
        """
        watcher = watcher or SourceWatcher(self.watch_paths())
        logger.info("Start watching...")
        await self.rebuild()

        while True:
            await asyncio.sleep(self.context.settings.watch_interval)
            if await asyncio.to_thread(watcher.changed):
                logger.info("Change detected, recompiling...")
                await self.rebuild()
