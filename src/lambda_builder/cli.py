"""
lambda-build - CLI Entry Point.

    lambda-build [function_name] [--logging] [--watch] [--loggingLevel=[debug|info|warn|error]]

Without a function name every function in src/functions is built.
"""

import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from lambda_builder import constants as CONSTANTS
from lambda_builder.compiler import CompilationResult, Compiler
from lambda_builder.core.context import BuildContext, BuildRequest
from lambda_builder.core.exceptions import BuildError, UsageError
from lambda_builder.core.logging_policy import LOGGING_LEVELS, is_valid_level
from lambda_builder.discovery import discover_functions, load_metadata
from lambda_builder.logger import setup_logger
from lambda_builder.packager import package_function
from lambda_builder.settings import BuilderSettings

logger = logging.getLogger(__name__)

LOGGING_FLAG = "--logging"
WATCH_FLAG = "--watch"
LOGGING_LEVEL_PREFIX = "--loggingLevel="


def usage() -> None:
    """Print usage to stderr and terminate with a failure status."""
    print(CONSTANTS.USAGE, file=sys.stderr)
    sys.exit(1)


def parse_args(argv: Sequence[str]) -> BuildRequest:
    """
    Parse command-line tokens into a BuildRequest.

    Args:
        argv: Arguments without the program name

    Raises:
        UsageError: On a second function name or an unknown logging level
    """
    function_name = None
    logging_enabled = False
    watch = False
    logging_level = None

    for arg in argv:
        if arg == LOGGING_FLAG:
            logging_enabled = True
        elif arg == WATCH_FLAG:
            watch = True
        elif arg.startswith(LOGGING_LEVEL_PREFIX):
            level = arg[len(LOGGING_LEVEL_PREFIX):]
            if not is_valid_level(level):
                raise UsageError(
                    f"Unknown logging level '{level}'. Expected one of: {', '.join(LOGGING_LEVELS)}"
                )
            logging_level = level
        elif function_name is None:
            function_name = arg
        else:
            raise UsageError(f"Unexpected argument '{arg}': only one function name is allowed")

    if logging_enabled and not logging_level:
        logging_level = "debug"
        logger.info('Logging level is set to "debug".')
    elif not logging_enabled and logging_level:
        logger.warning(f'Ignoring logging level "{logging_level}" because logging is disabled.')
        logging_level = None
    elif logging_enabled and logging_level:
        logger.info(f'Logging level is set to "{logging_level}".')

    return BuildRequest(
        function_name=function_name,
        logging=logging_enabled,
        logging_level=logging_level,
        watch=watch,
    )


def resolve_targets(context: BuildContext, request: BuildRequest) -> List[str]:
    if request.function_name:
        return [request.function_name]
    function_names = discover_functions(context.functions_dir)
    logger.info(f"Building all functions {function_names}")
    return function_names


def package_result(context: BuildContext, result: CompilationResult) -> None:
    """Package every compiled function with the metadata loaded for the build."""
    for descriptor in result.descriptors:
        package_function(result.fs, descriptor.name, descriptor.metadata, context.output_dir)


def make_watch_handler(context: BuildContext):
    """
    Handler for watch mode recompilations.

    Metadata sidecars are re-read on every call so edits apply without a
    restart.
    """
    def handle(result: CompilationResult) -> None:
        for descriptor in result.descriptors:
            metadata = load_metadata(context.functions_dir, descriptor.name)
            package_function(result.fs, descriptor.name, metadata, context.output_dir)

    return handle


async def build(context: BuildContext, request: BuildRequest) -> None:
    """Run one build (or a watch session) for a parsed request."""
    function_names = resolve_targets(context, request)
    compiler = Compiler(context, request, function_names)

    if request.watch:
        compiler.subscribe(make_watch_handler(context))
        await compiler.watch()
    else:
        result = await compiler.run()
        package_result(context, result)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = BuilderSettings()
    setup_logger(debug_mode=settings.debug, color=settings.color)

    try:
        request = parse_args(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        logger.error(str(e))
        usage()

    try:
        context = BuildContext.from_settings(settings)
        asyncio.run(build(context, request))
    except (BuildError, OSError) as e:
        logger.error(f"Could not build function(s): {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130

    logger.info("Compilation done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
