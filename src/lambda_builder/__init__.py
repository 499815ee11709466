"""
lambda-builder: bundles Node.js serverless functions into deployable zips.

Modules:
    cli: Command-line entry point
    discovery: Finds functions and their metadata sidecars
    compiler: Drives esbuild in one-shot and watch mode
    esbuild_runner: esbuild subprocess wrapper
    packager: Writes <name>.zip and <name>.json
    core: Exceptions, build configuration, context and logging policy
"""

__version__ = "1.0.0"
