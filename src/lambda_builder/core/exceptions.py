"""
Custom exceptions for the function builder.

This module defines a hierarchy of exceptions used throughout the build
pipeline to provide clear, actionable error messages.

Exception Hierarchy:
    BuildError (base)
    ├── UsageError - Malformed command-line arguments
    ├── ConfigurationError - Invalid or unreadable configuration
    ├── FunctionNotFoundError - Function sidecar or entry module is missing
    ├── CompilationError - The bundler failed to compile
    │   └── EsbuildError - esbuild exited with a non-zero status
    └── PackagingError - Compiled output could not be packaged
"""

from typing import List, Optional


class BuildError(Exception):
    """
    Base exception for all build-related errors.

    All custom exceptions in the builder inherit from this class,
    allowing broad exception handling at the CLI boundary.

    Attributes:
        message: Human-readable error description
        function_name: Optional function the error relates to
    """

    def __init__(self, message: str, function_name: Optional[str] = None):
        self.message = message
        self.function_name = function_name

        if function_name:
            full_message = f"{message} [function={function_name}]"
        else:
            full_message = message

        super().__init__(full_message)


class UsageError(BuildError):
    """Raised when the command line cannot be parsed into a build request."""


class ConfigurationError(BuildError):
    """
    Raised when configuration is invalid or cannot be read.

    Example:
        >>> load_metadata(functions_dir, "broken")
        ConfigurationError: Invalid JSON in metadata file: ... (file: broken.json)
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        function_name: Optional[str] = None
    ):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message, function_name=function_name)


class FunctionNotFoundError(BuildError):
    """
    Raised when a requested function cannot be located.

    This typically occurs when:
    - The function name has a typo
    - The metadata sidecar (<name>.json) is missing
    - No entry module (<name>.ts, <name>.js, <name>/index.*) exists
    """


class CompilationError(BuildError):
    """
    Raised when compiling one or more functions fails.

    Attributes:
        failures: The individual per-function errors of a batch, if any
    """

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        failures: Optional[List[BuildError]] = None
    ):
        self.failures = failures or []
        super().__init__(message, function_name=function_name)


class EsbuildError(CompilationError):
    """
    Raised when the esbuild process exits with a non-zero status.

    Attributes:
        return_code: Exit status of the esbuild process
        stderr: Diagnostics written by esbuild
    """

    def __init__(self, function_name: str, return_code: int, stderr: str):
        self.return_code = return_code
        self.stderr = stderr
        super().__init__(
            f"esbuild failed (exit {return_code}): {stderr.strip() or 'No output captured'}",
            function_name=function_name
        )


class PackagingError(BuildError):
    """Raised when compiled output for a function is missing from the build output."""
