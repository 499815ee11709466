"""
Core types shared by the build stages.

Exports:
    - Exceptions: BuildError and subclasses
    - BuildRequest, BuildContext, FunctionDescriptor
    - BuildConfig, load_build_config
    - resolve_pure_funcs, LOGGING_LEVELS
"""

from .exceptions import (
    BuildError,
    UsageError,
    ConfigurationError,
    FunctionNotFoundError,
    CompilationError,
    EsbuildError,
    PackagingError,
)
from .build_config import BuildConfig, load_build_config
from .context import BuildRequest, BuildContext, FunctionDescriptor
from .logging_policy import LOGGING_LEVELS, resolve_pure_funcs

__all__ = [
    "BuildError",
    "UsageError",
    "ConfigurationError",
    "FunctionNotFoundError",
    "CompilationError",
    "EsbuildError",
    "PackagingError",
    "BuildConfig",
    "load_build_config",
    "BuildRequest",
    "BuildContext",
    "FunctionDescriptor",
    "LOGGING_LEVELS",
    "resolve_pure_funcs",
]
