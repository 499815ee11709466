"""
Build request and context classes.

Configuration is loaded once when the CLI starts and handed to every stage
inside a BuildContext. Nothing in the builder reads configuration from module
state, so tests can construct a context for a temporary project directly.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from lambda_builder import constants as CONSTANTS
from lambda_builder.core.build_config import BuildConfig, load_build_config
from lambda_builder.settings import BuilderSettings


@dataclass(frozen=True)
class BuildRequest:
    """
    What the user asked to build, parsed from the command line.

    Attributes:
        function_name: Single function to build, or None for all functions
        logging: Whether logging is compiled into the bundles
        logging_level: Lowest level kept when logging is on (None when off)
        watch: Keep rebuilding on source changes
    """
    function_name: Optional[str] = None
    logging: bool = False
    logging_level: Optional[str] = None
    watch: bool = False


@dataclass
class FunctionDescriptor:
    """
    A discovered function ready to be compiled.

    Attributes:
        name: Function name (sidecar filename without .json)
        entry_path: Entry module handed to the bundler
        metadata_path: Path of the metadata sidecar
        metadata: Parsed sidecar contents, written next to the zip verbatim
    """
    name: str
    entry_path: Path
    metadata_path: Path
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def node_externals(self) -> List[str]:
        """Runtime-provided modules declared by this function only."""
        externals = self.metadata.get(CONSTANTS.METADATA_EXTERNALS_KEY) or []
        return [str(name) for name in externals]


@dataclass
class BuildContext:
    """
    Everything the build stages need, constructed once per process.

    Attributes:
        root_dir: Project root (bundler working directory)
        functions_dir: Directory holding function sidecars and entry modules
        output_dir: Directory receiving <name>.zip and <name>.json
        config: Project build configuration (aliases, externals)
        settings: Tool settings (esbuild location, node target, ...)
    """
    root_dir: Path
    functions_dir: Path
    output_dir: Path
    config: BuildConfig
    settings: BuilderSettings

    @classmethod
    def from_settings(cls, settings: BuilderSettings) -> "BuildContext":
        root_dir = settings.root_dir.resolve()
        return cls(
            root_dir=root_dir,
            functions_dir=settings.resolve(settings.functions_dir),
            output_dir=settings.resolve(settings.output_dir),
            config=load_build_config(root_dir),
            settings=settings,
        )
