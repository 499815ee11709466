from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lambda_builder import constants as CONSTANTS


class BuilderSettings(BaseSettings):
    """
    Tool settings, overridable through LAMBDA_BUILD_* environment variables
    or a .env file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="LAMBDA_BUILD_",
        env_file=".env",
        extra="ignore",
    )

    # Project
    root_dir: Path = Field(default_factory=Path.cwd)
    functions_dir: Path = Path(CONSTANTS.FUNCTIONS_DIR_NAME)
    output_dir: Path = Path(CONSTANTS.OUTPUT_DIR_NAME)

    # Bundler
    esbuild_binary: Optional[str] = None
    node_target: str = CONSTANTS.DEFAULT_NODE_TARGET

    # Watch mode
    watch_interval: float = CONSTANTS.DEFAULT_WATCH_INTERVAL_SECONDS

    # Output
    color: bool = True
    debug: bool = False

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root."""
        return path if path.is_absolute() else (self.root_dir / path).resolve()

    def resolve_esbuild_binary(self) -> str:
        """
        Locate the esbuild executable.

        An explicit setting wins, then the project's locally installed
        node_modules/.bin/esbuild, then whatever is on PATH.
        """
        if self.esbuild_binary:
            return self.esbuild_binary
        local = self.root_dir / CONSTANTS.LOCAL_ESBUILD_BINARY
        if local.exists():
            return str(local)
        return CONSTANTS.ESBUILD_BINARY_NAME
