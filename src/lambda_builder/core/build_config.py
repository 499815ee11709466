"""
Project build configuration.

An optional lambda-build.config.json at the project root adjusts how
functions are bundled:

    {
        "alias": {"pg": "./pg.js"},
        "externals": ["aws-sdk"]
    }

alias:     module specifier -> replacement path (relative to the project root)
externals: modules left out of the bundle and required at runtime instead

Usage:
    from lambda_builder.core.build_config import load_build_config

    config = load_build_config(Path("/path/to/project"))
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field, ValidationError

from lambda_builder import constants as CONSTANTS

logger = logging.getLogger(__name__)


class BuildConfig(BaseModel):
    """Module aliasing and external module exclusions for the bundler."""

    alias: Dict[str, str] = Field(default_factory=dict)
    externals: List[str] = Field(default_factory=list)


DEFAULT_BUILD_CONFIG: Dict[str, Any] = {
    "alias": {},
    "externals": [],
}


def load_build_config(root_dir: Path) -> BuildConfig:
    """
    Load the project override file merged over the defaults.

    Override fields win over the defaults; keys other than alias and
    externals are ignored. A missing or malformed file is never fatal: an
    informational notice is logged and the defaults are returned.

    Args:
        root_dir: Project root containing lambda-build.config.json

    Returns:
        BuildConfig for this build
    """
    config_path = Path(root_dir) / CONSTANTS.BUILD_CONFIG_FILE

    if not config_path.exists():
        logger.info(f'Cannot find "{CONSTANTS.BUILD_CONFIG_FILE}"! Using default config.')
        return BuildConfig(**DEFAULT_BUILD_CONFIG)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            override = json.load(f)
        if not isinstance(override, dict):
            raise ValueError("top-level value must be an object")
        return BuildConfig(**{**DEFAULT_BUILD_CONFIG, **override})
    except (OSError, ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        logger.info(
            f'Cannot load "{CONSTANTS.BUILD_CONFIG_FILE}" ({e})! Using default config.'
        )
        return BuildConfig(**DEFAULT_BUILD_CONFIG)
