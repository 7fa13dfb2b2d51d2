"""
Global Configuration and Defaults.

This module centralizes the file names and encodings stenciltree relies on
when locating a Stencil `docs.json` manifest, and the `Settings` object that
lets a project override them.

Resolution order for settings:
    1. Module defaults below
    2. `.stenciltree.yaml` in the project root
    3. `STENCILTREE_*` environment variables
"""

import codecs
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

logger = logging.getLogger(__name__)

# --- Canonical File Names ---
DOCS_JSON_FILE_NAME = "docs.json"
STENCIL_CONFIG_FILE_NAME = "stencil.config.ts"

# Optional per-project settings file
SETTINGS_FILE_NAME = ".stenciltree.yaml"

DEFAULT_ENCODING = "utf-8"

# Environment variable -> Settings field
ENV_OVERRIDES: Dict[str, str] = {
    "STENCILTREE_DOCS_JSON": "docs_json_file_name",
    "STENCILTREE_CONFIG_FILE": "stencil_config_file_name",
    "STENCILTREE_ENCODING": "encoding",
}


class Settings(BaseModel):
    """
    Runtime settings for manifest discovery and loading.

    Attributes:
        docs_json_file_name: Canonical name of the component manifest.
        stencil_config_file_name: Name of the build configuration source file.
        encoding: Text encoding used to read both files.
    """

    docs_json_file_name: str = DOCS_JSON_FILE_NAME
    stencil_config_file_name: str = STENCIL_CONFIG_FILE_NAME
    encoding: str = DEFAULT_ENCODING

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("encoding")
    @classmethod
    def check_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown encoding: {value}")
        return value

    @classmethod
    def load(cls, project_root: Optional[Union[str, Path]] = None) -> "Settings":
        """
        Build settings for a project.

        Args:
            project_root: Directory that may contain a `.stenciltree.yaml`.

        Returns:
            Settings: Defaults overlaid with the settings file and environment.
        """
        data: Dict[str, Any] = {}

        if project_root:
            data.update(_read_settings_file(Path(project_root) / SETTINGS_FILE_NAME))

        for env_name, field_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                data[field_name] = value

        try:
            return cls(**data)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid stenciltree settings: {e}")
            return cls()


def _read_settings_file(path: Path) -> Dict[str, Any]:
    """Read the YAML settings file, returning {} when absent or unusable."""
    if not path.is_file():
        return {}

    try:
        with open(path, "r", encoding=DEFAULT_ENCODING) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Expected a mapping in {path}, got {type(data).__name__}")
        return {}

    return data
