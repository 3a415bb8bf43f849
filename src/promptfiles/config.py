"""Run configuration for promptfiles."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from promptfiles.constants import DEFAULT_MODEL, DEFAULT_OUTPUT_DIR, DEFAULT_TIMEOUT

# Config file keys that map onto Settings fields
_FILE_KEYS = {
    "output_dir": "output_dir",
    "model": "model_name",
    "timeout": "timeout",
    "show_response": "show_response",
}


class Settings(BaseModel):
    """Settings for a single generation run."""

    model_config = ConfigDict(protected_namespaces=())

    api_key: SecretStr = Field(..., description="API key for the generative AI service")
    output_dir: Path = Field(Path(DEFAULT_OUTPUT_DIR), description="Output directory for generated files")
    model_name: str = Field(DEFAULT_MODEL, description="Configured model to generate with")
    timeout: Optional[float] = Field(DEFAULT_TIMEOUT, description="Deadline for the remote call in seconds")
    show_response: bool = Field(True, description="Print the raw API response")

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("API key is required")
        return value

    @field_validator("timeout")
    @classmethod
    def _disable_non_positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        # Zero or negative means wait indefinitely
        if value is not None and value <= 0:
            return None
        return value


def load_file_settings(config_path: Optional[Path]) -> dict[str, Any]:
    """Read run settings from a YAML config file.

    Only recognised keys are returned; the ``models`` section is handled by
    the model registry.
    """
    if config_path is None:
        return {}

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return {field: config[key] for key, field in _FILE_KEYS.items() if key in config}


def build_settings(config_path: Optional[Path] = None, **overrides: Any) -> Settings:
    """Merge config file values with command-line overrides.

    Overrides set to ``None`` are treated as not given.
    """
    values = load_file_settings(config_path)
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings(**values)
