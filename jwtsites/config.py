from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel

DEFAULT_CONFIG_FILE = "jwtsites.yaml"

# Environment variable -> ResolverConfig field
_ENV_OVERRIDES = {
    "JWTSITES_BASE_DIR": "base_dir",
    "JWTSITES_SETTINGS": "settings_path",
}


class ResolverConfig(BaseModel):
    """Where settings live and how relative key paths are anchored."""

    base_dir: Optional[Path] = None
    settings_path: Optional[Path] = None

    def effective_base_dir(self) -> Path:
        """Directory relative key paths are resolved against."""
        return self.base_dir or Path.cwd()


def _read_config_file(config_path: Path) -> dict:
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed resolver configuration {config_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Resolver configuration {config_path} must be a YAML mapping, "
            f"got {type(data).__name__}"
        )
    return data


def load_config(path: Optional[str] = None) -> ResolverConfig:
    """Build the resolver configuration.

    The file named by ``path`` (or ``JWTSITES_CONFIG``, or ``jwtsites.yaml``)
    is optional. ``JWTSITES_BASE_DIR`` and ``JWTSITES_SETTINGS`` win over
    whatever the file says.

    Raises:
        ValueError: The file exists but is not a YAML mapping of valid fields.
    """

    config_path = Path(path or os.getenv("JWTSITES_CONFIG", DEFAULT_CONFIG_FILE))
    values = _read_config_file(config_path) if config_path.is_file() else {}

    for env_name, field_name in _ENV_OVERRIDES.items():
        if os.getenv(env_name):
            values[field_name] = os.environ[env_name]
    return ResolverConfig.model_validate(values)
