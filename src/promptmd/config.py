"""promptmd settings

Sources are layered, lowest first: built-in defaults, ``config.yaml`` in the
working directory, ``PROMPTMD_<FIELD>`` environment variables, then explicit
CLI flags. A CLI flag left unset (``None``) never masks a lower layer.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "PROMPTMD_"


class Settings(BaseModel):
    app_name:      str = "promptmd"
    registry_path: str = Field(default="functions.yaml", description="Function catalog placeholders resolve against")
    id_grammar:    str = Field(default="permissive", pattern="^(permissive|uuid)$",
                               description="Which placeholder ids are recognized: permissive or uuid")
    log_level:     str = Field(default="WARNING", description="Minimum level written to stderr")
    json_indent:   int = Field(default=2, ge=0, description="Indent of document trees printed by `parse`")


def _from_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e


def _from_env() -> dict[str, str]:
    found = {}
    for name in Settings.model_fields:
        if val := os.getenv(ENV_PREFIX + name.upper()):
            found[name] = val
    return found


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Build Settings from every layer; raises ValueError on a bad file or value."""
    data = _from_file(Path(CONFIG_FILE))
    data.update(_from_env())
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return Settings(**data)
