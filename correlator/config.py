"""Correlator settings loaded from YAML with environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .utils import read_yaml_file

PLUGIN_DIR = "openscap"
RESULTS_DIR = "results"
ARF_FILENAME = "arf.xml"

ENV_PREFIX = "CORRELATOR_"
ENV_KEYS = ("workspace", "profile", "user_config_root", "results_file")


class Settings(BaseModel):
    """Options shared by every correlation run.

    ``profile`` is the compliance profile the scan was run with. It is passed
    through to reports and never interpreted here.
    """

    model_config = ConfigDict(extra="forbid")

    workspace: str = Field(default="", description="Directory holding plugin outputs")
    profile: str = Field(default="", description="Compliance profile id")
    user_config_root: str = Field(default="")
    results_file: Optional[str] = Field(default=None, description="Overrides the workspace ARF path")

    @field_validator("workspace", "profile", "user_config_root", mode="before")
    @classmethod
    def _strip(cls, value: object) -> str:
        return "" if value is None else str(value).strip()

    @property
    def arf_path(self) -> Path:
        if self.results_file:
            return Path(self.results_file)
        return Path(self.workspace) / PLUGIN_DIR / RESULTS_DIR / ARF_FILENAME

    def require_complete(self) -> None:
        if not self.workspace:
            raise ConfigurationError("workspace must be set")
        if not self.profile:
            raise ConfigurationError("profile must be set")
        if self.user_config_root and not Path(self.user_config_root).exists():
            raise ConfigurationError("user config root does not exist")

    def to_map(self) -> Dict[str, str]:
        selections = {"workspace": self.workspace, "profile": self.profile}
        if self.user_config_root:
            selections["user_config_root"] = self.user_config_root
        selections["results_file"] = str(self.arf_path)
        return selections


def load_settings(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from ``path`` (if given) then apply ``CORRELATOR_*`` overrides."""

    env = os.environ if env is None else env
    values: Dict[str, object] = {}
    if path is not None:
        try:
            data = read_yaml_file(Path(path))
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config at {path} is not valid YAML: {exc}") from exc
        if data is None:
            raise ConfigurationError(f"Config file not found or empty: {path}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config at {path} is not a mapping")
        values.update({key: value for key, value in data.items() if value is not None})
    for key in ENV_KEYS:
        override = env.get(ENV_PREFIX + key.upper())
        if override:
            values[key] = override
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid correlator settings: {exc}") from exc
