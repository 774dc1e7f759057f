"""
Typed settings for the research copilot.

Every knob has a default so the pipeline runs with no settings file at all;
``config/research.yaml`` only needs to list what it changes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_SETTINGS_PATH = Path("config/research.yaml")

KEYWORD_MATCH_THRESHOLD = 2
MIN_INSIGHT_LENGTH = 10
MAX_INSIGHTS = 5
MAX_NEXT_STEPS = 8
MIN_RESPONSE_LENGTH = 50
MAX_PROMPT_RESOURCES = 10
TOOL_RECORDS_PER_GROUP = 2


class AIServiceConfig(BaseModel):
    """Connection settings for one chat-completions endpoint."""

    model_config = ConfigDict(extra="ignore")

    provider: Literal["perplexity", "openai"] = "perplexity"
    model: str = "sonar"
    api_base: str = "https://api.perplexity.ai"
    api_key_env: str = "PPLX_API_KEY"
    timeout: float = Field(default=60.0, gt=0)

    @field_validator("api_base", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    def resolve_api_key(self) -> str | None:
        """Return the configured key, treating blank values as missing."""
        value = os.getenv(self.api_key_env, "").strip()
        return value or None


def _default_brief_service() -> AIServiceConfig:
    return AIServiceConfig(
        provider="openai",
        model="gpt-4o-mini",
        api_base="https://api.openai.com/v1",
        api_key_env="OPENAI_API_KEY",
    )


class MatchThresholds(BaseModel):
    """Magic numbers of the matchers and parser, kept overridable."""

    keyword_threshold: int = Field(default=KEYWORD_MATCH_THRESHOLD, ge=1)
    min_insight_length: int = Field(default=MIN_INSIGHT_LENGTH, ge=0)
    max_insights: int = Field(default=MAX_INSIGHTS, ge=1)
    max_next_steps: int = Field(default=MAX_NEXT_STEPS, ge=1)
    min_response_length: int = Field(default=MIN_RESPONSE_LENGTH, ge=0)
    max_prompt_resources: int = Field(default=MAX_PROMPT_RESOURCES, ge=0)
    tool_records_per_group: int = Field(default=TOOL_RECORDS_PER_GROUP, ge=0)


class ResearchSettings(BaseModel):
    """Top-level settings for one research invocation."""

    model_config = ConfigDict(extra="ignore")

    ai: AIServiceConfig = Field(default_factory=AIServiceConfig)
    brief: AIServiceConfig = Field(default_factory=_default_brief_service)
    thresholds: MatchThresholds = Field(default_factory=MatchThresholds)
    catalog_dirs: List[Path] = Field(default_factory=list)
    output_dir: Path = Field(default=Path("outputs"))
    default_topic: str = "repo roadmap"

    @field_validator("catalog_dirs", mode="before")
    @classmethod
    def coerce_dirs(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, Path)):
            return [value]
        return value


def read_yaml_file(path: Path) -> Dict[str, Any]:
    """Load a YAML file and return a dictionary."""
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at root of {path}, received {type(data)}")
    return data


def _resolve_config_path(value: Any, base_dir: Path) -> str:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    else:
        path = path.resolve()
    return str(path)


def _absolutize_settings_paths(data: Dict[str, Any], base_dir: Path) -> None:
    dirs = data.get("catalog_dirs")
    if isinstance(dirs, (str, Path)):
        dirs = [dirs]
    if isinstance(dirs, list):
        data["catalog_dirs"] = [_resolve_config_path(item, base_dir) for item in dirs if item]
    if data.get("output_dir"):
        data["output_dir"] = _resolve_config_path(data["output_dir"], base_dir)


def load_research_settings(path: Optional[Path] = None, *, base_dir: Path | None = None) -> ResearchSettings:
    """
    Load research settings, falling back to defaults when the file is absent.

    A present-but-invalid file is a user error and raises ``ValueError``.
    """
    base = (base_dir or Path.cwd()).resolve()
    if path is None:
        path = base / DEFAULT_SETTINGS_PATH
    path = path.expanduser().resolve()
    if not path.exists():
        settings = ResearchSettings()
        return settings.model_copy(update={"output_dir": (base / settings.output_dir).resolve()})

    try:
        data = read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in research settings {path}") from exc
    data.setdefault("output_dir", str(ResearchSettings.model_fields["output_dir"].default))
    _absolutize_settings_paths(data, base_dir=base)
    try:
        return ResearchSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid research settings in {path}") from exc


__all__ = [
    "AIServiceConfig",
    "DEFAULT_SETTINGS_PATH",
    "KEYWORD_MATCH_THRESHOLD",
    "MAX_INSIGHTS",
    "MAX_NEXT_STEPS",
    "MAX_PROMPT_RESOURCES",
    "MIN_INSIGHT_LENGTH",
    "MIN_RESPONSE_LENGTH",
    "MatchThresholds",
    "ResearchSettings",
    "TOOL_RECORDS_PER_GROUP",
    "load_research_settings",
    "read_yaml_file",
]
