"""Shared context objects for a research run."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rcopilot.core.catalogs import ConfigStore
from rcopilot.core.config import ResearchSettings
from rcopilot.core.provenance import ProvenanceLogger


class ResearchPaths(BaseModel):
    """Canonical locations used during a research run."""

    repo_root: Path
    output_dir: Path
    logs_dir: Path
    report_path: Path

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("repo_root", "output_dir", "logs_dir", "report_path", mode="before")
    @classmethod
    def _expand(cls, value: Path | str) -> Path:
        return Path(value).expanduser().resolve()

    def ensure_directories(self) -> None:
        # The report directory is left to the report writer.
        for path in (self.output_dir, self.logs_dir):
            path.mkdir(parents=True, exist_ok=True)


class ResearchContext(BaseModel):
    """Everything a run needs, resolved once at bootstrap."""

    settings: ResearchSettings
    store: ConfigStore
    paths: ResearchPaths
    provenance: ProvenanceLogger
    api_key: Optional[str] = Field(default=None, repr=False)
    env: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def ai_enabled(self) -> bool:
        return bool(self.api_key)
