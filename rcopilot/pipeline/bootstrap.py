"""Bootstrap helpers for the research pipeline."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

from rcopilot.core.catalogs import ConfigStore
from rcopilot.core.config import ResearchSettings, load_research_settings
from rcopilot.core.provenance import ProvenanceLogger
from rcopilot.report import DEFAULT_REPORT_NAME

from .context import ResearchContext, ResearchPaths

ENV_REPO_ROOT = "RCOPILOT_REPO_ROOT"
LOGGER = logging.getLogger(__name__)


def _capture_env(keys: tuple[str, ...]) -> Dict[str, str]:
    """Record which of ``keys`` are set without keeping their values."""
    return {key: "set" for key in keys if os.getenv(key)}


def resolve_repo_root(repo_root: Path | None = None) -> Path:
    if repo_root is not None:
        return Path(repo_root).expanduser().resolve()
    override = os.environ.get(ENV_REPO_ROOT)
    if override:
        return Path(override).expanduser().resolve()
    return Path.cwd().resolve()


def bootstrap_research(
    config_path: Path | None = None,
    *,
    repo_root: Path | None = None,
    output_dir: Path | None = None,
    report_path: Path | None = None,
    offline: bool = False,
    env_keys: tuple[str, ...] = ("PPLX_API_KEY", "OPENAI_API_KEY", "RCOPILOT_CONFIG_DIR"),
) -> ResearchContext:
    """
    Load settings, environment, and catalogs into a :class:`ResearchContext`.

    Parameters
    ----------
    config_path:
        Settings YAML. Defaults to ``<repo_root>/config/research.yaml``; a
        missing file means defaults.
    repo_root:
        Anchor for relative paths and catalog search. Defaults to
        ``$RCOPILOT_REPO_ROOT`` or the current directory.
    output_dir:
        Overrides ``settings.output_dir``.
    report_path:
        Where the Markdown report goes. Defaults to ``<repo_root>/RESEARCH.md``.
    offline:
        Ignore any configured API key and force the simulated branch.
    """

    repo_root = resolve_repo_root(repo_root)
    load_dotenv(repo_root / ".env")
    settings: ResearchSettings = load_research_settings(config_path, base_dir=repo_root)
    if output_dir is not None:
        settings = settings.model_copy(update={"output_dir": output_dir.expanduser().resolve()})

    paths = ResearchPaths(
        repo_root=repo_root,
        output_dir=settings.output_dir,
        logs_dir=settings.output_dir / "logs",
        report_path=report_path or (repo_root / DEFAULT_REPORT_NAME),
    )
    paths.ensure_directories()
    provenance = ProvenanceLogger(paths.logs_dir / "provenance.jsonl")
    store = ConfigStore.load(repo_root=repo_root, search_dirs=settings.catalog_dirs)

    api_key = None if offline else settings.ai.resolve_api_key()
    if offline:
        LOGGER.info("Offline mode requested; AI research disabled.")
    elif api_key is None:
        LOGGER.warning("%s not set; research will use simulated data.", settings.ai.api_key_env)

    ctx = ResearchContext(
        settings=settings,
        store=store,
        paths=paths,
        provenance=provenance,
        api_key=api_key,
        env=_capture_env(env_keys),
    )
    ctx.provenance.record(
        "bootstrap",
        "Research context ready",
        course_catalog=str(store.course_source) if store.course_source else None,
        resource_catalog=str(store.resource_source) if store.resource_source else None,
        ai_enabled=ctx.ai_enabled,
        model=settings.ai.model,
    )
    return ctx
