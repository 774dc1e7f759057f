from __future__ import annotations

import json
from pathlib import Path

import pytest

from rcopilot.core.config import AIServiceConfig, ResearchSettings, load_research_settings
from rcopilot.core.provenance import ProvenanceLogger


def test_missing_settings_file_uses_defaults(tmp_path: Path) -> None:
    settings = load_research_settings(base_dir=tmp_path)

    assert settings.ai.model == "sonar"
    assert settings.ai.api_base == "https://api.perplexity.ai"
    assert settings.brief.model == "gpt-4o-mini"
    assert settings.thresholds.max_insights == 5
    assert settings.thresholds.min_insight_length == 10
    assert settings.output_dir == (tmp_path / "outputs").resolve()


def test_partial_settings_override_defaults(tmp_path: Path) -> None:
    path = tmp_path / "research.yaml"
    path.write_text(
        "ai:\n  model: sonar-pro\n  api_base: https://proxy.local/v1/\nthresholds:\n  keyword_threshold: 3\n"
        "catalog_dirs: shared/config\noutput_dir: build\n",
        encoding="utf-8",
    )

    settings = load_research_settings(path, base_dir=tmp_path)

    assert settings.ai.model == "sonar-pro"
    assert settings.ai.api_base == "https://proxy.local/v1"
    assert settings.ai.api_key_env == "PPLX_API_KEY"
    assert settings.thresholds.keyword_threshold == 3
    assert settings.thresholds.max_insights == 5
    assert settings.catalog_dirs == [(tmp_path / "shared" / "config").resolve()]
    assert settings.output_dir == (tmp_path / "build").resolve()


@pytest.mark.parametrize(
    "content",
    ["ai: [unterminated", "- a\n- list\n", "thresholds:\n  keyword_threshold: 0\n", "ai:\n  provider: gemini\n"],
)
def test_invalid_settings_raise_value_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "research.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_research_settings(path, base_dir=tmp_path)


def test_blank_api_key_counts_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    config = AIServiceConfig()
    monkeypatch.setenv("PPLX_API_KEY", "   ")
    assert config.resolve_api_key() is None
    monkeypatch.setenv("PPLX_API_KEY", " pplx-123 ")
    assert config.resolve_api_key() == "pplx-123"


def test_default_settings_are_independent() -> None:
    first = ResearchSettings()
    second = ResearchSettings()
    first.catalog_dirs.append(Path("x"))
    assert second.catalog_dirs == []


def test_provenance_logger_appends_jsonl(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "provenance.jsonl"
    logger = ProvenanceLogger(log_path)

    logger.record("classify", "Category: Sciences", topic="gauss law", keyword_category="Sciences")
    logger.log({"stage": "report", "message": "Report written"})

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["stage"] == "classify"
    assert first["topic"] == "gauss law"
    assert first["payload"] == {"keyword_category": "Sciences"}
    assert logger.stages() == ["classify", "report"]


def test_provenance_logger_in_memory_only() -> None:
    logger = ProvenanceLogger()
    logger.extend([{"stage": "bootstrap", "message": "ready"}])
    assert logger.stages() == ["bootstrap"]
