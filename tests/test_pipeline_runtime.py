from __future__ import annotations

import json
from pathlib import Path

import anyio
import pytest

from rcopilot.pipeline import TopicAnalyzer, bootstrap_research, run_research, run_research_async
from rcopilot.core.catalogs import ConfigStore
from tests.mocks.chat_api import ChatCompletionsMock

AI_TEXT = """## Key Findings
- Laplace transforms convert linear ODEs into algebraic equations
- Initial conditions enter the transformed equation directly

## Sources
- Boyce & DiPrima
"""


def test_analyzer_prefers_course_category(config_store: ConfigStore) -> None:
    analysis = TopicAnalyzer(config_store).analyze("MAP2302 Laplace transform help")

    assert analysis.course_match is not None and analysis.course_match.code == "MAP2302"
    assert analysis.category == "Math & Coding"
    assert analysis.resources[0].title == "Paul's Notes"


def test_analyzer_course_category_overrides_keywords(config_store: ConfigStore) -> None:
    # "build" puts the topic in Personal Projects; the PHY2049 course says Sciences.
    analysis = TopicAnalyzer(config_store).analyze("build a PHY2049 demo")
    assert analysis.keyword_category == "Personal Projects"
    assert analysis.category == "Sciences"


def test_analyzer_without_catalogs() -> None:
    analysis = TopicAnalyzer(ConfigStore()).analyze("")
    assert analysis.category == "General Research"
    assert analysis.course_match is None
    assert analysis.resources == []


def test_offline_run_writes_report_and_provenance(sample_repo: Path) -> None:
    ctx = bootstrap_research(repo_root=sample_repo, offline=True)
    artifacts = run_research(ctx, "circuit rms average value homework")

    assert not ctx.ai_enabled
    assert artifacts.findings.source == "simulated"
    assert artifacts.course_code == "BME3506C"
    assert artifacts.report_path == (sample_repo / "RESEARCH.md").resolve()
    report = artifacts.report_path.read_text(encoding="utf-8")
    assert "**circuit rms average value homework**" in report
    assert "## Course Context" in report

    log_path = sample_repo / "outputs" / "logs" / "provenance.jsonl"
    stages = [json.loads(line)["stage"] for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert stages == ["bootstrap", "classify", "detect_course", "resolve_resources", "synthesize", "report"]


def test_run_without_report(sample_repo: Path) -> None:
    ctx = bootstrap_research(repo_root=sample_repo, offline=True)
    artifacts = run_research(ctx, "qqq", write_report=False)

    assert artifacts.report_path is None
    assert artifacts.report_text.startswith("# AI Research Report")
    assert not (sample_repo / "RESEARCH.md").exists()


def test_ai_run_uses_configured_client(sample_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PPLX_API_KEY", "test-token")
    server = ChatCompletionsMock(content=AI_TEXT)
    try:
        ctx = bootstrap_research(repo_root=sample_repo)
        with server.patch_chat_client():
            artifacts = run_research(ctx, "MAP2302 Laplace transform help")
    finally:
        server.close()

    assert ctx.ai_enabled
    assert ctx.env["PPLX_API_KEY"] == "set"
    assert artifacts.findings.source == "ai"
    assert artifacts.findings.insights == [
        "Laplace transforms convert linear ODEs into algebraic equations",
        "Initial conditions enter the transformed equation directly",
    ]
    assert server.requests[0]["authorization"] == "Bearer test-token"
    assert "## AI Research Results" in artifacts.report_text


def test_ai_failure_is_recorded_and_recovered(sample_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PPLX_API_KEY", "test-token")
    server = ChatCompletionsMock(status_code=503)
    try:
        ctx = bootstrap_research(repo_root=sample_repo)
        client = server.build_client(ctx.settings.ai)

        async def _run():
            return await run_research_async(ctx, "MAP2302 Laplace transform help", client=client)

        artifacts = anyio.run(_run)
    finally:
        server.close()

    assert artifacts.findings.source == "simulated"
    synth_event = next(event for event in ctx.provenance.events if event.stage == "synthesize")
    assert synth_event.payload["ai_failure"] == "http_503"


def test_bootstrap_creates_output_directories(sample_repo: Path, tmp_path: Path) -> None:
    output_dir = tmp_path / "fresh" / "outputs"
    ctx = bootstrap_research(repo_root=sample_repo, offline=True, output_dir=output_dir)
    assert ctx.paths.output_dir.is_dir()
    assert (output_dir / "logs").is_dir()
    assert not (sample_repo / "RESEARCH.md").exists()


def test_report_write_failure_propagates(sample_repo: Path) -> None:
    blocker = sample_repo / "blocked"
    blocker.write_text("not a directory", encoding="utf-8")
    ctx = bootstrap_research(repo_root=sample_repo, offline=True, report_path=blocker / "RESEARCH.md")
    with pytest.raises(OSError):
        run_research(ctx, "qqq")
