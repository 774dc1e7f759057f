from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from rcopilot.core.catalogs import CourseCatalog, ResourceRecord
from rcopilot.report import render_report, save_report
from rcopilot.research.models import Findings, ResearchTopic

GENERATED_AT = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _findings(**overrides) -> Findings:
    values = dict(
        category="Math & Coding",
        date="2025-06-01",
        topics=[ResearchTopic(title="laplace", description="Transforms", priority="high", status="in_progress")],
        insights=["Insight one", "Insight two"],
        next_steps=["Step one"],
    )
    values.update(overrides)
    return Findings(**values)


def test_report_lists_sections_in_order() -> None:
    resources = [ResourceRecord(title="Laplace Table", url="https://example.edu/laplace", description="Pairs")]
    text = render_report("laplace", _findings(), resources, generated_at=GENERATED_AT)

    headings = [line for line in text.splitlines() if line.startswith("#")]
    assert headings == [
        "# AI Research Report - 2025-06-01",
        "## Research Topic",
        "## Category",
        "## Research Topics",
        "### laplace",
        "## Key Insights",
        "## Next Steps",
        "## Resources",
    ]
    assert "- **Status**: in_progress" in text
    assert "- [Laplace Table](https://example.edu/laplace): Pairs" in text
    assert text.rstrip().endswith(f"*Generated by AI Research System on {GENERATED_AT.isoformat()}*")


def test_report_includes_course_and_ai_sections(course_catalog: CourseCatalog) -> None:
    findings = _findings(source="ai", ai_results="Key findings\n- raw model output\n")
    text = render_report("laplace", findings, course=course_catalog.get("MAP2302"), generated_at=GENERATED_AT)

    assert "## Course Context\n**MAP2302 (Differential Equations)**" in text
    assert "- **Enrollment**: current" in text
    assert "## Resources" not in text
    assert "## AI Research Results\n\nKey findings\n- raw model output\n" in text


def test_save_report_creates_parents(tmp_path: Path) -> None:
    target = save_report(tmp_path / "out" / "RESEARCH.md", "# Report\n")
    assert target.read_text(encoding="utf-8") == "# Report\n"


def test_findings_defaults_and_caps() -> None:
    findings = Findings(category="  ", insights=[f"i{n}" for n in range(9)], next_steps=[""] + [f"s{n}" for n in range(12)])
    assert findings.category == "General Research"
    assert len(findings.insights) == 5
    assert findings.next_steps[0] == "s0"
    assert len(findings.next_steps) == 8
    assert findings.as_dict()["source"] == "simulated"
