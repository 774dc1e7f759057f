"""Markdown rendering and persistence of research findings."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Sequence

from rcopilot.core.catalogs import CourseRecord, ResourceRecord
from rcopilot.research.models import Findings

LOGGER = logging.getLogger(__name__)

DEFAULT_REPORT_NAME = "RESEARCH.md"


def render_report(
    topic: str,
    findings: Findings,
    resources: Sequence[ResourceRecord] = (),
    *,
    course: CourseRecord | None = None,
    generated_at: datetime | None = None,
) -> str:
    generated_at = generated_at or datetime.now(timezone.utc)
    lines: List[str] = [
        f"# AI Research Report - {findings.date}",
        "",
        "## Research Topic",
        f"**{topic}**",
        "",
        "## Category",
        f"**{findings.category}**",
        "",
    ]

    if course is not None:
        lines.extend(["## Course Context", f"**{course.display_name}**"])
        if course.subject:
            lines.append(f"- **Subject**: {course.subject}")
        if course.term:
            lines.append(f"- **Term**: {course.term}")
        if course.status != "none":
            lines.append(f"- **Enrollment**: {course.status}")
        if course.textbooks:
            lines.append(f"- **Textbooks**: {', '.join(course.textbooks)}")
        if course.tools:
            lines.append(f"- **Tools**: {', '.join(course.tools)}")
        lines.append("")

    lines.extend(["## Research Topics", ""])
    for item in findings.topics:
        lines.extend(
            [
                f"### {item.title}",
                f"- **Priority**: {item.priority}",
                f"- **Status**: {item.status}",
                f"- **Description**: {item.description}",
                "",
            ]
        )

    lines.extend(["## Key Insights", ""])
    lines.extend(f"- {insight}" for insight in findings.insights)
    lines.extend(["", "## Next Steps", ""])
    lines.extend(f"- {step}" for step in findings.next_steps)
    lines.append("")

    if resources:
        lines.extend(["## Resources", ""])
        for record in resources:
            suffix = f": {record.description}" if record.description else ""
            lines.append(f"- [{record.title}]({record.url}){suffix}")
        lines.append("")

    if findings.ai_results:
        lines.extend(["## AI Research Results", "", findings.ai_results.strip(), ""])

    lines.extend(["---", f"*Generated by AI Research System on {generated_at.isoformat()}*", ""])
    return "\n".join(lines)


def save_report(path: Path, text: str) -> Path:
    """Write the report; ``OSError`` propagates because the run cannot succeed without it."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    LOGGER.info("Research report saved to %s", path)
    return path


__all__ = ["DEFAULT_REPORT_NAME", "render_report", "save_report"]
