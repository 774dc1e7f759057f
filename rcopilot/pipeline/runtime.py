"""Runs one research invocation end to end."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import anyio

from rcopilot.core.catalogs import ConfigStore, ResourceRecord
from rcopilot.core.config import MatchThresholds
from rcopilot.report import render_report, save_report
from rcopilot.research.ai_client import ChatCompletionClient
from rcopilot.research.classifier import CategoryClassifier
from rcopilot.research.course_detector import CourseDetector, CourseMatch
from rcopilot.research.models import Findings
from rcopilot.research.resource_resolver import ResourceResolver
from rcopilot.research.synthesizer import ContentSynthesizer

from .context import ResearchContext

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class TopicAnalysis:
    """Category, course match, and resources for a topic (no network I/O)."""

    topic: str
    category: str
    keyword_category: str
    course_match: CourseMatch | None = None
    resources: List[ResourceRecord] = field(default_factory=list)


@dataclass(slots=True)
class ResearchRunArtifacts:
    analysis: TopicAnalysis
    findings: Findings
    report_path: Path | None = None
    report_text: str = ""

    @property
    def course_code(self) -> str | None:
        match = self.analysis.course_match
        return match.code if match else None


class TopicAnalyzer:
    """Wires the classifier, course detector, and resolver over one catalog store."""

    def __init__(self, store: ConfigStore, *, thresholds: MatchThresholds | None = None) -> None:
        thresholds = thresholds or MatchThresholds()
        self.classifier = CategoryClassifier(store.courses)
        self.detector = CourseDetector(store.courses, keyword_threshold=thresholds.keyword_threshold)
        self.resolver = ResourceResolver(store.resources, tools_per_group=thresholds.tool_records_per_group)

    def analyze(self, topic: str) -> TopicAnalysis:
        keyword_category = self.classifier.classify(topic)
        match = self.detector.detect(topic)
        # Course context outranks generic keyword categorisation.
        category = match.course.category if match and match.course.category else keyword_category
        resources = self.resolver.resolve(topic, match.course if match else None)
        return TopicAnalysis(
            topic=topic,
            category=category,
            keyword_category=keyword_category,
            course_match=match,
            resources=resources,
        )


async def run_research_async(
    ctx: ResearchContext,
    topic: str,
    *,
    client: ChatCompletionClient | None = None,
    write_report: bool = True,
) -> ResearchRunArtifacts:
    """
    Classify, match, resolve, synthesize, and (optionally) write the report.

    ``client`` overrides the one built from settings; tests inject stubs here.
    Only report persistence errors escape.
    """

    thresholds = ctx.settings.thresholds
    analysis = TopicAnalyzer(ctx.store, thresholds=thresholds).analyze(topic)
    match = analysis.course_match
    ctx.provenance.record("classify", f"Category: {analysis.category}", topic=topic, keyword_category=analysis.keyword_category)
    ctx.provenance.record(
        "detect_course",
        f"Course: {match.code}" if match else "No course detected",
        topic=topic,
        course=match.code if match else None,
        phase=match.phase if match else None,
        matched_keywords=match.matched_keywords if match else [],
    )
    ctx.provenance.record(
        "resolve_resources",
        f"{len(analysis.resources)} resources",
        topic=topic,
        urls=[record.url for record in analysis.resources],
    )

    owns_client = False
    if client is None and ctx.ai_enabled:
        client = ChatCompletionClient(ctx.settings.ai, api_key=ctx.api_key)
        owns_client = True
    try:
        synthesizer = ContentSynthesizer(client, thresholds=thresholds)
        findings = await synthesizer.synthesize(
            topic,
            analysis.category,
            match.course if match else None,
            analysis.resources,
        )
    finally:
        if owns_client and client is not None:
            await client.aclose()

    outcome = synthesizer.last_outcome
    ctx.provenance.record(
        "synthesize",
        f"Findings from {findings.source} branch",
        topic=topic,
        source=findings.source,
        ai_failure=outcome.failure if outcome else None,
        insights=len(findings.insights),
        next_steps=len(findings.next_steps),
    )

    artifacts = ResearchRunArtifacts(analysis=analysis, findings=findings)
    artifacts.report_text = render_report(
        topic,
        findings,
        analysis.resources,
        course=match.course if match else None,
    )
    if write_report:
        artifacts.report_path = save_report(ctx.paths.report_path, artifacts.report_text)
        ctx.provenance.record("report", "Report written", topic=topic, path=str(artifacts.report_path))
    LOGGER.info(
        "Research run complete",
        extra={"category": findings.category, "source": findings.source, "course": artifacts.course_code},
    )
    return artifacts


def run_research(ctx: ResearchContext, topic: str, **kwargs) -> ResearchRunArtifacts:
    """Synchronous wrapper used by the CLI."""

    async def _run() -> ResearchRunArtifacts:
        return await run_research_async(ctx, topic, **kwargs)

    return anyio.run(_run)


__all__ = [
    "ResearchRunArtifacts",
    "TopicAnalysis",
    "TopicAnalyzer",
    "run_research",
    "run_research_async",
]
