"""Produce research findings from the AI service or from offline templates."""

from __future__ import annotations

import logging
from textwrap import dedent
from typing import List, Sequence

from rcopilot.core.catalogs import CourseRecord, ResourceRecord
from rcopilot.core.config import MatchThresholds

from .ai_client import ChatCompletionClient, CompletionOutcome
from .models import Findings, ResearchTopic
from .response_parser import ResponseParser
from .templates import select_content
from .user_profile import PROMPT_GUIDANCE, user_context_string

LOGGER = logging.getLogger(__name__)

AI_NEXT_STEPS: tuple[str, ...] = (
    "Review and validate research findings",
    "Implement recommendations from the research",
    "Schedule follow-up research if needed",
    "Document key insights for future reference",
)


class ContentSynthesizer:
    """
    Fill a :class:`Findings` for one topic.

    With a client the AI branch is tried first; any failure there (HTTP
    status, transport, unusable or too-short content) drops to the simulated
    branch, so callers always receive populated findings.
    """

    def __init__(
        self,
        client: ChatCompletionClient | None = None,
        *,
        thresholds: MatchThresholds | None = None,
        parser: ResponseParser | None = None,
    ) -> None:
        self.client = client
        self.thresholds = thresholds or MatchThresholds()
        self.parser = parser or ResponseParser(
            max_insights=self.thresholds.max_insights,
            min_length=self.thresholds.min_insight_length,
        )
        self.last_outcome: CompletionOutcome | None = None

    async def synthesize(
        self,
        topic: str,
        category: str,
        course: CourseRecord | None = None,
        resources: Sequence[ResourceRecord] = (),
    ) -> Findings:
        findings = Findings(
            category=category,
            max_insights=self.thresholds.max_insights,
            max_next_steps=self.thresholds.max_next_steps,
        )
        if self.client is None:
            LOGGER.info("No AI credential configured; using simulated research.")
            return self.simulate(topic, findings, course)

        prompt = build_research_prompt(
            topic,
            course=course,
            resources=resources,
            max_resources=self.thresholds.max_prompt_resources,
        )
        LOGGER.info("Querying AI service (model=%s)", self.client.model)
        outcome = await self.client.attempt(prompt, min_length=self.thresholds.min_response_length)
        self.last_outcome = outcome
        if not outcome.ok:
            LOGGER.warning("AI research unavailable (%s); falling back to simulation.", outcome.failure)
            return self.simulate(topic, findings, course)
        return self._apply_ai_text(topic, findings, outcome.text or "", course)

    def simulate(self, topic: str, findings: Findings, course: CourseRecord | None = None) -> Findings:
        content = select_content(topic, course)
        LOGGER.debug("Simulated template selected: %s", content.label)
        findings.source = "simulated"
        findings.ai_results = ""
        findings.topics = list(content.topics)
        findings.set_insights(content.insights)
        findings.set_next_steps(content.next_steps)
        return findings

    def _apply_ai_text(self, topic: str, findings: Findings, text: str, course: CourseRecord | None) -> Findings:
        parsed = self.parser.parse(text)
        findings.source = "ai"
        findings.ai_results = text
        findings.topics = [
            ResearchTopic(
                title=topic,
                description=f"Research findings from the AI service for: {topic}",
                priority="high",
                status="completed",
            )
        ]
        steps: List[str] = list(AI_NEXT_STEPS)
        if course is not None:
            findings.topics.append(
                ResearchTopic(
                    title=course.display_name,
                    description=f"Apply the findings to {course.code} coursework",
                    priority="medium",
                    status="in_progress",
                )
            )
            steps.extend(f"Apply the findings to: {item}" for item in course.typical_assignments[:2])
        findings.set_insights(parsed.insights)
        findings.set_next_steps(steps)
        LOGGER.info("AI research parsed into %d insights", len(findings.insights))
        return findings


def build_research_prompt(
    topic: str,
    *,
    course: CourseRecord | None = None,
    resources: Sequence[ResourceRecord] = (),
    max_resources: int = 10,
) -> str:
    """Single context-enriched prompt: topic, learner profile, course, resources."""

    sections: List[str] = [
        "You are a research assistant helping a university student. "
        "Please provide a comprehensive research brief on the following topic:",
        f"Topic: {topic}",
        f"Student context:\n{user_context_string()}",
    ]
    if course is not None:
        course_lines = [
            f"Course context: {course.display_name}",
            f"- Subject: {course.subject}" if course.subject else "",
            f"- Term: {course.term}" if course.term else "",
            f"- Common topics: {', '.join(course.common_topics)}" if course.common_topics else "",
            f"- Textbooks: {', '.join(course.textbooks)}" if course.textbooks else "",
            f"- Tools: {', '.join(course.tools)}" if course.tools else "",
            f"- Typical assignments: {', '.join(course.typical_assignments)}" if course.typical_assignments else "",
        ]
        sections.append("\n".join(line for line in course_lines if line))
    picked = list(resources)[: max(0, max_resources)]
    if picked:
        listing = "\n".join(f"- {item.title}: {item.url}" for item in picked)
        sections.append(f"Curated resources (cite where relevant):\n{listing}")
    sections.append(
        dedent(
            f"""\
            Please provide:
            1. Key findings and insights (3-5 bullet points)
            2. Important sources and references (3-5 reputable sources)
            3. Research gaps and opportunities
            4. Practical applications or implications
            5. Next steps for further research

            Focus: {PROMPT_GUIDANCE['focus']}. Tone: {PROMPT_GUIDANCE['tone']}.
            Format your response as a structured research brief with clear sections."""
        )
    )
    return "\n\n".join(sections)


__all__ = ["AI_NEXT_STEPS", "ContentSynthesizer", "build_research_prompt"]
