"""Topic classification, content resolution, and synthesis components."""

from __future__ import annotations

from .ai_client import AIServiceError, ChatCompletionClient, CompletionOutcome
from .brief import BriefSynthesizer
from .classifier import CategoryClassifier
from .course_detector import CourseDetector, CourseMatch
from .models import DEFAULT_CATEGORY, Findings, ResearchTopic
from .resource_resolver import ResourceResolver
from .response_parser import ParsedResponse, ResponseParser
from .synthesizer import ContentSynthesizer, build_research_prompt

__all__ = [
    "AIServiceError",
    "BriefSynthesizer",
    "CategoryClassifier",
    "ChatCompletionClient",
    "CompletionOutcome",
    "ContentSynthesizer",
    "CourseDetector",
    "CourseMatch",
    "DEFAULT_CATEGORY",
    "Findings",
    "ParsedResponse",
    "ResearchTopic",
    "ResourceResolver",
    "ResponseParser",
    "build_research_prompt",
]
