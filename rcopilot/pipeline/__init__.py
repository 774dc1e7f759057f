"""Bootstrap and runtime for research invocations."""

from __future__ import annotations

from .bootstrap import bootstrap_research
from .context import ResearchContext, ResearchPaths
from .runtime import ResearchRunArtifacts, TopicAnalysis, TopicAnalyzer, run_research, run_research_async

__all__ = [
    "ResearchContext",
    "ResearchPaths",
    "ResearchRunArtifacts",
    "TopicAnalysis",
    "TopicAnalyzer",
    "bootstrap_research",
    "run_research",
    "run_research_async",
]
