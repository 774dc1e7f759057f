"""Output records produced by a research run."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date as calendar_date
from typing import Dict, Iterable, List, Literal

from rcopilot.core.config import MAX_INSIGHTS, MAX_NEXT_STEPS

DEFAULT_CATEGORY = "General Research"

Priority = Literal["high", "medium", "low"]
TopicStatus = Literal["pending", "in_progress", "completed"]
FindingsSource = Literal["ai", "simulated"]


@dataclass(slots=True)
class ResearchTopic:
    title: str
    description: str
    priority: Priority = "medium"
    status: TopicStatus = "pending"


@dataclass(slots=True)
class Findings:
    """
    Structured result of one classification + synthesis run.

    ``insights`` and ``next_steps`` go through the setters so the caps hold
    no matter which branch filled them.
    """

    category: str = DEFAULT_CATEGORY
    date: str = field(default_factory=lambda: calendar_date.today().isoformat())
    topics: List[ResearchTopic] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)
    ai_results: str = ""
    source: FindingsSource = "simulated"
    max_insights: int = MAX_INSIGHTS
    max_next_steps: int = MAX_NEXT_STEPS

    def __post_init__(self) -> None:
        if not (self.category or "").strip():
            self.category = DEFAULT_CATEGORY
        self.set_insights(self.insights)
        self.set_next_steps(self.next_steps)

    def set_insights(self, insights: Iterable[str]) -> None:
        self.insights = [item for item in insights if item][: self.max_insights]

    def set_next_steps(self, steps: Iterable[str]) -> None:
        self.next_steps = [step for step in steps if step][: self.max_next_steps]

    def as_dict(self) -> Dict[str, object]:
        return {
            "date": self.date,
            "category": self.category,
            "source": self.source,
            "topics": [asdict(topic) for topic in self.topics],
            "insights": list(self.insights),
            "next_steps": list(self.next_steps),
            "ai_results": self.ai_results,
        }


__all__ = [
    "DEFAULT_CATEGORY",
    "Findings",
    "FindingsSource",
    "Priority",
    "ResearchTopic",
    "TopicStatus",
]
