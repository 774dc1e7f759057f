"""Keyword categorisation of free-text research topics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from rcopilot.core.catalogs import CourseCatalog
from rcopilot.utils.text import contains_any

from .models import DEFAULT_CATEGORY

LOGGER = logging.getLogger(__name__)


@dataclass
class CategoryRule:
    category: str
    keywords: List[str] = field(default_factory=list)

    def matches(self, topic: str) -> bool:
        return contains_any(topic, self.keywords)


# Evaluated top to bottom; the first rule with any hit decides the category.
DEFAULT_CATEGORY_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Personal Projects", ("project", "build", "create", "develop", "app", "website", "software", "tool")),
    ("Reflections & Questions", ("think", "reflect", "philosophy", "meaning", "purpose", "life", "personal", "growth")),
    ("Math & Coding", ("math", "mathematics", "algorithm", "code", "programming", "function", "equation", "calculate")),
    ("Sciences", ("science", "physics", "chemistry", "biology", "research", "experiment", "theory", "hypothesis")),
)


class CategoryClassifier:
    """First-match-wins classifier over an ordered rule table."""

    def __init__(
        self,
        courses: CourseCatalog | None = None,
        *,
        rules: Sequence[Tuple[str, Sequence[str]]] = DEFAULT_CATEGORY_RULES,
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self.default_category = default_category
        self.rules: List[CategoryRule] = [
            CategoryRule(category=category, keywords=[kw.lower() for kw in keywords]) for category, keywords in rules
        ]
        if courses is not None:
            self._absorb_course_keywords(courses)

    def classify(self, topic: str) -> str:
        for rule in self.rules:
            if rule.matches(topic):
                return rule.category
        return self.default_category

    def rule_for(self, category: str) -> CategoryRule | None:
        for rule in self.rules:
            if rule.category == category:
                return rule
        return None

    # ------------------------------------------------------------------

    def _absorb_course_keywords(self, courses: CourseCatalog) -> None:
        for course in courses.records():
            rule = self.rule_for(course.category)
            if rule is None:
                LOGGER.debug("No category rule named %r for %s; keywords not merged.", course.category, course.code)
                continue
            for keyword in course.keywords:
                lowered = keyword.lower()
                if lowered not in rule.keywords:
                    rule.keywords.append(lowered)
