"""Match a topic to a catalog course by code or by keyword overlap."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Literal

from rcopilot.core.catalogs import CourseCatalog, CourseRecord
from rcopilot.core.config import KEYWORD_MATCH_THRESHOLD
from rcopilot.utils.text import matching_keywords

LOGGER = logging.getLogger(__name__)

MatchPhase = Literal["code", "keywords"]
_DIGITS = re.compile(r"\d")


@dataclass(slots=True)
class CourseMatch:
    course: CourseRecord
    phase: MatchPhase
    matched_keywords: List[str] = field(default_factory=list)

    @property
    def code(self) -> str:
        return self.course.code


class CourseDetector:
    """
    Two-phase detector; catalog order breaks ties in both phases.

    Phase ``code`` looks for the course code, or for the code with every digit
    removed (``BME3100C`` becomes ``BMEC``, ``BME4722`` becomes ``BME``), as a
    substring of the upper-cased topic. Short letter runs therefore also match
    inside words: "roadmap" carries ``MAP`` and "physiology" carries ``PHY``.
    Phase ``keywords`` only runs when no code matched and needs
    ``keyword_threshold`` distinct keyword hits.
    """

    def __init__(self, courses: CourseCatalog | None, *, keyword_threshold: int = KEYWORD_MATCH_THRESHOLD) -> None:
        self.courses = courses
        self.keyword_threshold = keyword_threshold

    def detect(self, topic: str) -> CourseMatch | None:
        if self.courses is None or not self.courses.courses:
            return None
        match = self._match_code(topic) or self._match_keywords(topic)
        if match is not None:
            LOGGER.info(
                "Detected course %s via %s match",
                match.code,
                match.phase,
                extra={"keywords": match.matched_keywords},
            )
        return match

    def _match_code(self, topic: str) -> CourseMatch | None:
        upper_topic = (topic or "").upper()
        for course in self.courses.records():
            loose_code = _DIGITS.sub("", course.code)
            if (course.code and course.code in upper_topic) or (loose_code and loose_code in upper_topic):
                return CourseMatch(course=course, phase="code")
        return None

    def _match_keywords(self, topic: str) -> CourseMatch | None:
        for course in self.courses.records():
            hits = matching_keywords(topic, course.keywords)
            if len(hits) >= self.keyword_threshold:
                return CourseMatch(course=course, phase="keywords", matched_keywords=hits)
        return None


__all__ = ["CourseDetector", "CourseMatch"]
