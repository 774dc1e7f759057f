"""Pull bulleted insights out of free-form AI research prose."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from rcopilot.core.config import MAX_INSIGHTS, MIN_INSIGHT_LENGTH

INSIGHT_HEADER_CUES: Tuple[str, ...] = ("key findings", "insights", "findings")
STOP_HEADER_CUES: Tuple[str, ...] = ("sources", "references", "next steps", "applications")
BULLET_GLYPHS: Tuple[str, ...] = ("•", "-", "*")

_LIST_ITEM = re.compile(r"^(?:[•\-*]|\d+\.)")
_LEADING_MARKER = re.compile(r"^(?:[•\-*]+|\d+\.)\s*")


@dataclass(slots=True)
class ParsedResponse:
    insights: List[str] = field(default_factory=list)


class ResponseParser:
    """
    Two-tier insight extraction.

    The first pass reads bullets under a findings/insights header and stops at
    the sources/references/next-steps/applications sections. When that yields
    nothing (the model ignored the requested layout), every line carrying a
    bullet glyph is considered instead.
    """

    def __init__(self, *, max_insights: int = MAX_INSIGHTS, min_length: int = MIN_INSIGHT_LENGTH) -> None:
        self.max_insights = max_insights
        self.min_length = min_length

    def parse(self, text: str) -> ParsedResponse:
        lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
        insights = self._section_insights(lines) or self._bullet_fallback(lines)
        return ParsedResponse(insights=insights[: self.max_insights])

    def _section_insights(self, lines: List[str]) -> List[str]:
        insights: List[str] = []
        capturing = False
        for line in lines:
            lowered = line.lower()
            if any(cue in lowered for cue in INSIGHT_HEADER_CUES):
                capturing = True
                continue
            if not capturing:
                continue
            if any(cue in lowered for cue in STOP_HEADER_CUES):
                break
            if _LIST_ITEM.match(line):
                candidate = self._strip_marker(line)
                if len(candidate) > self.min_length:
                    insights.append(candidate)
        return insights

    def _bullet_fallback(self, lines: List[str]) -> List[str]:
        # The cap applies to bulleted lines before the length filter.
        bulleted = [line for line in lines if any(glyph in line for glyph in BULLET_GLYPHS)][: self.max_insights]
        candidates = (self._strip_marker(line) for line in bulleted)
        return [candidate for candidate in candidates if len(candidate) > self.min_length]

    @staticmethod
    def _strip_marker(line: str) -> str:
        return _LEADING_MARKER.sub("", line.strip(), count=1).strip()


__all__ = ["BULLET_GLYPHS", "INSIGHT_HEADER_CUES", "ParsedResponse", "ResponseParser", "STOP_HEADER_CUES"]
