"""Fixed learner profile injected into AI prompts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class StudentProfile:
    major: str
    minors: List[str]
    focus: List[str]
    learning_style: str
    current_term: str
    current_courses: List[str]
    upcoming_courses: List[str]
    activities: List[str] = field(default_factory=list)
    preferences: Dict[str, str] = field(default_factory=dict)


USER_PROFILE = StudentProfile(
    major="Bioengineering",
    minors=["Chemistry", "Computer Science"],
    focus=["Medical devices", "Biomaterials", "Tissue engineering"],
    learning_style="Self-directed, project-oriented, active self-study",
    current_term="Summer 2025",
    current_courses=["MAP2302 (Differential Equations)", "PHY2049 (Physics II)"],
    upcoming_courses=[
        "BME3100C (Introduction to Biomaterials)",
        "BME3404C (Human Physiology for Engineers II)",
        "BME3506C (Circuits for Bioengineers)",
        "BME4722 (Health Care Engineering)",
    ],
    activities=[
        "Multiple personal programming projects",
        "Religious self-study",
        "Active GitHub contributor",
        "Project-based learning approach",
    ],
    preferences={
        "communication": "Clear, actionable, step-by-step",
        "detail": "Practical over theoretical",
        "examples": "Real-world applications preferred",
        "format": "Structured, scannable markdown",
    },
)

PROMPT_GUIDANCE = {
    "focus": "Practical understanding and problem-solving",
    "tone": "Educational, encouraging, clear",
    "structure": "Comprehensive but scannable",
    "depth": "Sufficient for assignment completion",
}


def user_context_string(profile: StudentProfile = USER_PROFILE) -> str:
    minors = " & ".join(profile.minors)
    return "\n".join(
        [
            f"{profile.major} student ({minors} minor):",
            "- Active self-learner with multiple projects",
            f"- Currently: {', '.join(profile.current_courses)}",
            f"- Upcoming: {', '.join(profile.upcoming_courses[:2])}...",
            f"- Prefers: {profile.preferences.get('communication', '')}, {profile.preferences.get('detail', '')}",
        ]
    )


__all__ = ["PROMPT_GUIDANCE", "StudentProfile", "USER_PROFILE", "user_context_string"]
