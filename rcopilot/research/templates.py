"""
Deterministic content for the offline (simulated) research branch.

Selection order is: detected course by subject, then the first matching
keyword group, then the generic template. Every template leads its topic list
with the literal topic so reports always name what was asked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from rcopilot.core.catalogs import CourseRecord
from rcopilot.utils.text import contains_any

from .models import ResearchTopic


@dataclass(frozen=True)
class SimulatedContent:
    label: str
    topics: List[ResearchTopic]
    insights: List[str]
    next_steps: List[str] = field(default_factory=list)


TemplateBuilder = Callable[[str], SimulatedContent]
CourseTemplateBuilder = Callable[[str, CourseRecord], SimulatedContent]


def _lead_topic(topic: str, description: str) -> ResearchTopic:
    return ResearchTopic(title=topic, description=description, priority="high", status="in_progress")


def _join(items: Sequence[str], *, limit: int = 3, fallback: str) -> str:
    picked = [item for item in items if item][:limit]
    return ", ".join(picked) if picked else fallback


def _course_side_topics(course: CourseRecord) -> List[ResearchTopic]:
    return [
        ResearchTopic(
            title=name,
            description=f"Core {course.code} topic to review alongside this question",
            priority="medium",
            status="pending",
        )
        for name in course.common_topics[:2]
    ]


def _assignment_steps(course: CourseRecord) -> List[str]:
    return [f"Map the work onto the typical {course.code} assignment: {item}" for item in course.typical_assignments[:2]]


# ---------------------------------------------------------------------------
# Course-subject templates


def engineering_course_content(topic: str, course: CourseRecord) -> SimulatedContent:
    textbook = course.textbooks[0] if course.textbooks else "the course textbook"
    tools = _join(course.tools, fallback="your simulation tools")
    topics_hint = _join(course.common_topics, fallback=course.name or course.code)
    return SimulatedContent(
        label=f"course:{course.code}:engineering",
        topics=[
            _lead_topic(topic, f"{course.display_name} context for: {topic}"),
            *_course_side_topics(course),
        ],
        insights=[
            f"{course.code} problems reward a stated model: list assumptions and knowns before computing",
            f"Verify every {tools} result against a hand estimate before reporting it",
            f"Use {textbook} for definitions, sign conventions, and worked examples",
            f"Connect the question to the core {course.code} topics: {topics_hint}",
            "Units and significant figures are the most common source of lost points in engineering work",
        ],
        next_steps=[
            f"Locate the matching section in {textbook} and re-read its worked example",
            "Sketch the system and label every quantity with units",
            f"Solve by hand, then reproduce the result in {tools}",
            "Compare the two results and explain any discrepancy",
            *_assignment_steps(course),
            "Write up the method so the grader can follow each step",
        ],
    )


def quantitative_course_content(topic: str, course: CourseRecord) -> SimulatedContent:
    textbook = course.textbooks[0] if course.textbooks else "the assigned text"
    topics_hint = _join(course.common_topics, fallback=course.name or course.code)
    return SimulatedContent(
        label=f"course:{course.code}:quantitative",
        topics=[
            _lead_topic(topic, f"{course.display_name} problem-solving plan for: {topic}"),
            *_course_side_topics(course),
        ],
        insights=[
            "Write the derivation step by step; partial credit follows the visible reasoning",
            "Check boundary and initial conditions against the final solution before moving on",
            f"Classify the problem first: {topics_hint} each have a standard solution path",
            "Limiting cases (t -> 0, t -> infinity, zero forcing) catch most algebra mistakes",
            f"Keep {textbook} tables of standard forms open while working",
        ],
        next_steps=[
            "Restate the problem and identify its type and order",
            "Choose the solution method and justify it in one sentence",
            "Carry out the derivation step by step without skipping algebra",
            "Substitute the boundary/initial conditions and verify they hold",
            *_assignment_steps(course),
            "Check the answer numerically or by plotting it",
        ],
    )


def general_course_content(topic: str, course: CourseRecord) -> SimulatedContent:
    topics_hint = _join(course.common_topics, fallback=course.name or course.code)
    return SimulatedContent(
        label=f"course:{course.code}:general",
        topics=[
            _lead_topic(topic, f"{course.display_name} study notes for: {topic}"),
            *_course_side_topics(course),
        ],
        insights=[
            f"This question sits inside {course.display_name}",
            f"Related course topics: {topics_hint}",
            "Course materials are the most reliable first reference",
            "Summarising each concept in your own words exposes gaps quickly",
            "Short daily review beats a single long session before deadlines",
        ],
        next_steps=[
            f"Review the {course.code} notes covering this topic",
            "List the concepts you cannot yet explain without notes",
            *_assignment_steps(course),
            "Work one practice problem end to end",
            "Bring remaining questions to office hours",
        ],
    )


# Checked in order against the course subject (case-insensitive substring).
COURSE_SUBJECT_TEMPLATES: Tuple[Tuple[Tuple[str, ...], CourseTemplateBuilder], ...] = (
    (("math", "physics", "statistic", "calculus"), quantitative_course_content),
    (("engineer", "biomedical", "circuit"), engineering_course_content),
)


def course_content(topic: str, course: CourseRecord) -> SimulatedContent:
    for subjects, builder in COURSE_SUBJECT_TEMPLATES:
        if contains_any(course.subject, subjects):
            return builder(topic, course)
    return general_course_content(topic, course)


# ---------------------------------------------------------------------------
# Keyword-group templates


def biomaterials_content(topic: str) -> SimulatedContent:
    return SimulatedContent(
        label="biomaterials",
        topics=[
            _lead_topic(topic, f"Materials research focus: {topic}"),
            ResearchTopic(
                title="Biomaterials for Medical Applications",
                description="Biocompatible materials for implants and medical devices",
                priority="high",
                status="in_progress",
            ),
            ResearchTopic(
                title="Tissue Engineering Materials",
                description="Advanced materials for regenerative medicine and tissue scaffolds",
                priority="high",
                status="pending",
            ),
            ResearchTopic(
                title="PRISMA Protocol Development",
                description="Systematic review methodology for biomaterials research",
                priority="medium",
                status="pending",
            ),
        ],
        insights=[
            "Recent advances in biocompatible materials show promise for medical applications",
            "PRISMA guidelines provide systematic framework for evidence synthesis",
            "Tissue engineering requires careful material selection and biocompatibility testing",
            "Systematic reviews help identify gaps in current research",
            "Material properties must balance mechanical strength with biological compatibility",
        ],
        next_steps=[
            "Conduct systematic literature review using PRISMA guidelines",
            "Identify key material properties and biocompatibility requirements",
            "Analyze current research gaps and opportunities",
            "Develop research protocol and methodology",
            "Plan experimental validation approaches",
        ],
    )


def mathematics_content(topic: str) -> SimulatedContent:
    return SimulatedContent(
        label="mathematics",
        topics=[
            _lead_topic(topic, f"Mathematical analysis of: {topic}"),
            ResearchTopic(
                title="Mathematical Analysis Techniques",
                description="Methods for solving differential equations and transforms",
                priority="high",
                status="in_progress",
            ),
            ResearchTopic(
                title="Numerical Methods",
                description="Computational approaches for mathematical problem solving",
                priority="medium",
                status="pending",
            ),
        ],
        insights=[
            "Laplace transforms turn linear ODEs with initial conditions into algebra",
            "Numerical methods offer computational alternatives to analytical solutions",
            "MATLAB and Python provide robust platforms for mathematical computation",
            "Partial fractions are usually the hardest step of an inverse transform",
            "Checking the solution against the original equation catches most errors",
        ],
        next_steps=[
            "Review mathematical foundations and theory",
            "Implement computational solutions using appropriate software",
            "Validate results through analytical and numerical methods",
            "Document solution methodology and assumptions",
            "Prepare comprehensive analysis and conclusions",
        ],
    )


def circuits_content(topic: str) -> SimulatedContent:
    return SimulatedContent(
        label="circuits",
        topics=[
            _lead_topic(topic, f"Circuit signal analysis for: {topic}"),
            ResearchTopic(
                title="Average and RMS Values",
                description="Computing i_avg and i_rms for periodic waveforms",
                priority="high",
                status="in_progress",
            ),
            ResearchTopic(
                title="Power in Resistive Loads",
                description="Relating RMS current to delivered power",
                priority="medium",
                status="pending",
            ),
        ],
        insights=[
            "i_avg = (1/T) * integral of i(t) over one period; it is the DC component of the waveform",
            "i_rms = sqrt((1/T) * integral of i(t)^2 over one period); it sets the heating effect",
            "For a sinusoid with peak I_m, i_rms = I_m/sqrt(2) while a full-period i_avg is zero",
            "Resistor power uses i_rms: P = i_rms^2 * R, never i_avg^2 * R",
            "For piecewise waveforms, integrate each segment separately before combining i_avg or i_rms",
        ],
        next_steps=[
            "Sketch one full period of the waveform and mark its breakpoints",
            "Write i(t) for each segment of the period",
            "Integrate i(t) for the average value and i(t)^2 for the RMS value",
            "Check results against known sinusoid and square-wave values",
            "Verify numerically with a short MATLAB or Python script",
            "Compute the power delivered to the load from the RMS value",
        ],
    )


def project_planning_content(topic: str) -> SimulatedContent:
    return SimulatedContent(
        label="project_planning",
        topics=[
            _lead_topic(topic, f"Project plan for: {topic}"),
            ResearchTopic(
                title="Project Planning and Management",
                description="Practices for scoping, sequencing, and tracking work",
                priority="high",
                status="in_progress",
            ),
            ResearchTopic(
                title="Technology Stack Selection",
                description="Choosing appropriate tools and frameworks for development",
                priority="medium",
                status="pending",
            ),
        ],
        insights=[
            "A one-paragraph scope statement prevents most mid-project drift",
            "Shipping a thin end-to-end slice first exposes integration risk early",
            "Familiar tools beat novel ones when the deadline is fixed",
            "Small, frequent commits make regressions easy to locate",
            "Written acceptance criteria turn vague goals into checkable milestones",
        ],
        next_steps=[
            "Write the scope statement and list explicit non-goals",
            "Break the work into milestones of a week or less",
            "Pick the stack and set up the repository with CI",
            "Build the thinnest end-to-end version",
            "Review progress against milestones every week",
        ],
    )


def creative_content(topic: str) -> SimulatedContent:
    return SimulatedContent(
        label="creative",
        topics=[
            _lead_topic(topic, f"Open exploration of: {topic}"),
            ResearchTopic(
                title="Idea Generation",
                description="Divergent exploration before committing to a direction",
                priority="medium",
                status="pending",
            ),
        ],
        insights=[
            "Generating many rough ideas first produces better final choices",
            "Constraints (time, materials, audience) make open questions tractable",
            "Writing ideas down frees attention for connecting them",
            "Revisiting an idea after a break often reveals its strongest form",
        ],
        next_steps=[
            "Free-write for ten minutes without judging ideas",
            "Cluster the ideas into themes",
            "Pick one theme and define a small experiment",
            "Reflect on what the experiment taught you",
        ],
    )


# First matching group wins; checked only when no course was detected.
KEYWORD_TEMPLATES: Tuple[Tuple[Tuple[str, ...], TemplateBuilder], ...] = (
    (("biomaterial", "material", "tissue", "implant", "biocompat"), biomaterials_content),
    (("math", "laplace", "equation", "transform", "differential", "calculus"), mathematics_content),
    (("circuit", "rms", "average value", "waveform", "i_avg", "voltage"), circuits_content),
    (("project", "build", "develop", "prototype", "milestone"), project_planning_content),
    (("idea", "creative", "brainstorm", "imagine", "explore", "reflect"), creative_content),
)


def default_content(topic: str) -> SimulatedContent:
    return SimulatedContent(
        label="default",
        topics=[
            _lead_topic(topic, f"Research analysis for: {topic}"),
            ResearchTopic(
                title="Related Research Areas",
                description="Exploring connected topics and methodologies",
                priority="medium",
                status="pending",
            ),
        ],
        insights=[
            f"Key research focus: {topic}",
            "Systematic approaches improve research quality and reproducibility",
            "Evidence-based methods provide reliable foundations for decision making",
            "Documentation and methodology are crucial for research success",
            "Collaborative approaches enhance research outcomes",
        ],
        next_steps=[
            f"Develop comprehensive research plan for {topic}",
            "Identify key resources and methodologies",
            "Create systematic approach to information gathering",
            "Plan implementation and validation steps",
            "Document findings and recommendations",
        ],
    )


def select_content(topic: str, course: CourseRecord | None = None) -> SimulatedContent:
    if course is not None:
        return course_content(topic, course)
    for keywords, builder in KEYWORD_TEMPLATES:
        if contains_any(topic, keywords):
            return builder(topic)
    return default_content(topic)


__all__ = [
    "COURSE_SUBJECT_TEMPLATES",
    "KEYWORD_TEMPLATES",
    "SimulatedContent",
    "course_content",
    "default_content",
    "select_content",
]
