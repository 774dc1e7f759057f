"""Assemble reference links for a topic from the resource catalog."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from rcopilot.core.catalogs import CourseRecord, ResourceCatalog, ResourceRecord
from rcopilot.core.config import TOOL_RECORDS_PER_GROUP
from rcopilot.utils.text import contains_any, unique_by

LOGGER = logging.getLogger(__name__)

# Every rule whose keywords hit the topic contributes; order only affects
# which duplicate URL survives.
TOPIC_RESOURCE_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("python", "programming", "coding", "script"), ("programming.python",)),
    (("matlab", "simulink"), ("programming.matlab",)),
    (
        ("circuit", "rms", "voltage", "resistor", "capacitor", "signal", "waveform"),
        ("engineering.circuits", "engineering.signals"),
    ),
    (
        ("laplace", "differential", "equation", "transform", "boundary value"),
        ("mathematics.differential_equations", "mathematics.transforms"),
    ),
    (("calculus", "integral", "derivative", "linear algebra", "matrix"), ("mathematics.general",)),
    (
        ("biomaterial", "material", "tissue", "implant", "biocompat", "scaffold"),
        ("bioengineering.biomaterials",),
    ),
    (("physiology", "anatomy", "homeostasis"), ("bioengineering.physiology",)),
    (("physics", "electric", "magnetic", "optics", "gauss"), ("physics.electromagnetism",)),
    (("chemistry", "reaction", "organic", "polymer"), ("chemistry.general",)),
    (("prisma", "systematic review", "literature", "meta-analysis", "paper"), ("research.literature_review",)),
    (("health care", "healthcare", "medical device", "fda", "clinical"), ("bioengineering.healthcare",)),
)

TOOL_PATHS: Tuple[str, ...] = ("tools.calculators", "tools.references")


class ResourceResolver:
    """Collect course, keyword, and general-tool resources, deduplicated by URL."""

    def __init__(
        self,
        catalog: ResourceCatalog | None,
        *,
        rules: Sequence[Tuple[Sequence[str], Sequence[str]]] = TOPIC_RESOURCE_RULES,
        tool_paths: Sequence[str] = TOOL_PATHS,
        tools_per_group: int = TOOL_RECORDS_PER_GROUP,
    ) -> None:
        self.catalog = catalog
        self.rules = rules
        self.tool_paths = tool_paths
        self.tools_per_group = tools_per_group

    def resolve(self, topic: str, course: CourseRecord | None = None) -> List[ResourceRecord]:
        if self.catalog is None:
            return []
        collected: List[ResourceRecord] = []
        if course is not None:
            collected.extend(self._course_resources(course))
        collected.extend(self._topic_resources(topic))
        collected.extend(self._tool_resources())
        resources = unique_by(collected, key=lambda record: record.url)
        LOGGER.debug("Resolved %d resources (%d before dedup)", len(resources), len(collected))
        return resources

    # ------------------------------------------------------------------

    def _course_resources(self, course: CourseRecord) -> List[ResourceRecord]:
        return list(self._resolve_paths(self.catalog.paths_for_course(course.code)))

    def _topic_resources(self, topic: str) -> List[ResourceRecord]:
        records: List[ResourceRecord] = []
        for keywords, paths in self.rules:
            if contains_any(topic, keywords):
                records.extend(self._resolve_paths(paths))
        return records

    def _tool_resources(self) -> List[ResourceRecord]:
        records: List[ResourceRecord] = []
        for path in self.tool_paths:
            records.extend(self.catalog.lookup(path)[: self.tools_per_group])
        return records

    def _resolve_paths(self, paths: Iterable[str]) -> Iterable[ResourceRecord]:
        for path in paths:
            if not self.catalog.has_path(path):
                LOGGER.debug("Resource path %s not present in catalog", path)
                continue
            yield from self.catalog.lookup(path)


__all__ = ["ResourceResolver", "TOOL_PATHS", "TOPIC_RESOURCE_RULES"]
