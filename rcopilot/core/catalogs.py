"""Course and resource catalogs plus the loader that locates them."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, Sequence, Tuple, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rcopilot.utils.text import split_fields, unique_by

LOGGER = logging.getLogger(__name__)

ENV_CONFIG_DIR = "RCOPILOT_CONFIG_DIR"
COURSE_CATALOG_NAMES: Tuple[str, ...] = ("courses.yaml", "courses.yml", "courses.json")
RESOURCE_CATALOG_NAMES: Tuple[str, ...] = ("resources.yaml", "resources.yml", "resources.json")
DEFAULT_SEARCH_DIRS: Tuple[Path, ...] = (Path("config"), Path(".github/config"))

EnrollmentStatus = Literal["current", "upcoming", "none"]
CatalogT = TypeVar("CatalogT", bound=BaseModel)


def _string_tuple(value: Any) -> Any:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple)):
        return tuple(str(item).strip() for item in value if item is not None and str(item).strip())
    return value


class CourseRecord(BaseModel):
    """One academic course and the hints used to recognise it in a topic."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    code: str
    name: str = ""
    subject: str = ""
    credits: int = Field(default=0, ge=0)
    status: EnrollmentStatus = "none"
    term: str = ""
    category: str = ""
    keywords: Tuple[str, ...] = ()
    common_topics: Tuple[str, ...] = Field(default=(), alias="commonTopics")
    textbooks: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()
    typical_assignments: Tuple[str, ...] = Field(default=(), alias="typicalAssignments")

    @model_validator(mode="before")
    @classmethod
    def coerce_enrollment_flags(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("status"):
            return data
        payload = dict(data)
        if payload.pop("currentlyEnrolled", False) or payload.pop("current", False):
            payload["status"] = "current"
        elif payload.pop("upcoming", False):
            payload["status"] = "upcoming"
        return payload

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keywords(cls, value: Any) -> Any:
        tokens = split_fields(value)
        return tuple(unique_by(tokens, key=str.lower))

    @field_validator("common_topics", "textbooks", "tools", "typical_assignments", mode="before")
    @classmethod
    def strip_items(cls, value: Any) -> Any:
        return _string_tuple(value)

    @property
    def display_name(self) -> str:
        return f"{self.code} ({self.name})" if self.name else self.code


class SelfStudy(BaseModel):
    """Side-table of self-directed study areas; carried but not matched on."""

    topics: List[str] = Field(default_factory=list)
    category: str = ""


class CourseCatalog(BaseModel):
    """Ordered mapping of course code to record (file order is match order)."""

    model_config = ConfigDict(populate_by_name=True)

    courses: Dict[str, CourseRecord] = Field(default_factory=dict)
    self_study: Optional[SelfStudy] = Field(default=None, alias="selfStudy")

    @model_validator(mode="before")
    @classmethod
    def key_courses_by_code(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw_courses = data.get("courses")
        if not isinstance(raw_courses, dict):
            return data
        keyed: Dict[str, Any] = {}
        for key, record in raw_courses.items():
            code = str(key).strip().upper()
            if isinstance(record, dict):
                record = dict(record)
                inner = str(record.setdefault("code", code)).strip().upper()
                if inner != code:
                    raise ValueError(f"Course entry {key!r} declares mismatched code {record['code']!r}")
            keyed[code] = record
        return {**data, "courses": keyed}

    def records(self) -> List[CourseRecord]:
        return list(self.courses.values())

    def get(self, code: str) -> CourseRecord | None:
        return self.courses.get(code.strip().upper())


class ResourceRecord(BaseModel):
    """A titled external reference; ``url`` is its identity."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str
    url: str
    description: str = ""

    @field_validator("title", "url", "description", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class ResourceCatalog(BaseModel):
    """``category -> subcategory -> [ResourceRecord]`` plus per-course path lists."""

    model_config = ConfigDict(populate_by_name=True)

    resources: Dict[str, Dict[str, List[ResourceRecord]]] = Field(default_factory=dict)
    course_mappings: Dict[str, List[str]] = Field(default_factory=dict, alias="courseMappings")

    @model_validator(mode="before")
    @classmethod
    def collect_root_categories(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "resources" in data:
            return data
        mapping_keys = {"courseMappings", "course_mappings"}
        categories = {key: value for key, value in data.items() if key not in mapping_keys and isinstance(value, dict)}
        payload = {key: value for key, value in data.items() if key in mapping_keys}
        payload["resources"] = categories
        return payload

    @field_validator("course_mappings", mode="before")
    @classmethod
    def normalize_mapping_codes(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {str(code).strip().upper(): split_fields(paths) for code, paths in value.items()}

    def lookup(self, path: str) -> List[ResourceRecord]:
        """Resolve a ``"category.subcategory"`` path; unknown paths resolve to nothing."""
        category, _, subcategory = path.strip().partition(".")
        if not category or not subcategory:
            return []
        return list(self.resources.get(category, {}).get(subcategory, []))

    def has_path(self, path: str) -> bool:
        category, _, subcategory = path.strip().partition(".")
        return subcategory in self.resources.get(category, {})

    def paths_for_course(self, code: str) -> List[str]:
        return list(self.course_mappings.get(code.strip().upper(), []))


@dataclass(frozen=True)
class ConfigStore:
    """
    Both optional catalogs, loaded once and shared read-only.

    ``None`` means the catalog was absent or unusable; components treat that
    as "no data" rather than as an error.
    """

    courses: Optional[CourseCatalog] = None
    resources: Optional[ResourceCatalog] = None
    course_source: Optional[Path] = None
    resource_source: Optional[Path] = None

    @classmethod
    def load(
        cls,
        *,
        repo_root: Path | None = None,
        search_dirs: Sequence[Path] | None = None,
    ) -> "ConfigStore":
        dirs = build_search_dirs(repo_root=repo_root, extra_dirs=search_dirs)
        course_path = first_existing(dirs, COURSE_CATALOG_NAMES)
        resource_path = first_existing(dirs, RESOURCE_CATALOG_NAMES)
        courses = _load_catalog(course_path, CourseCatalog, label="course catalog")
        resources = _load_catalog(resource_path, ResourceCatalog, label="resource catalog")
        LOGGER.info(
            "Catalogs loaded",
            extra={
                "courses": len(courses.courses) if courses is not None else 0,
                "course_source": str(course_path) if course_path else None,
                "resource_source": str(resource_path) if resource_path else None,
            },
        )
        return cls(
            courses=courses,
            resources=resources,
            course_source=course_path if courses is not None else None,
            resource_source=resource_path if resources is not None else None,
        )


def build_search_dirs(*, repo_root: Path | None = None, extra_dirs: Iterable[Path] | None = None) -> List[Path]:
    """Ordered catalog directories: env override, configured dirs, then repo defaults."""

    root = (repo_root or Path.cwd()).expanduser().resolve()
    dirs: List[Path] = []
    env_dir = os.environ.get(ENV_CONFIG_DIR)
    if env_dir and env_dir.strip():
        dirs.append(Path(env_dir.strip()).expanduser().resolve())
    for directory in extra_dirs or []:
        candidate = Path(directory).expanduser()
        dirs.append(candidate if candidate.is_absolute() else (root / candidate).resolve())
    dirs.extend((root / directory).resolve() for directory in DEFAULT_SEARCH_DIRS)
    return unique_by(dirs, key=str)


def first_existing(directories: Iterable[Path], names: Sequence[str]) -> Path | None:
    for directory in directories:
        for name in names:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def read_catalog(path: Path, model: type[CatalogT]) -> CatalogT:
    """Parse one catalog file strictly; callers decide whether failures are fatal."""
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a mapping, received {type(data).__name__}")
    return model.model_validate(data)


def _load_catalog(path: Path | None, model: type[CatalogT], *, label: str) -> CatalogT | None:
    if path is None:
        LOGGER.warning("No %s found; continuing without it.", label)
        return None
    try:
        return read_catalog(path, model)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        LOGGER.warning("Ignoring unusable %s at %s: %s", label, path, exc)
        return None


def audit_catalogs(
    courses: CourseCatalog | None,
    resources: ResourceCatalog | None,
) -> Tuple[List[str], List[str]]:
    """Cross-check the two catalogs; returns ``(errors, warnings)``."""

    errors: List[str] = []
    warnings: List[str] = []
    if courses is None:
        warnings.append("Course catalog missing; course detection disabled.")
    if resources is None:
        warnings.append("Resource catalog missing; no resources will be resolved.")
        return errors, warnings

    for code, paths in resources.course_mappings.items():
        if courses is not None and courses.get(code) is None:
            warnings.append(f"courseMappings references unknown course {code}")
        for path in paths:
            if "." not in path:
                errors.append(f"courseMappings[{code}] path {path!r} is not 'category.subcategory'")
            elif not resources.has_path(path):
                errors.append(f"courseMappings[{code}] path {path!r} does not exist")

    for category, groups in resources.resources.items():
        for subcategory, records in groups.items():
            seen: set[str] = set()
            for record in records:
                if record.url in seen:
                    warnings.append(f"{category}.{subcategory} lists {record.url} more than once")
                seen.add(record.url)
                if not record.url.startswith(("http://", "https://")):
                    warnings.append(f"{category}.{subcategory} entry {record.title!r} has a non-http URL")

    if courses is not None:
        for course in courses.records():
            if not course.keywords:
                warnings.append(f"{course.code} has no keywords; only code matches can detect it")
            if not course.category:
                warnings.append(f"{course.code} has no category; its keywords widen no category rule")
    return errors, warnings


__all__ = [
    "COURSE_CATALOG_NAMES",
    "ConfigStore",
    "CourseCatalog",
    "CourseRecord",
    "ENV_CONFIG_DIR",
    "RESOURCE_CATALOG_NAMES",
    "ResourceCatalog",
    "ResourceRecord",
    "SelfStudy",
    "audit_catalogs",
    "build_search_dirs",
    "first_existing",
    "read_catalog",
]
