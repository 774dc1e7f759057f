"""
Settings, catalogs, and provenance logging for the research copilot.

Nothing here performs network I/O; the research components and pipeline
build on these modules.
"""

from .catalogs import ConfigStore, CourseCatalog, CourseRecord, ResourceCatalog, ResourceRecord
from .config import AIServiceConfig, MatchThresholds, ResearchSettings, load_research_settings
from .provenance import ProvenanceEvent, ProvenanceLogger

__all__ = [
    "AIServiceConfig",
    "ConfigStore",
    "CourseCatalog",
    "CourseRecord",
    "MatchThresholds",
    "ProvenanceEvent",
    "ProvenanceLogger",
    "ResearchSettings",
    "ResourceCatalog",
    "ResourceRecord",
    "load_research_settings",
]
