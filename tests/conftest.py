from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from rcopilot.core.catalogs import ConfigStore, CourseCatalog, ResourceCatalog

REPO_ROOT = Path(__file__).resolve().parents[1]
SAMPLE_CONFIG = REPO_ROOT / "config"

COURSES = {
    "courses": {
        "MAP2302": {
            "name": "Differential Equations",
            "subject": "Mathematics",
            "category": "Math & Coding",
            "status": "current",
            "keywords": ["laplace", "differential equations", "boundary value"],
            "commonTopics": ["Laplace transforms", "Second-order linear equations"],
            "textbooks": ["Boyce & DiPrima"],
            "tools": ["MATLAB"],
            "typicalAssignments": ["Weekly problem sets", "Laplace transform IVPs"],
        },
        "PHY2049": {
            "name": "Physics II",
            "subject": "Physics",
            "category": "Sciences",
            "keywords": ["electric field", "gauss", "magnetic"],
        },
        "BME3506C": {
            "name": "Circuits for Bioengineers",
            "subject": "Bioengineering",
            "category": "Math & Coding",
            "keywords": ["circuit", "rms", "op amp"],
            "typicalAssignments": ["Breadboard labs"],
        },
    }
}

RESOURCES = {
    "resources": {
        "programming": {
            "python": [{"title": "Python Docs", "url": "https://docs.python.org/3/", "description": "Reference"}],
            "matlab": [
                {"title": "MATLAB Docs", "url": "https://www.mathworks.com/help/matlab/"},
                {"title": "Shared Signals Primer", "url": "https://signals.example.edu/primer"},
            ],
        },
        "engineering": {
            "circuits": [
                {"title": "AC Theory", "url": "https://www.allaboutcircuits.com/textbook/alternating-current/"},
            ],
            "signals": [
                {"title": "AC Theory (signals)", "url": "https://www.allaboutcircuits.com/textbook/alternating-current/"},
                {"title": "Shared Signals Primer", "url": "https://signals.example.edu/primer"},
            ],
        },
        "mathematics": {
            "differential_equations": [{"title": "Paul's Notes", "url": "https://tutorial.math.lamar.edu/Classes/DE/DE.aspx"}],
            "transforms": [{"title": "Laplace Table", "url": "https://tutorial.math.lamar.edu/Classes/DE/Laplace_Table.aspx"}],
        },
        "tools": {
            "calculators": [
                {"title": "Wolfram Alpha", "url": "https://www.wolframalpha.com/"},
                {"title": "Desmos", "url": "https://www.desmos.com/calculator"},
                {"title": "Symbolab", "url": "https://www.symbolab.com/"},
            ],
            "references": [
                {"title": "Wikipedia", "url": "https://en.wikipedia.org/"},
                {"title": "Google Scholar", "url": "https://scholar.google.com/"},
                {"title": "Engineering Toolbox", "url": "https://www.engineeringtoolbox.com/"},
            ],
        },
    },
    "courseMappings": {
        "MAP2302": ["mathematics.differential_equations", "mathematics.transforms"],
        "BME3506C": ["engineering.circuits", "engineering.missing"],
    },
}


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("PPLX_API_KEY", "OPENAI_API_KEY", "RCOPILOT_CONFIG_DIR", "RCOPILOT_REPO_ROOT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def course_catalog() -> CourseCatalog:
    return CourseCatalog.model_validate(COURSES)


@pytest.fixture()
def resource_catalog() -> ResourceCatalog:
    return ResourceCatalog.model_validate(RESOURCES)


@pytest.fixture()
def config_store(course_catalog: CourseCatalog, resource_catalog: ResourceCatalog) -> ConfigStore:
    return ConfigStore(courses=course_catalog, resources=resource_catalog)


@pytest.fixture()
def sample_repo(tmp_path: Path) -> Path:
    """Temporary repository root carrying a copy of the shipped config directory."""

    shutil.copytree(SAMPLE_CONFIG, tmp_path / "config")
    return tmp_path
