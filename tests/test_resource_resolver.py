from __future__ import annotations

from rcopilot.core.catalogs import CourseCatalog, ResourceCatalog
from rcopilot.research.resource_resolver import ResourceResolver

TOOL_URLS = [
    "https://www.wolframalpha.com/",
    "https://www.desmos.com/calculator",
    "https://en.wikipedia.org/",
    "https://scholar.google.com/",
]


def test_multiple_rules_concatenate_before_dedup(resource_catalog: ResourceCatalog) -> None:
    resources = ResourceResolver(resource_catalog).resolve("python matlab circuit")
    urls = [record.url for record in resources]

    assert urls == [
        "https://docs.python.org/3/",
        "https://www.mathworks.com/help/matlab/",
        "https://signals.example.edu/primer",
        "https://www.allaboutcircuits.com/textbook/alternating-current/",
        *TOOL_URLS,
    ]
    assert len(urls) == len(set(urls))
    # The first record for a shared URL survives.
    assert resources[3].title == "AC Theory"


def test_course_mapping_resources_come_first(
    resource_catalog: ResourceCatalog, course_catalog: CourseCatalog
) -> None:
    course = course_catalog.get("MAP2302")
    resources = ResourceResolver(resource_catalog).resolve("Laplace homework", course)

    assert [record.title for record in resources[:2]] == ["Paul's Notes", "Laplace Table"]
    assert [record.url for record in resources[2:]] == TOOL_URLS


def test_unknown_mapping_paths_are_skipped(
    resource_catalog: ResourceCatalog, course_catalog: CourseCatalog
) -> None:
    course = course_catalog.get("BME3506C")
    resources = ResourceResolver(resource_catalog).resolve("lab report", course)
    assert resources[0].title == "AC Theory"
    assert [record.url for record in resources[1:]] == TOOL_URLS


def test_tool_groups_are_capped(resource_catalog: ResourceCatalog) -> None:
    resources = ResourceResolver(resource_catalog, tools_per_group=1).resolve("qqq")
    assert [record.title for record in resources] == ["Wolfram Alpha", "Wikipedia"]


def test_resolution_is_repeatable(resource_catalog: ResourceCatalog, course_catalog: CourseCatalog) -> None:
    resolver = ResourceResolver(resource_catalog)
    course = course_catalog.get("MAP2302")
    first = resolver.resolve("laplace transform python", course)
    second = resolver.resolve("laplace transform python", course)
    assert first == second
    assert len({record.url for record in first}) == len(first)


def test_missing_catalog_resolves_nothing() -> None:
    assert ResourceResolver(None).resolve("python matlab circuit") == []
