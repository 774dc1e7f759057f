"""CLI entry point for a single research run."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rcopilot import get_version
from rcopilot.pipeline import ResearchRunArtifacts, bootstrap_research, run_research
from rcopilot.pipeline.bootstrap import resolve_repo_root


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Research a topic and write RESEARCH.md.")
    parser.add_argument(
        "topic",
        nargs="*",
        help="Free-text research topic (default: the configured default topic).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the research settings YAML (default: <repo-root>/config/research.yaml)",
    )
    parser.add_argument(
        "--repo-root",
        default=None,
        help="Repository root used for catalogs, .env, and relative paths (default: $RCOPILOT_REPO_ROOT or cwd)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for logs and artifacts (default: settings.output_dir)",
    )
    parser.add_argument(
        "--report",
        default=None,
        help="Report path (default: <repo-root>/RESEARCH.md)",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Ignore any API key and use simulated research.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress the run summary on stdout.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def _resolve_path(value: str | Path, *, base: Path | None = None) -> Path:
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate.resolve()
    anchor = Path(base).expanduser().resolve() if base is not None else Path.cwd()
    return (anchor / candidate).resolve()


def _resolve_optional(value: str | Path | None, *, base: Path | None = None) -> Path | None:
    if value is None:
        return None
    return _resolve_path(value, base=base)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        repo_root = resolve_repo_root(_resolve_optional(args.repo_root))
        config_path = _resolve_optional(args.config, base=repo_root)
        if config_path is not None and not config_path.exists():
            raise FileNotFoundError(f"Settings file not found: {config_path}")
        ctx = bootstrap_research(
            config_path,
            repo_root=repo_root,
            output_dir=_resolve_optional(args.output_dir, base=repo_root),
            report_path=_resolve_optional(args.report, base=repo_root),
            offline=args.offline,
        )
        topic = " ".join(args.topic).strip() or ctx.settings.default_topic
        artifacts = run_research(ctx, topic)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    except OSError as exc:
        print(f"[research] unable to write report: {exc}", file=sys.stderr)
        return 1

    _print_summary(artifacts, quiet=args.quiet)
    return 0


def _print_summary(artifacts: ResearchRunArtifacts, *, quiet: bool = False) -> None:
    if quiet:
        return
    analysis = artifacts.analysis
    findings = artifacts.findings
    course = artifacts.course_code or "none"
    print(
        f"[research] topic={analysis.topic!r} | category={findings.category} | course={course} "
        f"| source={findings.source} | resources={len(analysis.resources)}"
    )
    if artifacts.report_path is not None:
        print(f"[research] report saved to {artifacts.report_path}")


if __name__ == "__main__":
    sys.exit(main())
