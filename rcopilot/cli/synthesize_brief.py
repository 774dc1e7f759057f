"""CLI that condenses a research report into SYNTHESIS.md."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import anyio
from dotenv import load_dotenv

from rcopilot.core.config import ResearchSettings, load_research_settings
from rcopilot.pipeline.bootstrap import resolve_repo_root
from rcopilot.research.ai_client import ChatCompletionClient
from rcopilot.research.brief import DEFAULT_INPUT, DEFAULT_OUTPUT, BriefSynthesizer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Synthesize an action brief from a research report.")
    parser.add_argument("input", nargs="?", default=str(DEFAULT_INPUT), help="Research report to read (default: RESEARCH.md)")
    parser.add_argument("--output", default=str(DEFAULT_OUTPUT), help="Where to write the brief (default: SYNTHESIS.md)")
    parser.add_argument("--stdout", action="store_true", help="Print the brief instead of writing a file.")
    parser.add_argument(
        "--config", default=None, help="Research settings YAML, relative to the repo root (default: config/research.yaml)"
    )
    parser.add_argument("--repo-root", default=None, help="Repository root (default: $RCOPILOT_REPO_ROOT or cwd)")
    parser.add_argument("--offline", action="store_true", help="Skip the API and emit the simulated brief.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


async def _synthesize(text: str, *, api_key: str | None, settings: ResearchSettings) -> str:
    if api_key is None:
        return await BriefSynthesizer().synthesize(text)
    client = ChatCompletionClient(settings.brief, api_key=api_key)
    try:
        return await BriefSynthesizer(client).synthesize(text)
    finally:
        await client.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        repo_root = resolve_repo_root(Path(args.repo_root) if args.repo_root else None)
        load_dotenv(repo_root / ".env")
        config_path = None
        if args.config:
            config_path = Path(args.config).expanduser()
            if not config_path.is_absolute():
                config_path = (repo_root / config_path).resolve()
            if not config_path.exists():
                raise FileNotFoundError(f"Settings file not found: {config_path}")
        settings = load_research_settings(config_path, base_dir=repo_root)
        input_path = Path(args.input).expanduser()
        if not input_path.is_absolute():
            input_path = (repo_root / input_path).resolve()
        text = BriefSynthesizer.load_input(input_path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    api_key = None if args.offline else settings.brief.resolve_api_key()

    async def _run() -> str:
        return await _synthesize(text, api_key=api_key, settings=settings)

    brief = anyio.run(_run)

    if args.stdout:
        sys.stdout.write(brief)
        return 0
    output_path = Path(args.output).expanduser()
    if not output_path.is_absolute():
        output_path = (repo_root / output_path).resolve()
    try:
        BriefSynthesizer.save(brief, output_path)
    except OSError as exc:
        print(f"[synthesize] unable to write {output_path}: {exc}", file=sys.stderr)
        return 1
    print(f"[synthesize] brief saved to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
