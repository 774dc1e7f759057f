"""Turn a saved research report into a short, action-oriented brief."""

from __future__ import annotations

import logging
from pathlib import Path

from .ai_client import ChatCompletionClient

LOGGER = logging.getLogger(__name__)

DEFAULT_INPUT = Path("RESEARCH.md")
DEFAULT_OUTPUT = Path("SYNTHESIS.md")

BRIEF_INSTRUCTIONS = """You are a pragmatic assistant. Read the research below and output ONLY the following sections, in this exact order and concise style:

# Direct Answers
- Answer the user's question(s) in plain language (3-7 bullets max)

# Next Actions
- A short checklist of concrete steps the user can take next (5-8 items)

# Materials (if relevant)
- List required materials/tools succinctly

# Risks & Mitigations (optional)
- Up to 3 bullets

# References (optional)
- Up to 5 short, high-signal references, if present in research

Do NOT describe the repo structure or general capabilities. Focus on answering the user's prompt directly.

---
"""

SIMULATED_BRIEF = """# Direct Answers
- This is a simulated synthesis. Provide specific, actionable guidance based on the research input.
- Summarize the most relevant points to answer the user's prompt directly.

# Next Actions
- List 5-8 concrete, short steps the user can take.

# Materials (if relevant)
- List only what's needed to proceed.

# Risks & Mitigations
- Up to 3 bullets with succinct mitigations.

# References
- Include up to 5 high-signal references if present in research.
"""


class BriefSynthesizer:
    """Reads a research report and asks the brief endpoint to condense it."""

    def __init__(self, client: ChatCompletionClient | None = None) -> None:
        self.client = client

    @staticmethod
    def load_input(path: Path) -> str:
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        text = path.read_text(encoding="utf-8")
        LOGGER.info("Loaded %d characters from %s", len(text), path)
        return text

    async def synthesize(self, research_text: str) -> str:
        if self.client is None:
            LOGGER.info("No brief API key configured; using simulated synthesis.")
            return SIMULATED_BRIEF
        outcome = await self.client.attempt(BRIEF_INSTRUCTIONS + research_text, min_length=1)
        if not outcome.ok:
            LOGGER.warning("Brief synthesis failed (%s); using simulated synthesis.", outcome.failure)
            return SIMULATED_BRIEF
        return outcome.text or SIMULATED_BRIEF

    @staticmethod
    def save(output: str, path: Path = DEFAULT_OUTPUT) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(output, encoding="utf-8")
        LOGGER.info("Synthesis saved to %s", path)
        return path


__all__ = ["BRIEF_INSTRUCTIONS", "BriefSynthesizer", "DEFAULT_INPUT", "DEFAULT_OUTPUT", "SIMULATED_BRIEF"]
