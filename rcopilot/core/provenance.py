"""Append-only JSONL record of what each research run decided and why."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, Field

RunStage = str


class ProvenanceEvent(BaseModel):
    """One pipeline decision (category chosen, course matched, fallback taken, ...)."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    stage: RunStage = Field(..., description="Pipeline stage, e.g. 'classify' or 'synthesize'.")
    message: str = Field(..., description="Human-readable description of the decision.")
    topic: str | None = None
    payload: Dict[str, Any] = Field(default_factory=dict)


class ProvenanceLogger:
    """Writes events to ``output_path`` and keeps them in memory for the run summary."""

    def __init__(self, output_path: Path | None = None):
        self.output_path = output_path
        self.events: List[ProvenanceEvent] = []
        if self.output_path is not None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: ProvenanceEvent | Dict[str, Any]) -> ProvenanceEvent:
        if not isinstance(event, ProvenanceEvent):
            event = ProvenanceEvent(**event)
        self.events.append(event)
        if self.output_path is not None:
            with self.output_path.open("a", encoding="utf-8") as handle:
                handle.write(event.model_dump_json() + "\n")
        return event

    def record(self, stage: RunStage, message: str, *, topic: str | None = None, **payload: Any) -> ProvenanceEvent:
        return self.log(ProvenanceEvent(stage=stage, message=message, topic=topic, payload=payload))

    def extend(self, events: Iterable[ProvenanceEvent | Dict[str, Any]]) -> None:
        for event in events:
            self.log(event)

    def stages(self) -> List[RunStage]:
        return [event.stage for event in self.events]


__all__ = ["ProvenanceEvent", "ProvenanceLogger"]
