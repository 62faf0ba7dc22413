"""Accumulated view of a single agent run."""

import itertools
import json
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import structlog

from .events import AgentEvent, DoneEvent, ResultEvent, TextEvent, ToolEvent, UsageEvent

logger = structlog.get_logger(__name__)


def _slug(prompt: str, max_words: int = 6) -> str:
    words = re.findall(r"[a-z0-9]+", prompt.lower())[:max_words]
    return "-".join(words) or "recipes"


@dataclass
class RunSummary:
    """Collects events from one stream for reporting and persistence."""

    texts: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    input_tokens: int = 0
    output_tokens: int = 0
    result: str | None = None
    done: bool = False

    def add(self, event: AgentEvent) -> None:
        match event:
            case TextEvent(text=text):
                self.texts.append(text)
            case ToolEvent(name=name):
                self.tools.append(name)
            case UsageEvent(input=input_tokens, output=output_tokens):
                self.input_tokens += input_tokens
                self.output_tokens += output_tokens
            case ResultEvent(text=text):
                self.result = text
            case DoneEvent():
                self.done = True

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @property
    def final_text(self) -> str:
        """The result if one arrived, otherwise the streamed text joined."""
        if self.result:
            return self.result
        return "\n\n".join(self.texts)

    def metadata(self) -> dict:
        return {
            "tools": self.tools,
            "tool_calls": len(self.tools),
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "completed": self.done,
        }

    def save(self, prompt: str, results_dir: Path) -> Path:
        """Write the answer as markdown plus a JSON run record beside it.

        Files are named ``<UTC timestamp>-<prompt slug>.md``; a run saved
        within the same second as another gets a ``-1``, ``-2``... suffix.

        Returns:
            Path to the markdown file.
        """
        results_dir.mkdir(parents=True, exist_ok=True)
        saved_at = datetime.now(UTC)
        stem = f"{saved_at.strftime('%Y%m%d-%H%M%S')}-{_slug(prompt)}"

        for attempt in itertools.count():
            answer_path = results_dir / (f"{stem}-{attempt}.md" if attempt else f"{stem}.md")
            try:
                with answer_path.open("x", encoding="utf-8") as fh:
                    fh.write(self.final_text)
            except FileExistsError:
                continue
            break

        record = {"prompt": prompt, "saved_at": saved_at.isoformat(), "answer_file": answer_path.name, **self.metadata()}
        answer_path.with_suffix(".json").write_text(json.dumps(record, indent=2), encoding="utf-8")
        logger.info("run_saved", path=str(answer_path), tool_calls=len(self.tools))
        return answer_path
