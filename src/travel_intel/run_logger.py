"""Run logger for recording intermediate pipeline results to JSON files."""

import dataclasses
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from travel_intel.data import IntelReport, Usage


class StageRecord(BaseModel):
    """Record of a single pipeline stage execution."""

    stage: str
    component: str
    input: Any = None
    output: Any = None
    usage: dict[str, Any] | None = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """Record of a complete pipeline run."""

    run_id: str
    country_name: str
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    report: dict[str, Any] | None = None
    trace: list[str] = []


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, lists, tuples, dicts, and primitives.
    For Usage objects, includes computed property summaries.
    """
    if obj is None:
        return None
    if isinstance(obj, Usage):
        return {
            "api_calls": [_serialize(c) for c in obj.api_calls],
            "search_requests": obj.search_requests,
            "scrape_requests": obj.scrape_requests,
            "input_tokens": obj.input_tokens,
            "output_tokens": obj.output_tokens,
        }
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RunLogger:
    """Writes one JSON log file per pipeline run.

    ``start_run`` returns the run's own ``RunRecord``; stages and the final
    report are attached to that record, so overlapping runs on one logger
    never share state. When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the most recently written log file, or None."""
        return self._last_log_path

    def start_run(self, country_name: str) -> RunRecord | None:
        """Create a record for a new run.

        Returns:
            The run's record, or None if logging is disabled.
        """
        if not self._enabled:
            return None

        return RunRecord(
            run_id=str(uuid.uuid4()),
            country_name=country_name,
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_stage(
        self,
        record: RunRecord | None,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        usage: Usage | None,
        duration_seconds: float,
    ) -> None:
        """Append a stage record to a run.

        Args:
            record: Record returned by ``start_run``.
            stage: Stage name (e.g. "search_verify", "summarize").
            component: Component or category the stage ran for.
            input_data: Stage input (will be serialized).
            output_data: Stage output (will be serialized).
            usage: Usage for this stage, if any.
            duration_seconds: Wall-clock time for this stage.
        """
        if not self._enabled or record is None:
            return

        record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input=_serialize(input_data),
                output=_serialize(output_data),
                usage=_serialize(usage) if usage is not None else None,
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(
        self, record: RunRecord | None, report: IntelReport | None, trace: list[str]
    ) -> Path | None:
        """Write a run's record to a JSON file.

        Args:
            record: Record returned by ``start_run``.
            report: Final report, or None if the run produced none.
            trace: Full execution trace of the run.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        if not self._enabled or record is None:
            return None

        record.completed_at = datetime.now(tz=UTC).isoformat()
        record.report = _serialize(report) if report is not None else None
        record.trace = list(trace)

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00_<id>.json (colons -> dashes, no microseconds/tz)
        ts = record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filepath = self._log_dir / f"run_{ts}_{record.run_id[:8]}.json"

        filepath.write_text(record.model_dump_json(indent=2))
        self._last_log_path = filepath
        return filepath
