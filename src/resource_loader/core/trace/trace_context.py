"""Trace of a single load: how the URI was resolved, which transport served it,
and how long each step took."""

import json
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, Optional


@dataclass
class StageRecord:
    """One recorded step of a load ("resolve", "dispatch", "fetch")."""

    data: Dict[str, Any]
    elapsed_ms: float = 0.0
    recorded_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recorded_at": self.recorded_at.isoformat(),
            "elapsed_ms": round(self.elapsed_ms, 3),
            "data": self.data,
        }


@dataclass
class TraceContext:
    """Collects the stages of a load and optionally appends them to a JSONL file.

    Attributes:
        trace_id: Unique identifier for this trace
        started_at: Timestamp when trace was created
        stages: Recorded stages keyed by name; a repeated name keeps the latest
        log_file: Optional JSONL file that ``finish()`` appends to
    """

    trace_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = field(default_factory=datetime.now)
    stages: Dict[str, StageRecord] = field(default_factory=dict)
    log_file: str | None = None

    def record_stage(self, stage_name: str, data: Dict[str, Any], elapsed_ms: float = 0.0) -> None:
        self.stages[stage_name] = StageRecord(data=data, elapsed_ms=elapsed_ms)

    def get_stage_data(self, stage_name: str) -> Optional[Dict[str, Any]]:
        """Return the data recorded for ``stage_name``, or None if it never ran."""
        stage = self.stages.get(stage_name)
        return None if stage is None else stage.data

    def get_stage_elapsed_ms(self, stage_name: str) -> Optional[float]:
        stage = self.stages.get(stage_name)
        return None if stage is None else stage.elapsed_ms

    def to_dict(self) -> Dict[str, Any]:
        ended_at = datetime.now()
        return {
            "trace_id": self.trace_id,
            "started_at": self.started_at.isoformat(),
            "ended_at": ended_at.isoformat(),
            "total_latency": (ended_at - self.started_at).total_seconds(),
            "stage_ms_total": round(sum(s.elapsed_ms for s in self.stages.values()), 3),
            "stages": {name: stage.to_dict() for name, stage in self.stages.items()},
        }

    def finish(self) -> Dict[str, Any]:
        payload = self.to_dict()
        if self.log_file:
            path = Path(self.log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return payload


@contextmanager
def stage_timer(trace: Optional[TraceContext], stage_name: str) -> Iterator[Dict[str, Any]]:
    """Time the enclosed block and record it as ``stage_name`` on ``trace``.

    The caller fills the yielded dict with stage data. Nothing is recorded
    when ``trace`` is None or the block raises.
    """

    data: Dict[str, Any] = {}
    started = time.perf_counter()
    yield data
    if trace is not None:
        trace.record_stage(stage_name, data, elapsed_ms=(time.perf_counter() - started) * 1000)
