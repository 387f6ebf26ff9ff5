from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .report import CrossCheckResult


LOG_NAME = "verification_log.jsonl"


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


class VerificationLogger:
    """JSONL event log of a cross-check run, one record per line.

    Records are `{ts_utc, event, payload}`. Pair records keep the failure kind
    and side so that a run can be filtered without re-reading the report.
    """

    def __init__(self, outdir: str | Path) -> None:
        self.outdir = Path(outdir)
        self.outdir.mkdir(parents=True, exist_ok=True)
        self.path = self.outdir / LOG_NAME

    def log(self, event: str, payload: Dict[str, Any]) -> None:
        rec = {"ts_utc": _utc_stamp(), "event": event, "payload": payload}
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False, default=str) + "\n")

    def log_pair(self, result: CrossCheckResult, *, left: Optional[Path] = None, right: Optional[Path] = None) -> None:
        failure = result.failure or {}
        self.log(
            "pair_checked",
            {
                "name": result.name,
                "status": result.status,
                "left": str(left) if left is not None else None,
                "right": str(right) if right is not None else None,
                "shape_left": list(result.shape_left),
                "shape_right": list(result.shape_right),
                "failure_kind": failure.get("kind"),
                "failure_side": failure.get("side"),
            },
        )

    def read(self, event: Optional[str] = None) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        recs = [json.loads(line) for line in self.path.read_text(encoding="utf-8").splitlines() if line.strip()]
        return [r for r in recs if event is None or r["event"] == event]
