from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .checks import check_closure_combine
from .comparison import identical_except_attributes, identical_sorted_cols
from .failures import ClosureFailure
from .results import ResultKind, add_class, untag


REPORT_VERSION = "1.0"

STATUS_AGREE = "agree"
STATUS_DISAGREE = "disagree"
STATUS_FAILURE = "failure"


@dataclass(frozen=True)
class CrossCheckResult:
    name: str
    status: str
    sorted_cols_identical: Optional[bool]
    identical_except_attributes: Optional[bool]
    shape_left: Tuple[int, int]
    shape_right: Tuple[int, int]
    failure: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class CrossCheckReport:
    version: str
    suite_name: str
    created_utc: str
    counts: Dict[str, int]
    results: Dict[str, Dict[str, Any]]

    @property
    def all_agree(self) -> bool:
        return self.counts.get(STATUS_AGREE, 0) == self.counts.get("pairs", -1)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, Path):
        return str(obj)
    raise TypeError(f"Object of type {obj.__class__.__name__} is not JSON serialisable")


def read_results_csv(path: str | Path) -> pd.DataFrame:
    """Reads a wide result table exported by some CLOSURE implementation.

    Writers differ in how they store whole numbers (e.g. `3.0` instead of
    `3`). Float columns holding only whole numbers are converted back to
    integer so that only values, not storage details, are compared.
    """
    df = pd.read_csv(path)
    for col in df.columns:
        s = df[col]
        if not pd.api.types.is_float_dtype(s):
            continue
        vals = s.dropna().to_numpy(dtype=float)
        if vals.size and not np.all(np.mod(vals, 1.0) == 0.0):
            continue
        df[col] = s.astype("int64") if not s.isna().any() else s.astype("Int64")
    return df


def _shape(df: pd.DataFrame) -> Tuple[int, int]:
    return int(df.shape[0]), int(df.shape[1])


def cross_check(
    left: Any,
    right: Any,
    *,
    name: str = "pair",
    check_shape: bool = True,
    message: bool = False,
) -> CrossCheckResult:
    """Do two enumerations of the same CLOSURE inputs agree?

    With `check_shape`, both tables must first pass check_closure_combine.
    Classified failures are recorded in the result instead of propagating,
    so that a suite reports on every pair.
    """
    left_df = untag(left)
    right_df = untag(right)
    shapes = {"shape_left": _shape(left_df), "shape_right": _shape(right_df)}

    side = "both"
    try:
        if check_shape:
            for side, df in (("left", left_df), ("right", right_df)):
                check_closure_combine(add_class(df, ResultKind.COMBINE))
            side = "both"
        agree = identical_sorted_cols(left_df, right_df, message=message)
    except ClosureFailure as exc:
        failure = exc.to_dict()
        failure["side"] = side
        return CrossCheckResult(
            name=name,
            status=STATUS_FAILURE,
            sorted_cols_identical=None,
            identical_except_attributes=None,
            failure=failure,
            **shapes,
        )

    return CrossCheckResult(
        name=name,
        status=STATUS_AGREE if agree else STATUS_DISAGREE,
        sorted_cols_identical=bool(agree),
        identical_except_attributes=identical_except_attributes(left_df, right_df),
        **shapes,
    )


def build_cross_check_report(results: Sequence[CrossCheckResult], *, suite_name: str = "suite") -> CrossCheckReport:
    counts = {STATUS_AGREE: 0, STATUS_DISAGREE: 0, STATUS_FAILURE: 0, "pairs": len(results)}
    for r in results:
        counts[r.status] += 1
    return CrossCheckReport(
        version=REPORT_VERSION,
        suite_name=suite_name,
        created_utc=datetime.now(timezone.utc).isoformat(),
        counts=counts,
        results={r.name: asdict(r) for r in results},
    )


def write_cross_check_report(report: CrossCheckReport, out_path: str | Path) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(report)
    payload["all_agree"] = report.all_agree
    out_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False, default=_json_default),
        encoding="utf-8",
    )
