from __future__ import annotations

import math
import re
from typing import Any, List, Sequence

import numpy as np
import pandas as pd

from .failures import (
    LEAVE_UNCHANGED_TIP,
    ClosureFailure,
    FailureKind,
    abort_closure_data_altered,
    abort_not_closure_data,
    quote_names,
)
from .results import ClosureCombineResult, ClosurePivotLongerResult, ClosureSummarizeResult
from .runtime_types import FLOATING_POINT, INTEGER, column_types


COMBINE_COLNAME = re.compile(r"^n\d+$")
PIVOT_COLUMNS = ("n", "value")
SUMMARIZE_COLUMNS = ("value", "f_absolute", "f_relative")


def expected_combine_colnames(ncol: int) -> List[str]:
    return [f"n{i}" for i in range(1, int(ncol) + 1)]


def _column_name_failure(kind: FailureKind, details: Sequence[str], **fields: Any) -> ClosureFailure:
    return ClosureFailure(
        kind,
        "Column names of CLOSURE data must be valid.",
        details,
        hint=LEAVE_UNCHANGED_TIP,
        fields=fields,
    )


def check_closure_combine(data: Any, *, allow_pivot: bool = False) -> None:
    """Error if `data` is not an unaltered wide CLOSURE result table.

    Passes silently when `data` is tagged as combine output, all columns are
    integer and the column names are exactly n1..nk in this order. Otherwise
    the most specific explanation is raised, in this order: removed columns,
    unexpected names, missing columns, wrong order. This is a best-effort
    diagnosis since several causes can produce the same names.
    """
    if not isinstance(data, ClosureCombineResult):
        abort_not_closure_data(allow_pivot=allow_pivot)

    df = data.frame
    colnames_all = [str(c) for c in df.columns]
    coltypes = column_types(df)

    if any(t != INTEGER for t in coltypes):
        offenders = [c for c, t in zip(colnames_all, coltypes) if t != INTEGER]
        this_these = "This column is" if len(offenders) == 1 else "These columns are"
        raise ClosureFailure(
            FailureKind.NON_INTEGER_COLUMNS,
            "All columns of CLOSURE data must be integer.",
            [f"{this_these} not integer:", quote_names(offenders)],
            fields={"offenders": offenders},
        )

    colnames_expected = expected_combine_colnames(df.shape[1])
    if colnames_all == colnames_expected:
        return None

    # From here on, only decide which column name error to raise.
    offenders = [c for c in colnames_all if c not in colnames_expected]

    # If correct columns were removed, `colnames_expected` is too short, so the
    # last surviving n<digits> names fall outside of it.
    if any(COMBINE_COLNAME.match(c) for c in offenders):
        raise _column_name_failure(
            FailureKind.COLUMNS_REMOVED,
            ["Were any columns removed?"],
            offenders=offenders,
        )

    if offenders:
        this_these = "This column name is" if len(offenders) == 1 else "These column names are"
        raise _column_name_failure(
            FailureKind.UNEXPECTED_COLUMN_NAMES,
            [f"{this_these} unexpected:", quote_names(offenders)],
            offenders=offenders,
        )

    missing_cols = [c for c in colnames_expected if c not in colnames_all]
    if missing_cols:
        col_cols = "column" if len(missing_cols) == 1 else "columns"
        raise _column_name_failure(
            FailureKind.MISSING_COLUMNS,
            [f"Missing {col_cols}:", quote_names(missing_cols)],
            missing=missing_cols,
        )

    # Complete and all expected, yet not pairwise identical: only the order
    # can be wrong.
    last_n = colnames_expected[-1]
    raise _column_name_failure(
        FailureKind.COLUMNS_MISORDERED,
        ["Columns are not properly ordered.", f'They should run from "n1" to "{last_n}".'],
        expected=colnames_expected,
        actual=colnames_all,
    )


def check_closure_pivot_longer_unaltered(data: Any) -> None:
    """Error unless the nested `results` table is still (n: integer, value: integer)."""
    data_are_correct = (
        isinstance(data, ClosurePivotLongerResult)
        and isinstance(data.results, pd.DataFrame)
        and list(data.results.columns) == list(PIVOT_COLUMNS)
        and column_types(data.results) == [INTEGER, INTEGER]
    )
    if not data_are_correct:
        abort_closure_data_altered(
            kind="long-format CLOSURE data",
            fn_name="closure_pivot_longer",
        )


def is_seq_linear_basic(x: Sequence[Any]) -> bool:
    """Does `x` have a constant step between all neighbouring elements?"""
    if len(x) < 3:
        return True
    vals = list(x)
    diff_first = vals[1] - vals[0]
    for i in range(2, len(vals)):
        if vals[i] - vals[i - 1] != diff_first:
            return False
    return True


def _inclusive_range(first: int, last: int) -> np.ndarray:
    step = 1 if last >= first else -1
    return np.arange(first, last + step, step, dtype=np.int64)


def _summary_is_correct(df: Any) -> bool:
    if not isinstance(df, pd.DataFrame):
        return False
    if list(df.columns) != list(SUMMARIZE_COLUMNS):
        return False
    if column_types(df) != [INTEGER, INTEGER, FLOATING_POINT]:
        return False
    if df["value"].isna().any() or df["f_absolute"].isna().any() or df["f_relative"].isna().any():
        return False
    if len(df) == 0:
        return False
    value = df["value"].to_numpy(dtype=np.int64)
    expected = _inclusive_range(int(value[0]), int(value[-1]))
    if not np.array_equal(value, expected):
        return False
    if not is_seq_linear_basic(value.tolist()):
        return False
    # correctly rounded sum; a plain float64 reduction can miss 1 by an ulp
    return math.fsum(df["f_relative"].to_numpy(dtype=float)) == 1.0


def check_closure_summarize_unaltered(data: Any) -> None:
    """Error unless the summary table still meets all of its invariants.

    Checked: column names and types, no missing values, `value` running over
    the inclusive integer range between its endpoints with a constant step,
    and `f_relative` summing to exactly 1.
    """
    if not (isinstance(data, ClosureSummarizeResult) and _summary_is_correct(data.frame)):
        abort_closure_data_altered(
            kind="summaries of CLOSURE data",
            fn_name="closure_summarize",
        )
