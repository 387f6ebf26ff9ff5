from __future__ import annotations

import sys
from typing import Any, List, Mapping

import numpy as np
import pandas as pd

from .failures import ClosureFailure, FailureKind, quote_names
from .results import untag


# Results read back from disk, or produced by another correct CLOSURE
# implementation, can differ in incidental metadata (tags, column labels,
# index, attrs) while holding the same values. Only the values matter.


def _strip_attributes(x: Any) -> Any:
    x = untag(x)
    if isinstance(x, pd.DataFrame):
        return [_plain_series(x.iloc[:, j]) for j in range(x.shape[1])]
    if isinstance(x, (pd.Series, pd.Index)):
        return _plain_series(pd.Series(x))
    if isinstance(x, np.ndarray):
        return x
    if isinstance(x, Mapping):
        return [_strip_attributes(v) for v in x.values()]
    if isinstance(x, (list, tuple)):
        return [_strip_attributes(v) for v in x]
    return x


def _plain_series(s: pd.Series) -> pd.Series:
    return pd.Series(s.array, dtype=s.dtype).reset_index(drop=True)


def _identical(a: Any, b: Any) -> bool:
    if isinstance(a, pd.Series) or isinstance(b, pd.Series):
        return isinstance(a, pd.Series) and isinstance(b, pd.Series) and a.equals(b)
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        if not (isinstance(a, np.ndarray) and isinstance(b, np.ndarray)):
            return False
        if a.dtype != b.dtype or a.shape != b.shape:
            return False
        return pd.Series(a.ravel()).equals(pd.Series(b.ravel()))
    if isinstance(a, list) or isinstance(b, list):
        if not (isinstance(a, list) and isinstance(b, list)) or len(a) != len(b):
            return False
        return all(_identical(u, v) for u, v in zip(a, b))
    if type(a) is not type(b):
        return False
    if pd.api.types.is_scalar(a) and pd.isna(a) and pd.isna(b):
        return True
    return bool(a == b)


def identical_except_attributes(x: Any, y: Any) -> bool:
    """Are `x` and `y` identical once their attributes are removed?

    Tags, column names, index labels, attrs and mapping keys are dropped;
    dtypes and values must then match exactly, position by position. Missing
    values in the same position count as equal.
    """
    return _identical(_strip_attributes(x), _strip_attributes(y))


def _sorted_values(col: pd.Series) -> pd.Series:
    return col.dropna().sort_values(kind="mergesort").reset_index(drop=True)


def identical_sorted_cols(x: Any, y: Any, message: bool = False) -> bool:
    """Does each pair of columns hold the same values once sorted?

    CLOSURE results are hard to predict, and different correct
    implementations can list the same distributions in different row order.
    Sorting every column independently and comparing makes the check
    insensitive to that order. Note that this compares per-column multisets,
    not row tuples.

    Both tables must have the same number and names of columns; otherwise a
    ClosureFailure is raised. With `message=True`, the first unequal column
    pair is reported on stderr (1-based position, then name).
    """
    x = untag(x)
    y = untag(y)
    if x.shape[1] != y.shape[1]:
        raise ClosureFailure(
            FailureKind.DIFFERENT_COLUMN_COUNT,
            "Different numbers of columns.",
            [f"`x` has {x.shape[1]} columns.", f"`y` has {y.shape[1]} columns."],
            fields={"ncol_x": int(x.shape[1]), "ncol_y": int(y.shape[1])},
        )
    names_x: List[Any] = list(x.columns)
    names_y: List[Any] = list(y.columns)
    if names_x != names_y:
        raise ClosureFailure(
            FailureKind.DIFFERENT_COLUMN_NAMES,
            "Different column names.",
            [f"`x` has columns {quote_names(names_x)}.", f"`y` has columns {quote_names(names_y)}."],
            fields={"names_x": names_x, "names_y": names_y},
        )
    for j in range(x.shape[1]):
        if not _sorted_values(x.iloc[:, j]).equals(_sorted_values(y.iloc[:, j])):
            if message:
                print(f"Different at {j + 1} ({names_x[j]})", file=sys.stderr)
            return False
    return True
