from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union

import pandas as pd


class ResultKind(str, Enum):
    """Runtime tag naming the operation that produced a table."""

    COMBINE = "ClosureCombineResult"
    PIVOT_LONGER = "ClosurePivotLongerResult"
    SUMMARIZE = "ClosureSummarizeResult"


@dataclass(frozen=True, eq=False)
class ClosureCombineResult:
    """Wide result table: one row per distribution, columns n1..nk."""

    frame: pd.DataFrame
    kind: ClassVar[ResultKind] = ResultKind.COMBINE

    @property
    def payload(self) -> pd.DataFrame:
        return self.frame


@dataclass(frozen=True, eq=False)
class ClosurePivotLongerResult:
    """Long-format view; the nested `results` table has columns (n, value)."""

    results: pd.DataFrame
    kind: ClassVar[ResultKind] = ResultKind.PIVOT_LONGER

    @property
    def payload(self) -> pd.DataFrame:
        return self.results


@dataclass(frozen=True, eq=False)
class ClosureSummarizeResult:
    """Summary view with columns (value, f_absolute, f_relative)."""

    frame: pd.DataFrame
    kind: ClassVar[ResultKind] = ResultKind.SUMMARIZE

    @property
    def payload(self) -> pd.DataFrame:
        return self.frame


TaggedResult = Union[ClosureCombineResult, ClosurePivotLongerResult, ClosureSummarizeResult]

_WRAPPERS = {
    ResultKind.COMBINE: ClosureCombineResult,
    ResultKind.PIVOT_LONGER: ClosurePivotLongerResult,
    ResultKind.SUMMARIZE: ClosureSummarizeResult,
}


def _as_kind(kind: ResultKind | str) -> ResultKind:
    try:
        return ResultKind(kind)
    except ValueError:
        raise ValueError(f"Unknown result tag: {kind!r}") from None


def untag(data: Any) -> Any:
    """Inner table of a tagged value; anything else is returned as is."""
    if isinstance(data, tuple(_WRAPPERS.values())):
        return data.payload
    return data


def add_class(payload: Any, kind: ResultKind | str) -> TaggedResult:
    """Mark `payload` as output of the producer named by `kind`.

    Producers call this right before returning. The table itself is not
    copied or checked here; check_* functions do that on the tagged value.
    """
    k = _as_kind(kind)
    inner = untag(payload)
    if not isinstance(inner, pd.DataFrame):
        raise ValueError(f"Can only tag a pandas DataFrame, got {type(inner).__name__}")
    return _WRAPPERS[k](inner)


def has_class(data: Any, kind: ResultKind | str) -> bool:
    k = _as_kind(kind)
    return isinstance(data, _WRAPPERS[k])
