from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, NoReturn, Optional, Sequence, Tuple


LEAVE_UNCHANGED_TIP = "Tip: leave the data unchanged to avoid this error."


class FailureKind(str, Enum):
    """Classified causes of a rejected table or input."""

    NOT_CLOSURE_DATA = "NotClosureData"
    NON_INTEGER_COLUMNS = "NonIntegerColumns"
    COLUMNS_REMOVED = "ColumnsRemoved"
    UNEXPECTED_COLUMN_NAMES = "UnexpectedColumnNames"
    MISSING_COLUMNS = "MissingColumns"
    COLUMNS_MISORDERED = "ColumnsMisordered"
    DATA_ALTERED = "DataAltered"
    INVALID_SCALE_RANGE = "InvalidScaleRange"
    MEAN_BELOW_SCALE_MIN = "MeanBelowScaleMin"
    MEAN_ABOVE_SCALE_MAX = "MeanAboveScaleMax"
    WRONG_TYPE = "WrongType"
    WRONG_LENGTH = "WrongLength"
    UNEXPECTED_MISSING = "UnexpectedMissing"
    DIFFERENT_COLUMN_COUNT = "DifferentColumnCount"
    DIFFERENT_COLUMN_NAMES = "DifferentColumnNames"


class ClosureFailure(Exception):
    """Structured failure raised by every check in this package.

    The core fields are meant to be asserted on directly:
    - kind: one FailureKind
    - summary: short headline
    - details: one or more detail lines
    - hint: remediation tip, if any
    - fields: named detail values (offending columns, compared values, lengths)

    Human-readable text is only produced by render().
    """

    def __init__(
        self,
        kind: FailureKind,
        summary: str,
        details: Sequence[str] = (),
        *,
        hint: Optional[str] = None,
        fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.kind = FailureKind(kind)
        self.summary = summary
        self.details: Tuple[str, ...] = tuple(details)
        self.hint = hint
        self.fields: Mapping[str, Any] = MappingProxyType(dict(fields or {}))
        super().__init__(self.render())

    def render(self) -> str:
        lines = [self.summary]
        lines.extend(f"x {d}" for d in self.details)
        if self.hint:
            lines.append(f"i {self.hint}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "summary": self.summary,
            "details": list(self.details),
            "hint": self.hint,
            "fields": dict(self.fields),
        }

    def __repr__(self) -> str:
        return f"ClosureFailure(kind={self.kind.value!r}, summary={self.summary!r})"


def quote_names(names: Sequence[Any]) -> str:
    return ", ".join(f'"{n}"' for n in names)


def abort_not_closure_data(allow_pivot: bool = False) -> NoReturn:
    """Raise NotClosureData.

    With allow_pivot, the message names the long-format view as a second
    acceptable origin; this depends on what the caller accepts.
    """
    error = "These data are not output of `closure_combine()`"
    if allow_pivot:
        error += " or `closure_pivot_longer()`"
    raise ClosureFailure(
        FailureKind.NOT_CLOSURE_DATA,
        "Can only use CLOSURE data.",
        [error + "."],
        fields={"allow_pivot": bool(allow_pivot)},
    )


def abort_closure_data_altered(kind: str, fn_name: str) -> NoReturn:
    """Raise DataAltered for output of `fn_name` that was manipulated later."""
    raise ClosureFailure(
        FailureKind.DATA_ALTERED,
        f"Can only use {kind} here if left unaltered.",
        [f"These data seem to be output of `{fn_name}()` that was later manipulated."],
        hint="Leave the data unchanged to avoid this error.",
        fields={"kind": kind, "fn_name": fn_name},
    )
