from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from .failures import ClosureFailure, FailureKind
from .runtime_types import is_missing_marker, is_vector, normalize_type_names, unwrap_scalar, value_length, value_type


def check_scale(scale_min: float, scale_max: float, mean: Optional[float] = None) -> None:
    """Scale bounds must be ordered, and the mean (if given) must lie within them.

    Functions taking the mean into account pass it; functions that only need
    the bounds leave it out.
    """
    if scale_min > scale_max:
        raise ClosureFailure(
            FailureKind.INVALID_SCALE_RANGE,
            "Scale minimum can't be greater than scale maximum.",
            [f"`scale_min` is {scale_min}.", f"`scale_max` is {scale_max}."],
            fields={"scale_min": scale_min, "scale_max": scale_max},
        )
    if mean is None:
        return None
    if mean < scale_min:
        raise ClosureFailure(
            FailureKind.MEAN_BELOW_SCALE_MIN,
            "Mean can't be less than scale minimum.",
            [f"`mean` is {mean}.", f"`scale_min` is {scale_min}."],
            fields={"mean": mean, "scale_min": scale_min},
        )
    if mean > scale_max:
        raise ClosureFailure(
            FailureKind.MEAN_ABOVE_SCALE_MAX,
            "Mean can't be greater than scale maximum.",
            [f"`mean` is {mean}.", f"`scale_max` is {scale_max}."],
            fields={"mean": mean, "scale_max": scale_max},
        )
    return None


def check_value(x: Any, allowed_types: str | Sequence[str], name: str = "x") -> None:
    """Make sure `x` has an allowed type, has length 1, and is not missing.

    A common choice of `allowed_types` is ("floating-point", "integer"), which
    accepts any number but nothing else. `name` is how the argument is shown
    in error messages.
    """
    allowed = normalize_type_names(allowed_types)
    x = unwrap_scalar(x)
    typ = value_type(x)
    if not is_missing_marker(x) and typ not in allowed:
        raise ClosureFailure(
            FailureKind.WRONG_TYPE,
            f"`{name}` must be {' or '.join(allowed)}.",
            [f"It is {typ}."],
            fields={"name": name, "type": typ, "allowed_types": allowed},
        )
    length = value_length(x)
    if length != 1:
        raise ClosureFailure(
            FailureKind.WRONG_LENGTH,
            f"`{name}` must have length 1.",
            [f"It has length {length}."],
            fields={"name": name, "length": length},
        )
    item = np.asarray(x, dtype=object).ravel()[0] if is_vector(x) else x
    if is_missing_marker(item) or pd.isna(item):
        raise ClosureFailure(
            FailureKind.UNEXPECTED_MISSING,
            f"`{name}` can't be missing.",
            fields={"name": name},
        )
    return None
