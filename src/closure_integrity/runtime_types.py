from __future__ import annotations

from typing import Any, List, Sequence

import numpy as np
import pandas as pd


INTEGER = "integer"
FLOATING_POINT = "floating-point"
BOOLEAN = "boolean"
TEXT = "text"
COMPLEX = "complex"
OTHER = "other"

TYPE_NAMES = (INTEGER, FLOATING_POINT, BOOLEAN, TEXT, COMPLEX, OTHER)

# pandas.api.types.infer_dtype labels
_INFERRED = {
    "integer": INTEGER,
    "floating": FLOATING_POINT,
    "mixed-integer-float": FLOATING_POINT,
    "decimal": FLOATING_POINT,
    "boolean": BOOLEAN,
    "string": TEXT,
    "bytes": TEXT,
    "complex": COMPLEX,
}


def column_type(col: pd.Series) -> str:
    """Element type of a column, by dtype.

    Only signed fixed-width integers count as integer; unsigned dtypes do not.
    """
    dtype = col.dtype
    if pd.api.types.is_bool_dtype(dtype):
        return BOOLEAN
    if pd.api.types.is_signed_integer_dtype(dtype):
        return INTEGER
    if pd.api.types.is_float_dtype(dtype):
        return FLOATING_POINT
    if pd.api.types.is_complex_dtype(dtype):
        return COMPLEX
    if pd.api.types.is_string_dtype(dtype) and pd.api.types.infer_dtype(col, skipna=True) in ("string", "empty"):
        return TEXT
    return OTHER


def column_types(df: pd.DataFrame) -> List[str]:
    return [column_type(df.iloc[:, j]) for j in range(df.shape[1])]


def is_missing_marker(x: Any) -> bool:
    """Untyped missing markers, which adopt whatever type is expected."""
    return x is None or x is pd.NA


def is_vector(x: Any) -> bool:
    if isinstance(x, np.ndarray):
        return x.ndim > 0
    return isinstance(x, (list, tuple, pd.Series, pd.Index))


def unwrap_scalar(x: Any) -> Any:
    """A 0-d array holds one value; return it as a numpy scalar."""
    if isinstance(x, np.ndarray) and x.ndim == 0:
        return x[()]
    return x


def value_type(x: Any) -> str:
    """Runtime type name of a scalar or of the elements of a vector."""
    x = unwrap_scalar(x)
    if is_vector(x):
        if isinstance(x, np.ndarray):
            x = x.ravel()
        # typed vectors keep their type even when empty
        if isinstance(x, (np.ndarray, pd.Series, pd.Index)) and x.dtype != object:
            return column_type(pd.Series(x))
        if len(x) == 0:
            return OTHER
        return _INFERRED.get(pd.api.types.infer_dtype(list(x), skipna=True), OTHER)
    if isinstance(x, (bool, np.bool_)):
        return BOOLEAN
    if isinstance(x, (int, np.integer)):
        return INTEGER
    if isinstance(x, (float, np.floating)):
        return FLOATING_POINT
    if isinstance(x, (complex, np.complexfloating)):
        return COMPLEX
    if isinstance(x, (str, bytes)):
        return TEXT
    return OTHER


def value_length(x: Any) -> int:
    if is_vector(x):
        return int(np.size(x)) if isinstance(x, np.ndarray) else len(x)
    return 1


def normalize_type_names(allowed: str | Sequence[str]) -> List[str]:
    names = [allowed] if isinstance(allowed, str) else [str(a) for a in allowed]
    if not names:
        raise ValueError("allowed_types must be non-empty")
    unknown = [n for n in names if n not in TYPE_NAMES]
    if unknown:
        raise ValueError(f"Unknown type names: {unknown}")
    return names
