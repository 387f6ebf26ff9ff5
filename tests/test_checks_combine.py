import numpy as np
import pandas as pd
import pytest

from closure_integrity.checks import check_closure_combine, expected_combine_colnames
from closure_integrity.failures import ClosureFailure, FailureKind
from closure_integrity.results import ResultKind, add_class


def _make_combine(k: int = 5, rows: int = 4, seed: int = 7) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    data = rng.integers(1, 6, size=(rows, k)).astype(np.int32)
    return pd.DataFrame(data, columns=expected_combine_colnames(k))


def _kind_of(df: pd.DataFrame) -> FailureKind:
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    return exc.value.kind


@pytest.mark.parametrize("k", [1, 3, 7])
def test_valid_combine_passes(k):
    assert check_closure_combine(add_class(_make_combine(k), "ClosureCombineResult")) is None


def test_untagged_table_is_not_closure_data():
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(_make_combine())
    assert exc.value.kind is FailureKind.NOT_CLOSURE_DATA
    assert "closure_pivot_longer" not in str(exc.value)


def test_not_closure_data_can_mention_pivot():
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(_make_combine(), allow_pivot=True)
    assert "`closure_pivot_longer()`" in str(exc.value)


def test_other_tags_are_not_combine_output():
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(_make_combine(), ResultKind.SUMMARIZE))
    assert exc.value.kind is FailureKind.NOT_CLOSURE_DATA


def test_non_integer_columns_are_listed():
    df = _make_combine(4)
    df["n2"] = df["n2"].astype(float)
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.kind is FailureKind.NON_INTEGER_COLUMNS
    assert exc.value.fields["offenders"] == ["n2"]
    assert "This column is not integer:" in exc.value.details

    df["n4"] = df["n4"].astype(str)
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.fields["offenders"] == ["n2", "n4"]
    assert "These columns are not integer:" in exc.value.details


def test_unsigned_and_boolean_columns_are_not_integer():
    df = _make_combine(2)
    df["n1"] = df["n1"].astype(np.uint8)
    df["n2"] = df["n2"] > 2
    assert _kind_of(df) is FailureKind.NON_INTEGER_COLUMNS


def test_nullable_integer_columns_are_integer():
    df = _make_combine(3).astype("Int64")
    check_closure_combine(add_class(df, ResultKind.COMBINE))


def test_removing_a_leading_column_is_diagnosed_as_removal():
    df = _make_combine(5).drop(columns=["n1"])
    assert _kind_of(df) is FailureKind.COLUMNS_REMOVED


def test_removing_the_last_column_leaves_a_valid_table():
    # n1..n4 is a complete result table of its own.
    df = _make_combine(5).drop(columns=["n5"])
    check_closure_combine(add_class(df, ResultKind.COMBINE))


def test_removing_a_middle_column_prefers_removal_diagnosis():
    df = _make_combine(3).drop(columns=["n2"])
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.kind is FailureKind.COLUMNS_REMOVED
    assert exc.value.fields["offenders"] == ["n3"]
    assert exc.value.details == ("Were any columns removed?",)


def test_swapped_columns_are_misordered():
    df = _make_combine(4)[["n1", "n3", "n2", "n4"]]
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.kind is FailureKind.COLUMNS_MISORDERED
    assert 'They should run from "n1" to "n4".' in exc.value.details


def test_renamed_column_is_unexpected():
    df = _make_combine(4).rename(columns={"n1": "x1"})
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.kind is FailureKind.UNEXPECTED_COLUMN_NAMES
    assert exc.value.fields["offenders"] == ["x1"]
    assert "This column name is unexpected:" in exc.value.details


def test_several_unexpected_names_use_plural():
    df = _make_combine(3).rename(columns={"n1": "a", "n3": "b"})
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.kind is FailureKind.UNEXPECTED_COLUMN_NAMES
    assert "These column names are unexpected:" in exc.value.details
    assert exc.value.details[-1] == '"a", "b"'


def test_duplicated_name_is_missing_column():
    df = _make_combine(3)
    df.columns = ["n1", "n1", "n3"]
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.kind is FailureKind.MISSING_COLUMNS
    assert exc.value.fields["missing"] == ["n2"]
    assert "Missing column:" in exc.value.details


def test_column_name_failures_carry_the_tip():
    df = _make_combine(4)[["n2", "n1", "n3", "n4"]]
    with pytest.raises(ClosureFailure) as exc:
        check_closure_combine(add_class(df, ResultKind.COMBINE))
    assert exc.value.hint == "Tip: leave the data unchanged to avoid this error."
    assert str(exc.value).splitlines()[0] == "Column names of CLOSURE data must be valid."


def test_check_does_not_modify_data():
    df = _make_combine(4)
    before = df.copy()
    check_closure_combine(add_class(df, ResultKind.COMBINE))
    pd.testing.assert_frame_equal(df, before)
