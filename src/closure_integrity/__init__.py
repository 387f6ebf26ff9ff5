"""closure_integrity

Result-integrity and invariant-verification layer for CLOSURE enumerations.

The package exposes:
- tagged result types for the combine, pivot-longer and summarize outputs
- shape validators with classified diagnostics (check_closure_combine, ...)
- scalar preconditions on enumeration inputs (check_scale, check_value)
- comparators certifying that two enumerations agree
- a cross-check report and CLI for results produced by other implementations
"""

from .checks import (
    check_closure_combine,
    check_closure_pivot_longer_unaltered,
    check_closure_summarize_unaltered,
    is_seq_linear_basic,
)
from .comparison import identical_except_attributes, identical_sorted_cols
from .config import CrossCheckPair, CrossCheckSuite, load_cross_check_suite
from .failures import ClosureFailure, FailureKind, abort_closure_data_altered, abort_not_closure_data
from .preconditions import check_scale, check_value
from .report import build_cross_check_report, cross_check, read_results_csv, write_cross_check_report
from .results import (
    ClosureCombineResult,
    ClosurePivotLongerResult,
    ClosureSummarizeResult,
    ResultKind,
    add_class,
    has_class,
    untag,
)

__version__ = "0.1.0"

__all__ = [
    "ResultKind",
    "ClosureCombineResult",
    "ClosurePivotLongerResult",
    "ClosureSummarizeResult",
    "add_class",
    "has_class",
    "untag",
    "FailureKind",
    "ClosureFailure",
    "abort_not_closure_data",
    "abort_closure_data_altered",
    "check_closure_combine",
    "check_closure_pivot_longer_unaltered",
    "check_closure_summarize_unaltered",
    "is_seq_linear_basic",
    "check_scale",
    "check_value",
    "identical_except_attributes",
    "identical_sorted_cols",
    "CrossCheckPair",
    "CrossCheckSuite",
    "load_cross_check_suite",
    "cross_check",
    "read_results_csv",
    "build_cross_check_report",
    "write_cross_check_report",
]
