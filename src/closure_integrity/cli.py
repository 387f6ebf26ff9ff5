from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from .config import CrossCheckPair, CrossCheckSuite, load_cross_check_suite
from .logger import VerificationLogger
from .report import (
    CrossCheckResult,
    build_cross_check_report,
    cross_check,
    read_results_csv,
    write_cross_check_report,
)


def _run_pair(pair: CrossCheckPair, *, message: bool, logger: VerificationLogger) -> CrossCheckResult:
    for p in (pair.left, pair.right):
        if not Path(p).exists():
            raise SystemExit(f"Missing results file: {p}")
    res = cross_check(
        read_results_csv(pair.left),
        read_results_csv(pair.right),
        name=pair.name,
        check_shape=pair.check_shape,
        message=message,
    )
    logger.log_pair(res, left=pair.left, right=pair.right)
    return res


def _suite_from_args(args: argparse.Namespace) -> tuple[str, CrossCheckSuite]:
    if args.suite:
        suite_path = Path(args.suite)
        if not suite_path.exists():
            raise SystemExit(f"Missing suite file: {suite_path}")
        suite = load_cross_check_suite(suite_path)
        name = args.name.strip() or suite_path.stem
        if args.message:
            suite = CrossCheckSuite(version=suite.version, message=True, pairs=suite.pairs)
        return name, suite

    if not (args.left and args.right):
        raise SystemExit("Provide --suite, or both --left and --right")

    left = Path(args.left)
    right = Path(args.right)
    name = args.name.strip() or f"{left.stem}_vs_{right.stem}"
    pair = CrossCheckPair(name=name, left=left, right=right, check_shape=not bool(args.no_check_shape))
    return name, CrossCheckSuite(message=bool(args.message), pairs=(pair,))


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Cross-check CLOSURE results from independent implementations.")
    ap.add_argument("--suite", type=str, default="", help="YAML file listing pairs of result CSVs.")
    ap.add_argument("--left", type=str, default="", help="First results CSV (columns n1..nk).")
    ap.add_argument("--right", type=str, default="", help="Second results CSV (columns n1..nk).")
    ap.add_argument("--name", type=str, default="", help="Name used for outputs.")
    ap.add_argument("--out-dir", type=str, default="_ci_out", help="Output directory.")
    ap.add_argument("--message", action="store_true", help="Report the first differing column on stderr.")
    ap.add_argument("--no-check-shape", action="store_true", help="Skip the column name and type checks.")

    args = ap.parse_args(argv)
    name, suite = _suite_from_args(args)

    out_dir = Path(args.out_dir)
    logger = VerificationLogger(out_dir)
    logger.log("suite_start", {"name": name, "suite": suite.to_dict()})

    results: List[CrossCheckResult] = [_run_pair(p, message=suite.message, logger=logger) for p in suite.pairs]

    report = build_cross_check_report(results, suite_name=name)
    write_cross_check_report(report, out_dir / f"cross_check_report_{name}.json")
    logger.log("suite_end", {"name": name, "counts": report.counts})

    for r in results:
        line = f"{r.name}: {r.status}"
        if r.failure:
            line += f" ({r.failure['kind']}, {r.failure['side']})"
        print(line)

    return 0 if report.all_agree else 1


if __name__ == "__main__":
    raise SystemExit(main())
