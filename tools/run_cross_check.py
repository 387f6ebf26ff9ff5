#!/usr/bin/env python3
"""
Convenience entrypoint.

Usage:
  python tools/run_cross_check.py --left a.csv --right b.csv
  python tools/run_cross_check.py --suite cross_checks.yaml --message

This delegates to closure_integrity.cli.
"""
from __future__ import annotations

from closure_integrity.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
