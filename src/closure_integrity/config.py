from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml


@dataclass(frozen=True)
class CrossCheckPair:
    """Two result files that should hold the same CLOSURE enumeration."""

    name: str
    left: Path
    right: Path
    check_shape: bool = True


@dataclass(frozen=True)
class CrossCheckSuite:
    """A named set of pairs to cross-check, typically loaded from YAML.

    Example file:

        version: v1
        message: true
        pairs:
          mean_3.5_sd_1.7_n_70:
            left: r/results.csv
            right: python/results.csv
          legacy_export:
            left: old.csv
            right: new.csv
            check_shape: false
    """

    version: str = "v1"
    message: bool = False
    pairs: Tuple[CrossCheckPair, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        if not self.pairs:
            raise ValueError("suite must contain at least one pair")
        names = [p.name for p in self.pairs]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate pair names: {dupes}")


def _resolve(base: Path, raw: Any) -> Path:
    p = Path(str(raw))
    return p if p.is_absolute() else (base / p)


def load_cross_check_suite(yaml_path: str | Path) -> CrossCheckSuite:
    p = Path(yaml_path)
    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    base = p.resolve().parent

    pairs = []
    for name, spec in (raw.get("pairs") or {}).items():
        if not isinstance(spec, dict) or "left" not in spec or "right" not in spec:
            raise ValueError(f"pair {name!r} needs both `left` and `right`")
        pairs.append(
            CrossCheckPair(
                name=str(name),
                left=_resolve(base, spec["left"]),
                right=_resolve(base, spec["right"]),
                check_shape=bool(spec.get("check_shape", True)),
            )
        )

    suite = CrossCheckSuite(
        version=str(raw.get("version", "v1")),
        message=bool(raw.get("message", False)),
        pairs=tuple(pairs),
    )
    suite.validate()
    return suite
