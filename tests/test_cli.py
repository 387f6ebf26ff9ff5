import json

import pandas as pd
import pytest

from closure_integrity.cli import main


def _write(path, df):
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path


def _make_results() -> pd.DataFrame:
    return pd.DataFrame({"n1": [1, 2, 2], "n2": [4, 3, 5]})


def test_cli_pair_agrees(tmp_path, capsys):
    left = _write(tmp_path / "left.csv", _make_results())
    right = _write(tmp_path / "right.csv", _make_results().iloc[::-1])
    out = tmp_path / "out"
    code = main(["--left", str(left), "--right", str(right), "--name", "unit", "--out-dir", str(out)])
    assert code == 0
    assert "unit: agree" in capsys.readouterr().out

    payload = json.loads((out / "cross_check_report_unit.json").read_text(encoding="utf-8"))
    assert payload["all_agree"] is True

    events = [json.loads(line)["event"] for line in (out / "verification_log.jsonl").read_text(encoding="utf-8").splitlines()]
    assert events == ["suite_start", "pair_checked", "suite_end"]


def test_cli_suite_reports_disagreement(tmp_path, capsys):
    _write(tmp_path / "a.csv", _make_results())
    changed = _make_results()
    changed.loc[0, "n2"] = 9
    _write(tmp_path / "b.csv", changed)
    suite = tmp_path / "suite.yaml"
    suite.write_text("pairs:\n  ab:\n    left: a.csv\n    right: b.csv\n", encoding="utf-8")

    code = main(["--suite", str(suite), "--out-dir", str(tmp_path / "out"), "--message"])
    assert code == 1
    captured = capsys.readouterr()
    assert "ab: disagree" in captured.out
    assert "Different at 2 (n2)" in captured.err
    assert (tmp_path / "out" / "cross_check_report_suite.json").exists()


def test_cli_needs_inputs(tmp_path):
    with pytest.raises(SystemExit):
        main(["--out-dir", str(tmp_path)])
    with pytest.raises(SystemExit):
        main(["--left", str(tmp_path / "missing.csv"), "--right", str(tmp_path / "missing.csv"), "--out-dir", str(tmp_path)])
