import json

import pandas as pd
import pytest

import run_experiment


def _write_prepared_csv(path, n=4000):
    pd.DataFrame(
        {
            "id": range(n),
            "text": [""] * n,
            "label": [1 if i % 2 == 0 else 0 for i in range(n)],
            "word_count": [i + 1 for i in range(n)],
            "sentiment_score": [1.0 if i % 2 == 0 else -1.0 for i in range(n)],
        }
    ).to_csv(path, index=False)


def test_runs_both_modes(tmp_path, capsys):
    csv = tmp_path / "reviews.csv"
    _write_prepared_csv(csv)
    results_dir = tmp_path / "results"

    run_experiment.main(["--csv", str(csv), "--results-dir", str(results_dir), "--k", "4"])

    summary = json.loads((results_dir / "experiment_summary.json").read_text())
    assert set(summary) == {"uniform", "micro_balanced"}
    for mode, res in summary.items():
        df = pd.read_csv(res["results_csv"])
        assert len(df) == 16
        assert (df["accuracy"] == 1.0).all()
        assert res["n_failed"] == 0
    out = capsys.readouterr().out
    assert "STEP 1: Loading and Preparing Data" in out
    assert "Split: uniform" in out


def test_single_mode_with_plots(tmp_path):
    csv = tmp_path / "reviews.csv"
    _write_prepared_csv(csv)
    results_dir = tmp_path / "results"

    run_experiment.main(
        ["--csv", str(csv), "--results-dir", str(results_dir), "--mode", "micro_balanced", "--plot"]
    )

    assert (results_dir / "micro_balanced" / "accuracy_heatmap.png").exists()
    assert (results_dir / "micro_balanced" / "bucket_summary.md").exists()


def test_preset_with_flag_overrides(tmp_path):
    csv = tmp_path / "reviews.csv"
    _write_prepared_csv(csv)
    results_dir = tmp_path / "results"

    run_experiment.main(
        [
            "--csv", str(csv),
            "--results-dir", str(results_dir),
            "--preset", "exp2",
            "--k", "3",
            "--threshold", "0.6",
            "--stratify-split",
        ]
    )

    summary = json.loads((results_dir / "experiment_summary.json").read_text())
    assert set(summary) == {"micro_balanced"}
    meta = json.loads((results_dir / "stratified_summary_micro_balanced_logreg_k3_s42.json").read_text())
    assert meta["config"]["mode"] == "micro_balanced"
    assert meta["config"]["k"] == 3
    assert meta["config"]["threshold"] == 0.6
    assert meta["config"]["stratify_split"] is True
    assert meta["n_cells"] == 9


def test_mode_flag_overrides_preset_mode(tmp_path):
    csv = tmp_path / "reviews.csv"
    _write_prepared_csv(csv)
    results_dir = tmp_path / "results"

    run_experiment.main(
        ["--csv", str(csv), "--results-dir", str(results_dir), "--preset", "exp1", "--mode", "micro_balanced"]
    )

    summary = json.loads((results_dir / "experiment_summary.json").read_text())
    assert set(summary) == {"micro_balanced"}


def test_missing_csv_exits(tmp_path):
    with pytest.raises(SystemExit, match="CSV not found"):
        run_experiment.main(["--csv", str(tmp_path / "missing.csv")])


def test_bad_k_exits(tmp_path):
    csv = tmp_path / "reviews.csv"
    _write_prepared_csv(csv, n=20)
    with pytest.raises(SystemExit, match="k must be"):
        run_experiment.main(["--csv", str(csv), "--k", "1", "--results-dir", str(tmp_path)])


def test_bad_threshold_exits(tmp_path):
    csv = tmp_path / "reviews.csv"
    _write_prepared_csv(csv, n=20)
    with pytest.raises(SystemExit, match="threshold must be"):
        run_experiment.main(["--csv", str(csv), "--threshold", "1.5", "--results-dir", str(tmp_path)])
