#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Runner for the review-length experiments.

- Run from project root (after `pip install -e .`).
- Loads a review CSV (text + stars/label, or a prepared table with
  word_count and sentiment_score), partitions it into word-count quantiles and
  evaluates accuracy over the K x K (length bucket, sample size) grid.
- Supports Experiment 1 (uniform), Experiment 2 (micro_balanced) or both;
  --preset exp1|exp2 starts from a named configuration and CLI flags override it.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from review_length.config import EXPERIMENT_PRESETS, ExperimentConfig, MODES
from review_length.core.errors import ExperimentError
from review_length.experiments.results import save_results, summarize
from review_length.experiments.stratified_experiment import StratifiedResamplingExperiment
from review_length.prepare_dataset import load_dataset

ROOT = Path(__file__).parent.resolve()


# -----------------------------
# Utilities
# -----------------------------
def _resolve_csv(data_dir: Optional[Path], csv_path: Optional[Path]) -> Path:
    """Locate the review CSV from --csv or --data-dir (defaults to ROOT/data)."""
    if csv_path is not None:
        p = csv_path if csv_path.is_absolute() else (ROOT / csv_path)
        if not p.exists():
            raise FileNotFoundError(f"CSV not found: {p}")
        return p
    if data_dir is None:
        data_dir = ROOT / "data"
    p = data_dir / "reviews.csv"
    if not p.exists():
        raise FileNotFoundError(
            f"Cannot find {p}. Place reviews.csv under --data-dir "
            f"or pass --csv explicitly."
        )
    return p


def _build_config(mode: str, args: argparse.Namespace) -> ExperimentConfig:
    """Preset (if any) first, then every flag the user actually set."""
    overrides = {
        name: getattr(args, name)
        for name in ("k", "seed", "model", "test_size", "threshold", "n_jobs", "on_cell_error")
        if getattr(args, name) is not None
    }
    overrides["mode"] = mode
    if args.stratify_split:
        overrides["stratify_split"] = True
    if args.preset:
        return ExperimentConfig.from_preset(args.preset, **overrides)
    return ExperimentConfig().with_overrides(**overrides)


def _run_one(config: ExperimentConfig, dataset, args: argparse.Namespace) -> Dict[str, Any]:
    mode = config.mode
    print("============================================================")
    print(f"Stratified resampling: mode={mode}")
    print("============================================================")
    print(f"Data length: {len(dataset)}")
    print(f"Buckets: {config.k}, model: {config.model}, seed: {config.seed}")
    print(f"Split: {'stratified' if config.stratify_split else 'uniform'}, test_size={config.test_size}")

    exp = StratifiedResamplingExperiment(config, verbose=True)
    rows = exp.run(dataset)

    buckets = exp.partitioner.summary()
    print("\nBuckets:")
    print(buckets)
    print("\nPer-bucket summary:")
    print(summarize(rows))

    csv_path = save_results(
        rows,
        args.results_dir,
        config=config.to_dict(),
        buckets=buckets,
        tag=f"{mode}_{config.model}_k{config.k}_s{config.seed}",
    )
    print(f"Saved results: {csv_path}")

    if args.plot:
        from review_length.experiments.visualization import (
            export_summary_table,
            plot_accuracy_curves,
            plot_accuracy_heatmap,
        )

        plot_dir = args.results_dir / mode
        plot_dir.mkdir(parents=True, exist_ok=True)
        plot_accuracy_heatmap(rows, plot_dir, title=f"Accuracy ({mode})")
        plot_accuracy_curves(rows, plot_dir, title=f"Accuracy vs sample size ({mode})")
        export_summary_table(rows, plot_dir)
        print(f"✓ Plots saved to {plot_dir}")

    return {
        "results_csv": str(csv_path),
        "min_count": exp.scheduler.min_count,
        "sample_sizes": exp.scheduler.sample_sizes(),
        "n_failed": sum(r.failed for r in rows),
    }


# -----------------------------
# Main
# -----------------------------
def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Run review-length experiments from project root")
    ap.add_argument("--data-dir", type=Path, default=None, help="Directory containing reviews.csv")
    ap.add_argument("--csv", type=Path, default=None, help="Explicit path to the review CSV")
    ap.add_argument("--results-dir", type=Path, default=Path("results"))
    ap.add_argument(
        "--preset",
        choices=sorted(EXPERIMENT_PRESETS),
        default=None,
        help="Start from a named configuration (exp1 = uniform, exp2 = micro_balanced)",
    )
    ap.add_argument(
        "--mode",
        choices=list(MODES) + ["both"],
        default=None,
        help="Sampling mode; defaults to the preset's mode, or both without a preset",
    )
    ap.add_argument("--k", type=int, default=None, help="Number of length buckets / size steps (default 5)")
    ap.add_argument("--seed", type=int, default=None, help="Global seed (default 42)")
    ap.add_argument("--model", default=None, help="logreg | naive_bayes | lasso | svm (default logreg)")
    ap.add_argument("--test-size", type=float, default=None, help="Held-out fraction per sample (default 0.25)")
    ap.add_argument("--threshold", type=float, default=None, help="P(POS) decision threshold for logreg (default 0.5)")
    ap.add_argument(
        "--stratify-split",
        action="store_true",
        help="Stratify the train/test split by label instead of splitting uniformly at random",
    )
    ap.add_argument("--n-jobs", type=int, default=None, help="Evaluate grid cells on N threads")
    ap.add_argument(
        "--on-cell-error",
        choices=["raise", "nan"],
        default=None,
        help="Abort on a degenerate cell (raise) or record it as NaN and continue",
    )
    ap.add_argument("--save-prepared", type=Path, default=None, help="Write the prepared table here")
    ap.add_argument("--plot", action="store_true")

    args = ap.parse_args(argv)

    try:
        if args.mode is not None:
            modes = list(MODES) if args.mode == "both" else [args.mode]
        elif args.preset:
            modes = [EXPERIMENT_PRESETS[args.preset]["mode"]]
        else:
            modes = list(MODES)
        configs = [_build_config(mode, args) for mode in modes]

        # STEP 1: Load data
        csv_path = _resolve_csv(args.data_dir, args.csv)
        print("============================================================")
        print("STEP 1: Loading and Preparing Data")
        print("============================================================")
        dataset = load_dataset(csv_path, save_prepared=args.save_prepared, verbose=True)
        print(f"[data] {dataset}")

        # STEP 2: Run experiments
        results: Dict[str, Any] = {}
        for config in configs:
            results[config.mode] = _run_one(config, dataset, args)
    except (ExperimentError, FileNotFoundError) as e:
        raise SystemExit(f"Error: {e}")

    # Save summary
    args.results_dir.mkdir(parents=True, exist_ok=True)
    out_path = args.results_dir / "experiment_summary.json"
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(results, f, ensure_ascii=False, indent=2)
    print(f"Saved summary: {out_path}")


if __name__ == "__main__":
    main()
