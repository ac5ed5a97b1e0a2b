#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Standalone script to plot results from a stratified results CSV file
"""

import argparse
from pathlib import Path

from review_length.experiments.results import load_results
from review_length.experiments.visualization import (
    export_summary_table,
    plot_accuracy_curves,
    plot_accuracy_heatmap,
)


def main():
    """Plot results from a stratified_results_*.csv file"""
    ap = argparse.ArgumentParser(description="Redraw plots for a saved results grid")
    ap.add_argument("--results", type=Path, default=None, help="stratified_results_*.csv (default: most recent)")
    ap.add_argument("--results-dir", type=Path, default=Path("results"))
    args = ap.parse_args()

    results_file = args.results
    if results_file is None:
        candidates = sorted(args.results_dir.glob("stratified_results_*.csv"), key=lambda p: p.stat().st_mtime)
        if not candidates:
            print(f"Error: no stratified_results_*.csv found in {args.results_dir}")
            return
        results_file = candidates[-1]

    if not results_file.exists():
        print(f"Error: Results file not found: {results_file}")
        print("Available result files:")
        for file in args.results_dir.glob("stratified_results_*.csv"):
            print(f"  - {file}")
        return

    print(f"Loading results from: {results_file}")
    rows = load_results(results_file)
    print(f"Found {len(rows)} cells")

    out_dir = results_file.parent / results_file.stem
    out_dir.mkdir(parents=True, exist_ok=True)

    print("\nGenerating visualizations...")
    plot_accuracy_heatmap(rows, out_dir)
    print(f"✓ Accuracy heatmap saved to {out_dir / 'accuracy_heatmap.png'}")
    plot_accuracy_curves(rows, out_dir)
    print(f"✓ Accuracy curves saved to {out_dir / 'accuracy_curves.png'}")
    export_summary_table(rows, out_dir)
    print(f"✓ Summary table saved to {out_dir / 'bucket_summary.csv'} and bucket_summary.md")

    print("\nVisualization complete!")


if __name__ == "__main__":
    main()
