# visualization.py
from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import seaborn as sns

from .results import accuracy_grid, results_to_frame, summarize
from .stratified_experiment import ResultRow


def plot_accuracy_heatmap(rows: List[ResultRow], save_dir: Path, title: str = "Accuracy by length bucket and sample size") -> Path:
    grid = accuracy_grid(rows)
    plt.figure(figsize=(7, 5))
    sns.heatmap(
        grid.astype(float),
        annot=True,
        fmt=".3f",
        cmap="Blues",
        vmin=0.0,
        vmax=1.0,
        cbar=True,
        square=True,
    )
    plt.xlabel("Sample-size step")
    plt.ylabel("Length bucket (word-count quantile)")
    plt.title(title)
    plt.tight_layout()
    out = Path(save_dir) / "accuracy_heatmap.png"
    plt.savefig(out, dpi=200, bbox_inches="tight")
    plt.close()
    return out


def plot_accuracy_curves(rows: List[ResultRow], save_dir: Path, title: str = "Accuracy vs sample size") -> Path:
    """One accuracy curve per length bucket, with label balance on a second axis."""
    df = results_to_frame(rows)
    fig, (ax_acc, ax_bal) = plt.subplots(1, 2, figsize=(12, 5))

    for bucket, g in df.groupby("bucket_index"):
        g = g.sort_values("size_step")
        ax_acc.plot(g["sample_size"], g["accuracy"].astype(float), marker="o", linewidth=2, label=f"bucket {bucket}")
        ax_bal.plot(g["sample_size"], g["label_balance"].astype(float), marker="s", linewidth=1, label=f"bucket {bucket}")

    ax_acc.set_xlabel("Sample size")
    ax_acc.set_ylabel("Test accuracy")
    ax_acc.set_title(title)
    ax_acc.grid(True, alpha=0.3)
    ax_acc.legend()

    ax_bal.axhline(0.5, color="grey", linestyle="--", linewidth=1)
    ax_bal.set_xlabel("Sample size")
    ax_bal.set_ylabel("Share of POS reviews")
    ax_bal.set_ylim(0.0, 1.0)
    ax_bal.set_title("Label balance")
    ax_bal.grid(True, alpha=0.3)

    plt.tight_layout()
    out = Path(save_dir) / "accuracy_curves.png"
    plt.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return out


def export_summary_table(rows: List[ResultRow], save_dir: Path) -> Path:
    df = summarize(rows)
    save_dir = Path(save_dir)
    df.to_csv(save_dir / "bucket_summary.csv", index=False)
    (save_dir / "bucket_summary.md").write_text(
        df.to_markdown(index=False, floatfmt=".4f"), encoding="utf-8"
    )
    return save_dir / "bucket_summary.csv"
