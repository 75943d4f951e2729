"""Plotting utilities for the timing sweep.

Generates figures from ``timings.csv`` (see ``overall/experiments.py``):
1. Runtime vs matrix size, one line per algorithm
2. Max relative error vs matrix size for the approximate algorithms
"""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

plt.rcParams.update({
    "font.size": 11,
    "axes.titlesize": 13,
    "axes.labelsize": 12,
    "legend.fontsize": 9,
    "lines.linewidth": 2,
    "lines.markersize": 7,
})

ALGO_COLORS = {
    "classic": "#4d4d4d",
    "strassen_static": "#92c5de",
    "strassen_dynamic": "#2166ac",
    "laderman": "#1a9850",
    "bini_exact": "#fdae61",
    "bini_approx": "#d73027",
    "schonhage_exact": "#c2a5cf",
    "schonhage_approx": "#7b3294",
}

ALGO_MARKERS = {
    "classic": "o",
    "strassen_static": "s",
    "strassen_dynamic": "s",
    "laderman": "^",
    "bini_exact": "D",
    "bini_approx": "D",
    "schonhage_exact": "v",
    "schonhage_approx": "v",
}

APPROXIMATE_ALGOS = ["bini_approx", "schonhage_approx"]


def _save_figure(fig: plt.Figure, path: Path) -> None:
    """Save figure with tight layout."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved: {path}")


def plot_runtime_vs_size(df: pd.DataFrame, output_path: Path) -> None:
    """Mean runtime per algorithm against matrix size (log y-axis)."""
    agg = df.groupby(["algorithm", "label", "size"])["runtime_sec"].mean().reset_index()

    fig, ax = plt.subplots(figsize=(10, 6))
    for (algo, label), subset in agg.groupby(["algorithm", "label"]):
        subset = subset.sort_values("size")
        ax.plot(
            subset["size"], subset["runtime_sec"],
            marker=ALGO_MARKERS.get(algo, "o"),
            color=ALGO_COLORS.get(algo),
            label=label,
        )

    ax.set_xlabel("Matrix size n (n x n)")
    ax.set_ylabel("Runtime (s)")
    ax.set_yscale("log")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    ax.set_title("Runtime vs matrix size")

    _save_figure(fig, output_path)


def plot_error_vs_size(df: pd.DataFrame, output_path: Path) -> None:
    """Worst relative error of the approximate algorithms against matrix size."""
    subset_df = df[df["algorithm"].isin(APPROXIMATE_ALGOS)]
    if subset_df.empty:
        print("Skipping error plot: no approximate runs in data")
        return
    agg = subset_df.groupby(["algorithm", "label", "size"])["max_rel_error"].max().reset_index()

    fig, ax = plt.subplots(figsize=(10, 6))
    for (algo, label), subset in agg.groupby(["algorithm", "label"]):
        subset = subset.sort_values("size")
        ax.plot(
            subset["size"], subset["max_rel_error"],
            marker=ALGO_MARKERS.get(algo, "o"),
            color=ALGO_COLORS.get(algo),
            label=label,
        )

    ax.set_xlabel("Matrix size n (n x n)")
    ax.set_ylabel("Max relative error")
    ax.set_yscale("log")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    ax.set_title("Approximation error vs matrix size")

    _save_figure(fig, output_path)


def generate_all_plots(results_dir: Path, output_dir: Path) -> None:
    csv_path = results_dir / "timings.csv"
    if not csv_path.exists():
        print(f"Skipping: {csv_path} not found")
        return

    df = pd.read_csv(csv_path)
    plot_runtime_vs_size(df, output_dir / "timings_fig1_runtime_vs_size.png")
    plot_error_vs_size(df, output_dir / "timings_fig2_error_vs_size.png")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate timing plots from the sweep CSV")
    parser.add_argument(
        "--results-dir",
        type=Path,
        default=Path("fast_matrix_multiplication/overall/results"),
        help="Directory containing timings.csv",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("fast_matrix_multiplication/overall/results/figures"),
        help="Directory to save plots",
    )
    args = parser.parse_args()
    generate_all_plots(args.results_dir, args.output_dir)


if __name__ == "__main__":  # pragma: no cover - plotting entrypoint
    main()
