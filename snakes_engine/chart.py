"""Bar chart of simulated moves-to-finish."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt


def make_moves_chart(
    mean_moves: dict[str, float],
    output_path: str = "moves_to_finish.png",
    title: str = "Snakes & Ladders: average moves to finish",
) -> str:
    """Create a horizontal bar chart of average moves, fewest on top.

    Returns the path to the saved PNG.
    """
    sorted_items = sorted(mean_moves.items(), key=lambda kv: kv[1])
    names = [name for name, _ in sorted_items]
    values = [value for _, value in sorted_items]

    fig, ax = plt.subplots(figsize=(10, max(3, len(names) * 0.7)))
    bars = ax.barh(names, values, color="#4A90D9", edgecolor="white")

    for bar, value in zip(bars, values):
        ax.text(
            bar.get_width() + 0.2, bar.get_y() + bar.get_height() / 2,
            f"{value:.1f}",
            va="center", fontsize=11, fontweight="bold",
        )

    ax.set_xlabel("Moves")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.invert_yaxis()
    ax.set_xlim(left=0, right=max(values, default=1) * 1.15 + 1)

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
