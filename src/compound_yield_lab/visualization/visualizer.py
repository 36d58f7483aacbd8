"""Matplotlib-based chart helpers for CompoundYieldLab."""

from __future__ import annotations

import pandas as pd


class Visualizer:
    """Collection of static helpers that turn APR reports into charts."""

    @staticmethod
    def _plt():
        try:
            import matplotlib.pyplot as plt
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "matplotlib is required for visualization. Install via pip."
            ) from exc
        return plt

    @staticmethod
    def bar_pool_apr(
        df: pd.DataFrame,
        title: str = "APR per pool",
        x_col: str = "pool",
        y_col: str = "apr",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Bar chart of APR percentages, one bar per pool.

        Rows without a pool are skipped; ``y_col`` is already a percentage.
        """

        if df.empty:
            return
        data = df[df[x_col].astype(bool)]
        if data.empty:
            return
        plt = Visualizer._plt()
        plt.figure(figsize=(10, 6))
        plt.bar(data[x_col], data[y_col])
        plt.title(title)
        plt.ylabel("APR (%)")
        plt.xticks(rotation=45, ha="right")
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()


__all__ = ["Visualizer"]
