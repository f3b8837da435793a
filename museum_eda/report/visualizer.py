"""
Visualization Module

Renders the computed tables as charts:
- Category counts (horizontal bars, largest on top)
- Binned year histograms
- Artwork vs. artist counts across collections (log scale)
"""

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for saving plots

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models import CollectionSummary, ComparisonTable, Distribution
from ..utils.file_utils import safe_file_stem
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


class Visualizer:
    """
    Creates chart files from distributions and the comparison table.

    Example:
        >>> viz = Visualizer(output_dir="data/summaries/plots")
        >>> viz.plot_comparison(table)
    """

    def __init__(
        self,
        output_dir: str = "data/summaries/plots",
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the Visualizer.

        Args:
            output_dir: Directory to save plots
            config: Configuration dictionary (``report`` block)
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.config = {
            'dpi': 150,
            'figsize': (12, 8),
            'style': 'whitegrid'
        }

        if config:
            self.config.update(config)

        sns.set_style(self.config['style'])

        logger.info(f"Initialized Visualizer (output: {self.output_dir})")

    def plot_distribution(
        self,
        dist: Distribution,
        collection_name: str,
        save: bool = True
    ) -> Optional[Path]:
        """
        Plot one distribution.

        Temporal distributions are drawn as a histogram over bin keys; the
        others as horizontal bars with the largest category on top.

        Args:
            dist: Distribution to plot
            collection_name: Collection the distribution belongs to
            save: Whether to save the plot

        Returns:
            Path to saved plot (if save=True and the distribution is non-empty)
        """
        if len(dist) == 0:
            logger.warning(
                f"Distribution '{dist.name}' of {collection_name} is empty - skipping plot"
            )
            return None

        if dist.kind == 'temporal':
            fig = self._plot_histogram(dist, collection_name)
        else:
            fig = self._plot_bars(dist, collection_name)

        return self._finish(fig, f"{safe_file_stem(collection_name)}_{safe_file_stem(dist.name)}", save)

    def _plot_bars(self, dist: Distribution, collection_name: str):
        fig, ax = plt.subplots(figsize=self.config['figsize'])

        labels = [str(label) for label in dist.labels][::-1]
        if dist.fractions is not None:
            values = list(dist.fractions)[::-1]
            xlabel = 'Share of non-null records'
        else:
            values = dist.counts[::-1]
            xlabel = 'Records'

        ax.barh(range(len(values)), values)
        ax.set_yticks(range(len(labels)))
        ax.set_yticklabels(labels)

        ax.set_xlabel(xlabel, fontsize=12)
        ax.set_ylabel(dist.column, fontsize=12)
        ax.set_title(f'{dist.column} - {collection_name}', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3, axis='x')

        return fig

    def _plot_histogram(self, dist: Distribution, collection_name: str):
        fig, ax = plt.subplots(figsize=self.config['figsize'])

        width = dist.bin_width or 1
        ax.bar(dist.labels, dist.counts, width=width, align='edge', edgecolor='black', alpha=0.7)

        ax.set_xlabel(f'{dist.column} ({width}-year bins)', fontsize=12)
        ax.set_ylabel('Records', fontsize=12)
        ax.set_title(f'{dist.column} - {collection_name}', fontsize=14, fontweight='bold')
        ax.grid(True, alpha=0.3, axis='y')

        return fig

    def plot_comparison(
        self,
        table: ComparisonTable,
        save: bool = True
    ) -> Optional[Path]:
        """
        Plot artwork and artist counts per collection on a log scale.

        Args:
            table: Comparison table
            save: Whether to save the plot

        Returns:
            Path to saved plot (if save=True and the table has rows)
        """
        if len(table) == 0:
            logger.warning("Comparison table is empty - skipping comparison plot")
            return None

        frame = table.to_frame()
        positions = np.arange(len(frame))
        bar_width = 0.4

        fig, ax = plt.subplots(figsize=self.config['figsize'])

        ax.bar(positions - bar_width / 2, frame['total_count'], bar_width, label='Artworks')
        ax.bar(positions + bar_width / 2, frame['distinct_count'], bar_width, label='Artists')

        ax.set_yscale('log')
        ax.set_xticks(positions)
        ax.set_xticklabels(frame['collection'])
        ax.set_ylabel('Count (log scale)', fontsize=12)
        ax.set_title('Artworks and Artists per Collection', fontsize=14, fontweight='bold')
        ax.legend()
        ax.grid(True, alpha=0.3, axis='y')

        return self._finish(fig, 'comparison', save)

    def plot_all(
        self,
        summaries: List[CollectionSummary],
        table: Optional[ComparisonTable] = None
    ) -> List[Path]:
        """Plot every distribution of every summary, then the comparison."""
        paths = []

        for summary in summaries:
            for dist in summary.distributions.values():
                path = self.plot_distribution(dist, summary.name)
                if path is not None:
                    paths.append(path)

        if table is not None:
            path = self.plot_comparison(table)
            if path is not None:
                paths.append(path)

        logger.info(f"Saved {len(paths)} plots to {self.output_dir}")

        return paths

    def _finish(self, fig, stem: str, save: bool) -> Optional[Path]:
        fig.tight_layout()

        file_path = None
        if save:
            file_path = self.output_dir / f"{stem}.png"
            fig.savefig(file_path, dpi=self.config['dpi'], bbox_inches='tight')
            logger.info(f"Saved plot: {file_path.name}")

        plt.close(fig)
        return file_path
