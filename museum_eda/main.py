"""
Main Report Orchestrator

Loads and summarizes every configured museum collection, then builds the
cross-collection comparison table.

Usage:
    # All collections in config/pipeline_config.yaml
    museum-eda

    # A subset, first 5000 rows each, no charts
    museum-eda --collections Met "MoMA Artworks" --sample-size 5000 --no-plots
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from .aggregator import build_comparison_table
from .config import Config, get_config
from .errors import AggregationError, LoadError, MissingColumnError
from .loader import CollectionLoader
from .models import CollectionSpec, CollectionSummary, ComparisonTable
from .summarizer import Summarizer
from .utils.file_utils import safe_file_stem, save_csv, save_json
from .utils.logging_utils import get_logger, setup_logger

logger = get_logger(__name__)


@dataclass
class RunResult:
    """
    Everything one run produced.

    ``errors`` maps a collection name (or ``"comparison"``) to the message of
    the failure that stopped it; the other collections are unaffected.
    """

    summaries: List[CollectionSummary] = field(default_factory=list)
    comparison: Optional[ComparisonTable] = None
    errors: Dict[str, str] = field(default_factory=dict)

    def summary(self, name: str) -> CollectionSummary:
        for summary in self.summaries:
            if summary.name == name:
                return summary
        raise KeyError(name)

    @property
    def ok(self) -> bool:
        return not self.errors


class Pipeline:
    """
    Main report orchestrator.

    Example:
        >>> pipeline = Pipeline()
        >>> result = pipeline.run()
        >>> result.comparison.names()
        ['Cleveland', 'Met', 'MoMA Artists', 'MoMA Artworks']
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        config: Optional[Config] = None
    ):
        """
        Initialize the pipeline.

        Args:
            config_file: Path to config file (optional)
            config: Already-built Config, used instead of config_file
        """
        self.config = config or get_config(config_file)

        log_config = self.config.get_stage_config('logging')
        file_config = log_config.get('file') or {}
        setup_logger(
            'museum_eda',
            log_file=file_config.get('path') if file_config.get('enabled') else None,
            level=log_config.get('level', 'INFO')
        )

        self.loader = CollectionLoader(config=self.config.get_stage_config('loader'))
        self.summarizer = Summarizer(config=self.config.get_stage_config('summarizer'))

        logger.info("=" * 80)
        logger.info("Museum Collection Report Initialized")
        logger.info("=" * 80)

    def run(self, names: Optional[Sequence[str]] = None) -> RunResult:
        """
        Summarize each collection, then compare them.

        A collection that fails to load, or whose CollectionSpec names a column it
        lacks, is recorded in ``errors`` and skipped; the comparison is built
        only after every collection has been attempted.

        Args:
            names: Collections to run (None = all configured, in config order)

        Returns:
            RunResult with per-collection summaries and the comparison table
        """
        specs = self.config.collection_specs(names)
        result = RunResult()

        if not specs:
            logger.warning("No collections configured")
            return result

        logger.info(f"Found {len(specs)} collections to summarize")

        for spec in tqdm(specs, desc="Summarizing collections"):
            try:
                result.summaries.append(self.run_collection(spec))
            except (LoadError, MissingColumnError) as e:
                logger.error(f"Failed to summarize {spec.name}: {e}")
                result.errors[spec.name] = str(e)

        logger.info(f"Successfully summarized {len(result.summaries)} of {len(specs)} collections")

        try:
            result.comparison = build_comparison_table(s.row for s in result.summaries)
        except AggregationError as e:
            logger.error(f"Failed to build comparison table: {e}")
            result.errors['comparison'] = str(e)

        if self.config.get('output.enabled', True):
            self.save_outputs(result)

        if self.config.get('report.enabled', False):
            self.render(result)

        return result

    def run_collection(self, spec: CollectionSpec) -> CollectionSummary:
        """Load and summarize one collection."""
        collection = self.loader.load_spec(spec)
        return self.summarizer.summarize(collection, spec)

    def save_outputs(self, result: RunResult) -> Path:
        """
        Write summaries, distributions and the comparison table.

        Returns:
            Directory the files were written to
        """
        output_dir = Path(self.config.get('data.summaries_dir', 'data/summaries'))

        for summary in result.summaries:
            stem = safe_file_stem(summary.name)
            save_json(summary.to_dict(), output_dir / f"{stem}.summary.json")

            for dist in summary.distributions.values():
                save_csv(dist.to_frame(), output_dir / f"{stem}.{safe_file_stem(dist.name)}.csv")

        if result.comparison is not None:
            save_csv(result.comparison.to_frame(), output_dir / "comparison.csv")

        index = {
            'total_collections': len(result.summaries),
            'collections': [s.name for s in result.summaries],
            'comparison': result.comparison.to_dict() if result.comparison is not None else None,
            'errors': result.errors
        }
        save_json(index, output_dir / "run_index.json")

        return output_dir

    def render(self, result: RunResult) -> List[Path]:
        """Draw charts for the run (imports matplotlib lazily)."""
        from .report import Visualizer

        plots_dir = self.config.get('data.plots_dir', 'data/summaries/plots')
        visualizer = Visualizer(output_dir=plots_dir, config=self.config.get_stage_config('report'))

        return visualizer.plot_all(result.summaries, result.comparison)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point for the report.

    Usage:
        museum-eda --config config/pipeline_config.yaml
        museum-eda --collections Met Cleveland --no-plots
    """
    parser = argparse.ArgumentParser(
        description="Exploratory summary of museum collection datasets",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--config',
        help='Path to config file (default: config/pipeline_config.yaml)'
    )

    parser.add_argument(
        '--collections',
        nargs='+',
        metavar='NAME',
        help='Only summarize these collections'
    )

    parser.add_argument(
        '--sample-size',
        type=int,
        default=None,
        help='Number of rows to read per collection (default: all)'
    )

    parser.add_argument(
        '--no-plots',
        action='store_true',
        help='Skip chart rendering'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    config = Config(args.config)
    if args.sample_size is not None:
        config.set('loader.sample_size', args.sample_size)
    if args.no_plots:
        config.set('report.enabled', False)
    if args.verbose:
        config.set('logging.level', 'DEBUG')

    pipeline = Pipeline(config=config)

    try:
        result = pipeline.run(args.collections)
    except ValueError as e:
        logger.error(str(e))
        return 2

    if result.comparison is not None:
        print("\n" + result.comparison.to_frame().to_string(index=False))

    for name, message in result.errors.items():
        print(f"✗ {name}: {message}", file=sys.stderr)

    return 0 if result.summaries else 1


if __name__ == '__main__':
    sys.exit(main())
