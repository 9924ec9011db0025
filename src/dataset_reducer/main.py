"""
Command-line entry point.

Reduces one or more CSV files and writes one JSON result per file.

Usage:
    dataset-reducer data/raw/sales.csv --question "What will revenue be next quarter?"
    dataset-reducer data/raw --output-dir data/reduced --forecast-column revenue
"""

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from .config import Config, get_config
from .forecasting import Forecaster, is_forecasting_intent
from .sampler import Sampler
from .summarizer import Summarizer
from .utils.file_utils import get_file_list, load_csv_records, save_json
from .utils.logging_utils import get_logger, setup_logger

logger = get_logger(__name__)


class ReductionRunner:
    """
    Runs the reducer over CSV files using a Config.

    Example:
        >>> runner = ReductionRunner(get_config(), output_dir="data/reduced")
        >>> results = runner.run_all([Path("data/raw/sales.csv")], "Show me total sales")
    """

    def __init__(self, config, output_dir: str = "data/reduced"):
        self.config = config
        self.output_dir = Path(output_dir)

        summarizer = Summarizer(config.get_stage_config('summarizer'))
        self.sampler = Sampler(config.get_stage_config('sampler'), summarizer=summarizer)
        self.forecaster = Forecaster(config.get_stage_config('forecaster'))

    def reduce_file(
        self,
        file_path: Path,
        question: str,
        forecast_column: Optional[str] = None,
        periods: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Reduce one CSV file and attach a forecast when the question asks for one.

        Returns:
            SampleResult dict, with a 'forecast' key when one was computed
        """
        records = load_csv_records(file_path)
        result = self.sampler.reduce(records, question).to_dict()

        if is_forecasting_intent(question):
            if forecast_column is not None:
                series = [record.get(forecast_column) for record in records]
            else:
                series = records
            projection = self.forecaster.forecast(series, periods)
            result['forecast'] = projection.to_dict() if projection else None

            if projection is None:
                logger.warning(f"Not enough data to forecast {file_path.name}")

        return result

    def run_all(
        self,
        files: List[Path],
        question: str,
        forecast_column: Optional[str] = None,
        periods: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Reduce every file, saving ``<stem>.reduced.json`` for each.

        Files that fail are logged and skipped.
        """
        if not files:
            logger.warning("No CSV files to process")
            return []

        results = []

        for file_path in tqdm(files, desc="Reducing files"):
            try:
                result = self.reduce_file(file_path, question, forecast_column, periods)
            except Exception as e:
                logger.error(f"Failed to process {file_path.name}: {e}")
                continue

            save_json(result, self.output_dir / f"{file_path.stem}.reduced.json")
            results.append(result)

        logger.info(f"Successfully processed {len(results)} of {len(files)} files")

        return results


def collect_files(paths: List[str]) -> List[Path]:
    """Expand directories to the CSV files they contain."""
    files = []
    for path in map(Path, paths):
        if path.is_dir():
            files.extend(get_file_list(path, "*.csv"))
        else:
            files.append(path)
    return files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dataset-reducer',
        description="Reduce CSV datasets to a bounded sample plus a summary"
    )
    parser.add_argument(
        'paths',
        nargs='+',
        help='CSV files or directories containing CSV files'
    )
    parser.add_argument(
        '--question',
        default='',
        help='Question the reduced data will be used to answer'
    )
    parser.add_argument(
        '--output-dir',
        default='data/reduced',
        help='Directory for output JSON files'
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to YAML config file'
    )
    parser.add_argument(
        '--forecast-column',
        default=None,
        help='Column to forecast when the question asks about the future'
    )
    parser.add_argument(
        '--periods',
        type=int,
        default=None,
        help='Number of periods to forecast'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Override the configured log level'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit code (1 when no file could be processed)
    """
    args = build_parser().parse_args(argv)

    config = Config(args.config) if args.config else get_config()

    log_config = config.get_stage_config('logging')
    file_config = log_config.get('file') or {}
    setup_logger(
        'dataset_reducer',
        log_file=file_config.get('path') if file_config.get('enabled') else None,
        level=args.log_level or log_config.get('level', 'INFO')
    )

    files = collect_files(args.paths)
    runner = ReductionRunner(config, output_dir=args.output_dir)
    results = runner.run_all(files, args.question, args.forecast_column, args.periods)

    print(f"\n✓ Reduced {len(results)} of {len(files)} files")
    print(f"✓ Outputs saved to: {args.output_dir}")

    return 0 if results else 1


if __name__ == '__main__':
    raise SystemExit(main())
