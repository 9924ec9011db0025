"""
File I/O utilities for the dataset reducer.
Handles loading YAML configs, CSV files as string records, and JSON results.
"""

import json
import yaml
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Union

from ..exceptions import ConfigError
from .logging_utils import get_logger

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigError: If YAML is malformed or not a mapping

    Example:
        >>> config = load_config("engine_config.yaml")
        >>> print(config['sampler']['max_sample_size'])
        2000
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading config from: {config_path}")

    with open(config_path, 'r') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")

    return config


def load_csv_records(file_path: Union[str, Path], **kwargs) -> List[Dict[str, str]]:
    """
    Load a CSV file as a list of string-valued records.

    Every cell is kept as text (no dtype inference, empty cells stay ``""``)
    so the result has the same shape as rows arriving from an upload or a
    spreadsheet export.

    Args:
        file_path: Path to CSV file
        **kwargs: Additional arguments passed to pd.read_csv

    Returns:
        List of records in file order

    Example:
        >>> records = load_csv_records("data/raw/sales.csv")
        >>> records[0]
        {'date': '2024-01-01', 'region': 'North', 'revenue': '1200'}
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"CSV file not found: {file_path}")

    logger.info(f"Loading CSV: {file_path}")

    df = pd.read_csv(file_path, dtype=str, keep_default_na=False, **kwargs)
    records = df.to_dict(orient='records')

    logger.info(f"Loaded {len(records)} rows, {len(df.columns)} columns")

    return records


def load_json(file_path: Union[str, Path]) -> Union[Dict, List]:
    """
    Load JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON data (dict or list)
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    logger.debug(f"Loading JSON: {file_path}")

    with open(file_path, 'r') as f:
        data = json.load(f)

    return data


def save_json(
    data: Union[Dict, List],
    file_path: Union[str, Path],
    indent: int = 2
) -> None:
    """
    Save data to JSON file.

    Args:
        data: Data to save (dict or list)
        file_path: Output file path
        indent: JSON indentation (default: 2)

    Example:
        >>> save_json(result.to_dict(), "data/reduced/sales.reduced.json")
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)

    logger.info(f"Saved JSON to: {file_path}")


def get_file_list(
    directory: Union[str, Path],
    pattern: str = "*.csv"
) -> List[Path]:
    """
    Get sorted list of files matching pattern in directory.

    Args:
        directory: Directory to search
        pattern: Glob pattern (default: "*.csv")

    Returns:
        List of matching file paths
    """
    directory = Path(directory)

    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")

    files = sorted(directory.glob(pattern))
    logger.info(f"Found {len(files)} files matching '{pattern}' in {directory}")

    return files
