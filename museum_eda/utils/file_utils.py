"""
File I/O utilities for the collection report.
Handles loading YAML config and delimited tables, and saving JSON and CSV
outputs.
"""

import json
import yaml
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from .logging_utils import get_logger

logger = get_logger(__name__)

SUFFIX_DELIMITERS = {
    '.csv': ',',
    '.tsv': '\t',
    '.txt': '\t',
}


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary (empty if the file is empty)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed

    Example:
        >>> config = load_config("config/pipeline_config.yaml")
        >>> print(config['data']['raw_dir'])
        data/raw
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading config from: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def load_csv(
    file_path: Union[str, Path],
    sample_size: Optional[int] = None,
    delimiter: str = ',',
    encoding: str = 'utf-8',
    **kwargs
) -> pd.DataFrame:
    """
    Load a delimited text table into a pandas DataFrame.

    Only empty cells become pandas nulls; literal strings such as "NA" or
    "None" are kept as values and nothing is filled in.

    Args:
        file_path: Path to the table
        sample_size: Number of rows to load (None = all rows)
        delimiter: Field separator
        encoding: Text encoding of the file
        **kwargs: Additional arguments passed to pd.read_csv

    Returns:
        DataFrame containing the table

    Example:
        >>> df = load_csv("data/raw/moma_artists.csv", sample_size=1000)
        >>> print(f"Loaded {len(df)} rows")
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Table file not found: {file_path}")

    logger.info(f"Loading table: {file_path}")

    read_kwargs = {'keep_default_na': False, 'na_values': ['']}
    read_kwargs.update(kwargs)

    df = pd.read_csv(
        file_path,
        sep=delimiter,
        encoding=encoding,
        nrows=sample_size,
        low_memory=False,
        **read_kwargs
    )

    if sample_size:
        logger.info(f"Loaded {len(df)} rows (sampled from {sample_size})")
    else:
        logger.info(f"Loaded {len(df)} rows")

    return df


def load_json_table(
    file_path: Union[str, Path],
    sample_size: Optional[int] = None,
    encoding: str = 'utf-8'
) -> pd.DataFrame:
    """
    Load a JSON array of objects into a DataFrame.

    Args:
        file_path: Path to JSON file
        sample_size: Number of records to keep (None = all)
        encoding: Text encoding of the file

    Returns:
        DataFrame with one row per object
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    logger.info(f"Loading JSON table: {file_path}")

    with open(file_path, 'r', encoding=encoding) as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of records, got {type(data).__name__}")

    if sample_size:
        data = data[:sample_size]

    df = pd.DataFrame.from_records(data)
    logger.info(f"Loaded {len(df)} rows")

    return df


def delimiter_for(file_path: Union[str, Path]) -> Optional[str]:
    """Default field separator for a file suffix (None for JSON or unknown)."""
    return SUFFIX_DELIMITERS.get(Path(file_path).suffix.lower())


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
        >>> save_json(summary.to_dict(), "data/summaries/Met.summary.json")
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Saving JSON: {file_path}")

    with open(file_path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)

    logger.info(f"Saved JSON to: {file_path}")


def save_csv(
    df: pd.DataFrame,
    file_path: Union[str, Path],
    **kwargs
) -> None:
    """
    Save DataFrame to CSV file.

    Args:
        df: DataFrame to save
        file_path: Output file path
        **kwargs: Additional arguments passed to df.to_csv
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(file_path, index=False, **kwargs)
    logger.info(f"Saved {len(df)} rows to: {file_path}")


def safe_file_stem(name: str) -> str:
    """Turn a collection or distribution name into a file-name stem."""
    stem = ''.join(ch if ch.isalnum() or ch in '-_' else '_' for ch in name.strip())
    return stem.strip('_') or 'unnamed'
