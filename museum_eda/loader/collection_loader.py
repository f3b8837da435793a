"""
Collection Loader

Reads one museum dataset (CSV, TSV or JSON records) into a Collection:
- Column names are kept exactly as given in the header row
- Missing cells stay null; nothing is filled in or renamed
- Any read or parse failure is reported as a LoadError for that file
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from ..errors import LoadError, MissingColumnError
from ..models import Collection, CollectionSpec
from ..utils.logging_utils import get_logger
from ..utils.file_utils import delimiter_for, load_csv, load_json_table

logger = get_logger(__name__)


class CollectionLoader:
    """
    Loads tabular dataset files into Collections.

    Attributes:
        config: Loader settings (sample_size)

    Example:
        >>> loader = CollectionLoader(config={"sample_size": 5000})
        >>> met = loader.load("data/raw/met_objects.csv", name="Met")
        >>> print(len(met))
        5000
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Collection Loader.

        Args:
            config: Configuration dict (``loader`` block of pipeline_config.yaml)
        """
        self.config = {
            'sample_size': None,  # None = use all rows
        }

        if config:
            self.config.update(config)

    def load(
        self,
        path: Union[str, Path],
        name: Optional[str] = None,
        expected_columns: Optional[Sequence[str]] = None,
        delimiter: Optional[str] = None,
        encoding: str = 'utf-8',
        text_columns: Optional[Sequence[str]] = None
    ) -> Collection:
        """
        Load one dataset file.

        Args:
            path: Path to the dataset file
            name: Collection name (defaults to the file stem)
            expected_columns: Columns that must be present in the header
            delimiter: Field separator, overriding the suffix default
            encoding: Text encoding of the file
            text_columns: Columns read as text, so IDs such as "007" keep their
                leading zeros (delimited files only)

        Returns:
            Collection holding every row of the file

        Raises:
            LoadError: If the file is missing, unreadable or not a table
            MissingColumnError: If an expected column is absent from the header
        """
        path = Path(path)
        name = name or path.stem

        logger.info(f"Loading collection '{name}' from {path}")

        frame = self._read(path, delimiter, encoding, text_columns)

        if expected_columns:
            missing = [col for col in expected_columns if col not in frame.columns]
            if missing:
                raise MissingColumnError(name, missing[0], list(frame.columns))

        logger.info(f"  {len(frame)} records, {len(frame.columns)} columns")

        return Collection(name=name, frame=frame, source_path=path)

    def load_spec(self, spec: CollectionSpec) -> Collection:
        """
        Load the dataset described by a CollectionSpec.

        Every column a role is mapped to is checked along with its
        ``expected_columns``. The identity column is read as text.
        """
        expected: List[str] = list(spec.expected_columns)
        for column in spec.role_columns():
            if column not in expected:
                expected.append(column)

        return self.load(
            spec.path,
            name=spec.name,
            expected_columns=expected,
            delimiter=spec.delimiter,
            encoding=spec.encoding,
            text_columns=[spec.identity_column]
        )

    def _read(
        self,
        path: Path,
        delimiter: Optional[str],
        encoding: str,
        text_columns: Optional[Sequence[str]] = None
    ) -> pd.DataFrame:
        sample_size = self.config['sample_size']

        if not path.exists():
            raise LoadError(path, "file does not exist")
        if not path.is_file():
            raise LoadError(path, "not a regular file")

        try:
            if path.suffix.lower() == '.json' and delimiter is None:
                return load_json_table(path, sample_size=sample_size, encoding=encoding)

            separator = delimiter or delimiter_for(path) or ','
            return load_csv(
                path,
                sample_size=sample_size,
                delimiter=separator,
                encoding=encoding,
                dtype={column: str for column in text_columns or []} or None
            )

        except pd.errors.EmptyDataError as e:
            raise LoadError(path, f"no header row ({e})") from e
        except pd.errors.ParserError as e:
            raise LoadError(path, f"not parsable as a table ({e})") from e
        except UnicodeDecodeError as e:
            raise LoadError(path, f"cannot decode as {encoding} ({e})") from e
        except json.JSONDecodeError as e:
            raise LoadError(path, f"invalid JSON ({e})") from e
        except (OSError, ValueError) as e:
            raise LoadError(path, str(e)) from e


def load_collection(
    path: Union[str, Path],
    name: Optional[str] = None,
    expected_columns: Optional[Sequence[str]] = None,
    **kwargs
) -> Collection:
    """Load a single dataset with default loader settings."""
    return CollectionLoader().load(path, name=name, expected_columns=expected_columns, **kwargs)
