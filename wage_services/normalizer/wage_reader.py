"""
County Wage Spreadsheet Reader

Reads the per-county occupational wage sheets ({countykey}_ow.xls) and yields
rows keyed by canonical column names, ready for normalize_wage_row().

Each sheet starts with banner rows, followed by the column header row and the
data table. The mid-range wage is split over three columns: the labeled
'Mid Range Annual Wage ($)' column holds the low bound, the first unlabeled
column after it holds a separator cell ('-') and the second unlabeled column
holds the high bound.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

WAGE_FILE_PATTERNS = ('*_ow.xls', '*_ow.xlsx')

# Source header (whitespace collapsed) -> canonical key
COLUMN_MAP = {
    'SOC Code': 'soc_code',
    'Occupational Title': 'title',
    'Educ. Level': 'education_level',
    'Area Type': 'area_type',
    'Average Hourly Wage ($)': 'average_hourly_wage',
    'Average Annual Wage ($)': 'average_annual_wage',
    'Median Annual Wage ($)': 'median_annual_wage',
    'Entry Annual Wage ($)': 'entry_annual_wage',
    "Exper'd Annual Wage ($)": 'experienced_annual_wage',
    'Mid Range Annual Wage ($)': 'mid_range_low',
}

MID_RANGE_HEADER = 'Mid Range Annual Wage ($)'
REQUIRED_HEADER = 'SOC Code'
UNLABELED_PREFIX = 'Unnamed:'


class WageSourceError(Exception):
    """Raised when the wage source directory is missing or holds no county files."""
    pass


class WageFileError(Exception):
    """Raised when a single county wage file cannot be read."""
    pass


def discover_county_files(data_dir: Union[str, Path]) -> list[Path]:
    """
    List the county wage files in a directory, sorted by file name.

    Args:
        data_dir: Directory containing {countykey}_ow.xls files

    Returns:
        Sorted list of file paths

    Raises:
        WageSourceError: If the directory does not exist or has no wage files.
                         There is no sensible empty catalog, so the build
                         must stop here.
    """
    directory = Path(data_dir)

    if not directory.is_dir():
        raise WageSourceError(f"Wage data directory not found: {directory}")

    files = sorted(
        {path for pattern in WAGE_FILE_PATTERNS for path in directory.glob(pattern)},
        key=lambda path: path.name
    )

    if not files:
        raise WageSourceError(
            f"No county wage files matching {', '.join(WAGE_FILE_PATTERNS)} in {directory}"
        )

    logger.info(f"Found {len(files)} county wage files", extra={'data_dir': str(directory)})
    return files


def _clean_header(header: Any) -> str:
    """Collapse embedded newlines and repeated spaces in a header cell."""
    return ' '.join(str(header).split())


def _is_unlabeled(header: Any) -> bool:
    """pandas labels empty header cells 'Unnamed: N'."""
    if header is None or (isinstance(header, float) and pd.isna(header)):
        return True
    cleaned = _clean_header(header)
    return not cleaned or cleaned.startswith(UNLABELED_PREFIX)


def _mid_range_high_column(columns: list[Any], mid_range_index: int) -> Optional[Any]:
    """The second unlabeled column after the mid-range column, if present."""
    unlabeled = [c for c in columns[mid_range_index + 1:mid_range_index + 3] if _is_unlabeled(c)]
    if len(unlabeled) < 2:
        return None
    return unlabeled[1]


def map_columns(columns: list[Any]) -> dict[Any, str]:
    """
    Map the sheet's column labels to canonical keys.

    The mid-range column is followed by an unlabeled separator column and
    then the unlabeled high bound column, which becomes 'mid_range_high'.
    Unknown columns are ignored.

    Args:
        columns: Column labels as read from the sheet

    Returns:
        Mapping of original column label -> canonical key
    """
    mapping: dict[Any, str] = {}

    for index, column in enumerate(columns):
        cleaned = _clean_header(column)
        key = COLUMN_MAP.get(cleaned)
        if key is None:
            continue
        mapping[column] = key
        if cleaned == MID_RANGE_HEADER:
            high_column = _mid_range_high_column(columns, index)
            if high_column is None:
                logger.warning("No mid-range high column after mid-range header", extra={'columns': len(columns)})
            else:
                mapping[high_column] = 'mid_range_high'

    return mapping


def read_wage_file(file_path: Union[str, Path], header_row: int = 5) -> list[dict[str, Any]]:
    """
    Read one county wage sheet into canonical rows.

    Args:
        file_path: Path to a .xls or .xlsx wage file
        header_row: Number of banner rows above the header row

    Returns:
        List of row dicts keyed by canonical column names. Empty cells are None.

    Raises:
        WageFileError: If the file cannot be read or has no 'SOC Code' column
    """
    path = Path(file_path)

    try:
        df = pd.read_excel(path, sheet_name=0, header=header_row, dtype=object)
    except Exception as e:
        raise WageFileError(f"Cannot read wage file {path.name}: {e}") from e

    columns = list(df.columns)
    mapping = map_columns(columns)

    if 'soc_code' not in mapping.values():
        raise WageFileError(
            f"Wage file {path.name} has no '{REQUIRED_HEADER}' column "
            f"(header_row={header_row}, columns={[_clean_header(c) for c in columns]})"
        )

    df = df[list(mapping.keys())].rename(columns=mapping)
    df = df.astype(object).where(pd.notna(df), None)

    rows = df.to_dict(orient='records')

    logger.debug(
        "Read wage file",
        extra={'file': path.name, 'rows': len(rows), 'columns': sorted(mapping.values())}
    )

    return rows
