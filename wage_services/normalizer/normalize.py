"""
Wage Row Normalization Logic

This module transforms one raw county spreadsheet row into our canonical
WageRecord. It owns all sentinel and validation handling for wage cells.

Key Responsibilities:
- Map sentinel cells ('*', '#', empty) to None
- Parse numeric strings without ever raising
- Normalize education level and area type codes to the closed vocabulary
- Drop the grand-total row and rows without a SOC code
"""

import logging
import math
import numbers
from typing import Any, Optional, Union

from wage_services.common.models import WageRecord
from wage_services.common.vocabulary import (
    TOTAL_SOC_CODE,
    parse_area_type,
    parse_education_level,
)

logger = logging.getLogger(__name__)

# Cells that mean "no data" or "suppressed for disclosure"
WAGE_SENTINELS = {'*', '#', ''}

# Canonical row keys produced by the spreadsheet reader
WAGE_FIELDS = (
    'average_hourly_wage',
    'average_annual_wage',
    'median_annual_wage',
    'entry_annual_wage',
    'experienced_annual_wage',
    'mid_range_low',
    'mid_range_high',
)


def parse_wage_value(value: Any) -> Optional[Union[int, float]]:
    """
    Parse a wage cell into a number or None.

    Numeric cells pass through unchanged. The sentinel tokens '*', '#' and
    the empty string map to None, as does anything that does not parse as a
    finite number. This never raises.

    The difference between '*' and '#' is intentionally lost here: both
    become None. Re-applying this function to its own output returns the
    same value.

    Args:
        value: Raw cell value (number, string, None, NaN)

    Returns:
        Number or None

    Examples:
        >>> parse_wage_value('62450')
        62450
        >>> parse_wage_value(62450)
        62450
        >>> parse_wage_value('*') is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, numbers.Real):
        number = float(value)
        return number if math.isfinite(number) else None

    if not isinstance(value, str):
        logger.debug("Unsupported wage cell type", extra={'value': value, 'type': type(value).__name__})
        return None

    cleaned = value.strip()
    if cleaned in WAGE_SENTINELS:
        return None

    cleaned = cleaned.replace(',', '').replace('$', '')

    try:
        return int(cleaned)
    except ValueError:
        pass

    try:
        number = float(cleaned)
    except ValueError:
        logger.debug("Failed to parse wage cell as number", extra={'value': value})
        return None

    return number if math.isfinite(number) else None


def _safe_string(value: Any) -> str:
    """
    Convert a cell to a stripped string; None and NaN become ''.
    """
    if value is None:
        return ''

    if isinstance(value, float) and math.isnan(value):
        return ''

    return str(value).strip()


def should_keep_row(soc_code: str) -> bool:
    """Rows without a SOC code and the 00-0000 grand-total row are dropped."""
    return bool(soc_code) and soc_code != TOTAL_SOC_CODE


def normalize_wage_row(row: dict[str, Any], county: str, data_date: str) -> Optional[WageRecord]:
    """
    Normalize one spreadsheet row into a WageRecord.

    Category header rows (SOC codes ending in -0000, other than the grand
    total) are kept.

    Args:
        row: Row keyed by canonical column names (see WAGE_FIELDS plus
             'soc_code', 'title', 'education_level', 'area_type')
        county: County display name for every record in this file
        data_date: Survey reference period, e.g. '2024-05'

    Returns:
        WageRecord, or None when the row is dropped
    """
    soc_code = _safe_string(row.get('soc_code'))

    if not should_keep_row(soc_code):
        logger.debug("Dropping row", extra={'soc_code': soc_code, 'county': county})
        return None

    wages = {name: parse_wage_value(row.get(name)) for name in WAGE_FIELDS}

    return WageRecord(
        soc_code=soc_code,
        title=_safe_string(row.get('title')),
        education_level=parse_education_level(row.get('education_level')),
        area_type=parse_area_type(row.get('area_type')),
        county=county,
        data_date=data_date,
        **wages,
    )
