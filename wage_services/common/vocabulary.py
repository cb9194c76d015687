"""
Wage Data Vocabulary

Fixed lookup tables used by the wage pipeline: education level codes, area
type codes, the county directory key table, and SOC major groups.

Every lookup here is a total function. Unknown inputs map to a defined
fallback instead of raising, because the source spreadsheets are not
formatted consistently and downstream grouping depends on the fallbacks.
"""

import logging
import math
from typing import Any, Optional

logger = logging.getLogger(__name__)


# Education level codes, in the order the source data documents them
EDUCATION_LEVELS = ('ND', 'HS', 'PS', 'SC', 'AD', 'BD', 'BD+', 'MD', 'DD', '#')
DEFAULT_EDUCATION_LEVEL = '#'

# Area type codes (granularity of the reporting region)
AREA_TYPES = ('CTY', 'WDA', 'MSA', 'STW')
DEFAULT_AREA_TYPE = 'CTY'

# Code of the statewide-only area type
STATEWIDE_AREA_TYPE = 'STW'

# Grand-total summary row, not a real occupation or category
TOTAL_SOC_CODE = '00-0000'

EDUCATION_DESCRIPTIONS = {
    'ND': 'No formal credential',
    'HS': 'High school diploma',
    'PS': 'Postsecondary certificate',
    'SC': 'Some college',
    'AD': "Associate's degree",
    'BD': "Bachelor's degree",
    'BD+': "Bachelor's degree or higher",
    'MD': "Master's degree",
    'DD': 'Doctoral degree',
    '#': 'Varies',
}

# County directory keys (file name prefixes) -> county display names
COUNTY_NAMES = {
    'adamsco': 'Adams',
    'allegco': 'Allegheny',
    'armco': 'Armstrong',
    'beavco': 'Beaver',
    'bedco': 'Bedford',
    'berksco': 'Berks',
    'blairco': 'Blair',
    'bradco': 'Bradford',
    'bucksco': 'Bucks',
    'butlerco': 'Butler',
    'cambco': 'Cambria',
    'cameco': 'Cameron',
    'carbco': 'Carbon',
    'centco': 'Centre',
    'chesco': 'Chester',
    'clarco': 'Clarion',
    'clearco': 'Clearfield',
    'clinco': 'Clinton',
    'coluco': 'Columbia',
    'crawco': 'Crawford',
    'cumbco': 'Cumberland',
    'daupco': 'Dauphin',
    'delaco': 'Delaware',
    'elkco': 'Elk',
    'erieco': 'Erie',
    'fayco': 'Fayette',
    'forestco': 'Forest',
    'frankco': 'Franklin',
    'fultco': 'Fulton',
    'greeneco': 'Greene',
    'huntco': 'Huntingdon',
    'indco': 'Indiana',
    'jeffco': 'Jefferson',
    'junco': 'Juniata',
    'lackco': 'Lackawanna',
    'lancco': 'Lancaster',
    'lawrco': 'Lawrence',
    'lebco': 'Lebanon',
    'lehighco': 'Lehigh',
    'luzco': 'Luzerne',
    'lycoco': 'Lycoming',
    'mckeanco': 'McKean',
    'mercerco': 'Mercer',
    'miffco': 'Mifflin',
    'monroeco': 'Monroe',
    'montgco': 'Montgomery',
    'montoco': 'Montour',
    'northamco': 'Northampton',
    'northumco': 'Northumberland',
    'perryco': 'Perry',
    'philaco': 'Philadelphia',
    'pikeco': 'Pike',
    'potterco': 'Potter',
    'schuyco': 'Schuylkill',
    'snyderco': 'Snyder',
    'somerco': 'Somerset',
    'sullco': 'Sullivan',
    'susqco': 'Susquehanna',
    'tiogaco': 'Tioga',
    'unionco': 'Union',
    'venco': 'Venango',
    'warrenco': 'Warren',
    'washco': 'Washington',
    'wayneco': 'Wayne',
    'westco': 'Westmoreland',
    'wyomco': 'Wyoming',
    'yorkco': 'York',
}

# SOC major groups (2-digit prefix -> label)
SOC_MAJOR_GROUPS = {
    '11': 'Management',
    '13': 'Business & Financial Operations',
    '15': 'Computer & Mathematical',
    '17': 'Architecture & Engineering',
    '19': 'Life, Physical & Social Science',
    '21': 'Community & Social Service',
    '23': 'Legal',
    '25': 'Educational Instruction & Library',
    '27': 'Arts, Design, Entertainment & Sports',
    '29': 'Healthcare Practitioners & Technical',
    '31': 'Healthcare Support',
    '33': 'Protective Service',
    '35': 'Food Preparation & Serving',
    '37': 'Building & Grounds Maintenance',
    '39': 'Personal Care & Service',
    '41': 'Sales & Related',
    '43': 'Office & Administrative Support',
    '45': 'Farming, Fishing & Forestry',
    '47': 'Construction & Extraction',
    '49': 'Installation, Maintenance & Repair',
    '51': 'Production',
    '53': 'Transportation & Material Moving',
}

WAGE_FILE_SUFFIX = '_ow'


def _normalize_code(
    value: Any,
    valid_values: tuple[str, ...],
    default: str,
    field_name: str
) -> str:
    """
    Match a code against a closed vocabulary, case-insensitively.

    Args:
        value: Raw code from the source row
        valid_values: Accepted codes (upper case)
        default: Fallback returned for anything not in valid_values
        field_name: Name of field (for logging)

    Returns:
        The matched code or the fallback
    """
    if value is None:
        return default

    normalized = str(value).strip().upper()

    if normalized not in valid_values:
        logger.debug(
            f"Unknown {field_name} code, using fallback",
            extra={'value': value, 'default': default}
        )
        return default

    return normalized


def parse_education_level(code: Any) -> str:
    """Return the education level code, or '#' for anything unrecognized."""
    return _normalize_code(code, EDUCATION_LEVELS, DEFAULT_EDUCATION_LEVEL, 'education_level')


def parse_area_type(code: Any) -> str:
    """Return the area type code, or 'CTY' for anything unrecognized."""
    return _normalize_code(code, AREA_TYPES, DEFAULT_AREA_TYPE, 'area_type')


def resolve_county_name(county_key: str) -> str:
    """
    Resolve a county directory key to its display name.

    Unmapped keys degrade to the capitalized key (e.g. 'unknownxyz' ->
    'Unknownxyz') rather than raising.

    Args:
        county_key: Directory key such as 'adamsco'

    Returns:
        County display name such as 'Adams'
    """
    key = county_key.strip().lower()
    name = COUNTY_NAMES.get(key)
    if name is None:
        logger.warning("Unmapped county key, using capitalized key", extra={'county_key': key})
        return key.capitalize()
    return name


def county_key_from_filename(filename: str) -> str:
    """
    Extract the county directory key from a wage file name.

    Examples:
        >>> county_key_from_filename('centco_ow.xls')
        'centco'
        >>> county_key_from_filename('/data/Adamsco_ow.xlsx')
        'adamsco'
    """
    name = filename.replace('\\', '/').rsplit('/', 1)[-1]
    stem = name.rsplit('.', 1)[0] if '.' in name else name
    if stem.lower().endswith(WAGE_FILE_SUFFIX):
        stem = stem[:-len(WAGE_FILE_SUFFIX)]
    return stem.lower()


def county_from_filename(filename: str) -> str:
    """Resolve the county display name for a wage file (e.g. 'centco_ow.xls' -> 'Centre')."""
    return resolve_county_name(county_key_from_filename(filename))


def is_category_header_code(soc_code: str) -> bool:
    """
    Check if a SOC code is a category header (ending in -0000).

    These are summary categories, not specific job titles.
    """
    return soc_code.endswith('-0000')


def soc_major_group(soc_code: str) -> str:
    """Return the label of the SOC major group, or 'Group NN' for unknown prefixes."""
    prefix = soc_code[:2]
    return SOC_MAJOR_GROUPS.get(prefix, f"Group {prefix}")


def format_education_level(level: str) -> str:
    """Human-readable label for an education level code (unknown codes pass through)."""
    return EDUCATION_DESCRIPTIONS.get(level, level)


def format_currency(amount: Optional[float]) -> str:
    """
    Format an annual wage for display.

    Missing and zero amounts render as 'N/A', never as '$0'. Cents round
    half away from zero (62450.5 -> '$62,451').

    Examples:
        >>> format_currency(62450)
        '$62,450'
        >>> format_currency(None)
        'N/A'
    """
    if not amount:
        return 'N/A'
    dollars = int(math.floor(abs(amount) + 0.5))
    sign = '-' if amount < 0 else ''
    return f"{sign}${dollars:,}"
