"""
Catalog Service - Main Entry Point

Runs one catalog query against occupations.json and prints the response as
JSON. Useful to check a freshly built catalog.

Usage:
    python -m wage_services.catalog.main [OPTIONS]

Options:
    --config TEXT        Path to wage_catalog.yml configuration file
    --catalog TEXT       Path to occupations.json (defaults to the configured output)
    --page INTEGER       1-indexed page number
    --page-size INTEGER  Occupations per page
    --sort-by TEXT       socCode | title | educationLevel | wages | entrySalary | medianSalary
    --sort-order TEXT    asc | desc
    --search TEXT        Title or SOC code search term
    --education TEXT     Education level code (repeatable)
    --min-salary FLOAT   Minimum statewide median
    --max-salary FLOAT   Maximum statewide median
    --county TEXT        County name, or All
    --soc-category TEXT  2-digit SOC major group
    --include-categories Include category header rows (-0000 codes)
    --verbose            Enable debug logging

Examples:
    python -m wage_services.catalog.main --search nurse --county Dauphin
    python -m wage_services.catalog.main --sort-by wages --sort-order desc --page-size 10

Exit Codes:
    0: Success
    2: Fatal error (missing catalog, invalid parameters, etc.)
"""

import argparse
import json
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from wage_services.common.config_loader import load_catalog_config

from .query import OccupationQueryParams, SortField, SortOrder, query_occupations
from .repository import OccupationRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='Query the occupation catalog',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument('--config', type=str, default=None, help='Path to wage_catalog.yml')
    parser.add_argument('--catalog', type=str, default=None, help='Path to occupations.json')
    parser.add_argument('--page', type=int, default=1, help='1-indexed page number')
    parser.add_argument('--page-size', type=int, default=None, dest='page_size', help='Occupations per page')
    parser.add_argument(
        '--sort-by',
        type=str,
        choices=[f.value for f in SortField],
        default=None,
        dest='sort_by',
        help='Field to sort on'
    )
    parser.add_argument(
        '--sort-order',
        type=str,
        choices=[o.value for o in SortOrder],
        default=SortOrder.ASC.value,
        dest='sort_order',
        help='Sort direction'
    )
    parser.add_argument('--search', type=str, default=None, help='Title or SOC code search term')
    parser.add_argument(
        '--education',
        action='append',
        default=[],
        dest='education_level',
        help='Education level code (repeatable)'
    )
    parser.add_argument('--min-salary', type=float, default=None, dest='min_salary')
    parser.add_argument('--max-salary', type=float, default=None, dest='max_salary')
    parser.add_argument('--county', type=str, default=None, help='County name, or All')
    parser.add_argument('--soc-category', type=str, default=None, dest='soc_category')
    parser.add_argument(
        '--include-categories',
        action='store_true',
        dest='include_categories',
        help='Include category header rows (-0000 codes)'
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the catalog query CLI.

    Returns:
        Exit code (0 = success, 2 = fatal error)
    """
    args = parse_args(argv)

    # Logs go to stderr so stdout stays valid JSON
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    try:
        config = load_catalog_config(args.config).apply_env_overrides()
        catalog_path = args.catalog or str(config.build.occupations_path)
        repository = OccupationRepository.from_json_file(catalog_path)

        params = OccupationQueryParams(
            page=args.page,
            page_size=args.page_size or config.query.default_page_size,
            sort_by=args.sort_by,
            sort_order=args.sort_order,
            search=args.search,
            education_level=tuple(args.education_level),
            min_salary=args.min_salary,
            max_salary=args.max_salary,
            county=args.county,
            soc_category=args.soc_category,
        )
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Invalid query: {e}")
        return 2

    catalog = repository.all() if args.include_categories else repository.specific_occupations()
    result = query_occupations(catalog, params)

    json.dump(result.to_dict(), sys.stdout, indent=2)
    sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
