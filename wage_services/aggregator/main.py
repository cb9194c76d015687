"""
Aggregator Service - Main Entry Point

This is the command-line interface for the aggregator service.
It can be called directly from the terminal or from Airflow tasks.

Usage:
    python -m wage_services.aggregator.main [OPTIONS]

Options:
    --config TEXT          Path to wage_catalog.yml configuration file
    --output-dir TEXT      Directory holding the wage records and catalog artifacts
    --label-strategy TEXT  first | most_common | statewide
    --dry-run              Aggregate without writing the catalog
    --verbose              Enable debug logging
    --help                 Show this message and exit

Examples:
    # Build occupations.json from wage-records.json:
    python -m wage_services.aggregator.main

    # Resolve title conflicts by majority instead of first record:
    python -m wage_services.aggregator.main --label-strategy most_common

Exit Codes:
    0: Success
    2: Fatal error (missing wage records, bad config, etc.)
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv

from wage_services.common.config_loader import load_catalog_config
from wage_services.common.models import Occupation, WageRecord
from wage_services.publisher.exporter import export_occupations, load_wage_records

from .aggregate import LABEL_STRATEGIES, aggregate_occupations, education_level_distribution

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
        description='Aggregate county wage records into the occupation catalog',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to wage_catalog.yml configuration file',
        default=None
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        help='Directory holding the wage records and catalog artifacts',
        default=None,
        dest='output_dir'
    )

    parser.add_argument(
        '--label-strategy',
        type=str,
        choices=LABEL_STRATEGIES,
        help='How to pick title/education when counties disagree',
        default=None,
        dest='label_strategy'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Aggregate without writing the catalog',
        dest='dry_run'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def run_aggregator(records: list[WageRecord], label_strategy: str = 'first') -> list[Occupation]:
    """
    Main aggregator logic.

    Args:
        records: Flat wage records from all counties
        label_strategy: How to choose title and education level

    Returns:
        Occupations sorted by SOC code
    """
    start_time = datetime.now(timezone.utc)

    logger.info(
        "Starting aggregator service",
        extra={'records': len(records), 'label_strategy': label_strategy}
    )

    occupations = aggregate_occupations(records, label_strategy)

    counties = {record.county for record in records}
    duration = (datetime.now(timezone.utc) - start_time).total_seconds()

    logger.info(
        "Aggregator service completed",
        extra={
            'duration_seconds': duration,
            'occupations': len(occupations),
            'counties': len(counties),
        }
    )

    for level, count in education_level_distribution(occupations):
        logger.info(f"Education level {level}: {count} occupations")

    return occupations


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the aggregator service.

    Returns:
        Exit code (0 = success, 2 = fatal error)
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    try:
        config = load_catalog_config(args.config).apply_env_overrides()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 2

    build = config.build
    if args.output_dir:
        build.output_dir = args.output_dir
    label_strategy = args.label_strategy or build.label_strategy

    try:
        records = load_wage_records(build.wage_records_path)
    except FileNotFoundError:
        logger.error(
            f"Wage records not found at {build.wage_records_path}; run the normalizer first"
        )
        return 2
    except ValueError as e:
        logger.error(f"Invalid wage records artifact: {e}")
        return 2

    try:
        occupations = run_aggregator(records, label_strategy)

        if args.dry_run:
            logger.info(f"DRY RUN: Would write {len(occupations)} occupations to {build.occupations_path}")
        else:
            export_occupations(occupations, build.output_dir, build.occupations_file)

        logger.info("Aggregator completed successfully")
        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130

    except Exception as e:
        logger.error(
            "Unexpected fatal error",
            extra={
                'error': str(e),
                'error_type': type(e).__name__,
            },
            exc_info=True
        )
        return 2


if __name__ == '__main__':
    sys.exit(main())
