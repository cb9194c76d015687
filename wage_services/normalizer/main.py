"""
Normalizer Service - Main Entry Point

This is the command-line interface for the normalizer service.
It can be called directly from the terminal or from Airflow tasks.

Usage:
    python -m wage_services.normalizer.main [OPTIONS]

Options:
    --config TEXT        Path to wage_catalog.yml configuration file
    --data-dir TEXT      Directory containing {countykey}_ow.xls files
    --output-dir TEXT    Directory for the wage records artifact
    --data-date TEXT     Survey reference period (e.g. 2024-05)
    --dry-run            Parse files without writing the artifact
    --verbose            Enable debug logging
    --help               Show this message and exit

Examples:
    # Normalize all county files from the configured data directory:
    python -m wage_services.normalizer.main

    # Normalize a different drop with verbose logging:
    python -m wage_services.normalizer.main --data-dir /tmp/wages --verbose

    # Dry run to check the files parse:
    python -m wage_services.normalizer.main --dry-run

Exit Codes:
    0: Success
    1: Some county files could not be read
    2: Fatal error (missing data directory, bad config, etc.)
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from wage_services.common.config_loader import load_catalog_config
from wage_services.common.models import WageRecord
from wage_services.common.vocabulary import county_from_filename
from wage_services.publisher.exporter import export_wage_records

from .normalize import normalize_wage_row
from .wage_reader import WageFileError, WageSourceError, discover_county_files, read_wage_file

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

RowReader = Callable[[Path, int], list[dict]]


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='Normalize county wage spreadsheets into canonical wage records',
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
        '--data-dir',
        type=str,
        help='Directory containing {countykey}_ow.xls files',
        default=None,
        dest='data_dir'
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        help='Directory for the wage records artifact',
        default=None,
        dest='output_dir'
    )

    parser.add_argument(
        '--data-date',
        type=str,
        help='Survey reference period (e.g. 2024-05)',
        default=None,
        dest='data_date'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Parse files without writing the artifact',
        dest='dry_run'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def run_normalizer(
    files: list[Path],
    data_date: str,
    header_row: int = 5,
    reader: RowReader = read_wage_file,
) -> tuple[list[WageRecord], dict[str, int]]:
    """
    Main normalizer logic.

    A file that cannot be read is logged and skipped; it never aborts the
    batch.

    Args:
        files: County wage files to process
        data_date: Survey reference period stamped on every record
        header_row: Banner rows above the header row in each sheet
        reader: Function returning canonical rows for one file

    Returns:
        Tuple of (records, stats) where stats has:
        - files: Number of files processed
        - files_failed: Number of files that could not be read
        - rows: Number of data rows read
        - records: Number of wage records produced
        - dropped: Number of rows dropped (no SOC code or grand total)
    """
    stats = {
        'files': 0,
        'files_failed': 0,
        'rows': 0,
        'records': 0,
        'dropped': 0,
    }

    start_time = datetime.now(timezone.utc)
    records: list[WageRecord] = []

    logger.info(
        "Starting normalizer service",
        extra={'files': len(files), 'data_date': data_date, 'header_row': header_row}
    )

    for file_path in files:
        county = county_from_filename(file_path.name)
        stats['files'] += 1

        try:
            rows = reader(file_path, header_row)
        except WageFileError as e:
            stats['files_failed'] += 1
            logger.error(
                "Failed to read county wage file",
                extra={'file': file_path.name, 'county': county, 'error': str(e)}
            )
            continue

        county_records = 0
        for row in rows:
            stats['rows'] += 1
            record = normalize_wage_row(row, county, data_date)
            if record is None:
                stats['dropped'] += 1
                continue
            records.append(record)
            county_records += 1

        logger.info(
            f"Processed {county} County: {county_records} occupations",
            extra={'file': file_path.name, 'county': county, 'records': county_records}
        )

    stats['records'] = len(records)
    duration = (datetime.now(timezone.utc) - start_time).total_seconds()

    logger.info(
        "Normalizer service completed",
        extra={'duration_seconds': duration, **stats}
    )

    return records, stats


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the normalizer service.

    Returns:
        Exit code (0 = success, 1 = partial failure, 2 = fatal error)
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Set logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")

    try:
        config = load_catalog_config(args.config).apply_env_overrides()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 2

    build = config.build
    if args.data_dir:
        build.data_dir = args.data_dir
    if args.output_dir:
        build.output_dir = args.output_dir
    if args.data_date:
        build.data_date = args.data_date

    try:
        files = discover_county_files(build.data_dir)

        records, stats = run_normalizer(
            files=files,
            data_date=build.data_date,
            header_row=build.header_row,
        )

        if args.dry_run:
            logger.info(f"DRY RUN: Would write {len(records)} wage records to {build.wage_records_path}")
        else:
            export_wage_records(records, build.output_dir, build.wage_records_file)

        if stats['files_failed'] > 0:
            logger.warning(f"Completed with errors: {stats['files_failed']} files failed")
            return 1  # Partial failure

        logger.info("Normalizer completed successfully")
        return 0

    except WageSourceError as e:
        logger.error(f"Wage source error: {e}")
        return 2  # Fatal error

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130  # Standard Unix exit code for SIGINT

    except Exception as e:
        logger.error(
            "Unexpected fatal error",
            extra={
                'error': str(e),
                'error_type': type(e).__name__,
            },
            exc_info=True
        )
        return 2  # Fatal error


if __name__ == '__main__':
    sys.exit(main())
