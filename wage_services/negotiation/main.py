"""
Negotiation Service - Main Entry Point

Prints the salary negotiation report for one occupation as JSON.

Usage:
    python -m wage_services.negotiation.main --occupation-id ID [OPTIONS]

Options:
    --occupation-id TEXT  Occupation id, e.g. 15_1252
    --county TEXT         County name, or 'statewide' (default)
    --experience TEXT     entry | mid | experienced (default: mid)
    --config TEXT         Path to wage_catalog.yml configuration file
    --catalog TEXT        Path to occupations.json
    --verbose             Enable debug logging

Examples:
    python -m wage_services.negotiation.main --occupation-id 15_1252 --county Dauphin --experience entry

Exit Codes:
    0: Report printed
    1: No data for this occupation / location / tier
    2: Fatal error (missing catalog, bad config, etc.)
"""

import argparse
import json
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from wage_services.catalog.repository import OccupationRepository
from wage_services.common.config_loader import load_catalog_config

from .calculator import STATEWIDE, ExperienceLevel, get_salary_negotiation_data

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
        description='Salary negotiation report for an occupation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--occupation-id',
        type=str,
        required=True,
        dest='occupation_id',
        help='Occupation id, e.g. 15_1252'
    )
    parser.add_argument('--county', type=str, default=STATEWIDE, help="County name, or 'statewide'")
    parser.add_argument(
        '--experience',
        type=str,
        choices=[level.value for level in ExperienceLevel],
        default=ExperienceLevel.MID.value,
        help='Experience tier'
    )
    parser.add_argument('--config', type=str, default=None, help='Path to wage_catalog.yml')
    parser.add_argument('--catalog', type=str, default=None, help='Path to occupations.json')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the negotiation CLI.

    Returns:
        Exit code (0 = report printed, 1 = no data, 2 = fatal error)
    """
    args = parse_args(argv)

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
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    report = get_salary_negotiation_data(
        repository,
        args.occupation_id,
        args.county,
        args.experience,
        state_name=config.negotiation.state_name,
        state_abbreviation=config.negotiation.state_abbreviation,
    )

    json.dump(report.to_dict() if report else None, sys.stdout, indent=2)
    sys.stdout.write('\n')

    if report is None:
        logger.warning(
            "No negotiation data for this combination",
            extra={'occupation_id': args.occupation_id, 'county': args.county, 'experience': args.experience}
        )
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
