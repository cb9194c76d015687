"""
Catalog Artifact Exporter

Writes the build-time data assets consumed by the catalog and the rest of the
application, and loads them back:

- wage-records.json: flat list of WageRecord (all counties, ungrouped)
- occupations.json: Occupation list sorted by SOC code

Both are UTF-8 JSON with camelCase keys.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Union

from wage_services.common.models import Occupation, WageRecord

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _write_json(payload: list[dict[str, Any]], output_dir: PathLike, filename: str) -> str:
    """
    Write a JSON array artifact.

    Creates output directory if it doesn't exist.

    Returns the path to the written file.
    """
    os.makedirs(output_dir, exist_ok=True)
    output_path = Path(output_dir) / filename

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
        f.write('\n')

    logger.info(
        f"Wrote {len(payload)} entries to {output_path}",
        extra={'path': str(output_path), 'entries': len(payload)}
    )
    return str(output_path)


def _read_json(path: PathLike) -> list[dict[str, Any]]:
    with open(path, encoding='utf-8') as f:
        payload = json.load(f)

    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array in {path}, got {type(payload).__name__}")

    return payload


def export_wage_records(
    records: Iterable[WageRecord],
    output_dir: PathLike = 'data/catalog',
    filename: str = 'wage-records.json',
) -> str:
    """Export the flat wage records artifact. Returns the written path."""
    return _write_json([record.to_dict() for record in records], output_dir, filename)


def export_occupations(
    occupations: Iterable[Occupation],
    output_dir: PathLike = 'data/catalog',
    filename: str = 'occupations.json',
) -> str:
    """Export the aggregated occupations artifact. Returns the written path."""
    return _write_json([occupation.to_dict() for occupation in occupations], output_dir, filename)


def load_wage_records(path: PathLike) -> list[WageRecord]:
    """
    Load the wage records artifact.

    Raises:
        FileNotFoundError: If the artifact doesn't exist
        ValueError: If the file is not a JSON array
    """
    return [WageRecord.from_dict(item) for item in _read_json(path)]


def load_occupations(path: PathLike) -> list[Occupation]:
    """
    Load the occupations artifact.

    Raises:
        FileNotFoundError: If the artifact doesn't exist
        ValueError: If the file is not a JSON array
    """
    return [Occupation.from_dict(item) for item in _read_json(path)]
