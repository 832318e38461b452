"""
Static exercise catalog loader.

The catalog lives in shared/dictionaries/exercises.yaml and is read once per
process. Records are validated into frozen Exercise models and the
cross-record invariants are checked before anything can use them.
"""

import logging
import pathlib
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError

from application.exceptions import CatalogError
from domain.models import Exercise, WorkoutLocation

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]

CATALOG_PATH = ROOT / "shared/dictionaries/exercises.yaml"


def _read_yaml(path: pathlib.Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogError(f"Exercise catalog not found: {path}")
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in exercise catalog {path}: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("exercises"), list):
        raise CatalogError("Exercise catalog must contain an 'exercises' list")
    return data


def validate_catalog(exercises: Sequence[Exercise]) -> None:
    """
    Check the invariants that span more than one record.

    Raises:
        CatalogError: On duplicate ids, dangling or invalid replacement
            references, or Home-eligible exercises that need equipment.
    """
    by_id: Dict[str, Exercise] = {}
    for ex in exercises:
        if ex.id in by_id:
            raise CatalogError(f"Duplicate exercise id '{ex.id}'")
        by_id[ex.id] = ex

    for ex in exercises:
        if ex.replaces_id is not None:
            original = by_id.get(ex.replaces_id)
            if original is None:
                raise CatalogError(
                    f"Exercise '{ex.id}' replaces unknown exercise '{ex.replaces_id}'"
                )
            if not original.requires_equipment:
                raise CatalogError(
                    f"Exercise '{ex.id}' replaces '{original.id}', which needs no equipment"
                )
        if ex.requires_equipment and ex.is_available_at(WorkoutLocation.HOME):
            raise CatalogError(
                f"Home exercise '{ex.id}' must not require equipment "
                f"('{ex.equipment_required}')"
            )


def parse_catalog(records: List[dict]) -> Tuple[Exercise, ...]:
    exercises = []
    for idx, record in enumerate(records):
        try:
            exercises.append(Exercise.model_validate(record))
        except ValidationError as e:
            raise CatalogError(f"Invalid exercise record {idx}: {e}")

    validate_catalog(exercises)
    return tuple(exercises)


def load_catalog(path: Optional[pathlib.Path] = None) -> Tuple[Exercise, ...]:
    """
    Load and validate the exercise catalog.

    The default catalog is cached for the lifetime of the process; passing
    an explicit path always reads that file.
    """
    if path is None:
        return _default_catalog()
    return parse_catalog(_read_yaml(path)["exercises"])


@lru_cache
def _default_catalog() -> Tuple[Exercise, ...]:
    catalog = parse_catalog(_read_yaml(CATALOG_PATH)["exercises"])
    logger.info(f"Loaded {len(catalog)} exercises from {CATALOG_PATH.name}")
    return catalog


@lru_cache
def load_equipment() -> Tuple[dict, ...]:
    """Known gym equipment tags as {"id", "name"} dicts."""
    return tuple(_read_yaml(CATALOG_PATH).get("equipment") or [])


def lookup(catalog: Sequence[Exercise], exercise_id: str) -> Optional[Exercise]:
    return next((ex for ex in catalog if ex.id == exercise_id), None)
