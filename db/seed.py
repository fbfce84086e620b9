"""
db/seed.py
----------
Seeds a fresh database: the default administrator plus species, breeds,
outcomes and animals read from the shelter outcomes CSV file.

Run through the entry point:
    python main.py --db-setup
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Iterator, Optional

import pandas as pd
from dateutil.parser import isoparse

from config import (
    DB_SEED_FILE,
    DEFAULT_USER_NAME,
    DEFAULT_USER_PASSWORD,
    SEED_BATCH_SIZE,
)
from db.connection import Database
from models.animal import AnimalSex
from services.animal_service import AnimalService
from services.breed_service import BreedService
from services.outcome_service import OutcomeService
from services.species_service import SpeciesService
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)

SEED_COLUMNS = [
    "animal_id", "name", "animal_type", "breed", "color", "date_of_birth",
    "sex_upon_outcome", "location_lat", "location_long",
    "outcome_type", "outcome_subtype",
]

_FEMALE = re.compile(r"\bfemale", re.IGNORECASE)
_MALE = re.compile(r"\bmale", re.IGNORECASE)
_NEUTERED = re.compile(r"neutered|spayed|castrated", re.IGNORECASE)


@dataclass
class SeedReport:
    """
    Outcome of a seeding run.

    Attributes:
        success: True only when the user (unless excluded) was created and
            every source record was processed.
        processed: Records processed; after a failed batch this points at
            the start of that batch.
        total: Records in the source file (header excluded).
        species, breeds, outcome_types, outcome_subtypes, users:
            Rows created per table.
    """
    success: bool = False
    processed: int = 0
    total: int = 0
    species: int = 0
    breeds: int = 0
    outcome_types: int = 0
    outcome_subtypes: int = 0
    users: int = 0


# ── Field parsing ─────────────────────────────────────────

def parse_sex_and_neutered(text: str) -> tuple[str, bool]:
    """
    The source mixes sex and neutered status in one field
    ("Spayed Female", "Intact Male", "Unknown"); split them apart.
    """
    text = text or ""
    neutered = bool(_NEUTERED.search(text))
    if _FEMALE.search(text):
        return AnimalSex.FEMALE, neutered
    if _MALE.search(text):
        return AnimalSex.MALE, neutered
    return AnimalSex.UNKNOWN, neutered


def parse_date(text: str) -> Optional[date]:
    text = (text or "").strip()
    if not text:
        return None
    try:
        return isoparse(text).date()
    except ValueError:
        logger.debug(f"Ignoring invalid date {text!r}")
        return None


def parse_coordinate(text: str) -> Optional[float]:
    """Blank, zero or malformed coordinates become None."""
    try:
        return float(text) or None
    except (TypeError, ValueError):
        return None


# ── CSV streaming ─────────────────────────────────────────

def read_records(source: str, chunksize: int = 500) -> Iterator[dict]:
    """
    Stream the seed file row by row.
    Every value is read as text; missing columns come back as "".
    """
    for chunk in pd.read_csv(source, dtype=str, keep_default_na=False, chunksize=chunksize):
        for record in chunk.to_dict(orient="records"):
            yield {c: (record.get(c) or "") for c in SEED_COLUMNS}


def count_records(source: str) -> int:
    """Number of data rows in the seed file (header excluded)."""
    return sum(len(chunk) for chunk in pd.read_csv(source, dtype=str, usecols=[0], chunksize=5000))


# ── Seeding steps ─────────────────────────────────────────

def seed_users(
    db: Database,
    username: str = DEFAULT_USER_NAME,
    password: str = DEFAULT_USER_PASSWORD,
) -> bool:
    """Create the default administrator. Returns True on success."""
    logger.info("Creating default system users.")
    user = UserService(db).create({"username": username, "password": password, "is_admin": True})
    if user is None:
        logger.error("Default user could not be created.")
        return False
    logger.info(f"Default user {user.username} created.")
    return True


class AnimalSeeder:
    """
    Loads species, breeds, outcomes and animals from the seed file.

    Reference rows are cached by name so each one is created only once;
    animals are inserted in batches of `batch_size`.
    """

    def __init__(self, db: Database, batch_size: int = SEED_BATCH_SIZE):
        self.batch_size = batch_size
        self.species_service = SpeciesService(db)
        self.breed_service = BreedService(db)
        self.outcome_service = OutcomeService(db)
        self.animal_service = AnimalService(db)

        self._species: dict = {}
        self._breeds: dict = {}
        self._outcome_types: dict = {}
        self._outcome_subtypes: dict = {}

    def _species_for(self, name: str):
        if name not in self._species:
            created = self.species_service.create({"name": name})
            if created is None:
                return None
            self._species[name] = created
        return self._species[name]

    def _breed_for(self, species_id: int, name: str):
        key = (species_id, name)
        if key not in self._breeds:
            created = self.breed_service.create({"name": name, "species_id": species_id})
            if created is None:
                return None
            self._breeds[key] = created
        return self._breeds[key]

    def _outcome_for(self, name: str, is_subtype: bool):
        cache = self._outcome_subtypes if is_subtype else self._outcome_types
        if name not in cache:
            created = self.outcome_service.create({"name": name, "is_subtype": is_subtype})
            if created is None:
                return None
            cache[name] = created
        return cache[name]

    def _flush(self, batch: list, exclude_animals: bool) -> bool:
        if exclude_animals or not batch:
            return True
        return self.animal_service.create(batch) is not None

    def run(self, source: str, exclude_animals: bool = False) -> SeedReport:
        """
        Process every record of the seed file.

        Processing stops at the first failure: a reference row that could not
        be created, or an animal batch that could not be inserted. Rows
        inserted before the failure stay in place.
        """
        report = SeedReport()
        logger.info(f"Preparing to load records from {source}.")
        try:
            report.total = count_records(source)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Cannot read seed file {source}: {e}")
            return report

        batch: list[dict] = []
        failed = False
        try:
            for record in read_records(source):
                report.processed += 1

                species = self._species_for(record["animal_type"].strip())
                breed_name = record["breed"].strip()
                breed = self._breed_for(species.id, breed_name) if species and breed_name else None
                type_name = record["outcome_type"].strip()
                subtype_name = record["outcome_subtype"].strip()
                outcome_type = self._outcome_for(type_name, False) if type_name else None
                outcome_subtype = self._outcome_for(subtype_name, True) if subtype_name else None

                if (
                    species is None
                    or (breed_name and breed is None)
                    or (type_name and outcome_type is None)
                    or (subtype_name and outcome_subtype is None)
                ):
                    failed = True
                    break

                sex, neutered = parse_sex_and_neutered(record["sex_upon_outcome"])
                batch.append({
                    "legacy_id": record["animal_id"],
                    "name": record["name"],
                    "species_id": species.id,
                    "breed_id": breed.id if breed else None,
                    "color": record["color"],
                    "date_of_birth": parse_date(record["date_of_birth"]),
                    "location_lat": parse_coordinate(record["location_lat"]),
                    "location_long": parse_coordinate(record["location_long"]),
                    "sex": sex,
                    "neutered": neutered,
                    "outcome_type_id": outcome_type.id if outcome_type else None,
                    "outcome_subtype_id": outcome_subtype.id if outcome_subtype else None,
                })

                if len(batch) == self.batch_size:
                    if not self._flush(batch, exclude_animals):
                        report.processed -= len(batch)
                        failed = True
                        break
                    batch = []
                    logger.info(f"Processed {report.processed} of {report.total} animal records.")

            if not failed and batch:
                if not self._flush(batch, exclude_animals):
                    report.processed -= len(batch)
                    failed = True
        except (OSError, pd.errors.ParserError) as e:
            logger.error(f"Seed file stream aborted at record {report.processed}: {e}")
            failed = True

        report.species = len(self._species)
        report.breeds = len(self._breeds)
        report.outcome_types = len(self._outcome_types)
        report.outcome_subtypes = len(self._outcome_subtypes)
        report.success = not failed and report.processed == report.total

        if report.success:
            logger.info(f"All {report.processed} animal records loaded into the database.")
        else:
            logger.error(
                f"Animal loading process failed at record {report.processed}. "
                f"Please verify the file and try again."
            )
        return report


def seed(
    db: Database,
    source: str = DB_SEED_FILE,
    batch_size: int = SEED_BATCH_SIZE,
    exclude_users: bool = False,
    exclude_animals: bool = False,
    username: str = DEFAULT_USER_NAME,
    password: str = DEFAULT_USER_PASSWORD,
) -> SeedReport:
    """
    Seed the database: default user first, then the CSV content.
    The CSV is not read when the default user cannot be created.
    """
    users_ok = True
    users_created = 0
    if not exclude_users:
        users_ok = seed_users(db, username, password)
        users_created = int(users_ok)

    if not users_ok:
        return SeedReport(success=False, users=users_created)

    report = AnimalSeeder(db, batch_size).run(source, exclude_animals)
    report.users = users_created
    return report
