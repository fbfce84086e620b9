"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Species: Dog, Cat, Bird, ...
CREATE TABLE IF NOT EXISTS species (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            VARCHAR(255) NOT NULL
);

-- Breeds: every breed belongs to a species
CREATE TABLE IF NOT EXISTS breeds (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            VARCHAR(255) NOT NULL,
    species_id      INTEGER NOT NULL REFERENCES species(id)
);

-- Outcomes: types and subtypes share the table, told apart by is_subtype
CREATE TABLE IF NOT EXISTS outcomes (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    name            VARCHAR(255) NOT NULL,
    is_subtype      BOOLEAN NOT NULL DEFAULT 0
);

-- Animals registered in the shelter
CREATE TABLE IF NOT EXISTS animals (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    legacy_id           VARCHAR(255),
    name                VARCHAR(255),
    species_id          INTEGER NOT NULL REFERENCES species(id),
    breed_id            INTEGER REFERENCES breeds(id),
    color               VARCHAR(255),
    sex                 VARCHAR(10) NOT NULL DEFAULT 'Unknown'
                        CHECK (sex IN ('Male', 'Female', 'Unknown')),
    neutered            BOOLEAN NOT NULL DEFAULT 0,
    date_of_birth       DATE,
    location_lat        DECIMAL(8, 6),
    location_long       DECIMAL(9, 6),
    outcome_type_id     INTEGER REFERENCES outcomes(id),
    outcome_subtype_id  INTEGER REFERENCES outcomes(id)
);

-- Users allowed to log into the registry
CREATE TABLE IF NOT EXISTS users (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    username        VARCHAR(255) UNIQUE NOT NULL,
    password        VARCHAR(255) NOT NULL,
    is_admin        BOOLEAN NOT NULL DEFAULT 0
);

-- Indexes for faster lookups
CREATE INDEX IF NOT EXISTS idx_breeds_species ON breeds(species_id);
CREATE INDEX IF NOT EXISTS idx_animals_species_breed ON animals(species_id, breed_id);
"""

DROP_SQL = """
DROP TABLE IF EXISTS animals;
DROP TABLE IF EXISTS breeds;
DROP TABLE IF EXISTS outcomes;
DROP TABLE IF EXISTS species;
DROP TABLE IF EXISTS users;
"""


def create_tables(db: Database, force: bool = False) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        db: Open storage handle.
        force: Drop every table first, discarding all data.
    """
    conn = db.get_connection()
    try:
        if force:
            conn.executescript(DROP_SQL)
            logger.info("Existing tables dropped.")
        conn.executescript(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from config import DB_STORAGE

    with Database(DB_STORAGE) as database:
        create_tables(database)
    print("Database schema created successfully.")
