"""
db/ - Database Layer
====================
Handles the SQLite storage handle, schema initialization and seeding.
This layer sits below the repositories; only db/seed.py reaches up into the
services to reuse their create operations.
"""
