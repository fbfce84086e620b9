"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw rows from the database and return domain model objects.
Storage failures are raised as repositories.errors exceptions.
"""
