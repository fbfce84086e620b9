"""
models/ - Domain Models
=======================
Plain dataclasses describing the registry entities. Repositories build them
from database rows; services and screens pass them around.
"""
