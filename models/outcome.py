"""
models/outcome.py
-----------------
Domain model for shelter outcomes.
The same table holds outcome types (Adoption, Transfer, ...) and outcome
subtypes (Partner, Foster, ...), told apart by `is_subtype`.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Outcome:
    name: str
    is_subtype: bool = False
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.name
