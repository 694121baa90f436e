"""
Domain entities for the tours bounded context.

Entities contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Difficulty(Enum):
    """How demanding a tour is."""

    EASY = "easy"
    MEDIUM = "medium"
    DIFFICULT = "difficult"


@dataclass(frozen=True)
class Tour:
    """A bookable tour as stored in the tour repository."""

    id: str
    name: str
    duration: int
    max_group_size: int
    difficulty: Difficulty
    price: float
    summary: str
    image_cover: str
    created_at: datetime
    ratings_average: float = 4.5
    ratings_quantity: int = 0
    price_discount: Optional[float] = None
    description: Optional[str] = None
