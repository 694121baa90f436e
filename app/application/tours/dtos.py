"""
Data Transfer Objects for the tours application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CreateTourCommand:
    """Input DTO for creating a tour.

    Attributes:
        fields: Validated tour fields keyed by column name.
    """

    fields: dict[str, Any]


@dataclass(frozen=True)
class GetTourQuery:
    """Input DTO for reading one tour."""

    tour_id: str


@dataclass(frozen=True)
class ListToursQuery:
    """Input DTO for listing tours.

    Attributes:
        filters: Equality filters keyed by column name. Empty means all.
    """

    filters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateTourCommand:
    """Input DTO for a partial tour update.

    Attributes:
        tour_id: ID of the tour to update.
        changes: Only the fields the client sent.
    """

    tour_id: str
    changes: dict[str, Any]


@dataclass(frozen=True)
class DeleteTourCommand:
    """Input DTO for deleting a tour."""

    tour_id: str
