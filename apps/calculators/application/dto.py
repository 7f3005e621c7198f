"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from external API contracts.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class SavedCalculationDTO:
    """Saved calculation data transfer object."""
    tool_slug: str
    inputs: Dict[str, Any]
    outputs: Dict[str, Any]
    title: str = ""
    id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class CalculationPageDTO:
    """One page of saved calculations."""
    items: List[SavedCalculationDTO]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size


@dataclass
class PruneResultDTO:
    """Result DTO for the saved-calculation retention task."""
    success: bool
    deleted: int
    retention_days: int
    errors: List[str] = field(default_factory=list)
