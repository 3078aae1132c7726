"""
Public contact information mirrored from the API.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class OperationArea:
    city_id: int
    city_name: str = ''
    address: str = ''


@dataclass
class Contact:
    email: str
    phone: str
    operation_areas: str = ''
    operation_areas_details: List[OperationArea] = field(default_factory=list)
    id: Optional[int] = None
    updated_at: Optional[datetime] = None

    @property
    def area_names(self) -> List[str]:
        """Operation areas from the comma separated field, trimmed, blanks dropped."""
        return [area.strip() for area in (self.operation_areas or '').split(',') if area.strip()]
