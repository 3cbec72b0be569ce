"""
Officer Assignment - picks the responsible officer for a routed complaint.

Lookup: exact ward match, then exact division match, then nobody.
"""

from typing import Iterable, Optional, Tuple
import logging

from pydantic import BaseModel

from app.models.complaint import ComplaintCategory, ComplaintStatus, Officer

logger = logging.getLogger(__name__)


class OfficerDirectory:
    """Read-only officer lookup over an injected list."""

    def __init__(self, officers: Iterable[Officer]):
        self._officers: Tuple[Officer, ...] = tuple(officers)

    def __iter__(self):
        return iter(self._officers)

    def __len__(self) -> int:
        return len(self._officers)

    def find_by_ward(self, ward: str) -> Optional[Officer]:
        return next((o for o in self._officers if o.ward == ward), None)

    def find_by_division(self, division: str) -> Optional[Officer]:
        return next((o for o in self._officers if o.division == division), None)


class Assignment(BaseModel):
    officer: Optional[Officer] = None
    status: ComplaintStatus
    worker_name: Optional[str] = None
    department: str

    @property
    def officer_id(self) -> Optional[str]:
        return self.officer.id if self.officer else None


class OfficerAssignor:
    def __init__(self, directory: OfficerDirectory):
        self.directory = directory

    def pick_officer(self, ward: str, division: str) -> Optional[Officer]:
        return self.directory.find_by_ward(ward) or self.directory.find_by_division(division)

    def assign(self, ward: str, division: str, category: ComplaintCategory) -> Assignment:
        officer = self.pick_officer(ward, division)

        if officer is None:
            logger.info(f"No officer found for ward '{ward}' / division '{division}'")
            return Assignment(
                officer=None,
                status=ComplaintStatus.SUBMITTED,
                worker_name=None,
                department=category.value,
            )

        logger.info(f"Officer {officer.id} ({officer.name}) assigned for ward '{ward}'")
        return Assignment(
            officer=officer,
            status=ComplaintStatus.IN_PROGRESS,
            worker_name=officer.name,
            department=officer.department,
        )
