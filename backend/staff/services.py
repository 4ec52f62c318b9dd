import logging
from typing import Optional

from core_backend.exceptions import NotFound, InactiveEntity
from .models import Staff

logger = logging.getLogger(__name__)


class StaffDirectory:
    """Read-only lookups of staff identity used by restaurant operations."""

    @staticmethod
    def get_by_id(staff_id) -> Optional[Staff]:
        if staff_id is None:
            return None
        return Staff.objects.filter(pk=staff_id).first()

    @staticmethod
    def require(staff_id, label: str = "Staff member") -> Staff:
        """
        Return the staff member or raise NotFound.

        Args:
            staff_id: Primary key of the staff member
            label: Prefix used in the error message ("Target staff", ...)
        """
        staff = StaffDirectory.get_by_id(staff_id)
        if staff is None:
            raise NotFound(f"{label} {staff_id} not found")
        return staff

    @staticmethod
    def require_active(staff_id, label: str = "Staff member") -> Staff:
        """Return the staff member, raising NotFound or InactiveEntity."""
        staff = StaffDirectory.require(staff_id, label)
        if not staff.is_active:
            logger.warning(f"{label} {staff_id} ({staff.full_name}) is not active")
            raise InactiveEntity(f"{label} {staff.full_name} is not active")
        return staff
