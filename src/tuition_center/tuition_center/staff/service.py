from __future__ import annotations

import logging
import random
from datetime import date
from typing import Optional, Sequence

from ..common.codes import generate_code
from ..common.datetime_utils import parse_iso_date, to_iso_date
from ..common.validators import optional_text, require_choice, require_non_empty, require_non_negative
from ..core.constants import STAFF_CODE_PREFIX
from ..core.enums import RecordStatus, SalaryType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Staff
from .repository import StaffRepository

logger = logging.getLogger(__name__)

_REQUIRED = {"full_name": ("fullName", "Full name"), "role": ("role", "Role"), "phone": ("phone", "Phone")}
_OPTIONAL = {
    "gender": "gender",
    "email": "email",
    "address": "address",
    "qualification": "qualification",
}


def _clean(fields: dict, *, partial: bool) -> dict:
    record: dict = {}
    for key, (wire, label) in _REQUIRED.items():
        if key in fields or not partial:
            record[wire] = require_non_empty(fields.get(key), label)
    for key, wire in _OPTIONAL.items():
        if key in fields:
            record[wire] = optional_text(fields.get(key))
    if "salary_type" in fields or not partial:
        record["salaryType"] = require_choice(
            fields.get("salary_type") or SalaryType.MONTHLY, "Salary type", SalaryType
        ).value
    if "basic_salary" in fields or not partial:
        record["basicSalary"] = require_non_negative(fields.get("basic_salary", 0), "Basic salary")
    if "status" in fields:
        record["status"] = require_choice(fields["status"], "Status", RecordStatus).value
    if "joining_date" in fields:
        value = fields["joining_date"]
        if isinstance(value, date):
            record["joiningDate"] = to_iso_date(value)
        elif value:
            try:
                record["joiningDate"] = to_iso_date(parse_iso_date(str(value)))
            except ValueError:
                raise ValidationError("joiningDate must be a date (YYYY-MM-DD)")
        else:
            record["joiningDate"] = None
    unknown = set(fields) - set(_REQUIRED) - set(_OPTIONAL) - {"salary_type", "basic_salary", "status", "joining_date"}
    if unknown:
        raise ValidationError(f"Unknown staff field(s): {', '.join(sorted(unknown))}")
    return record


class StaffService:
    """Use case: manage staff records and their salary configuration."""

    def __init__(self, staff: StaffRepository, *, rng: Optional[random.Random] = None):
        self._staff = staff
        self._rng = rng

    def add(self, **fields) -> Staff:
        record = _clean(fields, partial=False)
        record.setdefault("status", RecordStatus.ACTIVE.value)
        if not record.get("joiningDate"):
            record["joiningDate"] = to_iso_date(date.today())
        record["staffCode"] = generate_code(STAFF_CODE_PREFIX, exists=self._staff.code_exists, rng=self._rng)

        staff_id = self._staff.create(record)
        logger.info("Added staff %s (%s)", record["fullName"], record["staffCode"])
        return self._staff.get_by_id(staff_id)

    def update(self, staff_id: str, **fields) -> Staff:
        changes = _clean(fields, partial=True)
        if not changes:
            raise ValidationError("Nothing to update")
        if not self._staff.update(staff_id, changes):
            raise NotFoundError("Staff member not found")
        return self._staff.get_by_id(staff_id)

    def delete(self, staff_id: str) -> None:
        if not self._staff.delete(staff_id):
            raise NotFoundError("Staff member not found")
        logger.info("Deleted staff %s", staff_id)

    def get(self, staff_id: str) -> Optional[Staff]:
        return self._staff.get_by_id(staff_id)

    def list(self, *, active_only: bool = False) -> Sequence[Staff]:
        return self._staff.list_active() if active_only else self._staff.list_all()
