"""Status transition tables for projects and calculations."""
from enum import Enum as PyEnum

from app.core.exceptions import BadRequestError


class ProjectStatus(str, PyEnum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class CalculationStatus(str, PyEnum):
    DRAFT = "draft"
    CALCULATED = "calculated"
    VERIFIED = "verified"
    APPROVED = "approved"


PROJECT_TRANSITIONS: dict[str, set[str]] = {
    ProjectStatus.DRAFT.value: {ProjectStatus.ACTIVE.value, ProjectStatus.ARCHIVED.value},
    ProjectStatus.ACTIVE.value: {
        ProjectStatus.COMPLETED.value,
        ProjectStatus.DRAFT.value,
        ProjectStatus.ARCHIVED.value,
    },
    ProjectStatus.COMPLETED.value: {ProjectStatus.ACTIVE.value, ProjectStatus.ARCHIVED.value},
    ProjectStatus.ARCHIVED.value: {ProjectStatus.DRAFT.value},
}

CALCULATION_TRANSITIONS: dict[str, set[str]] = {
    CalculationStatus.DRAFT.value: {CalculationStatus.CALCULATED.value},
    CalculationStatus.CALCULATED.value: {
        CalculationStatus.VERIFIED.value,
        CalculationStatus.DRAFT.value,
    },
    CalculationStatus.VERIFIED.value: {
        CalculationStatus.APPROVED.value,
        CalculationStatus.CALCULATED.value,
    },
    CalculationStatus.APPROVED.value: set(),
}


def ensure_transition(
    current: str, target: str, table: dict[str, set[str]] = PROJECT_TRANSITIONS
) -> str:
    """Return ``target`` if moving from ``current`` is allowed, else raise BAD_REQUEST."""
    if current == target:
        return target
    if target not in table.get(current, set()):
        raise BadRequestError(f"Cannot change status from {current} to {target}")
    return target
