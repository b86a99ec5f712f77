from __future__ import annotations

from ..extensions import db
from ..models import BusinessUnit
from ..permissions import Role
from ..scopes import AllUnits, Global, Specific, SpecificUnits, Unset, UNSET


class UnitAccessError(Exception):
    """Raised when a user targets a business unit outside their access."""
    pass


def get_all_units() -> list[BusinessUnit]:
    """All business units in canonical order."""
    return (
        db.session.query(BusinessUnit)
        .order_by(BusinessUnit.position.asc(), BusinessUnit.id.asc())
        .all()
    )


def accessible_units(user, all_units) -> list:
    """
    Units the user may act within, in all_units' canonical order.

    The user's own list order is ignored, and ids that match no unit are
    silently dropped.
    """
    scope = user.unit_scope
    if isinstance(scope, AllUnits):
        return list(all_units)
    return [unit for unit in all_units if scope.includes(unit.id)]


def can_switch_units(user) -> bool:
    """Admins, and anyone with more than one unit, get a unit switcher."""
    if user.role == Role.ADMIN:
        return True
    scope = user.unit_scope
    return isinstance(scope, AllUnits) or len(scope.unit_ids) > 1


def can_select_global(user) -> bool:
    """Only admins are offered the global ("all") view."""
    return user.role == Role.ADMIN


def initial_selection(user):
    """
    Selection right after login.

    Exactly one concrete unit -> that unit is selected immediately.
    Several units, or every unit -> Unset, forcing an explicit choice.
    """
    scope = user.unit_scope
    if isinstance(scope, SpecificUnits) and len(scope.unit_ids) == 1:
        return Specific(scope.unit_ids[0])
    return UNSET


def reconcile_selection(user, selection):
    """
    Re-check a live session's selection after its user record was edited.

    Only a concrete selection that the user can no longer access changes:
    it moves to the single remaining unit, or is cleared when several
    remain. A user that became super-admin keeps whatever they had.
    """
    if not isinstance(selection, Specific):
        return selection

    scope = user.unit_scope
    if isinstance(scope, AllUnits) or scope.includes(selection.unit_id):
        return selection

    if len(scope.unit_ids) == 1:
        return Specific(scope.unit_ids[0])
    return UNSET


def validate_selection(user, selection, all_units) -> None:
    """
    Check that user may switch their session to selection.

    Raises UnitAccessError for an empty selection, a global selection by a
    non-admin, or a unit that is not in the user's accessible units.
    """
    if isinstance(selection, Unset):
        raise UnitAccessError("A business unit must be selected")

    if isinstance(selection, Global):
        if not can_select_global(user):
            raise UnitAccessError("Global view is not available for this user")
        return

    allowed_ids = {unit.id for unit in accessible_units(user, all_units)}
    if selection.unit_id not in allowed_ids:
        raise UnitAccessError("Business unit not found")


def user_can_access_unit(user, unit_id: str | None) -> bool:
    if user is None or unit_id is None:
        return False
    return user.unit_scope.includes(unit_id)


def require_unit_access(user, unit_id: str | None) -> BusinessUnit:
    """
    Validate that unit_id names an existing unit the user may act within.

    Returns the BusinessUnit.
    """
    unit = db.session.query(BusinessUnit).filter_by(id=unit_id).first() if unit_id else None
    if not unit or not user_can_access_unit(user, unit.id):
        # Don't reveal whether the unit exists
        raise UnitAccessError("Business unit not found")
    return unit
