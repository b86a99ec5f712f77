# Overview: Service-layer operations for auth and user administration.

"""
Login lookup and user administration.

There is no password: a login is a case-insensitive exact match on email.

USER RULES (enforced on create/update, not by the schema):
- name, email and role are required; email is unique ignoring case
- an Admin with no units gets access to every unit (["*"])
- ["*"] must stand alone; it cannot be mixed with concrete ids
- every non-super-admin user has at least one unit
- only Producción and Cocina users may span several units
- per-user overrides never target the permission-management module
"""

from __future__ import annotations

from sqlalchemy import func

from ..extensions import db
from ..models import BusinessUnit, ProductionTask, User
from ..permissions import MULTI_UNIT_ROLES, Role, validate_role
from ..scopes import ALL_UNITS_SENTINEL
from . import permission_service, session_service
from .errors import NotFoundError
from kitchen.time_utils import utcnow


def find_user_by_email(email: str | None) -> User | None:
    if not email or not email.strip():
        return None
    return (
        db.session.query(User)
        .filter(func.lower(User.email) == email.strip().lower())
        .first()
    )


def authenticate(email: str | None) -> User | None:
    """
    Look a user up by email for login.

    Returns the User, or None when no account matches.
    """
    user = find_user_by_email(email)
    if user is not None:
        user.last_login_at = utcnow()
        db.session.commit()
    return user


def normalize_unit_ids(role: str, unit_ids) -> list[str]:
    """
    Apply the unit assignment rules for role to a requested unit list.

    Returns the list to store. Raises ValueError when the list is invalid.
    """
    if unit_ids is None:
        unit_ids = []
    if not isinstance(unit_ids, (list, tuple)):
        raise ValueError("accessible_unit_ids must be a list")

    ids: list[str] = []
    for unit_id in unit_ids:
        unit_id = str(unit_id).strip()
        if unit_id and unit_id not in ids:
            ids.append(unit_id)

    if ALL_UNITS_SENTINEL in ids:
        if ids != [ALL_UNITS_SENTINEL]:
            raise ValueError("'*' grants every unit and cannot be combined with specific units")
        return ids

    if not ids:
        if role == Role.ADMIN:
            return [ALL_UNITS_SENTINEL]
        raise ValueError("At least one business unit must be assigned")

    if len(ids) > 1 and role != Role.ADMIN and role not in MULTI_UNIT_ROLES:
        raise ValueError(f"Role '{role}' can only be assigned to one business unit")

    known = {row[0] for row in db.session.query(BusinessUnit.id).filter(BusinessUnit.id.in_(ids)).all()}
    unknown = [unit_id for unit_id in ids if unit_id not in known]
    if unknown:
        raise ValueError(f"Unknown business units: {', '.join(unknown)}")

    return ids


def _validate_identity(name: str | None, email: str | None, user_id: int | None = None) -> tuple[str, str]:
    name = (name or "").strip()
    email = (email or "").strip()
    if not name or not email:
        raise ValueError("name and email are required")

    existing = find_user_by_email(email)
    if existing is not None and existing.id != user_id:
        raise ValueError("Email already in use")
    return name, email


def create_user(
    name: str,
    email: str,
    role: str,
    accessible_unit_ids=None,
    permission_overrides=None,
    created_by_user_id: int | None = None,
) -> User:
    """Create a user after applying the user rules."""
    name, email = _validate_identity(name, email)
    if not validate_role(role):
        raise ValueError(f"Role '{role}' not found")

    user = User(
        name=name,
        email=email,
        role=role,
        accessible_unit_ids=normalize_unit_ids(role, accessible_unit_ids),
        permission_overrides=permission_service.clean_permission_overrides(permission_overrides),
    )
    db.session.add(user)
    db.session.commit()

    permission_service.log_security_event(
        user_id=created_by_user_id,
        event_type="USER_CREATED",
        success=True,
        action=f"Created user: {user.email}",
    )
    return user


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users() -> list[User]:
    return db.session.query(User).order_by(User.id.asc()).all()


def update_user(user_id: int, data: dict, updated_by_user_id: int | None = None) -> User:
    """
    Update a user's name, email, role, units and overrides.

    Fields missing from data keep their value. Live sessions of the edited
    user are reconciled with the new unit assignments afterwards.
    """
    user = get_user(user_id)

    name, email = _validate_identity(
        data.get("name", user.name), data.get("email", user.email), user_id=user.id
    )

    role = data.get("role", user.role)
    if not validate_role(role):
        raise ValueError(f"Role '{role}' not found")

    if "accessible_unit_ids" in data:
        unit_ids = data["accessible_unit_ids"]
    elif role != user.role and user.role == Role.ADMIN and user.accessible_unit_ids == [ALL_UNITS_SENTINEL]:
        # Demoted from global admin: a unit must be chosen explicitly
        unit_ids = []
    else:
        unit_ids = user.accessible_unit_ids
    unit_ids = normalize_unit_ids(role, unit_ids)

    if "permission_overrides" in data:
        overrides = permission_service.clean_permission_overrides(data["permission_overrides"])
    else:
        overrides = user.permission_overrides

    user.name = name
    user.email = email
    user.role = role
    # Reassign (not mutate) JSON columns so the change is flushed
    user.accessible_unit_ids = list(unit_ids)
    user.permission_overrides = dict(overrides) if overrides else None
    db.session.commit()

    session_service.reconcile_user_sessions(user)

    permission_service.log_security_event(
        user_id=updated_by_user_id,
        event_type="USER_UPDATED",
        success=True,
        action=f"Updated user: {user.email}",
    )
    return user


def delete_user(user_id: int, deleted_by_user_id: int) -> None:
    """
    Delete a user. A user cannot delete the account they are logged in with.

    Production tasks assigned to the user become unassigned.
    """
    if user_id == deleted_by_user_id:
        raise ValueError("You cannot delete the user you are logged in with")

    user = get_user(user_id)
    email = user.email

    db.session.query(ProductionTask).filter_by(assigned_user_id=user.id).update(
        {ProductionTask.assigned_user_id: None}
    )
    db.session.delete(user)
    db.session.commit()

    session_service.revoke_user_sessions(user_id)

    permission_service.log_security_event(
        user_id=deleted_by_user_id,
        event_type="USER_DELETED",
        success=True,
        action=f"Deleted user: {email}",
    )
