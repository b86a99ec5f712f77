from __future__ import annotations

from ..extensions import db
from ..scopes import parse_unit_scope
from kitchen.time_utils import to_utc_z


class User(db.Model):
    """
    Staff accounts.

    ACCESS:
    - role selects the default permission set (RolePermission rows)
    - accessible_unit_ids lists the business units the user may work in,
      or the single sentinel ["*"] for every unit (super-admin)
    - permission_overrides is a sparse {module: level} map that takes
      precedence over the role default

    There is no password: login is a lookup by email.
    """
    __tablename__ = "users"
    __table_args__ = (
        db.UniqueConstraint("email", name="uq_users_email"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    role = db.Column(db.String(32), nullable=False, index=True)  # Admin, Producción, Servicio, Cocina

    # Ordered list of BusinessUnit ids, or ["*"] for all units
    accessible_unit_ids = db.Column(db.JSON, nullable=False, default=list)

    # Sparse {module_code: level}; NULL when the user has no overrides
    permission_overrides = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    last_login_at = db.Column(db.DateTime(timezone=True), nullable=True)

    @property
    def unit_scope(self):
        return parse_unit_scope(self.accessible_unit_ids)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "accessible_unit_ids": list(self.accessible_unit_ids or []),
            "permission_overrides": dict(self.permission_overrides) if self.permission_overrides else None,
            "created_at": to_utc_z(self.created_at),
            "last_login_at": to_utc_z(self.last_login_at) if self.last_login_at else None,
        }


class RolePermission(db.Model):
    """
    One cell of the role permission table: (role, module) -> level.

    A missing row means NONE. Rows are edited one cell at a time by a
    super-admin.
    """
    __tablename__ = "role_permissions"
    __table_args__ = (
        db.UniqueConstraint("role", "module", name="uq_role_permissions_role_module"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    role = db.Column(db.String(32), nullable=False, index=True)
    module = db.Column(db.String(64), nullable=False, index=True)
    level = db.Column(db.String(8), nullable=False)  # none, view, edit

    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role,
            "module": self.module,
            "level": self.level,
            "updated_at": to_utc_z(self.updated_at),
        }
