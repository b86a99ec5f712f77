from __future__ import annotations

from ..extensions import db
from kitchen.time_utils import to_utc_z


class TaskFrequency:
    DIARIA = "Diaria"
    SEMANAL = "Semanal"
    MENSUAL = "Mensual"


TASK_FREQUENCIES = (TaskFrequency.DIARIA, TaskFrequency.SEMANAL, TaskFrequency.MENSUAL)


class ChecklistStatus:
    PENDIENTE = "Pendiente"
    EN_PROGRESO = "En Progreso"
    COMPLETADO = "Completado"


CHECKLIST_STATUSES = (ChecklistStatus.PENDIENTE, ChecklistStatus.EN_PROGRESO, ChecklistStatus.COMPLETADO)


class OperationalTaskTemplate(db.Model):
    """Recurring checklist item definition, assigned to a role."""
    __tablename__ = "operational_task_templates"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    frequency = db.Column(db.String(16), nullable=False, default=TaskFrequency.DIARIA)
    assigned_role = db.Column(db.String(32), nullable=False, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "frequency": self.frequency,
            "assigned_role": self.assigned_role,
        }


class OperationalTask(db.Model):
    """
    Checklist item instance for one unit and day.

    position is the board order; reordering rewrites it.
    """
    __tablename__ = "operational_tasks"
    __table_args__ = (
        db.Index("ix_operational_tasks_unit_role", "unit_id", "assigned_role"),
    )

    id = db.Column(db.String(64), primary_key=True)
    template_id = db.Column(db.String(64), db.ForeignKey("operational_task_templates.id"), nullable=True, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    date = db.Column(db.DateTime(timezone=True), nullable=False)
    status = db.Column(db.String(16), nullable=False, default=ChecklistStatus.PENDIENTE)
    assigned_role = db.Column(db.String(32), nullable=False)
    unit_id = db.Column(db.String(64), db.ForeignKey("business_units.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "template_id": self.template_id,
            "name": self.name,
            "description": self.description,
            "date": to_utc_z(self.date),
            "status": self.status,
            "assigned_role": self.assigned_role,
            "unit_id": self.unit_id,
            "position": self.position,
        }
