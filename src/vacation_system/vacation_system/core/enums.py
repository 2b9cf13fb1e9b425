from __future__ import annotations

from enum import Enum


class EmploymentStatus(str, Enum):
    """Employment status as stored by the employee registry."""

    ACTIVE = "Ativo"
    TERMINATED = "Desligado"


class EmploymentCategory(str, Enum):
    """Employment category (regime) as stored by the employee registry."""

    PERMANENT = "Efetivo"
    COMMISSIONED = "Comissionado"
    CONTRACTED = "Contratado"
    ELECTED_OFFICIAL = "Vereador"


class CycleStatus(str, Enum):
    """Lifecycle state of an acquisition cycle, derived on every read."""

    ACQUIRED = "ACQUIRED"
    OVERDUE = "OVERDUE"
    IN_PROGRESS = "IN_PROGRESS"
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"


class LeaveMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class RejectionReason(str, Enum):
    """Why a leave commit was refused."""

    OVERLAP = "OVERLAP"
    BALANCE_EXCEEDED = "BALANCE_EXCEEDED"


class CycleSortKey(str, Enum):
    NAME = "name"
    BALANCE = "balance"
    PERIOD = "period"
    STATUS = "status"
