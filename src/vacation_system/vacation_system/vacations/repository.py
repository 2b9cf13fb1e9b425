from __future__ import annotations

from typing import Any, Iterator, Protocol, Sequence

from .model import LeavePeriod


class ScheduleRepository(Protocol):
    """Schedule store: leave lists keyed by cycle id.

    Writes replace the whole list of one cycle; implementations must make
    ``put`` atomic per key so readers never see a half-written list.
    """

    def get(self, cycle_id: str) -> list[LeavePeriod]:
        """Return the leaves of a cycle, empty when nothing is stored."""

        raise NotImplementedError

    def put(self, cycle_id: str, leaves: Sequence[LeavePeriod]) -> None:
        raise NotImplementedError

    def delete(self, cycle_id: str) -> None:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> dict[str, list[LeavePeriod]]:
        """Return every stored cycle of an employee, whatever its start year."""

        raise NotImplementedError

    # Raw access, used only by the legacy migration.
    def iter_raw(self) -> Iterator[tuple[str, Any]]:
        raise NotImplementedError

    def put_raw(self, cycle_id: str, payload: Any) -> None:
        raise NotImplementedError
