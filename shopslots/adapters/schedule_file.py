"""
File-backed schedule provider.
"""

import logging
from datetime import date as date_type
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..config import ClockSafeLoader
from ..domain.exceptions import ScheduleSourceError
from ..domain.schedule import DaySchedule
from ..domain.weekday import parse_date

logger = logging.getLogger(__name__)


class FileScheduleProvider:
    """
    Provides staff schedules from a YAML (or JSON) file.

    Layout::

        staff:
          <staff id>:
            working_hours: [{day_of_week, start_time, end_time}, ...]
            breaks: [{day_of_week?, start_time, end_time, name?}, ...]
        appointments:
          <staff id>:
            <YYYY-MM-DD>: [{time, end_time}, ...]
        closures:
          <YYYY-MM-DD>: [{start_time, end_time, reason?}, ...]

    The file is read once, on construction. Individual malformed entries are
    left for the domain layer to skip.
    """

    def __init__(self, schedule_path: Path):
        """
        Load the schedule file.

        Args:
            schedule_path: Path to the schedule file

        Raises:
            ScheduleSourceError: If the file is missing, unreadable or not a mapping
        """
        self.schedule_path = Path(schedule_path)
        self._load_schedule_data()

    def _load_schedule_data(self):
        """Load schedule data from the file."""
        if not self.schedule_path.exists():
            raise ScheduleSourceError(f"Schedule file not found: {self.schedule_path}")

        try:
            with open(self.schedule_path, "r", encoding="utf-8") as f:
                data = yaml.load(f, Loader=ClockSafeLoader) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ScheduleSourceError(f"Could not read schedule file {self.schedule_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ScheduleSourceError("Schedule file must contain a mapping at the root level.")

        self.staff: Dict[str, Dict[str, Any]] = {
            str(name): entry or {} for name, entry in (data.get("staff") or {}).items()
        }
        self.appointments: Dict[str, Dict[str, List[Any]]] = {
            str(name): self._by_date(entries)
            for name, entries in (data.get("appointments") or {}).items()
        }
        self.closures: Dict[str, List[Any]] = self._by_date(data.get("closures"))

        logger.debug(
            "Loaded schedule for %d staff member(s) from %s",
            len(self.staff),
            self.schedule_path,
        )

    @staticmethod
    def _by_date(entries: Any) -> Dict[str, List[Any]]:
        # YAML turns unquoted dates into date objects; key everything by ISO string
        return {str(key): list(items or []) for key, items in (entries or {}).items()}

    def staff_ids(self) -> List[str]:
        """Return the configured staff identifiers."""
        return list(self.staff)

    async def get_schedule(self, staff_id: str, on_date: "str | date_type") -> DaySchedule:
        """
        Return the raw schedule of one staff member on one date.

        Working hours and breaks are returned for every weekday; narrowing
        them to ``on_date`` is the calculator's job.

        Raises:
            ScheduleSourceError: If the staff member is not in the file
        """
        if staff_id not in self.staff:
            raise ScheduleSourceError(
                f"Unknown staff member: '{staff_id}'. "
                f"Known: {', '.join(self.staff_ids()) or 'none'}"
            )

        day_key = parse_date(on_date).isoformat()
        entry = self.staff[staff_id]

        return DaySchedule.from_raw(
            working_hours=entry.get("working_hours"),
            breaks=entry.get("breaks"),
            appointments=self.appointments.get(staff_id, {}).get(day_key),
            closures=self.closures.get(day_key),
        )
