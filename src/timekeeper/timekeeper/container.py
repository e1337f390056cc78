from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from decimal import Decimal
from typing import Optional

from .common.datetime_utils import get_zone
from .core.constants import DEFAULT_HOURLY_RATE, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .payroll.calculator.hourly_calculator import HourlyRateCalculator
from .payroll.service import PayrollReportService
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.repository import TimeEntryRepository
from .time_entries.service import ClockService
from .timesheets.service import TimesheetService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    tz: tzinfo

    time_entries_repo: TimeEntryRepository

    clock_service: ClockService
    timesheet_service: TimesheetService
    payroll_report_service: PayrollReportService


def build_container(
    *,
    db_config: dict,
    timezone_name: str = DEFAULT_TIMEZONE,
    hourly_rate: Decimal | str | float = DEFAULT_HOURLY_RATE,
    time_entries_repo: Optional[TimeEntryRepository] = None,
) -> Container:
    """Wire repositories and services.

    Passing ``time_entries_repo`` skips the MySQL connection entirely (tests,
    scripts working on an exported snapshot).
    """

    tz = get_zone(timezone_name)

    conn = None
    if time_entries_repo is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        time_entries_repo = MySQLTimeEntryRepository(conn)

    clock_service = ClockService(time_entries_repo, tz=tz)
    timesheet_service = TimesheetService(time_entries_repo, tz=tz)
    payroll_report_service = PayrollReportService(
        timesheet_service,
        calculator=HourlyRateCalculator(hourly_rate),
    )

    return Container(
        conn=conn,
        tz=tz,
        time_entries_repo=time_entries_repo,
        clock_service=clock_service,
        timesheet_service=timesheet_service,
        payroll_report_service=payroll_report_service,
    )
