from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import format_minutes
from ..core.enums import ShiftStatus
from ..timesheets.service import TimesheetService
from .calculator.base import PayrollCalculator
from .calculator.hourly_calculator import HourlyRateCalculator
from .period import PayPeriod, next_pay_period, previous_pay_period

SHIFT_CSV_FIELDS = [
    "work_date",
    "employee_id",
    "employee_name",
    "clock_in",
    "clock_out",
    "status",
    "worked_hours",
    "duration_minutes",
]


@dataclass(frozen=True)
class ReportData:
    period: PayPeriod
    rows: list[dict]
    summary: list[dict]
    totals: dict


class PayrollReportService:
    def __init__(
        self,
        timesheets: TimesheetService,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._timesheets = timesheets
        self._calculator = calculator or HourlyRateCalculator()

    def build_period_report(self, reference: datetime | None = None, *, now: datetime | None = None) -> ReportData:
        view = self._timesheets.period_view(reference, now=now)

        out_rows: list[dict] = []
        summary: list[dict] = []
        total_cost = Decimal("0.00")
        total_missing = 0

        for s in view.summaries:
            cost = self._calculator.estimate_cost(s)
            total_cost += cost
            total_missing += s.missing_punches

            for shift in s.shifts:
                out_rows.append(
                    {
                        "work_date": shift.date.strftime("%Y-%m-%d"),
                        "employee_id": s.employee_id,
                        "employee_name": s.employee_name,
                        "clock_in_id": shift.clock_in_id,
                        "clock_out_id": shift.clock_out_id,
                        "clock_in": shift.clock_in.strftime("%H:%M"),
                        "clock_out": shift.clock_out.strftime("%H:%M") if shift.clock_out else "-",
                        "status": shift.status.value,
                        "worked_hours": format_minutes(shift.duration_minutes) if shift.duration_minutes > 0 else "-",
                        "duration_minutes": shift.duration_minutes,
                    }
                )

            summary.append(
                {
                    "employee_id": s.employee_id,
                    "employee_name": s.employee_name,
                    "total_minutes": s.total_minutes,
                    "total_hours": s.total_hours,
                    "worked_hours": format_minutes(s.total_minutes),
                    "shift_count": sum(1 for x in s.shifts if x.status == ShiftStatus.COMPLETED),
                    "missing_punches": s.missing_punches,
                    "is_active": s.is_active,
                    "estimated_cost": str(cost),
                }
            )

        summary.sort(key=lambda x: x["total_minutes"], reverse=True)
        out_rows.sort(key=lambda x: (x["work_date"], x["clock_in"]), reverse=True)

        return ReportData(
            period=view.period,
            rows=out_rows,
            summary=summary,
            totals={
                "total_hours": view.total_hours,
                "estimated_cost": str(total_cost),
                "active_employees": view.active_employees,
                "missing_punches": total_missing,
                "employees": len(summary),
            },
        )

    @staticmethod
    def period_navigation(period: PayPeriod) -> dict:
        def as_dict(p: PayPeriod) -> dict:
            return {"start": p.start.isoformat(), "end": p.end.isoformat(), "label": p.label}

        return {
            "current": as_dict(period),
            "previous": as_dict(previous_pay_period(period)),
            "next": as_dict(next_pay_period(period)),
        }

    @staticmethod
    def write_csv(report: ReportData) -> bytes:
        """Render shift rows as CSV (UTF-8 with BOM so Excel opens it cleanly)."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=SHIFT_CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in report.rows:
            writer.writerow(row)
        return out.getvalue().encode("utf-8-sig")
