from __future__ import annotations

import logging
from datetime import time
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import combine_local, now_local, parse_iso_date
from ..core.constants import DEFAULT_FIX_CLOCK_OUT
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from ..payroll.period import get_pay_period

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def json_errors(view):
        """Translate domain errors into the JSON envelope."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except NotFoundError as e:
                return jsonify({"success": False, "message": str(e)}), 404
            except ValidationError as e:
                logger.warning("Rejected %s: %s", request.path, e)
                return jsonify({"success": False, "message": str(e)}), 400
            except Exception:
                logger.exception("Unhandled error on %s", request.path)
                return jsonify({"success": False, "message": "System error"}), 500

        return wrapper

    def _reference_from_args():
        date_s = request.args.get("date")
        if not date_s:
            return None
        return combine_local(parse_iso_date(date_s), time(12, 0), container.tz)

    def _body() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/pay-periods", methods=["GET"], endpoint="api_pay_periods")
    @json_errors
    def api_pay_periods():
        reference = _reference_from_args()
        view_period = get_pay_period(reference or now_local(container.tz))
        return jsonify({"success": True, **container.payroll_report_service.period_navigation(view_period)})

    @app.route("/api/timesheets", methods=["GET"], endpoint="api_timesheets")
    @json_errors
    def api_timesheets():
        report = container.payroll_report_service.build_period_report(_reference_from_args())
        return jsonify(
            {
                "success": True,
                "period": {
                    "start": report.period.start.isoformat(),
                    "end": report.period.end.isoformat(),
                    "label": report.period.label,
                },
                "summary": report.summary,
                "rows": report.rows,
                "totals": report.totals,
            }
        )

    @app.route("/api/timesheets.csv", methods=["GET"], endpoint="api_timesheets_csv")
    @json_errors
    def api_timesheets_csv():
        report = container.payroll_report_service.build_period_report(_reference_from_args())
        filename = f"timesheet_{report.period.start:%Y%m%d}_{report.period.end:%Y%m%d}.csv"
        return app.response_class(
            container.payroll_report_service.write_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/timesheets/missing-punch", methods=["POST"], endpoint="api_fix_missing_punch")
    @json_errors
    def api_fix_missing_punch():
        data = _body()
        entry = container.timesheet_service.fix_missing_punch(
            employee_id=data.get("employee_id", ""),
            employee_name=data.get("employee_name", ""),
            shift_date=parse_iso_date(data.get("date", "")),
            clock_out=data.get("time") or DEFAULT_FIX_CLOCK_OUT,
            clock_in_id=data.get("clock_in_id") or None,
        )
        return jsonify({"success": True, "message": "Missing punch has been corrected.", "entry_id": entry.id}), 201

    @app.route("/api/timesheets/stop-clock", methods=["POST"], endpoint="api_stop_clock")
    @json_errors
    def api_stop_clock():
        data = _body()
        entry = container.timesheet_service.stop_clock(
            employee_id=data.get("employee_id", ""),
            employee_name=data.get("employee_name", ""),
        )
        return jsonify({"success": True, "message": f"{entry.employee_name} has been clocked out.", "entry_id": entry.id}), 201

    @app.route("/api/timesheets/shifts", methods=["POST"], endpoint="api_add_shift")
    @json_errors
    def api_add_shift():
        data = _body()
        clock_in, clock_out = container.timesheet_service.add_shift(
            employee_id=data.get("employee_id", ""),
            employee_name=data.get("employee_name"),
            shift_date=parse_iso_date(data.get("date", "")),
            start=data.get("start", ""),
            end=data.get("end"),
        )
        return jsonify(
            {
                "success": True,
                "message": "Shift created.",
                "clock_in_id": clock_in.id,
                "clock_out_id": clock_out.id if clock_out else None,
            }
        ), 201

    @app.route("/api/timesheets/shifts/<clock_in_id>", methods=["PUT"], endpoint="api_edit_shift")
    @json_errors
    def api_edit_shift(clock_in_id: str):
        data = _body()
        container.timesheet_service.edit_shift(
            clock_in_id=clock_in_id,
            clock_out_id=data.get("clock_out_id"),
            shift_date=parse_iso_date(data.get("date", "")),
            start=data.get("start", ""),
            end=data.get("end"),
        )
        return jsonify({"success": True, "message": "The shift times have been saved."})

    @app.route("/api/timesheets/shifts/<clock_in_id>", methods=["DELETE"], endpoint="api_delete_shift")
    @json_errors
    def api_delete_shift(clock_in_id: str):
        container.timesheet_service.delete_shift(
            clock_in_id=clock_in_id,
            clock_out_id=request.args.get("clock_out_id"),
        )
        return jsonify({"success": True, "message": "Shift deleted."})
