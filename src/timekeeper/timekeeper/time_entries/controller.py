from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.enums import PunchType
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punch", methods=["POST"], endpoint="api_punch")
    def api_punch():
        """Kiosk punch: CLOCK_IN/CLOCK_OUT is inferred from the employee's last punch."""
        data = request.get_json(silent=True) or {}
        try:
            entry = container.clock_service.punch(
                data.get("employee_id", ""),
                data.get("employee_name", ""),
                data.get("method", ""),
                snapshot_url=data.get("snapshot_url"),
                punch_type=data.get("type") or None,
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Punch failed")
            return jsonify({"success": False, "message": "System error while recording punch"}), 500

        return jsonify(
            {
                "success": True,
                "message": f"{entry.punch_type.value} recorded for {entry.employee_name}",
                "entry": {
                    "id": entry.id,
                    "employee_id": entry.employee_id,
                    "type": entry.punch_type.value,
                    "timestamp": entry.timestamp.isoformat(),
                    "method": entry.method.value,
                },
            }
        ), 201

    @app.route("/api/employees/<employee_id>/status", methods=["GET"], endpoint="api_employee_status")
    def api_employee_status(employee_id: str):
        try:
            status = container.clock_service.current_status(employee_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify(
            {
                "success": True,
                "employee_id": employee_id,
                "clocked_in": status == PunchType.CLOCK_IN,
                "last_punch": status.value if status else None,
            }
        )
