from __future__ import annotations

import logging
from datetime import date, datetime
from functools import wraps
from typing import Any, Optional

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import require_positive_int
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ReportRange, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, ValidationError
from ..reports.export import report_to_csv
from ..reports.model import ReportFilter
from ..users.model import Identity

logger = logging.getLogger(__name__)


def _ok(data: Any, message: Optional[str] = None, status: int = 200):
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def _fail(code: str, message: str, status: int):
    return jsonify({"success": False, "error": {"code": code, "message": message}}), status


def _identity_from_session() -> Identity:
    if "user_id" not in session:
        raise AuthenticationError()
    try:
        role = Role(session.get("role"))
        user_id = int(session["user_id"])
    except (TypeError, ValueError):
        raise AuthenticationError("Session identity is malformed") from None
    branch_id = session.get("branch_id")
    return Identity(
        user_id=user_id,
        role=role,
        department=session.get("department"),
        branch_id=int(branch_id) if branch_id not in (None, "") else None,
    )


def _opt_int(name: str) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer") from None


def _opt_date(name: str) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date") from None


def _location_payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form.to_dict()
    return data


def register(app: Flask, container: Container) -> None:
    def _now() -> datetime:
        return now_local(app.config.get("ATTENDANCE_TIMEZONE", "UTC"))

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.identity = _identity_from_session()
            return view(*args, **kwargs)

        return wrapper

    def elevated_required(view):
        """Admins and team leads only (live monitor, reports)."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            g.identity = _identity_from_session()
            if not g.identity.is_elevated:
                raise AuthorizationError()
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(DomainError)
    def handle_domain_error(err: DomainError):
        return _fail(err.code, err.message, err.http_status)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        # Let Flask render its own HTTP errors (404, 405, ...).
        if isinstance(err, HTTPException):
            return err
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _fail("SERVER_ERROR", "Internal server error", 500)

    @app.route("/api/attendance/office-locations", methods=["GET"], endpoint="attendance_office_locations")
    @login_required
    def office_locations():
        offices = container.attendance_service.list_offices()
        return _ok([o.to_dict() for o in offices], "Office locations retrieved successfully")

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    @login_required
    def status():
        view = container.attendance_service.get_status(g.identity.user_id, now=_now())
        return _ok(view.to_dict())

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def checkin():
        data = _location_payload()
        result = container.attendance_service.check_in(
            g.identity.user_id,
            data.get("latitude"),
            data.get("longitude"),
            data.get("accuracy"),
            now=_now(),
        )
        message = (
            "Successfully checked in from office location"
            if result.record.is_within_office
            else "Checked in remotely (outside office premises)"
        )
        return _ok(result.to_dict(), message)

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def checkout():
        data = _location_payload()
        result = container.attendance_service.check_out(
            g.identity.user_id,
            data.get("latitude"),
            data.get("longitude"),
            data.get("accuracy"),
            now=_now(),
        )
        if result.is_valid_location:
            message = f"Successfully checked out. Total hours: {result.total_hours}"
        else:
            message = f"Checked out from outside office premises. Total hours: {result.total_hours}"
        return _ok(result.to_dict(), message)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history():
        history = container.attendance_service.get_history(
            g.identity.user_id,
            start=_opt_date("start_date"),
            end=_opt_date("end_date"),
            page=require_positive_int(request.args.get("page"), "page", default=1),
            limit=require_positive_int(request.args.get("limit"), "limit", default=DEFAULT_HISTORY_LIMIT),
        )
        return _ok(history.to_dict())

    @app.route("/api/attendance/period", methods=["GET"], endpoint="attendance_period")
    @login_required
    def period():
        branch_id = _opt_int("branch")
        if branch_id is None:
            branch_id = g.identity.branch_id
        current = container.report_service.current_period(
            now=_now(),
            branch_id=branch_id,
            reference=_opt_date("date"),
        )
        return _ok({"branch_id": branch_id, **current.to_dict()})

    @app.route("/api/attendance/live", methods=["GET"], endpoint="attendance_live")
    @elevated_required
    def live():
        snapshot = container.monitoring_service.snapshot(now=_now(), branch_id=_opt_int("branch"))
        return _ok(snapshot.to_dict())

    def _report_filter() -> ReportFilter:
        start = _opt_date("start_date")
        end = _opt_date("end_date")
        raw_range = request.args.get("range")
        if not raw_range:
            raw_range = ReportRange.CUSTOM.value if (start or end) else ReportRange.TODAY.value
        try:
            rng = ReportRange(raw_range)
        except ValueError:
            raise ValidationError(f"Unknown range: {raw_range}") from None
        return ReportFilter(
            range=rng,
            date=_opt_date("date"),
            start=start,
            end=end,
            branch_id=_opt_int("branch"),
            user_id=_opt_int("employee"),
        )

    @app.route("/api/attendance/reports", methods=["GET"], endpoint="attendance_reports")
    @elevated_required
    def reports():
        report = container.report_service.build_report(_report_filter(), now=_now())
        return _ok(report.to_dict())

    @app.route("/api/attendance/reports.csv", methods=["GET"], endpoint="attendance_reports_csv")
    @elevated_required
    def reports_csv():
        report = container.report_service.build_report(_report_filter(), now=_now())
        csv_bytes = report_to_csv(report).encode("utf-8-sig")
        filename = f"attendance_report_{report.start.strftime('%Y%m%d')}_{report.end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
