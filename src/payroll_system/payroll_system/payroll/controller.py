from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import InvalidPeriod, UpstreamUnavailable

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    def payroll_list():
        try:
            rows = container.payroll_query_service.list_records(
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        except InvalidPeriod as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except UpstreamUnavailable as e:
            return jsonify({"success": False, "error": str(e)}), 503
        return jsonify({"success": True, "data": [r.to_dict() for r in rows]})

    @app.route("/api/payroll/summary", methods=["GET"], endpoint="payroll_summary")
    def payroll_summary():
        try:
            summaries = container.payroll_query_service.period_summaries(
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        except InvalidPeriod as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except UpstreamUnavailable as e:
            return jsonify({"success": False, "error": str(e)}), 503
        return jsonify({"success": True, "data": [s.to_dict() for s in summaries]})

    @app.route("/api/payroll/department-summary", methods=["GET"], endpoint="payroll_department_summary")
    def payroll_department_summary():
        try:
            summaries = container.payroll_query_service.department_summaries(
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        except InvalidPeriod as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except UpstreamUnavailable as e:
            return jsonify({"success": False, "error": str(e)}), 503
        return jsonify({"success": True, "data": [s.to_dict() for s in summaries]})

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def payroll_generate():
        payload = request.get_json(silent=True)
        if payload is None:
            payload = request.form
        elif not isinstance(payload, dict):
            return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400
        try:
            result = container.payroll_generator.generate_for_period(payload.get("month"), payload.get("year"))
        except InvalidPeriod as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except UpstreamUnavailable as e:
            logger.error("Payroll generation aborted: %s", e, extra={"action": "payroll_generate_aborted"})
            return jsonify({"success": False, "error": str(e)}), 503
        return jsonify({"success": True, "message": "Payroll generated successfully", "data": result.to_dict()})

    @app.route("/api/payroll/backfill", methods=["POST"], endpoint="payroll_backfill")
    def payroll_backfill():
        try:
            result = container.payroll_generator.generate_for_all_historical_periods()
        except UpstreamUnavailable as e:
            logger.error("Payroll backfill aborted: %s", e, extra={"action": "payroll_backfill_aborted"})
            return jsonify({"success": False, "error": str(e)}), 503
        return jsonify({"success": True, "data": result.to_dict()})
