"""Flask REST API for StyleGuard.

Endpoints:
  GET  /api/v1/status  — Service health check
  GET  /api/v1/rules   — List house-style rules
  POST /api/v1/check   — Check a settings document
  POST /api/v1/fix     — Fix a settings document and return the result
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from styleguard import __version__
from styleguard.check.checker import ComplianceChecker
from styleguard.errors import SettingsFormatError
from styleguard.report.generator import ReportGenerator
from styleguard.settings.provider import InMemorySettingsProvider
from styleguard.settings.store import readonly_from_data, settings_from_data, settings_to_data

logger = logging.getLogger(__name__)


def create_app(checker: ComplianceChecker | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.json.sort_keys = False

    _checker = checker or ComplianceChecker()
    _reporter = ReportGenerator()

    def _provider_from_request():
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("settings"), dict):
            return None, (jsonify({"error": "Missing 'settings' mapping in request body"}), 400)
        readonly = data.get("readonly") or []
        if not isinstance(readonly, list):
            return None, (jsonify({"error": "'readonly' must be a list of setting names"}), 400)
        try:
            values = settings_from_data(data["settings"])
            readonly = readonly_from_data(readonly)
        except SettingsFormatError as e:
            return None, (jsonify({"error": str(e)}), 400)
        return InMemorySettingsProvider(values, readonly=readonly), None

    @app.route("/api/v1/status", methods=["GET"])
    def status():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "version": __version__,
            "profile": _checker.profile.name,
            "rules_loaded": _checker.engine.rule_count,
        })

    @app.route("/api/v1/rules", methods=["GET"])
    def list_rules():
        rules = _checker.engine.rules
        return jsonify({
            "count": len(rules),
            "rules": [
                {
                    "name": r.name,
                    "title": r.title,
                    "settings": list(r.settings),
                }
                for r in rules
            ],
        })

    @app.route("/api/v1/check", methods=["POST"])
    def check_settings():
        """Check a settings document against the house style."""
        provider, error = _provider_from_request()
        if error:
            return error
        report = _checker.check(provider, source="api")
        return jsonify(_reporter.compliance_data(report))

    @app.route("/api/v1/fix", methods=["POST"])
    def fix_settings():
        """Apply the house style and return the corrected settings."""
        provider, error = _provider_from_request()
        if error:
            return error
        result = _checker.fix(provider)
        logger.info("API fix applied to %d rules", len(result.applied))
        return jsonify({
            "fix": _reporter.fix_data(result),
            "settings": settings_to_data(provider.as_dict()),
        })

    return app
