from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.web import admin_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/health", methods=["GET"], endpoint="admin_health")
    @admin_required
    def admin_health():
        try:
            return jsonify(container.health_service.check())
        except Exception as e:
            logger.exception("Database health check failed")
            return jsonify({"status": "Database test failed", "error": str(e)}), 500
