"""Flask application exposing the task tagger to the browser UI."""

import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, g, jsonify, request

from src.config import Settings
from src.credentials import AuthError
from src.exceptions import TaggerError
from src.identity import IdentityVerifier
from src.tagging import ALL_TAGS
from src.tasks import FetchStatus, TaskTaggingService, ValidationError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def _error(message: str, status: int, **extra):
    return jsonify({"error": message, **extra}), status


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[TaskTaggingService] = None,
    verifier: Optional[IdentityVerifier] = None,
) -> Flask:
    """Build the Flask app.

    Args:
        settings: Runtime settings. Read from the environment if omitted.
        service: Tagging service (for testing). Built from settings if omitted.
        verifier: Identity verifier (for testing). Built from settings if omitted.
    """
    settings = settings or Settings.from_env()
    service = service or TaskTaggingService.from_settings(settings)
    verifier = verifier or IdentityVerifier.from_settings(settings)

    app = Flask(__name__)
    app.config["TAGGER_SETTINGS"] = settings

    @app.after_request
    def add_cors_headers(response):
        response.headers.update(CORS_HEADERS)
        return response

    @app.errorhandler(TaggerError)
    def handle_tagger_error(error: TaggerError):
        if error.status_code >= 500:
            logger.error("Request failed: %s", error)
        return _error(str(error), error.status_code)

    def require_identity():
        g.principal = verifier.verify_header(request.headers.get("Authorization"))
        return g.principal

    @app.route("/api/tasks", methods=["GET"])
    def list_tasks():
        logger.info("API: fetching tasks")
        outcome = service.load_tasks()
        if outcome.status == FetchStatus.FAILED:
            raise outcome.error
        if outcome.is_degraded:
            logger.warning("API: serving fallback tasks: %s", outcome.reason)
        return jsonify(
            {
                "tasks": [task.to_dict() for task in outcome.tasks],
                "source": outcome.source,
                "reason": outcome.reason,
            }
        )

    @app.route("/api/tasks/<task_id>/tags", methods=["POST"])
    def update_task_tags(task_id: str):
        principal = require_identity()
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or payload.get("tags") is None:
            raise ValidationError("Missing taskId or tags")
        tags = payload["tags"]
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValidationError("Tags must be provided as a list of strings")

        logger.info("API: %s tagging task %s", principal.subject, task_id)
        updated = service.save_tags(task_id, tags)
        return jsonify(
            {
                "success": True,
                "message": "Task updated successfully",
                "task": updated.to_dict(),
            }
        )

    @app.route("/api/tags", methods=["GET"])
    def list_tags():
        return jsonify({"tags": list(ALL_TAGS)})

    @app.route("/api/health", methods=["GET"])
    def health():
        configured = service.remote_configured
        return jsonify(
            {
                "status": "OK",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "environment": {
                    "hasCredentials": configured,
                    "strategies": service.configured_strategies,
                    "identityConfigured": verifier.configured,
                    "appEnv": settings.app_env,
                },
                "message": (
                    "Task service credentials are configured"
                    if configured
                    else "Task service credentials are NOT configured"
                ),
            }
        )

    @app.route("/api/auth-test", methods=["GET"])
    def auth_test():
        try:
            principal = require_identity()
        except AuthError as e:
            return _error(str(e), 401, identityConfigured=verifier.configured)
        return jsonify(
            {
                "success": True,
                "message": "Authentication successful",
                "subject": principal.subject,
                "sessionId": principal.session_id,
            }
        )

    return app
