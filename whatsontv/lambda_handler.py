"""Serverless entry point: post today's schedule to Slack.

Deployed as an AWS Lambda function triggered on a schedule. Show options
come from the APP_CONFIG environment variable (JSON), Slack credentials
from SLACK_TOKEN / SLACK_CHANNEL.

Response format:
    {"statusCode": 200, "body": "{\"message\": ..., \"requestId\": ..., \"executionTime\": ...}"}
"""
from __future__ import annotations

import asyncio
import json
import time
from typing import Any

import structlog
from pydantic import ValidationError

from whatsontv import resolve_slack_target
from whatsontv.cli import send_to_slack
from whatsontv.config import AppConfig, get_settings, show_options_from_json
from whatsontv.utils.exceptions import ConfigurationError, WhatsOnTVError
from whatsontv.utils.logger import setup_logging

logger = structlog.get_logger(__name__)


def _response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {"statusCode": status_code, "body": json.dumps(body)}


def handler(event: dict[str, Any] | None, context: Any) -> dict[str, Any]:
    """Lambda handler.

    Args:
        event: Trigger event (unused beyond logging).
        context: Lambda context; `aws_request_id` and `function_name` are logged.

    Returns:
        API Gateway style response with statusCode 200 or 500.
    """
    request_id = getattr(context, "aws_request_id", None)
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        function_name=getattr(context, "function_name", None),
    )

    start = time.monotonic()
    try:
        try:
            settings = get_settings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment settings: {e}") from e

        setup_logging(log_level=settings.LOG_LEVEL, log_format="json")
        logger.info("lambda_started", event_keys=sorted((event or {}).keys()))

        options = show_options_from_json(settings.APP_CONFIG)
        target = resolve_slack_target(settings, AppConfig())
        asyncio.run(send_to_slack(settings, target, options))
    except WhatsOnTVError as e:
        logger.error("lambda_failed", error=e.message, error_type=type(e).__name__)
        return _response(500, {
            "error": e.message,
            "message": "Failed to process TV shows",
            "requestId": request_id,
        })
    except Exception as e:
        logger.exception("lambda_failed", error=str(e), error_type=type(e).__name__)
        return _response(500, {
            "error": str(e),
            "message": "Failed to process TV shows",
            "requestId": request_id,
        })

    execution_ms = round((time.monotonic() - start) * 1000)
    logger.info("lambda_completed", execution_ms=execution_ms)
    return _response(200, {
        "message": "TV shows successfully processed and sent to Slack",
        "requestId": request_id,
        "executionTime": execution_ms,
    })
