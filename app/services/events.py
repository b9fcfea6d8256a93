"""Deployment event stream shaping.

Vercel returns build/runtime events as a list of objects with ``type``,
``created`` and ``payload``. The error classifier here is a heuristic: an
event counts as an error when it was written to stderr or when its text
mentions "error" in any case. It is not a structured build-log parser.
"""

from typing import Any

from app.models.deployment import BuildError, LogEntry


def to_log_entries(events: list[dict[str, Any]]) -> list[LogEntry]:
    """Map events to log entries, keeping upstream order."""
    return [
        LogEntry(
            timestamp=event.get("created"),
            type=event.get("type"),
            payload=event.get("payload"),
        )
        for event in events
    ]


def _payload(event: dict[str, Any]) -> dict[str, Any]:
    payload = event.get("payload")
    return payload if isinstance(payload, dict) else {}


def is_error_event(event: dict[str, Any]) -> bool:
    if event.get("type") == "stderr":
        return True
    text = _payload(event).get("text")
    return isinstance(text, str) and "error" in text.lower()


def error_message(event: dict[str, Any]) -> str:
    payload = _payload(event)
    return str(payload.get("text") or payload.get("message") or "Unknown error")


def extract_errors(events: list[dict[str, Any]]) -> list[BuildError]:
    """Filter events down to likely errors."""
    return [
        BuildError(timestamp=event.get("created"), message=error_message(event))
        for event in events
        if is_error_event(event)
    ]
