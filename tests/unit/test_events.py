"""Unit tests for deployment event shaping and error classification."""

from app.services.events import extract_errors, is_error_event, to_log_entries


class TestLogEntries:
    """Tests for to_log_entries."""

    def test_maps_fields_and_keeps_order(self):
        events = [
            {"created": 3, "type": "stdout", "payload": {"text": "c"}},
            {"created": 1, "type": "stdout", "payload": {"text": "a"}},
            {"created": 1, "type": "stdout", "payload": {"text": "a"}},
        ]

        entries = to_log_entries(events)

        assert [e.timestamp for e in entries] == [3, 1, 1]
        assert entries[0].type == "stdout"
        assert entries[0].payload == {"text": "c"}
        assert len(entries) == 3

    def test_empty_stream(self):
        assert to_log_entries([]) == []


class TestErrorClassification:
    """The classifier is a substring heuristic; these tests pin it down."""

    def test_stderr_event_is_error(self):
        events = [
            {"type": "stdout", "created": 1, "payload": {"text": "ok"}},
            {"type": "stderr", "created": 2, "payload": {"text": "boom"}},
        ]

        errors = extract_errors(events)

        assert len(errors) == 1
        assert errors[0].message == "boom"
        assert errors[0].timestamp == 2

    def test_text_mentioning_error_is_error_any_case(self):
        assert is_error_event({"type": "stdout", "payload": {"text": "Build ERROR in page"}})
        assert is_error_event({"type": "stdout", "payload": {"text": "TypeError: x"}})

    def test_false_positive_is_expected(self):
        """A line like "0 errors" still matches."""
        assert is_error_event({"type": "stdout", "payload": {"text": "Compiled with 0 errors"}})

    def test_message_only_payload_is_not_scanned(self):
        event = {"type": "stdout", "payload": {"message": "fatal error"}}
        assert not is_error_event(event)

    def test_missing_payload(self):
        assert not is_error_event({"type": "stdout"})
        assert is_error_event({"type": "stderr"})

    def test_message_fallbacks(self):
        events = [
            {"type": "stderr", "created": 1, "payload": {"message": "from message"}},
            {"type": "stderr", "created": 2, "payload": {}},
            {"type": "stderr", "created": 3},
        ]

        messages = [e.message for e in extract_errors(events)]

        assert messages == ["from message", "Unknown error", "Unknown error"]
