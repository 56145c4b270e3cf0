"""Tests for decoding server payloads into SubmissionResponse."""

import pytest

from ajaxsubmit_core.exceptions import TransportError
from ajaxsubmit_core.response import SubmissionResponse


class TestFromPayload:

    def test_full_payload(self):
        res = SubmissionResponse.from_payload(
            {"success": True, "message": "Saved", "invalid": [], "id": 7}
        )

        assert res.success is True
        assert res.message == "Saved"
        assert res.invalid == []
        assert res["id"] == 7
        assert res.get("missing", "x") == "x"

    def test_missing_success_is_falsy(self):
        res = SubmissionResponse.from_payload({"message": "Nope"})

        assert res.success is False

    @pytest.mark.parametrize(
        "value,expected",
        [(1, True), ("yes", True), ([], True), ({}, True), (0, False), ("", False), (None, False), (float("nan"), False)],
    )
    def test_success_truthiness(self, value, expected):
        assert SubmissionResponse.from_payload({"success": value}).success is expected

    def test_empty_message_is_absent(self):
        assert SubmissionResponse.from_payload({"success": True, "message": ""}).message is None

    def test_scalar_message_rendered(self):
        assert SubmissionResponse.from_payload({"success": True, "message": 404}).message == "404"
        assert SubmissionResponse.from_payload({"success": True, "message": True}).message == "True"

    @pytest.mark.parametrize("value", [False, 0, 0.0, None])
    def test_falsy_message_is_absent(self, value):
        assert SubmissionResponse.from_payload({"success": False, "message": value}).message is None

    def test_structured_message_ignored(self):
        assert SubmissionResponse.from_payload({"success": True, "message": {"a": 1}}).message is None

    def test_missing_invalid_is_empty(self):
        assert SubmissionResponse.from_payload({"success": False}).invalid == []

    def test_single_invalid_name(self):
        assert SubmissionResponse.from_payload({"success": False, "invalid": "email"}).invalid == ["email"]

    def test_invalid_entries_filtered(self):
        res = SubmissionResponse.from_payload({"success": False, "invalid": ["email", 3, None, "name"]})

        assert res.invalid == ["email", "name"]

    def test_invalid_of_unexpected_type(self):
        assert SubmissionResponse.from_payload({"success": False, "invalid": {"email": 1}}).invalid == []

    @pytest.mark.parametrize("payload", [None, [], ["success"], "ok", 1, True])
    def test_non_object_payload_is_parse_error(self, payload):
        with pytest.raises(TransportError) as exc_info:
            SubmissionResponse.from_payload(payload)

        assert exc_info.value.status == "parsererror"
