"""Unit tests for braindump.errors and braindump.outcome."""

import pytest

from braindump.errors import (
    AppendFailure,
    BrainDumpError,
    CreationFailure,
    DeliveryFailure,
    ProbeFailure,
    ResolutionError,
    ShareFailure,
)
from braindump.outcome import Outcome


class TestErrorTaxonomy:
    @pytest.mark.parametrize("error_cls", [
        ProbeFailure, CreationFailure, ShareFailure, DeliveryFailure, AppendFailure, ResolutionError,
    ])
    def test_all_errors_are_braindump_errors(self, error_cls):
        assert issubclass(error_cls, BrainDumpError)

    def test_slack_error_from_cause(self, make_slack_error):
        try:
            raise AppendFailure("edit failed") from make_slack_error("canvas_editing_failed")
        except AppendFailure as e:
            assert e.slack_error == "canvas_editing_failed"

    def test_slack_error_through_nested_cause(self, make_slack_error):
        """ResolutionError wrapping a CreationFailure still exposes the Slack code."""
        creation = CreationFailure("tier failed", tier="channel")
        creation.__cause__ = make_slack_error("missing_scope")

        error = ResolutionError("all tiers failed", original=creation)
        error.__cause__ = creation

        assert error.slack_error == "missing_scope"
        assert error.original is creation

    def test_slack_error_none_without_cause(self):
        assert ShareFailure("nope").slack_error is None

    def test_slack_error_none_for_plain_cause(self):
        error = ProbeFailure("gone")
        error.__cause__ = TimeoutError()

        assert error.slack_error is None

    def test_creation_failure_tier(self):
        assert CreationFailure("x", tier="file").tier == "file"
        assert CreationFailure("x").tier is None


class TestOutcome:
    def test_success(self):
        outcome = Outcome.success("F123")

        assert outcome.ok
        assert bool(outcome) is True
        assert outcome.value == "F123"
        assert outcome.advisories == []

    def test_success_with_advisories(self):
        share = ShareFailure("not shared")
        outcome = Outcome.success("F123", advisories=[share])

        assert outcome.ok
        assert outcome.advisories == [share]

    def test_failure(self):
        error = CreationFailure("nope", tier="channel")
        outcome = Outcome.failure(error)

        assert not outcome
        assert outcome.error is error
        assert outcome.value is None

    def test_repr(self):
        assert repr(Outcome.success("F1")) == "Outcome.success('F1', advisories=0)"
        assert repr(Outcome.failure(ValueError("x"))).startswith("Outcome.failure(ValueError")
