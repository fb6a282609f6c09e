"""Unit tests for braindump.canvas.appender module.

Tests IdeaAppender functionality including:
- Fragment formatting
- The canvases.edit call
- No deduplication
- Failures reported as False instead of raised
"""

import pytest

from braindump.config import IdeaRecord


class TestFormatIdea:
    """Tests for rendering an IdeaRecord as markdown."""

    def test_fragment_contains_author_and_channel(self, appender, sample_record):
        """Fragment should mention the author and channel in Slack link syntax."""
        fragment = appender.format_idea(sample_record)

        assert "From:** <@U1> in <#C1>" in fragment
        assert "Idea:** Ship it" in fragment

    def test_fragment_shape(self, appender, sample_record):
        """Fragment should be heading, from line, idea line and a separator."""
        fragment = appender.format_idea(sample_record)

        assert fragment == (
            "### 💡 Oct 19, 2026, 02:05 PM\n"
            "**From:** <@U1> in <#C1>\n"
            "**Idea:** Ship it\n\n"
            "---\n\n"
        )

    def test_multiline_text_preserved(self, appender):
        """Idea text should be inserted as-is."""
        record = IdeaRecord(text="line one\nline two", author="U1", source_channel="C1")

        fragment = appender.format_idea(record)

        assert "**Idea:** line one\nline two\n" in fragment


class TestAppend:
    """Tests for IdeaAppender.append."""

    @pytest.mark.asyncio
    async def test_append_inserts_at_end(self, appender, sample_record, mock_slack_client):
        """append() should send an insert_at_end change to the resolved canvas."""
        result = await appender.append("C1", sample_record)

        assert result is True
        mock_slack_client.canvases_edit.assert_awaited_once()
        kwargs = mock_slack_client.canvases_edit.call_args.kwargs
        assert kwargs["canvas_id"] == "F123CANVAS"
        change = kwargs["changes"][0]
        assert change["operation"] == "insert_at_end"
        assert change["document_content"]["type"] == "markdown"
        assert "Idea:** Ship it" in change["document_content"]["markdown"]

    @pytest.mark.asyncio
    async def test_append_resolves_for_given_channel(self, appender, sample_record, mock_slack_client):
        """The canvas should be resolved for the channel passed to append()."""
        await appender.append("C999OTHER", sample_record)

        kwargs = mock_slack_client.conversations_canvases_create.call_args.kwargs
        assert kwargs["channel_id"] == "C999OTHER"

    @pytest.mark.asyncio
    async def test_append_twice_appends_twice(self, appender, sample_record, mock_slack_client):
        """Identical appends should produce two separate fragments."""
        assert await appender.append("C1", sample_record) is True
        assert await appender.append("C1", sample_record) is True

        assert mock_slack_client.canvases_edit.await_count == 2
        first = mock_slack_client.canvases_edit.call_args_list[0].kwargs["changes"]
        second = mock_slack_client.canvases_edit.call_args_list[1].kwargs["changes"]
        assert first == second
        # The canvas is created once and reused
        mock_slack_client.conversations_canvases_create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_edit_failure_returns_false(self, appender, sample_record, mock_slack_client, make_slack_error):
        """A rejected canvas edit should return False, not raise."""
        mock_slack_client.canvases_edit.side_effect = make_slack_error("canvas_editing_failed")

        result = await appender.append("C1", sample_record)

        assert result is False

    @pytest.mark.asyncio
    async def test_resolution_failure_returns_false(
        self, appender, sample_record, mock_slack_client, make_slack_error
    ):
        """If no canvas can be resolved, append() should return False without editing."""
        mock_slack_client.conversations_canvases_create.side_effect = make_slack_error("missing_scope")
        mock_slack_client.canvases_create.side_effect = make_slack_error("not_allowed")
        mock_slack_client.files_upload_v2.side_effect = make_slack_error("invalid_auth")

        result = await appender.append("C1", sample_record)

        assert result is False
        mock_slack_client.canvases_edit.assert_not_called()

    @pytest.mark.asyncio
    async def test_edit_failure_not_retried(self, appender, sample_record, mock_slack_client, make_slack_error):
        """A failed edit should be attempted exactly once."""
        mock_slack_client.canvases_edit.side_effect = make_slack_error("canvas_editing_failed")

        await appender.append("C1", sample_record)

        assert mock_slack_client.canvases_edit.await_count == 1
