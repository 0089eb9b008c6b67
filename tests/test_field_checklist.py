"""
Tests for wingit/field_checklist.py

Run with: pytest tests/test_field_checklist.py
"""

from unittest.mock import MagicMock, patch

import pytest

from wingit.field_checklist import stream_field_checklist
from wingit.models import TargetFilters, TargetResult, TargetRow


def make_settings(**overrides):
    """Return a minimal Settings-like object for testing."""
    settings = MagicMock()
    settings.anthropic_api_key = "test-key"
    settings.field_checklist_model = "claude-haiku-4-5"
    for k, v in overrides.items():
        setattr(settings, k, v)
    return settings


def text_event(text: str) -> MagicMock:
    event = MagicMock()
    event.type = "content_block_delta"
    delta = MagicMock()
    delta.type = "text_delta"
    delta.text = text
    event.delta = delta
    return event


def fake_stream(events: list) -> MagicMock:
    stream = MagicMock()
    stream.__iter__ = MagicMock(return_value=iter(events))
    stream.__enter__ = MagicMock(return_value=stream)
    stream.__exit__ = MagicMock(return_value=False)
    return stream


@pytest.fixture
def sample_result() -> TargetResult:
    return TargetResult(
        filters=TargetFilters(location="Santa Fe, NM", days_back=3),
        targets=[TargetRow(species_code="lewo", common_name="Lewis's Woodpecker",
                           sci_name="Melanerpes lewis", recent_frequency=0.2,
                           last_seen_nearby="2025-10-04")],
        excluded_because_already_seen=1,
    )


class TestStreamFieldChecklist:
    def test_missing_key_raises(self, sample_result):
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            list(stream_field_checklist(sample_result, make_settings(anthropic_api_key="")))

    @patch("wingit.field_checklist.anthropic.Anthropic")
    def test_yields_tokens_then_text(self, mock_cls, sample_result):
        other = MagicMock()
        other.type = "message_start"
        mock_client = MagicMock()
        mock_client.messages.stream.return_value = fake_stream(
            [other, text_event("HIGH\n"), text_event("- Lewis's Woodpecker")]
        )
        mock_cls.return_value = mock_client

        events = list(stream_field_checklist(sample_result, make_settings()))

        assert events == [
            ("token", "HIGH\n"),
            ("token", "- Lewis's Woodpecker"),
            ("text", "HIGH\n- Lewis's Woodpecker"),
        ]
        mock_cls.assert_called_once_with(api_key="test-key")

    @patch("wingit.field_checklist.anthropic.Anthropic")
    def test_prompt_and_tool_output_sent(self, mock_cls, sample_result):
        mock_client = MagicMock()
        mock_client.messages.stream.return_value = fake_stream([])
        mock_cls.return_value = mock_client

        events = list(stream_field_checklist(sample_result, make_settings()))

        kwargs = mock_client.messages.stream.call_args.kwargs
        assert kwargs["model"] == "claude-haiku-4-5"
        assert "Santa Fe, NM" in kwargs["system"]
        assert "last 3 days" in kwargs["system"]
        user_content = kwargs["messages"][0]["content"]
        assert '"speciesCode":"lewo"' in user_content
        assert '"excludedBecauseAlreadySeen":1' in user_content
        assert events == [("text", "")]
