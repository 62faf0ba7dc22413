"""Tests for run summaries."""

import json
from unittest.mock import patch

from recipe_finder.events import DoneEvent, ResultEvent, TextEvent, ToolEvent, UsageEvent
from recipe_finder.session import RunSummary


def _summarize(*events) -> RunSummary:
    summary = RunSummary()
    for event in events:
        summary.add(event)
    return summary


class TestRunSummary:
    """Test event accumulation."""

    def test_usage_is_summed(self):
        summary = _summarize(UsageEvent(input=10, output=2), UsageEvent(input=5, output=3))
        assert (summary.input_tokens, summary.output_tokens, summary.total_tokens) == (15, 5, 20)

    def test_tools_in_order(self):
        summary = _summarize(ToolEvent(name="navigate_page"), ToolEvent(name="fill"), ToolEvent(name="navigate_page"))
        assert summary.tools == ["navigate_page", "fill", "navigate_page"]

    def test_final_text_prefers_result(self):
        summary = _summarize(TextEvent(text="Searching..."), ResultEvent(text="Lasagna"))
        assert summary.final_text == "Lasagna"

    def test_final_text_falls_back_to_text(self):
        summary = _summarize(TextEvent(text="one"), TextEvent(text="two"))
        assert summary.final_text == "one\n\ntwo"

    def test_done_flag(self):
        assert not _summarize(TextEvent(text="x")).done
        assert _summarize(DoneEvent()).done

    def test_metadata(self):
        summary = _summarize(ToolEvent(name="click"), UsageEvent(input=1, output=2), DoneEvent())
        assert summary.metadata() == {
            "tools": ["click"],
            "tool_calls": 1,
            "input_tokens": 1,
            "output_tokens": 2,
            "completed": True,
        }


class TestSave:
    """Test writing a run to the results directory."""

    def test_writes_answer_and_record(self, tmp_path):
        summary = _summarize(ToolEvent(name="navigate_page"), UsageEvent(input=10, output=5), ResultEvent(text="**Lasagna**"), DoneEvent())
        path = summary.save("Easy Vegetarian Lasagna!", tmp_path)

        assert path.parent == tmp_path
        assert path.name.endswith("-easy-vegetarian-lasagna.md")
        assert path.read_text(encoding="utf-8") == "**Lasagna**"

        record = json.loads(path.with_suffix(".json").read_text())
        assert record["prompt"] == "Easy Vegetarian Lasagna!"
        assert record["answer_file"] == path.name
        assert record["tools"] == ["navigate_page"]
        assert (record["input_tokens"], record["output_tokens"]) == (10, 5)
        assert record["completed"] is True

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "a" / "b"
        assert _summarize(TextEvent(text="x")).save("soup", target).exists()

    def test_prompt_without_words(self, tmp_path):
        path = _summarize(TextEvent(text="x")).save("???", tmp_path)
        assert path.name.endswith("-recipes.md")

    def test_slug_keeps_first_words(self, tmp_path):
        path = _summarize(TextEvent(text="x")).save("one two three four five six seven eight", tmp_path)
        assert path.name.endswith("-one-two-three-four-five-six.md")

    def test_same_second_gets_suffix(self, tmp_path):
        with patch("recipe_finder.session.datetime") as mock_dt:
            mock_dt.now.return_value.strftime.return_value = "20260101-000000"
            mock_dt.now.return_value.isoformat.return_value = "2026-01-01T00:00:00+00:00"
            first = _summarize(ResultEvent(text="a")).save("pie", tmp_path)
            second = _summarize(ResultEvent(text="b")).save("pie", tmp_path)

        assert first.name == "20260101-000000-pie.md"
        assert second.name == "20260101-000000-pie-1.md"
        assert first.read_text() == "a"
        assert second.read_text() == "b"
        assert json.loads(second.with_suffix(".json").read_text())["answer_file"] == second.name
