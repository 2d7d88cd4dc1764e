"""Unit tests for the tool modules (guidance, topics, instructions)."""

from __future__ import annotations

import inspect
import json

import pytest

from core import resources
from core.dispatcher import UnknownTopicError
from tools import guidance, instructions, topics


class TestGuidanceTools:
    def test_one_tool_per_topic(self, installed_dispatcher) -> None:
        mapping = guidance.get_tools()
        assert set(mapping) == {t.tool_name for t in installed_dispatcher.topics}
        for meta in mapping.values():
            assert callable(meta["func"])
            assert meta["title"]
            assert meta["description"]

    def test_signatures_follow_focus_parameter(self, installed_dispatcher) -> None:
        mapping = guidance.get_tools()
        match_sig = inspect.signature(mapping["get_graph_match_guidance"]["func"])
        assert list(match_sig.parameters) == ["focusArea"]
        assert match_sig.parameters["focusArea"].default is None
        command_sig = inspect.signature(mapping["get_graph_command_guidance"]["func"])
        assert list(command_sig.parameters) == ["commandType"]
        schema_sig = inspect.signature(mapping["get_schema_simplification_guidance"]["func"])
        assert list(schema_sig.parameters) == []

    def test_function_metadata(self, installed_dispatcher) -> None:
        func = guidance.get_tools()["get_graph_match_guidance"]["func"]
        assert func.__name__ == "get_graph_match_guidance"
        assert "graph-match operator" in func.__doc__
        assert inspect.iscoroutinefunction(func)

    def test_match_description_lists_aliases(self, installed_dispatcher) -> None:
        description = guidance.get_tools()["get_graph_match_guidance"]["description"]
        assert "`focusArea`" in description
        assert "'variablelength'" in description

    @pytest.mark.asyncio
    async def test_match_tool_filters(self, installed_dispatcher) -> None:
        func = guidance.get_tools()["get_graph_match_guidance"]["func"]
        result = json.loads(await func(focusArea="Performance"))
        assert list(result) == ["PerformanceOptimization", "CommonMistakes"]

    @pytest.mark.asyncio
    async def test_match_tool_without_focus(self, installed_dispatcher) -> None:
        func = guidance.get_tools()["get_graph_match_guidance"]["func"]
        assert await func() == installed_dispatcher.get_guidance("match_guidance")

    @pytest.mark.asyncio
    async def test_best_practices_ignores_focus(self, installed_dispatcher) -> None:
        func = guidance.get_tools()["get_graph_model_best_practices"]["func"]
        assert await func(focusArea="labels") == installed_dispatcher.get_guidance("best_practices")

    @pytest.mark.asyncio
    async def test_command_guidance_ignores_command_type(self, installed_dispatcher) -> None:
        func = guidance.get_tools()["get_graph_command_guidance"]["func"]
        assert await func(commandType="create") == installed_dispatcher.get_guidance("command_guidance")

    @pytest.mark.asyncio
    async def test_schema_simplification(self, installed_dispatcher) -> None:
        func = guidance.get_tools()["get_schema_simplification_guidance"]["func"]
        result = json.loads(await func())
        assert result["IDTypeConsistency"]["Rule"] == "ALWAYS use string type for all IDs in your graph model"

    def test_requires_dispatcher(self) -> None:
        with pytest.raises(RuntimeError, match="not been initialised"):
            guidance.get_tools()


class TestTopicTools:
    @pytest.mark.asyncio
    async def test_list_guidance_topics(self, installed_dispatcher) -> None:
        listed = json.loads(await topics.list_guidance_topics())
        assert [t["topic"] for t in listed] == list(installed_dispatcher.topic_names)
        match = next(t for t in listed if t["topic"] == "match_guidance")
        assert match["tool"] == "get_graph_match_guidance"
        assert match["focus_parameter"] == "focusArea"
        assert "examples" in match["focus_aliases"]
        best = next(t for t in listed if t["topic"] == "best_practices")
        assert best["focus_parameter"] is None
        assert best["focus_aliases"] == []

    @pytest.mark.asyncio
    async def test_get_topic_guidance(self, installed_dispatcher) -> None:
        result = json.loads(await topics.get_topic_guidance("match_guidance", "examples"))
        assert list(result) == ["ExampleQueries"]

    @pytest.mark.asyncio
    async def test_get_topic_guidance_unknown_topic(self, installed_dispatcher) -> None:
        with pytest.raises(UnknownTopicError):
            await topics.get_topic_guidance("nonexistent")

    def test_get_tools(self) -> None:
        assert set(topics.get_tools()) == {"list_guidance_topics", "get_topic_guidance"}


class TestInstructionsTool:
    @pytest.mark.asyncio
    async def test_returns_resource_content(self) -> None:
        resources.set_resource_map({"assistant_instructions": "# Use the tools"})
        assert await instructions.get_instructions() == "# Use the tools"

    @pytest.mark.asyncio
    async def test_missing_resource_summarizes_topics(self, installed_dispatcher) -> None:
        text = await instructions.get_instructions()
        for topic in installed_dispatcher.topics:
            assert topic.tool_name in text
        assert "`focusArea`" in text
        assert "`labels`" in text

    @pytest.mark.asyncio
    async def test_missing_resource_without_dispatcher(self) -> None:
        with pytest.raises(RuntimeError, match="initialised"):
            await instructions.get_instructions()
