import inspect
from typing import Any, Optional

from core.resources import get_dispatcher  # type: ignore
from core.topics import Topic  # type: ignore


def make_topic_tool(topic: Topic):
    """Build the tool function for one topic.

    The function takes a single optional string argument named after the
    topic's focus parameter, or no argument when the topic defines none.
    """
    parameter = topic.focus_parameter

    async def _tool(**kwargs: Any) -> str:
        focus = kwargs.get(parameter) if parameter else None
        return get_dispatcher().get_guidance(topic.name, focus)

    params = []
    if parameter:
        params.append(
            inspect.Parameter(
                parameter,
                inspect.Parameter.KEYWORD_ONLY,
                default=None,
                annotation=Optional[str],
            )
        )
    _tool.__signature__ = inspect.Signature(parameters=params, return_annotation=str)
    _tool.__annotations__ = {p.name: p.annotation for p in params}
    _tool.__annotations__["return"] = str
    _tool.__name__ = topic.tool_name
    _tool.__qualname__ = topic.tool_name
    _tool.__doc__ = topic.description
    return _tool


def _describe(topic: Topic) -> str:
    if topic.supports_focus and topic.focus_parameter:
        aliases = ", ".join(f"'{alias}'" for alias in topic.aliases)
        return f"{topic.description} Optional `{topic.focus_parameter}` narrows the result to: {aliases}."
    return topic.description


def get_tools() -> dict[str, Any]:
    return {
        topic.tool_name: {
            "func": make_topic_tool(topic),
            "title": topic.title,
            "description": _describe(topic),
        }
        for topic in get_dispatcher().topics
    }
