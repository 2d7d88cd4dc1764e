from typing import Any

from core.resources import get_dispatcher  # type: ignore
from utils import to_json_text  # type: ignore


async def list_guidance_topics() -> str:
    """Return the registered guidance topics, their tools and focus aliases as JSON."""
    topics = [
        {
            "topic": topic.name,
            "tool": topic.tool_name,
            "title": topic.title,
            "description": topic.description,
            "focus_parameter": topic.focus_parameter if topic.supports_focus else None,
            "focus_aliases": list(topic.aliases),
        }
        for topic in get_dispatcher().topics
    ]
    return to_json_text(topics)


async def get_topic_guidance(topic: str, focus: str | None = None) -> str:
    """Return the guidance document of `topic`, narrowed by `focus` where the topic supports it.

    An unknown topic raises UnknownTopicError, which the host reports as a tool error.
    """
    return get_dispatcher().get_guidance(topic, focus)


def get_tools() -> dict[str, Any]:
    return {
        "list_guidance_topics": {
            "func": list_guidance_topics,
            "title": "List guidance topics",
            "description": "Return the available graph guidance topics with their tool names and accepted focus values as JSON.",
        },
        "get_topic_guidance": {
            "func": get_topic_guidance,
            "title": "Get guidance by topic",
            "description": "Return the guidance document for a topic name from list_guidance_topics. An optional focus value narrows topics that support it; unknown focus values return the full document.",
        },
    }
