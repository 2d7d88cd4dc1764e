from typing import Any

from core.resources import INSTRUCTIONS_RESOURCE, get_dispatcher, get_resource_map  # type: ignore


def summarize_topics() -> str:
    """Markdown list of the guidance tools, built from the registered topics."""
    lines = ["# Kusto graph guidance tools", ""]
    for topic in get_dispatcher().topics:
        line = f"- **{topic.tool_name}**: {topic.description}"
        if topic.supports_focus:
            values = ", ".join(f"`{alias}`" for alias in topic.aliases)
            line += f" Pass `{topic.focus_parameter}` ({values}) to get part of the guidance."
        lines.append(line)
    return "\n".join(lines)


async def get_instructions() -> str:
    """Return the assistant instructions for the guidance tools.

    Uses the `assistant_instructions` resource when it was loaded, otherwise a
    summary generated from the registered topics.
    """
    content = get_resource_map().get(INSTRUCTIONS_RESOURCE)
    if content:
        return content
    return summarize_topics()


def get_tools() -> dict[str, Any]:
    return {
        "get_instructions": {
            "func": get_instructions,
            "title": "Read assistant instructions",
            "description": "Explains which graph guidance tool to use for which question and how to narrow graph-match guidance with a focus value."
        }
    }
