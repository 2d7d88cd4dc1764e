"""Topic definitions loaded from YAML files.

Each file under the topics directory describes one guidance topic: the tool
it is exposed as, the guidance document, and an optional `focus` block that
says whether the topic can be narrowed to a subset of its sections.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from core.document import DocumentError, Node, build_document

logger = logging.getLogger(__name__)

TOPIC_FILE_SUFFIXES = (".yaml", ".yml")


class TopicDefinitionError(ValueError):
    """A topic file is missing fields or is internally inconsistent."""


@dataclass(frozen=True, eq=False)
class Topic:
    name: str
    tool_name: str
    title: str
    description: str
    document: Node
    supports_focus: bool = False
    focus_parameter: Optional[str] = None
    aliases: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def sections_for(self, alias: str) -> Optional[Tuple[str, ...]]:
        """Return the sections mapped by an already-normalized alias, if any."""
        return self.aliases.get(alias)


def load_topics(topics_dir: str | Path) -> List[Topic]:
    """Load every topic file in `topics_dir`, sorted by file name.

    Raises TopicDefinitionError on the first invalid file or on duplicate
    topic or tool names.
    """
    topics_dir = Path(topics_dir)
    if not topics_dir.is_dir():
        raise TopicDefinitionError(f"Topics directory not found: {topics_dir}")

    topics: List[Topic] = []
    seen_names: Dict[str, Path] = {}
    seen_tools: Dict[str, Path] = {}
    for file_path in sorted(topics_dir.iterdir()):
        if not file_path.is_file() or file_path.suffix.lower() not in TOPIC_FILE_SUFFIXES:
            continue
        topic = load_topic_file(file_path)
        if topic.name in seen_names:
            raise TopicDefinitionError(
                f"{file_path.name}: topic '{topic.name}' already defined in {seen_names[topic.name].name}"
            )
        if topic.tool_name in seen_tools:
            raise TopicDefinitionError(
                f"{file_path.name}: tool '{topic.tool_name}' already defined in {seen_tools[topic.tool_name].name}"
            )
        seen_names[topic.name] = file_path
        seen_tools[topic.tool_name] = file_path
        topics.append(topic)
        logger.info(
            f"Loaded topic {topic.name} ({len(topic.document)} sections, focus={topic.supports_focus}) from {file_path.name}"
        )
    return topics


def load_topic_file(file_path: str | Path) -> Topic:
    file_path = Path(file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TopicDefinitionError(f"{file_path.name}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise TopicDefinitionError(f"{file_path.name}: expected a mapping at the top level")
    return parse_topic(raw, source=file_path.name)


def parse_topic(raw: Dict[str, Any], source: str = "<topic>") -> Topic:
    """Build a Topic from the plain data of one topic file."""
    for key in ("name", "tool", "description", "document"):
        if key not in raw:
            raise TopicDefinitionError(f"{source}: missing required field '{key}'")

    name = _require_str(raw, "name", source).strip().lower()
    tool_name = _require_str(raw, "tool", source).strip()
    description = _require_str(raw, "description", source).strip()
    title = raw.get("title") or tool_name
    if not isinstance(title, str):
        raise TopicDefinitionError(f"{source}: 'title' must be a string")

    try:
        document = build_document(raw["document"])
    except DocumentError as e:
        raise TopicDefinitionError(f"{source}: {e}") from e

    focus = raw.get("focus")
    if focus is None:
        return Topic(name=name, tool_name=tool_name, title=title, description=description, document=document)
    if not isinstance(focus, dict):
        raise TopicDefinitionError(f"{source}: 'focus' must be a mapping")

    parameter = focus.get("parameter")
    if not isinstance(parameter, str) or not parameter.isidentifier():
        raise TopicDefinitionError(f"{source}: focus.parameter must be a valid identifier")
    enabled = bool(focus.get("enabled", False))
    aliases = _parse_aliases(focus.get("aliases") or {}, document, source)
    if aliases and not enabled:
        raise TopicDefinitionError(f"{source}: focus.aliases given but focus.enabled is false")
    if enabled and not aliases:
        raise TopicDefinitionError(f"{source}: focus.enabled requires at least one alias")

    return Topic(
        name=name,
        tool_name=tool_name,
        title=title,
        description=description,
        document=document,
        supports_focus=enabled,
        focus_parameter=parameter,
        aliases=MappingProxyType(aliases),
    )


def _parse_aliases(raw: Any, document: Node, source: str) -> Dict[str, Tuple[str, ...]]:
    if not isinstance(raw, dict):
        raise TopicDefinitionError(f"{source}: focus.aliases must be a mapping")
    aliases: Dict[str, Tuple[str, ...]] = {}
    for alias, sections in raw.items():
        key = str(alias).strip().lower()
        if not key:
            raise TopicDefinitionError(f"{source}: empty focus alias")
        if key in aliases:
            raise TopicDefinitionError(f"{source}: duplicate focus alias '{key}'")
        if isinstance(sections, str):
            sections = [sections]
        if not isinstance(sections, list) or not sections:
            raise TopicDefinitionError(f"{source}: alias '{key}' must map to a non-empty list of sections")
        missing = [s for s in sections if s not in document]
        if missing:
            raise TopicDefinitionError(f"{source}: alias '{key}' references unknown sections {missing}")
        repeated = sorted({s for s in sections if sections.count(s) > 1})
        if repeated:
            raise TopicDefinitionError(f"{source}: alias '{key}' lists sections more than once {repeated}")
        aliases[key] = tuple(sections)
    return aliases


def _require_str(raw: Dict[str, Any], key: str, source: str) -> str:
    value = raw[key]
    if not isinstance(value, str) or not value.strip():
        raise TopicDefinitionError(f"{source}: '{key}' must be a non-empty string")
    return value
