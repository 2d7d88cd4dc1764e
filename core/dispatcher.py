"""Guidance dispatcher: topic lookup, focus projection, and serialization."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from core.document import Node
from core.topics import Topic
from utils.response_utils import DEFAULT_INDENT, to_json_text

logger = logging.getLogger(__name__)


class UnknownTopicError(LookupError):
    """The requested topic is not registered."""

    def __init__(self, topic: str, known: Iterable[str] = ()):
        self.topic = topic
        self.known = tuple(known)
        message = f"Unknown guidance topic '{topic}'"
        if self.known:
            message += f". Available topics: {', '.join(self.known)}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


def normalize_topic(topic: str) -> str:
    return topic.strip().lower()


def normalize_focus(focus: Optional[str]) -> str:
    """Lower-case a focus value; None becomes the empty string.

    Surrounding whitespace is kept, so a padded value matches no alias.
    """
    if not focus:
        return ""
    return str(focus).lower()


class GuidanceDispatcher:
    """Serves the static guidance documents of a fixed set of topics.

    Topics are registered once at construction. Every call reads that shared
    data and builds only request-local output, so one dispatcher can serve
    any number of concurrent requests.
    """

    def __init__(self, topics: Iterable[Topic], indent: Optional[int] = DEFAULT_INDENT):
        self._topics: Dict[str, Topic] = {}
        for topic in topics:
            key = normalize_topic(topic.name)
            if key in self._topics:
                raise ValueError(f"Duplicate topic '{topic.name}'")
            self._topics[key] = topic
        self._indent = indent

    @property
    def topics(self) -> Tuple[Topic, ...]:
        return tuple(self._topics.values())

    @property
    def topic_names(self) -> Tuple[str, ...]:
        return tuple(self._topics)

    def get_topic(self, topic: str) -> Topic:
        found = self._topics.get(normalize_topic(topic)) if isinstance(topic, str) else None
        if found is None:
            raise UnknownTopicError(str(topic), self.topic_names)
        return found

    def resolve_sections(self, topic: Topic, focus: Optional[str]) -> Optional[Tuple[str, ...]]:
        """Return the sections a focus value selects, or None for the full document."""
        if not topic.supports_focus:
            return None
        alias = normalize_focus(focus)
        if not alias:
            return None
        sections = topic.sections_for(alias)
        if sections is None:
            logger.debug("Unrecognized focus %r for topic %s; returning full document", focus, topic.name)
        return sections

    def select(self, topic: str, focus: Optional[str] = None) -> Node:
        """Return the full document of `topic`, or its projection for `focus`."""
        found = self.get_topic(topic)
        sections = self.resolve_sections(found, focus)
        if sections is None:
            return found.document
        return found.document.project(sections)

    def get_guidance(self, topic: str, focus: Optional[str] = None) -> str:
        """Return the guidance for `topic` as indented JSON.

        Raises UnknownTopicError when `topic` is not registered. A focus value
        on a topic without filtering, or one that matches no alias, yields the
        full document.
        """
        return to_json_text(self.select(topic, focus).to_data(), indent=self._indent)
