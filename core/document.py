"""Guidance document tree.

A guidance document is an ordered tree with string leaves:

    Leaf(str) | ListNode(tuple of Leaf) | Node(ordered sections)

Documents are built once from plain YAML data and never mutated. Projection
and serialization walk the tree recursively, so the same code handles every
topic regardless of its shape.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Tuple, Union


class DocumentError(ValueError):
    """Raised when plain data cannot be turned into a guidance document."""


@dataclass(frozen=True)
class Leaf:
    value: str

    def to_data(self) -> str:
        return self.value


@dataclass(frozen=True)
class ListNode:
    items: Tuple[Leaf, ...]

    def to_data(self) -> list:
        return [item.to_data() for item in self.items]


@dataclass(frozen=True)
class Node:
    sections: Tuple[Tuple[str, "Section"], ...]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __contains__(self, name: object) -> bool:
        return any(name == key for key, _ in self.sections)

    def __getitem__(self, name: str) -> "Section":
        for key, value in self.sections:
            if key == name:
                return value
        raise KeyError(name)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self)

    def project(self, names: Iterable[str]) -> "Node":
        """Return a new node holding only ``names``, in the order given.

        Raises KeyError if a name is not a section of this node.
        """
        return Node(tuple((name, self[name]) for name in names))

    def to_data(self) -> dict:
        return {name: value.to_data() for name, value in self.sections}


Section = Union[Leaf, ListNode, Node]


def build_document(data: Any, path: str = "document") -> Node:
    """Build a document from a mapping loaded from YAML or JSON.

    The top level must be a mapping. Nested values may be strings, lists of
    strings, or further mappings. Anything else raises DocumentError with the
    dotted path of the offending value.
    """
    if not isinstance(data, dict):
        raise DocumentError(f"{path}: expected a mapping, got {type(data).__name__}")
    return _build_node(data, path)


def _build_node(data: dict, path: str) -> Node:
    sections = []
    for key, value in data.items():
        if not isinstance(key, str):
            raise DocumentError(f"{path}: section names must be strings, got {key!r}")
        sections.append((key, _build_section(value, f"{path}.{key}")))
    return Node(tuple(sections))


def _build_section(value: Any, path: str) -> Section:
    if isinstance(value, str):
        return Leaf(value)
    if isinstance(value, list):
        items = []
        for index, item in enumerate(value):
            if not isinstance(item, str):
                raise DocumentError(
                    f"{path}[{index}]: list items must be strings, got {type(item).__name__}"
                )
            items.append(Leaf(item))
        return ListNode(tuple(items))
    if isinstance(value, dict):
        return _build_node(value, path)
    raise DocumentError(f"{path}: unsupported value of type {type(value).__name__}")
