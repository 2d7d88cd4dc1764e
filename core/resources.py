"""Module that holds the server's shared registry as module-globals.

Tools call `get_resource_map()` for the text resources and `get_dispatcher()`
for the guidance dispatcher. The server populates both during startup.
"""
from typing import Dict, Optional

from core.dispatcher import GuidanceDispatcher

INSTRUCTIONS_RESOURCE = "assistant_instructions"

resource_map: Dict[str, str] = {}
dispatcher: Optional[GuidanceDispatcher] = None


def set_resource_map(mapping: Dict[str, str]) -> None:
    global resource_map
    resource_map = mapping


def get_resource_map() -> Dict[str, str]:
    return resource_map


def set_dispatcher(value: Optional[GuidanceDispatcher]) -> None:
    global dispatcher
    dispatcher = value


def get_dispatcher() -> GuidanceDispatcher:
    if dispatcher is None:
        raise RuntimeError("Guidance dispatcher has not been initialised; call server.create_server() first")
    return dispatcher
