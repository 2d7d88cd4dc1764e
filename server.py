from core.config import get_config
from core.dispatcher import GuidanceDispatcher
from core.logging_config import get_logger, setup_logging
from core.resources import INSTRUCTIONS_RESOURCE, set_dispatcher, set_resource_map
from core.topics import load_topics
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.resources import TextResource
from pathlib import Path
from importlib import import_module
from utils import resolve_path
import argparse
import pkgutil
import sys
from typing import Any, Dict, List, Optional, Tuple

logger = get_logger(__name__)

TOOLS_PACKAGE = "tools"


###################################################### MCP Resources ######################################################

def load_text_resources(resources_dir: Path) -> List[Tuple[Path, str]]:
    """Read every regular file directly under `resources_dir`."""
    resource_files: List[Tuple[Path, str]] = []
    if not resources_dir.is_dir():
        logger.warning(f"Resources directory not found: {resources_dir}")
        return resource_files
    for file_path in sorted(resources_dir.iterdir()):
        if file_path.is_file():
            resource_files.append((file_path, file_path.read_text(encoding="utf-8")))
    return resource_files


def register_resources(mcp: FastMCP, resource_files: List[Tuple[Path, str]], dispatcher: GuidanceDispatcher) -> int:
    """Expose text files and the full document of every topic as MCP resources."""
    count = 0
    for file_path, content in resource_files:
        try:
            mcp.add_resource(
                TextResource(
                    uri=f"resource://{file_path.stem.replace(' ', '_')}",
                    name=file_path.stem,
                    text=content,
                    description=f"Contents of {file_path.name}",
                    mime_type="text/markdown",
                )
            )
            count += 1
        except Exception:
            logger.exception(f"Failed to add resource {file_path}")

    for topic in dispatcher.topics:
        mcp.add_resource(
            TextResource(
                uri=f"resource://topics/{topic.name}",
                name=topic.name,
                text=dispatcher.get_guidance(topic.name),
                description=topic.description,
                mime_type="application/json",
            )
        )
        count += 1
    return count


###################################################### MCP Tools ######################################################

def register_tools(mcp: FastMCP, package: str = TOOLS_PACKAGE) -> List[str]:
    """Import every module of `package` and register the tools its `get_tools()` returns.

    A module that fails to import or register is logged and skipped.
    """
    registered_tool_names: List[str] = []
    pkg = import_module(package)
    for _finder, name, _ispkg in pkgutil.iter_modules(pkg.__path__):
        if name.startswith("_"):
            continue
        module_name = f"{package}.{name}"
        try:
            mod = import_module(module_name)
            logger.info(f"Imported tools module: {module_name}")
            if not hasattr(mod, "get_tools"):
                continue
            # mapping: tool_name -> { 'func': callable, 'title': str, 'description': str }
            for tool_name, meta in mod.get_tools().items():
                if isinstance(meta, dict):
                    func = meta.get("func")
                    title = meta.get("title")
                    description = meta.get("description")
                else:
                    func, title, description = meta, None, None

                if not func:
                    logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                    continue

                try:
                    mcp.add_tool(func, name=tool_name, title=title, description=description)
                    logger.info(f"Added tool via add_tool: {tool_name} (title={title}) from {module_name}")
                    registered_tool_names.append(tool_name)
                except Exception:
                    logger.exception(f"Failed to register tool {tool_name} from {module_name}")
        except Exception:
            logger.exception(f"Failed to load tools from module {module_name}")
    return registered_tool_names


###################################################### Server ######################################################

def create_server(config: Optional[Dict[str, Any]] = None) -> FastMCP:
    """Load resources and topics, then build a FastMCP server with every tool registered.

    Raises TopicDefinitionError if a topic file is invalid.
    """
    config = config if config is not None else get_config()

    logger.info("Loading MCP resources...")
    resource_files = load_text_resources(resolve_path(config.get("resources_dir"), "resources_dir"))
    resource_map = {file_path.stem.lower(): content for file_path, content in resource_files}
    set_resource_map(resource_map)
    logger.info(f"Total resources discovered: {len(resource_files)}, resource names: {list(resource_map.keys())}")

    logger.info("Loading guidance topics...")
    topics = load_topics(resolve_path(config.get("topics_dir"), "topics_dir"))
    dispatcher = GuidanceDispatcher(topics, indent=config.get("json_indent", 2))
    set_dispatcher(dispatcher)
    logger.info(f"Total topics loaded: {len(topics)}, topic names: {list(dispatcher.topic_names)}")

    instr = resource_map.get(INSTRUCTIONS_RESOURCE)
    mcp = FastMCP(config.get("server_name", "kusto-graph-guidance"), instructions=instr)
    logger.info("MCP server instance created with instructions: %s", bool(instr))

    logger.info(f"Total resources loaded into MCP: {register_resources(mcp, resource_files, dispatcher)}")

    logger.info("Loading MCP tools...")
    registered_tool_names = register_tools(mcp)
    logger.info(f"Total tools registered: {len(registered_tool_names)} , tool names: {registered_tool_names}")
    return mcp


###################################################### Startup ######################################################

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Kusto graph guidance MCP server (stdio transport)")
    p.add_argument("--config", default=None, help="Path to a config.yaml (defaults to $GRAPH_GUIDANCE_CONFIG or ./config.yaml)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = get_config(args.config)
    log_cfg = config.get("logging", {})
    setup_logging(
        logs_dir=resolve_path(log_cfg.get("dir", "logs"), "logging.dir"),
        log_file_name=log_cfg.get("file_name", "server.log"),
        level=log_cfg.get("level", "INFO"),
    )
    logger.info("MCP server bootstrap starting.")
    try:
        mcp = create_server(config)
        logger.info("Starting MCP server...")
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/server.log for details.", file=sys.stderr)
        sys.exit(-1)


if __name__ == "__main__":
    main()
