"""Follower graph export to Graphviz DOT and image rendering."""

import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from xml_editor.shared import GraphConfig, get_logger

from .network import SocialNetwork

FollowerGraph = Dict[str, List[str]]

NODE_STYLE = "node [shape=circle, style=filled, fillcolor=lightblue];"


class GraphRenderError(Exception):
    """Raised when the DOT renderer is unavailable or fails."""


def build_graph(network: SocialNetwork) -> FollowerGraph:
    """Map each user id to the ids of its followers."""
    return {user.id: list(user.follower_ids) for user in network}


def _dot_id(value: str) -> str:
    if value.isidentifier() or value.isdigit():
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def export_dot(graph: FollowerGraph, config: Optional[GraphConfig] = None) -> str:
    """DOT text with one ``user -> follower`` edge per follower entry.

    Users without followers still appear as standalone nodes.
    """
    config = config or GraphConfig()
    lines = [f"digraph {config.graph_name} {{", f"  {NODE_STYLE}"]
    for user_id, follower_ids in graph.items():
        if not follower_ids:
            lines.append(f"  {_dot_id(user_id)};")
        for follower_id in follower_ids:
            lines.append(f"  {_dot_id(user_id)} -> {_dot_id(follower_id)};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_graph(
    dot_text: str,
    output_path: Union[str, Path],
    config: Optional[GraphConfig] = None,
    correlation_id: Optional[str] = None
) -> Path:
    """Render DOT text to an image file with the Graphviz ``dot`` executable.

    Args:
        dot_text: Graph description in DOT language
        output_path: Image file to create
        config: Executable, image format and timeout settings

    Returns:
        Path of the written image

    Raises:
        GraphRenderError: If ``dot`` cannot be found, fails or times out
    """
    config = config or GraphConfig()
    logger = get_logger(__name__, correlation_id, "graph_renderer")
    output_path = Path(output_path)

    executable = shutil.which(config.dot_executable)
    if executable is None:
        raise GraphRenderError(
            f"Graphviz executable '{config.dot_executable}' not found on PATH"
        )

    command = [executable, f"-T{config.image_format}", "-o", str(output_path)]
    try:
        completed = subprocess.run(
            command,
            input=dot_text.encode("utf-8"),
            capture_output=True,
            timeout=config.render_timeout_seconds,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise GraphRenderError(
            f"Rendering timed out after {config.render_timeout_seconds} seconds"
        ) from e
    except OSError as e:
        raise GraphRenderError(f"Failed to run {executable}: {e}") from e

    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        raise GraphRenderError(
            f"dot exited with status {completed.returncode}: {stderr}"
        )

    logger.info(
        "Graph rendered",
        extra={"output_path": str(output_path), "image_format": config.image_format},
    )
    return output_path
