"""Tests for follower graph export and rendering."""

import subprocess
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from xml_editor.shared import GraphConfig
from xml_editor.social import (
    GraphRenderError,
    build_graph,
    build_network,
    export_dot,
    render_graph,
)


USERS_XML = (
    "<users>"
    "<user><id>1</id><followers><follower><id>2</id></follower>"
    "<follower><id>3</id></follower></followers></user>"
    "<user><id>2</id><followers><follower><id>1</id></follower></followers></user>"
    "<user><id>3</id></user>"
    "</users>"
)


class TestExportDot:
    """Test DOT generation."""

    def test_build_graph(self):
        """Test the user to followers mapping."""
        graph = build_graph(build_network(USERS_XML))
        assert graph == {"1": ["2", "3"], "2": ["1"], "3": []}

    def test_dot_text(self):
        """Test edges, node style and standalone users."""
        dot = export_dot(build_graph(build_network(USERS_XML)))
        assert dot == (
            "digraph SocialNetwork {\n"
            "  node [shape=circle, style=filled, fillcolor=lightblue];\n"
            "  1 -> 2;\n"
            "  1 -> 3;\n"
            "  2 -> 1;\n"
            "  3;\n"
            "}\n"
        )

    def test_graph_name_from_config(self):
        """Test the configured graph name."""
        dot = export_dot({"1": []}, GraphConfig(graph_name="Followers"))
        assert dot.startswith("digraph Followers {")

    def test_ids_quoted_when_needed(self):
        """Test that unusual ids are quoted."""
        dot = export_dot({"user 1": ['a"b']})
        assert '"user 1" -> "a\\"b";' in dot


class TestRenderGraph:
    """Test invocation of the Graphviz executable."""

    def test_missing_executable(self):
        """Test the error when dot is not installed."""
        with patch("xml_editor.social.graph.shutil.which", return_value=None):
            with pytest.raises(GraphRenderError, match="not found"):
                render_graph("digraph G {}", "out.jpg")

    def test_successful_render(self):
        """Test the command line passed to dot."""
        completed = MagicMock(returncode=0, stderr=b"")
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "graph.png"
            with patch("xml_editor.social.graph.shutil.which", return_value="/usr/bin/dot"), \
                 patch("xml_editor.social.graph.subprocess.run", return_value=completed) as run:
                result = render_graph("digraph G {}", output, GraphConfig(image_format="png"))

        assert result == output
        command = run.call_args.args[0]
        assert command == ["/usr/bin/dot", "-Tpng", "-o", str(output)]
        assert run.call_args.kwargs["input"] == b"digraph G {}"

    def test_failed_render(self):
        """Test that a non-zero exit status raises."""
        completed = MagicMock(returncode=1, stderr=b"syntax error")
        with patch("xml_editor.social.graph.shutil.which", return_value="/usr/bin/dot"), \
             patch("xml_editor.social.graph.subprocess.run", return_value=completed):
            with pytest.raises(GraphRenderError, match="syntax error"):
                render_graph("digraph {", "out.jpg")

    def test_render_timeout(self):
        """Test that a hung renderer raises."""
        with patch("xml_editor.social.graph.shutil.which", return_value="/usr/bin/dot"), \
             patch(
                 "xml_editor.social.graph.subprocess.run",
                 side_effect=subprocess.TimeoutExpired("dot", 1),
             ):
            with pytest.raises(GraphRenderError, match="timed out"):
                render_graph("digraph G {}", "out.jpg")
