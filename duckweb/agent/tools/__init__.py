"""Agent tools."""

from duckweb.agent.tools.base import Tool
from duckweb.agent.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolRegistry"]
