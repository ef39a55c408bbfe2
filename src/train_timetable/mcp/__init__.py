"""MCP (Model Context Protocol) server module for station timetables.

This module provides an MCP server that exposes the timetable update
action and timetable lookups through the Model Context Protocol.
"""

from .server import TimetableMCPServer, main

__all__ = ["TimetableMCPServer", "main"]
