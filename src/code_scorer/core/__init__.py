"""Core scoring logic: prompt, OpenAI client, reply parsing and data models.

This module has no dependency on MCP or on the extension host. The server and
the save watcher both go through the pipeline built on top of it.
"""
