"""Code Scorer MCP Server.

Scores source code 0-100 with OpenAI on every save and shows the result as a
status line: best practices, performance, readability and correctness.
"""

__version__ = "0.1.0"

from .extension import CodeScorerExtension

__all__ = ["CodeScorerExtension"]
