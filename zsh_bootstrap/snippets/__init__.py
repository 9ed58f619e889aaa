"""Blocs de code shell gérés par le patcher."""

from zsh_bootstrap.snippets.config import ShellSnippet
from zsh_bootstrap.snippets.process_tools import (
    PROCESS_TOOLS,
    PROCESS_TOOLS_BLOCK,
)

__all__ = [
    "ShellSnippet",
    "PROCESS_TOOLS",
    "PROCESS_TOOLS_BLOCK",
]
