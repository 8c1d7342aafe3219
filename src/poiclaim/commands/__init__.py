"""
Chat command parsing and execution.
"""

from poiclaim.commands.interpreter import (
    Command,
    CommandInterpreter,
    Intent,
    parse_command,
)

__all__ = [
    "Command",
    "CommandInterpreter",
    "Intent",
    "parse_command",
]
