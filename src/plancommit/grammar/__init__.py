"""Plan text grammar: patterns, task nesting and the stage parser."""

from __future__ import annotations

from plancommit.grammar.parser import StageParser, parse
from plancommit.grammar.tasks import build_task_tree

__all__ = [
    "StageParser",
    "build_task_tree",
    "parse",
]
