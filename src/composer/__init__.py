"""Task registry and composer for shared build tasks.

Provides the Registry and TaskSpec primitives, sequential dependency-ordered
execution, and a Typer CLI that hosts the tasks from `buildtasks`.
"""

from .core import Registry, TaskSpec  # re-export for convenience

__all__ = ["Registry", "TaskSpec"]
