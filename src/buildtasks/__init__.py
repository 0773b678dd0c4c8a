"""Shared build tasks.

Each setup function takes the host's :class:`composer.Registry` and optional
:class:`Options` overrides, registers its task(s), and registers whatever it
depends on first. Registering the same task twice is an error, so call each
setup function at most once per registry.
"""

from .artifacts import clean
from .compilation import build
from .composite import build_all, generate_complete_taskgraph, test
from .dependencies import depcheck
from .linters import eslint, lint, tslint
from .typings import init
from .options import FileSelection, Options

SETUP_FUNCTIONS = {
    "init": init,
    "clean": clean,
    "depcheck": depcheck,
    "tslint": tslint,
    "eslint": eslint,
    "lint": lint,
    "build": build,
    "build_all": build_all,
    "test": test,
    "complete": generate_complete_taskgraph,
}

__all__ = [
    "FileSelection",
    "Options",
    "SETUP_FUNCTIONS",
    "build",
    "build_all",
    "clean",
    "depcheck",
    "eslint",
    "generate_complete_taskgraph",
    "init",
    "lint",
    "test",
    "tslint",
]
