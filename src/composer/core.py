from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from .errors import CyclicDependencyError, DuplicateTaskError, UnknownTaskError
from .logging import get_logger


Action = Callable[[], None]


@dataclass
class TaskSpec:
    name: str
    deps: List[str] = field(default_factory=list)
    fn: Optional[Action] = None
    description: str = ""

    def run(self) -> None:
        if self.fn is not None:
            self.fn()


class Registry:
    """Named tasks plus the prerequisites each one declares.

    One registry is created by the host entry point and handed to every setup
    function; a task name can be registered at most once.
    """

    def __init__(self, name: str = "composer") -> None:
        self.name = name
        self._tasks: Dict[str, TaskSpec] = {}
        self.logger = get_logger(f"composer.{self.name}")

    def has(self, name: str) -> bool:
        return name in self._tasks

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __iter__(self) -> Iterator[TaskSpec]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def names(self) -> list[str]:
        return sorted(self._tasks)

    def register(
        self,
        name: str,
        deps: Sequence[str] = (),
        fn: Optional[Action] = None,
        description: str = "",
    ) -> TaskSpec:
        if name in self._tasks:
            raise DuplicateTaskError(name)
        spec = TaskSpec(name=name, deps=list(deps), fn=fn, description=description)
        self._tasks[name] = spec
        self.logger.debug("Registered %s (deps: %s)", name, ", ".join(spec.deps) or "-")
        return spec

    def get(self, name: str) -> TaskSpec:
        try:
            return self._tasks[name]
        except KeyError as exc:
            raise UnknownTaskError(name) from exc

    def task(self, name: str, deps: Sequence[str] = (), description: str = ""):
        """Decorator form of :meth:`register`."""

        def deco(fn: Action) -> Action:
            self.register(name, deps, fn, description=description or (fn.__doc__ or "").strip())
            return fn

        return deco

    def plan(self, *names: str) -> list[str]:
        """Return the order in which ``run(*names)`` executes tasks.

        Prerequisites come before their dependents, requested names keep their
        relative order and every task appears once.
        """
        ordered: list[str] = []
        visited: set[str] = set()
        visiting: list[str] = []

        def visit(name: str, required_by: str | None) -> None:
            if name in visited:
                return
            if name in visiting:
                raise CyclicDependencyError(visiting[visiting.index(name):] + [name])
            if name not in self._tasks:
                raise UnknownTaskError(name, required_by)
            visiting.append(name)
            for dep in self._tasks[name].deps:
                visit(dep, name)
            visiting.pop()
            visited.add(name)
            ordered.append(name)

        for name in names:
            visit(name, None)
        return ordered

    def run(self, *names: str) -> None:
        """Run ``names`` in order, each after its prerequisites.

        Execution is sequential and stops at the first failure; the exception
        propagates unchanged to the caller. A run nested inside a task action
        starts with nothing completed.
        """
        selected = self.plan(*names)
        self.logger.info("Selected steps: %s", " → ".join(selected))
        for step_name in selected:
            spec = self._tasks[step_name]
            step_logger = get_logger(f"composer.{self.name}.{step_name}")
            step_logger.info("Starting '%s'...", step_name)
            started = time.perf_counter()
            try:
                spec.run()
            except Exception:
                step_logger.error(
                    "'%s' errored after %.2f s", step_name, time.perf_counter() - started
                )
                raise
            step_logger.info(
                "Finished '%s' after %.2f s", step_name, time.perf_counter() - started
            )
