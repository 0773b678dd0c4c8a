"""Options shared by every setup function, and gulp-style file selections."""

from __future__ import annotations

import dataclasses
import fnmatch
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, FrozenSet, Iterable, List, Mapping, Tuple, Union

from composer.errors import ConfigurationError


_MAGIC = "*?["


def _is_magic(part: str) -> bool:
    return any(ch in part for ch in _MAGIC)


def _match(rel_path: str, pattern: str) -> bool:
    """Match a posix relative path against a glob where ``**`` spans directories."""
    path_parts = PurePosixPath(rel_path).parts
    pat_parts = PurePosixPath(pattern).parts

    def walk(i: int, j: int) -> bool:
        if j == len(pat_parts):
            return i == len(path_parts)
        if pat_parts[j] == "**":
            return any(walk(k, j + 1) for k in range(i, len(path_parts) + 1))
        if i == len(path_parts):
            return False
        return fnmatch.fnmatchcase(path_parts[i], pat_parts[j]) and walk(i + 1, j + 1)

    return walk(0, 0)


@dataclass(frozen=True)
class FileSelection:
    """Ordered include globs; a leading ``!`` turns a pattern into an exclude."""

    patterns: Tuple[str, ...]

    @classmethod
    def of(cls, *patterns: str) -> "FileSelection":
        return cls(tuple(patterns))

    @property
    def includes(self) -> List[str]:
        return [p for p in self.patterns if not p.startswith("!")]

    @property
    def excludes(self) -> List[str]:
        return [p[1:] for p in self.patterns if p.startswith("!")]

    def base(self, root: Path) -> Path:
        """Glob parent of the first include pattern, e.g. ``src/**/*`` -> ``root/src``."""
        if not self.includes:
            return Path(root)
        parts = PurePosixPath(self.includes[0]).parts
        fixed: List[str] = []
        for part in parts:
            if _is_magic(part):
                break
            fixed.append(part)
        else:
            # A literal file path: its directory is the base.
            fixed = fixed[:-1]
        return Path(root).joinpath(*fixed)

    def resolve(self, root: Path) -> List[Path]:
        root = Path(root)
        found: set[Path] = set()
        for pattern in self.includes:
            if not _is_magic(pattern):
                candidate = root / pattern
                if candidate.is_file():
                    found.add(candidate)
                continue
            for path in root.glob(pattern):
                if path.is_file():
                    found.add(path)
        excludes = self.excludes
        selected = []
        for path in found:
            rel = path.relative_to(root).as_posix()
            if any(_match(rel, ex) for ex in excludes):
                continue
            selected.append(path)
        return sorted(selected)


SelectionLike = Union[FileSelection, str, Iterable[str]]


def _selection(value: SelectionLike, field_name: str) -> FileSelection:
    if isinstance(value, FileSelection):
        return value
    if isinstance(value, str):
        return FileSelection.of(value)
    try:
        patterns = tuple(value)
    except TypeError as exc:
        raise ConfigurationError(f"Option '{field_name}' must be a glob or list of globs") from exc
    if not all(isinstance(p, str) for p in patterns):
        raise ConfigurationError(f"Option '{field_name}' must contain only strings")
    return FileSelection(patterns)


def _str_collection(value: Any, field_name: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        items = tuple(value)
        if all(isinstance(v, str) for v in items):
            return items
    raise ConfigurationError(f"Option '{field_name}' must be a list of strings")


@dataclass(frozen=True)
class Options:
    sticky_deps: FrozenSet[str] = frozenset()
    ts_srcs: FileSelection = FileSelection.of("src/**/*.ts")
    js_srcs: FileSelection = FileSelection.of("test/**/*.js", "gulpfile.js")
    data_srcs: FileSelection = FileSelection.of("src/**/*", "!src/**/*.ts")
    build_artifacts: Tuple[str, ...] = ("lib/", "typings/")
    test_srcs: FileSelection = FileSelection.of("test/**/*_test.js")
    out_dir: str = "lib"
    ignore_type_definition_deps: bool = True
    test_ui: str = "tdd"
    test_reporter: str = "spec"

    def with_overrides(self, overrides: Mapping[str, Any] | None = None, **kwargs: Any) -> "Options":
        """Shallow merge: each provided field replaces the current value wholesale."""
        values = dict(overrides or {})
        values.update(kwargs)
        known = {f.name for f in dataclasses.fields(self)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        for name, value in values.items():
            if name in ("ts_srcs", "js_srcs", "data_srcs", "test_srcs"):
                changes[name] = _selection(value, name)
            elif name == "sticky_deps":
                changes[name] = frozenset(_str_collection(value, name))
            elif name == "build_artifacts":
                changes[name] = _str_collection(value, name)
            elif name == "ignore_type_definition_deps":
                if not isinstance(value, bool):
                    raise ConfigurationError(f"Option '{name}' must be true or false")
                changes[name] = value
            else:
                if not isinstance(value, str) or not value:
                    raise ConfigurationError(f"Option '{name}' must be a non-empty string")
                changes[name] = value
        return dataclasses.replace(self, **changes)


def coerce_options(options: Options | Mapping[str, Any] | None) -> Options:
    """What every setup function does with the ``options`` it was handed."""
    if options is None:
        return Options()
    if isinstance(options, Options):
        return options
    return Options().with_overrides(options)
