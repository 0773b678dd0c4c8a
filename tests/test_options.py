import pytest

from buildtasks.options import FileSelection, Options, coerce_options
from composer.errors import ConfigurationError


def _touch(root, *paths):
    for rel in paths:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("x", encoding="utf-8")


def test_defaults():
    opts = Options()
    assert opts.sticky_deps == frozenset()
    assert opts.ts_srcs.patterns == ("src/**/*.ts",)
    assert opts.js_srcs.patterns == ("test/**/*.js", "gulpfile.js")
    assert opts.data_srcs.patterns == ("src/**/*", "!src/**/*.ts")
    assert opts.build_artifacts == ("lib/", "typings/")


def test_overrides_replace_fields_wholesale():
    opts = Options().with_overrides({"build_artifacts": ["dist/"], "sticky_deps": ["polymer"]})
    assert opts.build_artifacts == ("dist/",)
    assert opts.sticky_deps == frozenset({"polymer"})
    # untouched fields keep their defaults
    assert opts.ts_srcs == Options().ts_srcs
    assert opts.out_dir == "lib"


def test_overrides_do_not_mutate_original():
    base = Options()
    base.with_overrides(out_dir="dist")
    assert base.out_dir == "lib"


def test_selection_from_string_and_list():
    opts = Options().with_overrides(ts_srcs="lib-src/**/*.ts", js_srcs=["a.js", "b/*.js"])
    assert opts.ts_srcs == FileSelection.of("lib-src/**/*.ts")
    assert opts.js_srcs.patterns == ("a.js", "b/*.js")


@pytest.mark.parametrize(
    "overrides",
    [
        {"stickyDeps": []},
        {"build_artifacts": [1, 2]},
        {"ignore_type_definition_deps": "yes"},
        {"out_dir": ""},
        {"ts_srcs": 5},
    ],
)
def test_invalid_overrides(overrides):
    with pytest.raises(ConfigurationError):
        Options().with_overrides(overrides)


def test_coerce_options():
    assert coerce_options(None) == Options()
    opts = Options(out_dir="dist")
    assert coerce_options(opts) is opts
    assert coerce_options({"out_dir": "dist"}).out_dir == "dist"


def test_selection_resolve_applies_excludes(tmp_path):
    _touch(tmp_path, "src/index.ts", "src/views/page.html", "src/data/words.json", "other/x.json")
    selection = Options().data_srcs

    found = [p.relative_to(tmp_path).as_posix() for p in selection.resolve(tmp_path)]

    assert found == ["src/data/words.json", "src/views/page.html"]


def test_selection_resolve_literal_paths(tmp_path):
    _touch(tmp_path, "gulpfile.js", "test/a_test.js", "test/deep/b_test.js")
    found = [p.relative_to(tmp_path).as_posix() for p in Options().js_srcs.resolve(tmp_path)]
    assert found == ["gulpfile.js", "test/a_test.js", "test/deep/b_test.js"]


def test_selection_base(tmp_path):
    assert FileSelection.of("src/**/*", "!src/**/*.ts").base(tmp_path) == tmp_path / "src"
    assert FileSelection.of("assets/img/*.png").base(tmp_path) == tmp_path / "assets" / "img"
    assert FileSelection.of("gulpfile.js").base(tmp_path) == tmp_path
