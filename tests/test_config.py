import json

import pytest

from composer.config import find_config, load_project_config
from composer.errors import ConfigNotFoundError, ConfigurationError


@pytest.fixture
def dirs(tmp_path):
    cwd = tmp_path / "project"
    pkg = tmp_path / "package"
    cwd.mkdir()
    pkg.mkdir()
    return cwd, pkg


def test_working_directory_wins(dirs):
    cwd, pkg = dirs
    (cwd / "tslint.json").write_text(json.dumps({"rules": {"a": True}}), encoding="utf-8")
    (pkg / "tslint.json").write_text(json.dumps({"rules": {"b": True}}), encoding="utf-8")

    path, parsed = find_config("tslint.json", [cwd, pkg])

    assert path == cwd / "tslint.json"
    assert parsed == {"rules": {"a": True}}


def test_only_in_working_directory(dirs):
    cwd, pkg = dirs
    (cwd / "tslint.json").write_text("{}", encoding="utf-8")
    assert find_config("tslint.json", [cwd, pkg])[0] == cwd / "tslint.json"


def test_falls_back_to_package_directory(dirs):
    cwd, pkg = dirs
    (pkg / ".eslintrc.json").write_text("{}", encoding="utf-8")
    assert find_config(".eslintrc.json", [cwd, pkg])[0] == pkg / ".eslintrc.json"


def test_missing_everywhere(dirs):
    cwd, pkg = dirs
    with pytest.raises(ConfigNotFoundError) as exc_info:
        find_config("tslint.json", [cwd, pkg])
    assert exc_info.value.filename == "tslint.json"
    assert exc_info.value.searched == [str(cwd), str(pkg)]
    assert "tslint.json" in str(exc_info.value)


def test_unparsable_file_falls_through(dirs, caplog):
    cwd, pkg = dirs
    (cwd / "tslint.json").write_text("{not json", encoding="utf-8")
    (pkg / "tslint.json").write_text('{"rules": {}}', encoding="utf-8")

    path, parsed = find_config("tslint.json", [cwd, pkg])

    assert path == pkg / "tslint.json"
    assert parsed == {"rules": {}}
    assert "Ignoring unusable" in caplog.text


def test_unparsable_file_is_never_replaced_by_defaults(dirs):
    cwd, pkg = dirs
    (cwd / "tslint.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigNotFoundError):
        find_config("tslint.json", [cwd, pkg])


def test_project_config_defaults_when_absent(tmp_path):
    config = load_project_config(tmp_path / "buildgraph.yaml")
    assert config.setup == []
    assert config.options == {}


def test_project_config_required(tmp_path):
    with pytest.raises(ConfigurationError):
        load_project_config(tmp_path / "missing.yaml", required=True)


def test_project_config_parses_setup_and_options(tmp_path):
    path = tmp_path / "buildgraph.yaml"
    path.write_text(
        "setup: clean\noptions:\n  build_artifacts: [dist/]\n  sticky_deps: [polymer]\n",
        encoding="utf-8",
    )
    config = load_project_config(path)
    assert config.setup == ["clean"]
    assert config.options == {"build_artifacts": ["dist/"], "sticky_deps": ["polymer"]}


@pytest.mark.parametrize(
    "body",
    ["- just\n- a list\n", "setup: [1, 2]\n", "options: nope\n", "tasks: []\n", "setup: [\n"],
)
def test_project_config_rejects_bad_documents(tmp_path, body):
    path = tmp_path / "buildgraph.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_project_config(path)
