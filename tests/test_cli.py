"""Tests for command-line arguments, configuration and entry point."""

import argparse
import json
from pathlib import Path

import pytest

from importgraph import cli
from importgraph.args import parse_args
from importgraph.config import Settings, load_config, resolve_settings
from importgraph.constants import Constants, ExitCodes
from importgraph.errors import ConfigError


def _write_package(directory: Path, package_json) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "package.json").write_text(json.dumps(package_json), encoding="utf-8")
    return directory


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(Constants.ENV_ROOT, raising=False)
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")
    root_dir = _write_package(tmp_path / "project", {
        "name": "root",
        "version": "1.0.0",
        "dependencies": {"dep": "^1.0.0"},
        "exports": {
            ".": {"require": "./index.cjs", "default": "./index.js"},
            "./utils/*": "./lib/utils/*.js",
        },
    })
    _write_package(root_dir / "node_modules" / "dep", {"name": "dep", "version": "1.0.0", "main": "main.js"})
    return root_dir.resolve()


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    return excinfo.value.code


class TestParseArgs:
    """Argument parsing."""

    def test_resolve_command(self):
        args = parse_args(["resolve", "dep", "fs", "-r", "/tmp/root", "--from", "./src/a.js", "--loglevel", "debug"])
        assert args.command == "resolve"
        assert args.SPECS == ["dep", "fs"]
        assert args.ROOT == "/tmp/root"
        assert args.FROM == "./src/a.js"
        assert args.LOG_LEVEL == "DEBUG"
        assert not args.QUIET

    def test_entries_command(self):
        args = parse_args(["entries", "-c", "import", "-c", "node", "-q"])
        assert args.command == "entries"
        assert args.CONDITIONS == ["import", "node"]
        assert args.QUIET

    def test_command_is_required(self):
        with pytest.raises(SystemExit) as excinfo:
            parse_args([])
        assert excinfo.value.code == ExitCodes.ARGUMENT_ERROR.value


class TestConfig:
    """YAML configuration and settings precedence."""

    def test_load_config(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("root: ./pkg\nconditions:\n  - import\nloglevel: debug\n", encoding="utf-8")
        assert load_config(str(path)) == {"root": "./pkg", "conditions": ["import"], "loglevel": "debug"}

    def test_load_default_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == {}
        (tmp_path / Constants.CONFIG_FILE).write_text("root: ./default\n", encoding="utf-8")
        assert load_config() == {"root": "./default"}

    def test_empty_config(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == {}

    @pytest.mark.parametrize("contents", ["root: [unclosed", "- just\n- a list\n"])
    def test_malformed_config(self, tmp_path, contents):
        path = tmp_path / "config.yml"
        path.write_text(contents, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_missing_config(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "missing.yml"))

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_settings(argparse.Namespace(), environ={}) == Settings()

    def test_precedence(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("root: ./from-config\nconditions: [browser]\nloglevel: error\n", encoding="utf-8")

        from_config = resolve_settings(argparse.Namespace(CONFIG=str(path)), environ={})
        assert from_config == Settings(root="./from-config", conditions=["browser"], loglevel="ERROR")

        environ = {Constants.ENV_ROOT: "./from-env", Constants.ENV_LOG_LEVEL: "warning"}
        from_env = resolve_settings(argparse.Namespace(CONFIG=str(path)), environ=environ)
        assert from_env.root == "./from-env"
        assert from_env.loglevel == "WARNING"

        args = argparse.Namespace(CONFIG=str(path), ROOT="./from-cli", CONDITIONS=["node"], LOG_LEVEL="DEBUG")
        from_cli = resolve_settings(args, environ=environ)
        assert from_cli == Settings(root="./from-cli", conditions=["node"], loglevel="DEBUG")

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yml"
        for contents in ("root: 1\n", "conditions: {a: b}\n", "loglevel: loud\n"):
            path.write_text(contents, encoding="utf-8")
            with pytest.raises(ConfigError):
                resolve_settings(argparse.Namespace(CONFIG=str(path)), environ={})


class TestMain:
    """Command-line runs."""

    def test_resolve(self, project, tmp_path):
        output = tmp_path / "out.json"

        code = _run(["resolve", "dep", "fs", "missing", "-r", str(project), "-o", str(output), "-q"])

        assert code == ExitCodes.SUCCESS.value
        dep, builtin, missing = json.loads(output.read_text(encoding="utf-8"))

        assert dep["kind"] == "package"
        assert dep["uri"] == (project / "node_modules" / "dep").as_uri()
        assert dep["host"] == {"name": "dep", "version": "1.0.0", "uri": dep["uri"]}
        assert dep["deref"] == (project / "node_modules" / "dep" / "main.js").as_uri()
        assert dep["dependency"] == "runtime"

        assert builtin["kind"] == "implied"
        assert builtin["host"] is None
        assert builtin["dependency"] == "implied"

        assert missing["uri"] == "import:package:missing"
        assert missing["dependency"] is None

    def test_resolve_from_module(self, project, tmp_path):
        output = tmp_path / "out.json"

        code = _run(["resolve", "./b.js", "-r", str(project), "--from", "./src/a.js", "-o", str(output), "-q"])

        assert code == ExitCodes.SUCCESS.value
        (found,) = json.loads(output.read_text(encoding="utf-8"))
        assert found["uri"] == (project / "src" / "b.js").as_uri()
        assert found["dependency"] == "self"

    def test_resolve_prints_json(self, project, capsys):
        code = _run(["resolve", "dep", "-r", str(project)])

        assert code == ExitCodes.SUCCESS.value
        (found,) = json.loads(capsys.readouterr().out)
        assert found["spec"] == "dep"

    def test_entries(self, project, tmp_path):
        output = tmp_path / "entries.json"

        code = _run(["entries", "-r", str(project), "-o", str(output), "-q"])

        assert code == ExitCodes.SUCCESS.value
        assert json.loads(output.read_text(encoding="utf-8")) == [
            {"path": ".", "pattern": False, "target": "./index.js", "js": "./index.cjs"},
            {"path": "./utils/*", "pattern": True, "target": "./lib/utils/*.js", "js": "./lib/utils/*.js"},
        ]

    def test_entries_with_conditions(self, project, tmp_path):
        output = tmp_path / "entries.json"

        code = _run(["entries", "-r", str(project), "-c", "require", "-o", str(output), "-q"])

        assert code == ExitCodes.SUCCESS.value
        main, utils = json.loads(output.read_text(encoding="utf-8"))
        assert main["target"] == "./index.cjs"
        assert utils["target"] is None

    def test_entries_root_from_config(self, project, tmp_path):
        config = tmp_path / "config.yml"
        config.write_text(f"root: {json.dumps(str(project))}\n", encoding="utf-8")
        output = tmp_path / "entries.json"

        code = _run(["entries", "--config", str(config), "-o", str(output), "-q"])

        assert code == ExitCodes.SUCCESS.value
        entries = json.loads(output.read_text(encoding="utf-8"))
        assert entries[0]["target"] == "./index.js"

    def test_missing_root_package(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")
        assert _run(["resolve", "dep", "-r", str(tmp_path), "-q"]) == ExitCodes.FILE_ERROR.value

    def test_bad_config(self, tmp_path, monkeypatch):
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")
        config = tmp_path / "config.yml"
        config.write_text("root: [unclosed", encoding="utf-8")
        assert _run(["entries", "--config", str(config), "-q"]) == ExitCodes.FILE_ERROR.value

    def test_unknown_command(self):
        assert _run(["bogus"]) == ExitCodes.ARGUMENT_ERROR.value
