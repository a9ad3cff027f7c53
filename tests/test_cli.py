from __future__ import annotations

import zipfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from log_export.cli import NOTHING_REQUESTED_MESSAGE, app

from conftest import NEWER_LOG, InstallTree

runner = CliRunner()


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch, install_tree: InstallTree) -> list[str]:
    for name, value in install_tree.environ.items():
        monkeypatch.setenv(name, value)
    config_file = install_tree.root / "log_export.yaml"
    config_file.write_text("project:\n  env: test\n", encoding="utf-8")
    return ["--config-file", str(config_file), "--no-pause"]


def test_no_component_flags_prints_reminder_only(
    monkeypatch: pytest.MonkeyPatch,
    cli_env: list[str],
    tmp_path: Path,
):
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    result = runner.invoke(app, cli_env)

    assert result.exit_code == 0
    assert NOTHING_REQUESTED_MESSAGE in result.output
    assert list(workdir.iterdir()) == []


def test_help_prints_usage_and_exits(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["-help", "-server"])

    assert result.exit_code == 0
    assert "-datastorefolder" in result.output
    assert "-destination" in result.output
    assert list(tmp_path.iterdir()) == []


def test_server_and_portal_export(cli_env: list[str], tmp_path: Path):
    destination = tmp_path / "out"

    result = runner.invoke(app, ["-server", "-portal", "-destination", str(destination), *cli_env])

    assert result.exit_code == 0, result.output
    assert "Destination directory:" in result.output
    archives = list(destination.glob("export_*.zip"))
    assert len(archives) == 1
    with zipfile.ZipFile(archives[0]) as bundle:
        assert len(bundle.namelist()) == 2
    assert [path.name for path in destination.iterdir()] == [archives[0].name]


def test_destination_defaults_to_working_directory(
    monkeypatch: pytest.MonkeyPatch,
    cli_env: list[str],
    tmp_path: Path,
):
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    result = runner.invoke(app, ["-server", *cli_env])

    assert result.exit_code == 0, result.output
    assert str(workdir.resolve()) in result.output
    assert len(list(workdir.glob("export_*.zip"))) == 1


def test_datastore_prompt_lists_four_folders(cli_env: list[str], tmp_path: Path):
    destination = tmp_path / "out"

    result = runner.invoke(
        app,
        ["-datastore", "-datastorefolder", "bogus", "-destination", str(destination), *cli_env],
        input="2\n",
    )

    assert result.exit_code == 0, result.output
    for index, folder in enumerate(("server", "database", "elasticsearch", "tilecache"), start=1):
        assert f"{index}. {folder}" in result.output
    archive = next(destination.glob("export_*.zip"))
    with zipfile.ZipFile(archive) as bundle:
        assert bundle.read(f"datastore_{NEWER_LOG}") == b"datastore database newer"


def test_invalid_prompt_answer_fails_run(cli_env: list[str], tmp_path: Path):
    destination = tmp_path / "out"

    result = runner.invoke(
        app,
        ["-server", "-datastore", "-destination", str(destination), *cli_env],
        input="9\n",
    )

    assert result.exit_code == 1
    assert "Export failed" in result.output
    assert list(destination.iterdir()) == []


def test_missing_install_variable_fails_run(
    monkeypatch: pytest.MonkeyPatch,
    cli_env: list[str],
    tmp_path: Path,
):
    monkeypatch.delenv("AGSPORTAL")

    result = runner.invoke(app, ["-portal", "-destination", str(tmp_path / "out"), *cli_env])

    assert result.exit_code == 1
    assert "AGSPORTAL" in result.output


def test_show_config_prints_yaml(cli_env: list[str]):
    result = runner.invoke(app, ["--show-config", *cli_env])

    assert result.exit_code == 0
    assert "install_dir_env: AGSSERVER" in result.output
    assert "archive_prefix: export" in result.output


def test_missing_config_file_is_rejected(install_tree: InstallTree, tmp_path: Path):
    destination = tmp_path / "out"

    result = runner.invoke(
        app,
        ["-server", "-destination", str(destination), "--config-file", str(tmp_path / "typo.yaml"), "--no-pause"],
    )

    assert result.exit_code == 2
    assert not destination.exists()


def test_existing_staged_name_is_not_overwritten(cli_env: list[str], tmp_path: Path):
    destination = tmp_path / "out"
    destination.mkdir()
    user_file = destination / f"server_{NEWER_LOG}"
    user_file.write_text("keep me", encoding="utf-8")

    result = runner.invoke(app, ["-server", "-destination", str(destination), *cli_env])

    assert result.exit_code == 1
    assert user_file.read_text(encoding="utf-8") == "keep me"
    assert list(destination.glob("export_*.zip")) == []
