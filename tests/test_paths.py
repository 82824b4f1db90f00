from __future__ import annotations

from pathlib import Path

from cfgpanel.paths import GLOBAL_FOLDER_ENV_VAR, get_global_folder


def test_get_global_folder_override(tmp_path: Path) -> None:
    target = tmp_path / "cfgpanel_home"
    resolved = get_global_folder(target)
    assert resolved == target.resolve()


def test_get_global_folder_reads_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(GLOBAL_FOLDER_ENV_VAR, str(tmp_path / "from-env"))
    assert get_global_folder() == (tmp_path / "from-env").resolve()


def test_get_global_folder_defaults_under_home(monkeypatch) -> None:
    monkeypatch.delenv(GLOBAL_FOLDER_ENV_VAR, raising=False)
    assert get_global_folder() == (Path.home() / ".cfgpanel").resolve()
