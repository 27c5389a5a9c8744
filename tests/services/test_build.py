"""Tests for BuildService — settings → pipeline → ServiceResult."""

from __future__ import annotations

from pathlib import Path

import pytest

from jrectl.config.settings import JreSettings
from jrectl.services.build import BuildService


class TestBuild:
    def test_success(self, settings: JreSettings, dist: Path) -> None:
        result = BuildService(settings).build(dist)
        assert result.ok
        assert result.op == "build"
        assert result.data["state"] == "image_built"
        assert result.data["modules"] == ["java.base", "java.logging"]
        assert result.warnings == []

    def test_skip_is_success_with_warning(
        self, make_jdk, tmp_path: Path, dist: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("JAVA_HOME", raising=False)
        root = make_jdk(name="empty-jdk", modules_output="\n")
        settings = JreSettings.from_cli(java_home=root, start=tmp_path)
        result = BuildService(settings).build(dist)
        assert result.ok
        assert result.data["state"] == "skipped"
        assert result.warnings

    def test_missing_dist_is_failed_result(self, settings: JreSettings, tmp_path: Path) -> None:
        result = BuildService(settings).build(tmp_path / "absent")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONFIGURATION_ERROR"
        assert result.error.detail["phase"] == "validate"

    def test_missing_binary_is_failed_result(
        self, make_jdk, tmp_path: Path, dist: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("JAVA_HOME", raising=False)
        root = make_jdk(name="no-jlink", with_jlink=False)
        settings = JreSettings.from_cli(java_home=root, start=tmp_path)
        result = BuildService(settings).build(dist)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestMakeRequest:
    def test_uses_settings(self, tmp_path: Path, jdk: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JAVA_HOME", raising=False)
        (tmp_path / "jrectl.toml").write_text(
            '[link]\nimage_dir_name = "runtime"\ncompress = "zip-9"\n'
            "[tools]\ntimeout = 60\ncheck_exit_status = false\n"
        )
        settings = JreSettings.from_cli(java_home=jdk, start=tmp_path)
        request = BuildService(settings).make_request(tmp_path / "dist")
        assert request.java_home == jdk
        assert request.image_dir_name == "runtime"
        assert request.compress == "zip-9"
        assert request.timeout == 60
        assert request.check_exit_status is False

    def test_overrides_win(self, settings: JreSettings, tmp_path: Path) -> None:
        request = BuildService(settings).make_request(
            tmp_path, timeout=5.0, check_exit_status=False
        )
        assert request.timeout == 5.0
        assert request.check_exit_status is False


class TestListModules:
    def test_lists(self, settings: JreSettings, jdk: Path) -> None:
        result = BuildService(settings).list_modules()
        assert result.ok
        assert result.data == {
            "java_home": str(jdk),
            "count": 2,
            "modules": ["java.base", "java.logging"],
        }

    def test_no_jdk(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JAVA_HOME", raising=False)
        monkeypatch.delenv("JRECTL_JAVA_HOME", raising=False)
        settings = JreSettings.from_cli(start=tmp_path)
        result = BuildService(settings).list_modules()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONFIGURATION_ERROR"
