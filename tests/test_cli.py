"""Tests for waymark.cli — CLI entrypoint, ``routes`` and ``match``."""

from pathlib import Path

import pytest

from waymark.cli import main


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["routes", "match"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_directory(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_match_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", str(tmp_path)])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "waymark" in capsys.readouterr().out


class TestRoutesCommand:
    def test_lists_routes(self, routes_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(routes_dir)])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["VERB", "PATH", "NAME", "CONTROLLER", "FLAGS"]
        assert "users.index" in lines[2]
        assert "app.controllers:UserController.show" in out
        assert "auth,admin" in out

    def test_empty_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(tmp_path)])
        assert "No routes registered." in capsys.readouterr().out

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "absent")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_reports_skipped(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "routes.yaml").write_text(
            "- {path: /ok, name: ok}\n- {path: /nameless}\n- {path: '/x/{', name: broken}\n",
            encoding="utf-8",
        )
        main(["routes", str(tmp_path)])
        captured = capsys.readouterr()
        assert "ok" in captured.out
        assert captured.err.count("Skipped:") == 2
        assert "broken" in captured.err


class TestMatchCommand:
    def test_match(self, routes_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", str(routes_dir), "/app/users/42/", "--subdir", "/app"])
        out = capsys.readouterr().out
        assert "name:       users.show" in out
        assert "param:      id=42" in out
        assert "auth:       true" in out

    def test_no_match(self, routes_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", str(routes_dir), "/missing"])
        assert exc_info.value.code == 1
        assert "No route matches /missing" in capsys.readouterr().err

    def test_verb_mismatch(self, routes_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", str(routes_dir), "/users", "--verb", "post"])
        assert exc_info.value.code == 1
        assert "allowed: GET" in capsys.readouterr().err

    def test_auth_flag(self, routes_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", str(routes_dir), "/users", "--auth"])
        assert "auth:       true" in capsys.readouterr().out
