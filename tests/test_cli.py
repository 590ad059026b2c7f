"""Tests for CLI argument parsing and the check command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from callorder.cli import _build_parser, main

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "sample_repo"


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the CLI from reconfiguring the root logger under pytest."""
    monkeypatch.setattr(
        "callorder.cli.setup_logging", lambda *args, **kwargs: None
    )


class TestArgParser:
    def test_version_flag(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["--version"])
        assert args.version is True

    def test_check_defaults(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["check", "src"])
        assert args.command == "check"
        assert args.paths == ["src"]
        assert args.format == "text"
        assert args.output is None
        assert args.language is None
        assert args.verbose is False

    def test_check_with_options(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(
            [
                "check",
                "a.py",
                "lib",
                "--format",
                "json",
                "--output",
                "report.json",
                "-l",
                "python",
                "-l",
                "rust",
                "--verbose",
            ]
        )
        assert args.paths == ["a.py", "lib"]
        assert args.format == "json"
        assert args.output == "report.json"
        assert args.language == ["python", "rust"]
        assert args.verbose is True

    def test_check_requires_paths(self) -> None:
        parser = _build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["check"])

    def test_unknown_language_rejected(self) -> None:
        parser = _build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["check", "x", "-l", "cobol"])

    def test_no_command_prints_help(self) -> None:
        parser = _build_parser()
        args = parser.parse_args([])
        assert args.command is None


class TestMain:
    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--version"])
        assert capsys.readouterr().out.startswith("callorder ")

    def test_violations_exit_one(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(FIXTURE_DIR)])
        assert exc_info.value.code == 1

        out = capsys.readouterr().out
        assert "function `foo` should be defined before `bar`" in out
        assert "= help: move the function earlier" in out
        assert "3 warnings in 3 files" in out

    def test_clean_exit_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(FIXTURE_DIR / "pkg" / "ordered.py")])
        assert exc_info.value.code == 0

    def test_language_filter(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit):
            main(["check", str(FIXTURE_DIR), "-l", "rust", "-f", "json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload["file_count"] == 1
        assert payload["violation_count"] == 1

    def test_json_written_to_output_file(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "report.json"
        with pytest.raises(SystemExit):
            main(
                [
                    "check",
                    str(FIXTURE_DIR / "pkg"),
                    "--format",
                    "json",
                    "--output",
                    str(output),
                ]
            )
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert payload["violation_count"] == 2

    def test_missing_path_exit_two(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(tmp_path / "missing")])
        assert exc_info.value.code == 2
        assert "does not exist" in capsys.readouterr().err

    def test_verbose_flag_reaches_logging_setup(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: list[tuple[str, bool]] = []
        monkeypatch.setattr(
            "callorder.cli.setup_logging",
            lambda level, *, verbose=False: seen.append((level, verbose)),
        )
        monkeypatch.setenv("CALLORDER_LOG_LEVEL", "ERROR")
        with pytest.raises(SystemExit):
            main(["check", str(FIXTURE_DIR / "pkg" / "ordered.py"), "-v"])
        assert seen == [("ERROR", True)]

    def test_unknown_log_level_exit_two(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from callorder import logging_config

        monkeypatch.setattr(
            "callorder.cli.setup_logging", logging_config.resolve_level
        )
        monkeypatch.setenv("CALLORDER_LOG_LEVEL", "chatty")
        with pytest.raises(SystemExit) as exc_info:
            main(["check", str(FIXTURE_DIR / "pkg" / "ordered.py")])
        assert exc_info.value.code == 2
        assert "Unknown log level" in capsys.readouterr().err
