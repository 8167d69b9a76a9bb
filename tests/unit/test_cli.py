"""
Tests for the command line interface.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docs_redirects.app_shell.cli import build_parser, main

RULES = """
base_url: https://suites.dev
redirects:
  - from: /docs/overview/quickstart
    to: /docs/get-started/quickstart
  - from: [/docs/developer-guide/unit-tests/solitary, /docs/learn/unit-tests/solitary]
    to: /docs/guides/solitary
targets:
  - platform: vercel
    path: vercel.json
"""

CONFLICTING_RULES = """
redirects:
  - from: /docs/a
    to: /docs/b
  - from: /docs/a
    to: /docs/c
"""


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "redirects.yaml"
    path.write_text(RULES, encoding="utf-8")
    return path


@pytest.fixture
def conflicting_rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "conflicting.yaml"
    path.write_text(CONFLICTING_RULES, encoding="utf-8")
    return path


class TestParser:
    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_routes_options_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["check", "--build-dir", "a", "--routes-file", "b"])


class TestCheck:
    def test_ok(self, rules_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--rules", str(rules_file), "check"]) == 0
        assert "OK: 2 rules, 6 table entries." in capsys.readouterr().out

    def test_problems(
        self, conflicting_rules_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--rules", str(conflicting_rules_file), "check"]) == 1
        assert "1 problem(s) found." in capsys.readouterr().out

    def test_against_build_dir(self, rules_file: Path, build_dir: Path) -> None:
        assert main(["--rules", str(rules_file), "check", "--build-dir", str(build_dir)]) == 0

    def test_against_routes_file(self, rules_file: Path, tmp_path: Path) -> None:
        routes = tmp_path / "routes.txt"
        routes.write_text("/docs/overview/quickstart\n", encoding="utf-8")

        assert main(["--rules", str(rules_file), "check", "--routes-file", str(routes)]) == 1

    def test_missing_rules_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--rules", str(tmp_path / "missing.yaml"), "check"])
        assert exc.value.code == 1

    def test_missing_build_dir(self, rules_file: Path, tmp_path: Path) -> None:
        args = ["--rules", str(rules_file), "check", "--build-dir", str(tmp_path / "nope")]
        assert main(args) == 1


class TestBuild:
    def test_writes_artifacts(
        self,
        rules_file: Path,
        build_dir: Path,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        out_dir = tmp_path / "out"

        code = main(
            [
                "--rules",
                str(rules_file),
                "build",
                "--build-dir",
                str(build_dir),
                "--out-dir",
                str(out_dir),
            ]
        )

        assert code == 0
        assert "Wrote 4 file(s)." in capsys.readouterr().out
        vercel = json.loads((out_dir / "vercel.json").read_text(encoding="utf-8"))
        assert vercel["redirects"][0] == {
            "source": "/docs/overview/quickstart",
            "destination": "/docs/get-started/quickstart",
            "permanent": True,
        }
        assert (build_dir / "docs" / "overview" / "quickstart" / "index.html").exists()

    def test_no_stubs(self, rules_file: Path, build_dir: Path, tmp_path: Path) -> None:
        code = main(
            [
                "--rules",
                str(rules_file),
                "build",
                "--build-dir",
                str(build_dir),
                "--out-dir",
                str(tmp_path / "out"),
                "--no-stubs",
            ]
        )

        assert code == 0
        assert not (build_dir / "docs" / "overview").exists()

    def test_failure(self, conflicting_rules_file: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        args = ["--rules", str(conflicting_rules_file), "build", "--out-dir", str(out_dir)]

        assert main(args) == 1
        assert list(out_dir.iterdir()) == []

    def test_unsafe_target_rejected(self, tmp_path: Path) -> None:
        rules = tmp_path / "unsafe.yaml"
        rules.write_text(
            RULES.replace("path: vercel.json", "path: ../vercel.json"), encoding="utf-8"
        )
        out_dir = tmp_path / "out"

        with pytest.raises(SystemExit) as exc:
            main(["--rules", str(rules), "build", "--out-dir", str(out_dir)])
        assert exc.value.code == 1
        assert not (tmp_path / "vercel.json").exists()

    def test_write_failure(self, rules_file: Path, tmp_path: Path) -> None:
        out_file = tmp_path / "not-a-dir"
        out_file.write_text("", encoding="utf-8")

        args = ["--rules", str(rules_file), "build", "--out-dir", str(out_file)]
        assert main(args) == 1


class TestResolve:
    def test_redirect(self, rules_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--rules", str(rules_file), "resolve", "/docs/overview/quickstart/"]) == 0
        assert (
            "/docs/overview/quickstart/ -> /docs/get-started/quickstart (301)"
            in capsys.readouterr().out
        )

    def test_no_redirect(self, rules_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--rules", str(rules_file), "resolve", "/docs/guides/solitary"]) == 0
        assert "/docs/guides/solitary: no redirect" in capsys.readouterr().out

    def test_invalid_rules(self, conflicting_rules_file: Path) -> None:
        assert main(["--rules", str(conflicting_rules_file), "resolve", "/docs/a"]) == 1
