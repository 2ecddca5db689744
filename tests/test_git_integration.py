"""Tests for the git helpers (subprocess is always mocked)."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

from harpoon.core.features import git_integration


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(["git"], returncode, stdout, stderr)


class TestRunGit:
    def test_success(self):
        with patch("subprocess.run", return_value=_completed(stdout="main\n")):
            assert git_integration.run_git("status") == (True, "main")

    def test_failure_returns_stderr(self):
        with patch(
            "subprocess.run",
            return_value=_completed(128, stderr="fatal: not a git repository"),
        ):
            ok, out = git_integration.run_git("status")
        assert not ok
        assert "not a git repository" in out

    def test_git_missing(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert git_integration.run_git("status") == (False, "git not found")

    def test_timeout(self):
        with patch(
            "subprocess.run", side_effect=subprocess.TimeoutExpired("git", 10)
        ):
            assert git_integration.run_git("status") == (
                False,
                "git command timed out",
            )


class TestBranchAndToplevel:
    def test_current_branch(self):
        with patch("subprocess.run", return_value=_completed(stdout="feature/x\n")):
            assert git_integration.current_branch("/repo") == "feature/x"

    def test_current_branch_outside_repo(self):
        with patch("subprocess.run", return_value=_completed(128, stderr="fatal")):
            assert git_integration.current_branch("/tmp") is None

    def test_toplevel(self):
        with patch("subprocess.run", return_value=_completed(stdout="/repo\n")):
            assert git_integration.toplevel("/repo/src") == "/repo"

    def test_toplevel_without_git(self):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert git_integration.toplevel("/repo") is None


class TestUndecodableOutput:
    def test_decode_error_is_reported_not_raised(self):
        exc = UnicodeDecodeError("utf-8", b"feat-\xff", 5, 6, "invalid start byte")
        with patch("subprocess.run", side_effect=exc):
            ok, out = git_integration.run_git("rev-parse", "--abbrev-ref", "HEAD")
        assert not ok
        assert "utf-8" in out

    def test_branch_lookup_survives_decode_error(self):
        exc = UnicodeDecodeError("utf-8", b"feat-\xff", 5, 6, "invalid start byte")
        with patch("subprocess.run", side_effect=exc):
            assert git_integration.current_branch("/repo") is None
            assert git_integration.toplevel("/repo") is None

    def test_output_decoded_with_replacement(self):
        with patch("subprocess.run", return_value=_completed(stdout="x")) as run:
            git_integration.run_git("status")
        assert run.call_args.kwargs["errors"] == "replace"
