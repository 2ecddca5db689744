"""Tests for scope key resolution."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from harpoon.core.features.project_backends import ProjectInfo
from harpoon.core.features.scope import ScopeResolver, sanitize
from harpoon.core.models import Problem

from .conftest import FixedBackend

ROOT = Path("/work/proj")


def _resolver(name="proj", branch="main", **kwargs):
    info = ProjectInfo(name=name, root=ROOT) if name is not None else None
    provider = branch if callable(branch) else (lambda root: branch)
    return ScopeResolver(FixedBackend(info), provider, **kwargs)


class TestSanitize:
    def test_replaces_separators(self):
        assert sanitize("feature/login") == "feature---login"
        assert sanitize("a\\b/c") == "a---b---c"

    def test_plain_text_unchanged(self):
        assert sanitize("proj") == "proj"


class TestResolve:
    def test_project_and_branch(self):
        res = _resolver().resolve()
        assert res.key == "proj#main"
        assert res.project_root == ROOT
        assert res.branch == "main"
        assert res.problems == []

    def test_branch_is_sanitized(self):
        assert _resolver(branch="feature/x").resolve_key() == "proj#feature---x"

    def test_without_branch_separation(self):
        res = _resolver(branch="dev", separate_by_branch=False).resolve()
        assert res.key == "proj"
        assert res.branch == ""

    def test_project_name_is_sanitized(self):
        assert _resolver(name="org/proj", separate_by_branch=False).resolve_key() == (
            "org---proj"
        )

    @pytest.mark.parametrize("name", [None, "", "none", "-"])
    def test_no_project_uses_fallback(self, name):
        res = _resolver(name=name, fallback_name=lambda: "scratch/pad").resolve()
        assert res.key == "scratch---pad"
        assert res.project_root is None
        assert res.problems == [Problem.PROJECT_NOT_DETECTED]

    def test_default_fallback(self):
        assert _resolver(name=None).resolve_key() == "harpoon"

    def test_branch_none_degrades_to_placeholder(self):
        res = _resolver(branch=lambda root: None).resolve()
        assert res.key == "proj#"
        assert res.problems == [Problem.BRANCH_LOOKUP_FAILED]

    @pytest.mark.parametrize(
        "exc",
        [OSError("no git"), RuntimeError("boom"), subprocess.TimeoutExpired("git", 1)],
    )
    def test_branch_errors_do_not_propagate(self, exc):
        def provider(root):
            raise exc

        res = _resolver(branch=provider).resolve()
        assert res.key == "proj#"
        assert Problem.BRANCH_LOOKUP_FAILED in res.problems

    def test_branch_provider_gets_project_root(self):
        seen = []
        _resolver(branch=lambda root: seen.append(root) or "main").resolve()
        assert seen == [ROOT]

    def test_branch_not_queried_when_disabled(self):
        def provider(root):
            raise AssertionError("should not be called")

        assert _resolver(branch=provider, separate_by_branch=False).resolve_key() == (
            "proj"
        )

    def test_any_provider_exception_is_a_failed_lookup(self):
        def provider(root):
            raise ValueError("undecodable branch name")

        res = _resolver(branch=provider).resolve()
        assert res.key == "proj#"
        assert res.problems == [Problem.BRANCH_LOOKUP_FAILED]
