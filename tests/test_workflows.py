"""
Tests for module workflows — upgrade, get, tidy, replace, why, format.
"""

from pathlib import Path

import pytest

from gomodctl.core.context import ModuleContext
from gomodctl.core.services.mod_client import GoModClient, GoModError, ToolInvocationFailed
from gomodctl.core.services.mod_mode import ModulesDisabled
from gomodctl.core.services.mod_workflows import ModWorkflows


@pytest.fixture
def workflows(go_context, client, host) -> ModWorkflows:
    return ModWorkflows(go_context, client, host)


def _gets(mock) -> list[str]:
    return [c for c in mock.calls if c.startswith("get ")]


# ── Upgrade-One ──────────────────────────────────────────────────────


class TestUpgradeOne:
    def test_confirmed(self, workflows, mock_go, host):
        mock_go.set_output("list -m -u example.com/foo", "example.com/foo v0.1.0 [v0.2.0]\n")
        mock_go.set_output("get example.com/foo@v0.2.0", "go: upgraded example.com/foo v0.1.0 => v0.2.0\n")
        host.confirms.append(True)

        outcome = workflows.upgrade_one("example.com/foo v0.1.0")

        assert outcome.status == "ok"
        assert outcome.version == "v0.2.0"
        assert "upgraded" in outcome.output
        assert ("confirm", "Upgrade example.com/foo to v0.2.0?") in host.asked

    def test_already_latest(self, workflows, mock_go, host):
        mock_go.set_output("list -m -u example.com/foo", "example.com/foo v0.2.0 [v0.2.0]\n")
        outcome = workflows.upgrade_one("example.com/foo v0.2.0")
        assert outcome.status == "noop"
        assert "already at latest" in outcome.message
        assert _gets(mock_go) == []
        assert host.asked == []

    def test_declined(self, workflows, mock_go, host):
        mock_go.set_output("list -m -u example.com/foo", "example.com/foo v0.1.0 [v0.2.0]\n")
        host.confirms.append(False)
        outcome = workflows.upgrade_one("example.com/foo v0.1.0")
        assert outcome.status == "declined"
        assert _gets(mock_go) == []

    def test_cancelled_selection(self, workflows, mock_go):
        mock_go.set_output("list -m all", "example.com/foo v0.1.0\n")
        outcome = workflows.upgrade_one()
        assert outcome.status == "cancelled"
        assert _gets(mock_go) == []

    def test_modules_disabled(self, workflows, mock_go):
        mock_go.set_output("list -m", "command-line-arguments\n")
        with pytest.raises(ModulesDisabled):
            workflows.upgrade_one("example.com/foo")

    def test_get_failure_propagates(self, workflows, mock_go, host):
        mock_go.set_output("list -m -u example.com/foo", "example.com/foo v0.1.0 [v0.2.0]\n")
        mock_go.set_failure("get example.com/foo@v0.2.0", error="go: verifying module: checksum mismatch")
        host.confirms.append(True)
        with pytest.raises(ToolInvocationFailed, match="checksum mismatch"):
            workflows.upgrade_one("example.com/foo")


# ── Upgrade-All ──────────────────────────────────────────────────────


class TestUpgradeAll:
    def test_streams_to_host(self, workflows, mock_go, host):
        mock_go.set_output("get -u -m all", "go: upgraded a v1.0.0 => v1.1.0\ngo: upgraded b v0.1.0 => v0.3.0\n")
        outcome = workflows.upgrade_all()
        assert outcome.status == "ok"
        assert host.displayed == ["go: upgraded a v1.0.0 => v1.1.0", "go: upgraded b v0.1.0 => v0.3.0"]

    def test_patch(self, workflows, mock_go):
        outcome = workflows.upgrade_all(patch_only=True)
        assert outcome.version == "patch"
        assert "get -u=patch -m all" in mock_go.calls

    def test_no_target_resolution(self, workflows, mock_go):
        workflows.upgrade_all()
        assert "list -m" not in mock_go.calls

    def test_failure(self, workflows, mock_go):
        mock_go.set_failure("get -u -m all", error="go: network unreachable")
        with pytest.raises(ToolInvocationFailed):
            workflows.upgrade_all()

    def test_start_returns_handle(self, workflows):
        run = workflows.start_upgrade_all()
        assert run.wait(timeout=5).ok

    def test_display_failure_is_reported(self, workflows, mock_go, host):
        mock_go.set_output("get -u -m all", "go: upgraded a v1.0.0 => v1.1.0\n")

        def broken(message):
            raise RuntimeError("terminal closed")

        host.display = broken
        with pytest.raises(GoModError, match="terminal closed"):
            workflows.upgrade_all()


# ── Get-Specific-Version ─────────────────────────────────────────────


class TestGetVersion:
    def test_select_version(self, workflows, mock_go, host):
        mock_go.set_output("list -m -versions example.com/foo", "example.com/foo v0.1.0 v0.2.0 v1.0.0\n")
        host.selections.append("v0.2.0")
        outcome = workflows.get_version("example.com/foo")
        assert outcome.status == "ok"
        assert host.asked == [("select", ["v0.1.0", "v0.2.0", "v1.0.0"])]
        assert _gets(mock_go) == ["get example.com/foo@v0.2.0"]

    def test_no_versions(self, workflows, mock_go, host):
        mock_go.set_output("list -m -versions example.com/foo", "example.com/foo\n")
        outcome = workflows.get_version("example.com/foo")
        assert outcome.status == "noop"
        assert "No other versions" in outcome.message
        assert _gets(mock_go) == []
        assert host.asked == []

    def test_explicit_version_skips_prompt(self, workflows, mock_go, host):
        outcome = workflows.get_version("example.com/foo", version="main")
        assert outcome.version == "main"
        assert "list -m -versions example.com/foo" not in mock_go.calls
        assert _gets(mock_go) == ["get example.com/foo@main"]

    def test_version_cancelled(self, workflows, mock_go):
        mock_go.set_output("list -m -versions example.com/foo", "example.com/foo v0.1.0\n")
        outcome = workflows.get_version("example.com/foo")
        assert outcome.status == "cancelled"
        assert _gets(mock_go) == []


# ── Tidy / Why ───────────────────────────────────────────────────────


class TestTidyAndWhy:
    def test_tidy(self, workflows, mock_go):
        mock_go.set_output("mod tidy", "go: downloading github.com/lib/pq v1.2.3\n")
        outcome = workflows.tidy()
        assert outcome.status == "ok"
        assert "downloading" in outcome.output

    def test_why(self, workflows, mock_go):
        mock_go.set_output("mod why golang.org/x/text", "# golang.org/x/text\nexample.com/app\ngolang.org/x/text/language\n")
        outcome = workflows.why("\tgolang.org/x/text v0.14.0 // indirect")
        assert outcome.target == "golang.org/x/text"
        assert outcome.output.startswith("# golang.org/x/text")


# ── Replace-With-Local-Path ──────────────────────────────────────────


class TestReplaceWithLocal:
    def test_relative_to_working_dir(self, mock_go, host):
        context = ModuleContext(working_dir=Path("/home/user"), go111module="on")
        workflows = ModWorkflows(context, GoModClient(context, mock_go), host)
        host.texts.append("/home/user/foo")

        outcome = workflows.replace_with_local("example.com/foo")

        assert mock_go.calls[-1] == "mod edit -replace example.com/foo=foo"
        assert outcome.message == "example.com/foo => foo"

    def test_sibling_directory(self, workflows, mock_go, go_context):
        sibling = go_context.working_dir.parent / "foo"
        workflows.replace_with_local("example.com/foo", path=str(sibling))
        assert mock_go.calls[-1] == "mod edit -replace example.com/foo=../foo"

    def test_relative_input(self, workflows, mock_go):
        workflows.replace_with_local("example.com/foo", path="vendor/foo")
        assert mock_go.calls[-1] == "mod edit -replace example.com/foo=vendor/foo"

    def test_empty_path_cancels(self, workflows, mock_go, host):
        host.texts.append("  ")
        outcome = workflows.replace_with_local("example.com/foo")
        assert outcome.status == "cancelled"
        assert not any(c.startswith("mod edit") for c in mock_go.calls)


# ── Format-On-Save ───────────────────────────────────────────────────


class TestFormatOnSave:
    def test_manifest(self, workflows, mock_go, go_context):
        outcome = workflows.format_on_save(go_context.manifest_path)
        assert outcome.status == "ok"
        assert mock_go.calls[-1] == "mod edit -fmt"

    def test_other_file_skipped(self, workflows, mock_go, go_context):
        outcome = workflows.format_on_save(go_context.working_dir / "main.go")
        assert outcome.status == "skipped"
        assert "mod edit -fmt" not in mock_go.calls

    def test_disabled(self, workflows, mock_go, go_context):
        go_context.format_on_save = False
        outcome = workflows.format_on_save("go.mod")
        assert outcome.status == "skipped"
        assert "mod edit -fmt" not in mock_go.calls


# ── Read-only ────────────────────────────────────────────────────────


class TestReadOnly:
    def test_list_modules(self, workflows, mock_go):
        mock_go.set_output("list -m all", "example.com/app\nexample.com/foo v0.1.0\n")
        assert [m.path for m in workflows.list_modules()] == ["example.com/app", "example.com/foo"]

    def test_outdated(self, workflows, mock_go):
        mock_go.set_output("list -m -u all", "example.com/foo v0.1.0 [v0.2.0]\n")
        assert workflows.outdated()[0].latest == "v0.2.0"
