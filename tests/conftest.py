"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from gomodctl.adapters.mock import MockAdapter
from gomodctl.core.context import ModuleContext
from gomodctl.core.services.mod_client import GoModClient
from gomodctl.core.services.mod_host import Host


class ScriptedHost(Host):
    """Host that answers from queues and records what it was asked."""

    def __init__(self, selections=None, confirms=None, texts=None):
        self.selections = list(selections or [])
        self.confirms = list(confirms or [])
        self.texts = list(texts or [])
        self.asked: list[tuple[str, object]] = []
        self.displayed: list[str] = []

    def select_one(self, title, options):
        self.asked.append(("select", list(options)))
        return self.selections.pop(0) if self.selections else None

    def confirm(self, message):
        self.asked.append(("confirm", message))
        return self.confirms.pop(0) if self.confirms else False

    def read_text(self, prompt, default=None):
        self.asked.append(("text", prompt))
        return self.texts.pop(0) if self.texts else ""

    def display(self, message):
        self.displayed.append(message)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def go_context(tmp_path: Path) -> ModuleContext:
    """Context rooted in a temp dir with module mode on."""
    (tmp_path / "go.mod").write_text("module example.com/app\n\ngo 1.21\n")
    return ModuleContext(working_dir=tmp_path, go111module="on")


@pytest.fixture
def mock_go() -> MockAdapter:
    """Mock toolchain that sits inside module example.com/app."""
    adapter = MockAdapter(adapter_name="go")
    adapter.set_output("list -m", "example.com/app\n")
    adapter.set_output("version", "go version go1.21.5 linux/amd64\n")
    return adapter


@pytest.fixture
def client(go_context: ModuleContext, mock_go: MockAdapter) -> GoModClient:
    return GoModClient(go_context, mock_go)


@pytest.fixture
def host() -> ScriptedHost:
    return ScriptedHost()


@pytest.fixture
def make_host():
    """Factory for hosts with scripted answers."""
    return ScriptedHost
