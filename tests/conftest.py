"""Shared test fixtures for Spork."""

from __future__ import annotations

import json
import socketserver
import threading
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from spork.models.config import SporkConfig
from spork.models.environment import Environment
from spork.models.notifications import NotificationEvent
from spork.store.cookbooks import CookbookSource
from spork.store.environments import LocalEnvironmentStore


def write_cookbook(base: Path, name: str, version: str, *, style: str = "rb") -> Path:
    """Create ``base/name`` with a metadata.rb or metadata.json."""
    cookbook_dir = base / name
    cookbook_dir.mkdir(parents=True, exist_ok=True)
    if style == "json":
        (cookbook_dir / "metadata.json").write_text(
            json.dumps({"name": name, "version": version}), encoding="utf-8"
        )
    else:
        (cookbook_dir / "metadata.rb").write_text(
            f'name "{name}"\nmaintainer "Ops"\nversion "{version}"\n',
            encoding="utf-8",
        )
    return cookbook_dir


def write_environment(directory: Path, name: str, cookbook_versions: dict[str, str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.json"
    path.write_text(
        json.dumps(
            {
                "name": name,
                "description": f"The {name} environment",
                "cookbook_versions": cookbook_versions,
                "json_class": "Chef::Environment",
                "chef_type": "environment",
                "default_attributes": {"region": "eu-west-1"},
                "override_attributes": {},
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def chef_repo(tmp_path: Path) -> Path:
    """A chef repo with cookbooks a, b, c and two environments.

    production pins a and b; staging pins nothing.
    """
    repo = tmp_path / "chef-repo"
    cookbooks = repo / "cookbooks"
    write_cookbook(cookbooks, "a", "1.0.1")
    write_cookbook(cookbooks, "b", "2.0.0", style="json")
    write_cookbook(cookbooks, "c", "0.3.0")
    write_environment(repo / "environments", "production", {"a": "= 1.0.0", "b": "= 2.0.0"})
    write_environment(repo / "environments", "staging", {})
    return repo


@pytest.fixture
def cookbook_path(chef_repo: Path) -> Path:
    return chef_repo / "cookbooks"


@pytest.fixture
def cookbook_source(cookbook_path: Path) -> CookbookSource:
    return CookbookSource([cookbook_path])


@pytest.fixture
def local_store(cookbook_path: Path) -> LocalEnvironmentStore:
    return LocalEnvironmentStore([cookbook_path])


@pytest.fixture
def config() -> SporkConfig:
    """A config with every channel disabled."""
    return SporkConfig()


@pytest.fixture
def make_environment() -> Callable[..., Environment]:
    """Factory fixture: build an Environment with sensible defaults."""

    def _factory(
        name: str = "production",
        cookbook_versions: dict[str, str] | None = None,
        **overrides: Any,
    ) -> Environment:
        return Environment(
            name=name,
            cookbook_versions=cookbook_versions if cookbook_versions is not None else {"app": "= 2.2.0"},
            **overrides,
        )

    return _factory


@pytest.fixture
def event() -> NotificationEvent:
    return NotificationEvent(
        environment="production",
        user="deploy",
        changes_text="app: = 2.2.0 changed to = 2.3.1\n",
    )


# ---------------------------------------------------------------------------
# TCP listener — stands in for irccat and graphite
# ---------------------------------------------------------------------------


class TcpListener:
    """Collects every payload written to it, one entry per connection."""

    def __init__(self) -> None:
        self.received: list[str] = []
        self._got_data = threading.Event()
        listener = self

        class _Handler(socketserver.StreamRequestHandler):
            def handle(self) -> None:
                data = self.rfile.read()
                listener.received.append(data.decode("utf-8"))
                listener._got_data.set()

        self._server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _Handler)
        self._server.daemon_threads = True
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def port(self) -> int:
        return self._server.server_address[1]

    def start(self) -> None:
        self._thread.start()

    def wait(self, timeout: float = 5.0) -> bool:
        return self._got_data.wait(timeout)

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()


@pytest.fixture
def tcp_listener() -> Iterator[TcpListener]:
    listener = TcpListener()
    listener.start()
    yield listener
    listener.stop()


@pytest.fixture
def closed_port() -> int:
    """A localhost port with nothing listening on it."""
    server = socketserver.TCPServer(("127.0.0.1", 0), socketserver.BaseRequestHandler)
    port = server.server_address[1]
    server.server_close()
    return port


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory fixture: write an executable ``/bin/sh`` script."""

    def _factory(name: str, body: str) -> Path:
        path = tmp_path / "bin" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        path.chmod(0o755)
        return path

    return _factory


@pytest.fixture
def make_cookbook() -> Callable[..., Path]:
    """Factory fixture: ``make_cookbook(base, name, version, style="rb")``."""
    return write_cookbook


@pytest.fixture
def make_environment_file() -> Callable[..., Path]:
    """Factory fixture: ``make_environment_file(directory, name, table)``."""
    return write_environment
