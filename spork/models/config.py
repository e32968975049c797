"""Cascading file configuration models (``spork-config.yml``).

The merged YAML mapping is validated into ``SporkConfig`` once at the CLI
boundary and passed explicitly to the orchestrator and dispatcher.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GitConfig(BaseModel):
    """Pull the chef repository before promoting."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False


class GistConfig(BaseModel):
    """Paste channel: an external ``gist`` executable that reads stdin."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    in_chef: bool = False
    chef_path: str = ""
    path: str = "gist"

    @property
    def executable(self) -> str:
        return self.chef_path if self.in_chef else self.path


class IrccatConfig(BaseModel):
    """Chat channel: one line of text to an irccat listener."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    server: str = "localhost"
    port: int = 12345
    channel: str = "#chef"


class GraphiteConfig(BaseModel):
    """Metrics channel: a plaintext-protocol counter on a carbon listener."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    server: str = "localhost"
    port: int = 2003
    namespace: str = "chef"


class SporkConfig(BaseModel):
    """Merged configuration for one promotion run."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    default_environments: list[str] | None = None
    git: GitConfig = GitConfig()
    gist: GistConfig = GistConfig()
    irccat: IrccatConfig = IrccatConfig()
    graphite: GraphiteConfig = GraphiteConfig()
    network_timeout: float = 10.0
