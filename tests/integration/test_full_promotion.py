"""End-to-end promotion tests — real stores, real channels.

These tests exercise the PromotionOrchestrator, CookbookSource,
LocalEnvironmentStore, KnifeRemoteStore and NotificationDispatcher working
together against a temporary chef repository, a fake ``knife`` and
``gist`` and local TCP listeners standing in for irccat and graphite.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from spork.core.orchestrator import PromotionOrchestrator
from spork.models.config import GistConfig, GraphiteConfig, IrccatConfig, SporkConfig
from spork.models.promotion import PromotionRequest
from spork.store import CookbookSource, KnifeRemoteStore, LocalEnvironmentStore


def _fake_knife(make_script, tmp_path: Path, server_table: dict[str, str]) -> Path:
    server = tmp_path / "server-production.json"
    server.write_text(json.dumps({"name": "production", "cookbook_versions": server_table}))
    uploaded = tmp_path / "uploaded.json"
    return make_script(
        "knife",
        f'if [ "$2" = "show" ]; then cat "{server}"; else cat "$4" > "{uploaded}"; fi',
    )


class TestFullPromotion:
    @pytest.fixture
    def build(self, cookbook_path, tmp_path, make_script):
        def _build(config: SporkConfig, server_table: dict[str, str] | None = None):
            knife = _fake_knife(make_script, tmp_path, server_table or {})
            return PromotionOrchestrator(
                config,
                CookbookSource([cookbook_path]),
                LocalEnvironmentStore([cookbook_path]),
                KnifeRemoteStore(str(knife), timeout=5.0),
                git_available=False,
                user="deploy",
            )

        return _build

    def test_local_promotion_of_all_cookbooks(self, build, chef_repo):
        orch = build(SporkConfig())
        result = orch.promote(PromotionRequest(cookbook="all", environments=["production"]))

        data = json.loads((chef_repo / "environments" / "production.json").read_text())
        assert data["cookbook_versions"] == {"a": "= 1.0.1", "b": "= 2.0.0", "c": "= 0.3.0"}
        assert data["json_class"] == "Chef::Environment"
        assert data["default_attributes"] == {"region": "eu-west-1"}
        # b unchanged, c is new: only a is reported
        assert [c.render() for c in result.environments[0].changes] == [
            "a: = 1.0.0 changed to = 1.0.1"
        ]

    def test_local_run_makes_no_network_calls(self, build, tcp_listener, make_script, tmp_path):
        marker = tmp_path / "gist-called"
        gist = make_script("gist", f'touch "{marker}"')
        config = SporkConfig(
            gist=GistConfig(enabled=True, path=str(gist)),
            graphite=GraphiteConfig(enabled=True, server="127.0.0.1", port=tcp_listener.port),
            irccat=IrccatConfig(enabled=True, server="127.0.0.1", port=tcp_listener.port),
        )
        result = build(config).promote(
            PromotionRequest(cookbook="a", environments=["production"])
        )

        assert not result.environments[0].uploaded
        assert not tcp_listener.wait(timeout=0.5)
        assert tcp_listener.received == []
        assert not marker.exists()

    def test_remote_promotion_notifies_every_channel(
        self, build, tcp_listener, make_script, tmp_path
    ):
        paste = tmp_path / "paste.txt"
        gist = make_script("gist", f'cat > "{paste}"\necho https://gist.example/abc')
        config = SporkConfig(
            gist=GistConfig(enabled=True, path=str(gist)),
            irccat=IrccatConfig(
                enabled=True, server="127.0.0.1", port=tcp_listener.port, channel="#ops"
            ),
        )
        result = build(config, server_table={"a": "= 0.9.0", "b": "= 2.0.0"}).promote(
            PromotionRequest(cookbook="a", environments=["production"], remote=True)
        )

        env_result = result.environments[0]
        assert env_result.uploaded
        assert env_result.notified_channels == ["gist", "irccat"]
        assert "a: = 0.9.0 changed to = 1.0.1" in paste.read_text()
        assert tcp_listener.wait()
        assert tcp_listener.received == [
            "#ops CHEF: deploy uploaded environment production https://gist.example/abc"
        ]
        uploaded = json.loads((tmp_path / "uploaded.json").read_text())
        assert uploaded["cookbook_versions"]["a"] == "= 1.0.1"

    def test_dead_channels_do_not_fail_remote_promotion(
        self, build, closed_port, tmp_path, chef_repo
    ):
        config = SporkConfig(
            gist=GistConfig(enabled=True, path=str(tmp_path / "no-such-gist")),
            irccat=IrccatConfig(enabled=True, server="127.0.0.1", port=closed_port),
            graphite=GraphiteConfig(enabled=True, server="127.0.0.1", port=closed_port),
            network_timeout=1.0,
        )
        result = build(config).promote(
            PromotionRequest(
                cookbook="c", environments=["staging"], version="1.2.3", remote=True
            )
        )

        env_result = result.environments[0]
        assert env_result.uploaded
        assert env_result.notified_channels == []
        data = json.loads((chef_repo / "environments" / "staging.json").read_text())
        assert data["cookbook_versions"] == {"c": "= 1.2.3"}
