"""
Tests for plugin discovery, activation and trigger routing.
"""

import pytest

from zjump.launcher.plugin_base import PluginBase
from zjump.launcher.plugin_manager import PluginManager
from zjump.launcher.plugins.zoxide import ZoxidePlugin


@pytest.fixture
def manager(config, stub_api, zoxide_bin):
    manager = PluginManager(api=stub_api, config=config)
    yield manager
    manager.cleanup()


def test_discovers_zoxide_plugin(manager):
    assert manager.get_plugin_names() == ["zoxide"]
    assert manager.plugin_classes["zoxide"] is ZoxidePlugin
    assert manager.trigger_map == {"z": "zoxide"}


def test_plugins_are_not_activated_until_needed(manager):
    assert manager.get_active_plugin_names() == []


def test_find_trigger_plugin(manager):
    assert manager.find_trigger_plugin("z proj") == ("zoxide", "z")
    assert manager.find_trigger_plugin("z") == ("zoxide", "z")
    assert manager.find_trigger_plugin("zed") == (None, "")


def test_triggered_query_strips_trigger(manager, fake_zoxide, zoxide_bin):
    fake_zoxide.respond("query", stdout="/home/me/project")

    results = manager.query("z  my proj ")

    assert [r.title for r in results] == ["Navigate to: project"]
    assert fake_zoxide.calls == [[zoxide_bin, "query", "my proj"]]
    assert manager.get_active_plugin_names() == ["zoxide"]


def test_activation_passes_api(manager, stub_api):
    assert manager.activate_plugin("zoxide")
    plugin = manager.get_active_plugins()[0]

    assert plugin.api is stub_api
    assert len(stub_api.callbacks) == 1


def test_activate_unknown_plugin(manager):
    assert manager.activate_plugin("nope") is False


def test_deactivate_cleans_up(manager, stub_api):
    manager.activate_plugin("zoxide")
    plugin = manager.plugins["zoxide"]

    assert manager.deactivate_plugin("zoxide")
    assert plugin.disposed
    assert stub_api.callbacks == {}
    assert manager.deactivate_plugin("zoxide") is False


def test_configured_triggers_replace_defaults(config, stub_api, zoxide_bin):
    config["plugins"] = {"zoxide": {"triggers": ["cd", "zo"]}}
    manager = PluginManager(api=stub_api, config=config)

    assert manager.trigger_map == {"cd": "zoxide", "zo": "zoxide"}
    assert manager.find_trigger_plugin("z proj") == (None, "")

    manager.activate_plugin("zoxide")
    assert manager.plugins["zoxide"].get_triggers() == ["cd", "zo"]


def test_disabled_plugin_has_no_triggers(config, stub_api):
    config["plugins"] = {"zoxide": {"enabled": False}}
    manager = PluginManager(api=stub_api, config=config)

    assert manager.trigger_map == {}
    assert manager.query("z proj") == []


def test_untriggered_query_uses_active_plugins(manager, fake_zoxide):
    manager.activate_plugin("zoxide")
    fake_zoxide.respond("query", stdout="/srv/zebra")

    results = manager.query("zebra")

    assert [r.title for r in results] == ["Navigate to: zebra"]


def test_failed_activation_is_reported(config, stub_api, monkeypatch):
    def broken_initialize(self, api=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(ZoxidePlugin, "initialize", broken_initialize)
    manager = PluginManager(api=stub_api, config=config)

    assert manager.activate_plugin("zoxide") is False
    assert manager.get_plugin_for_trigger("z") is None


class _TriggerlessPlugin(PluginBase):
    def initialize(self, api=None):
        pass

    def cleanup(self):
        pass

    def query(self, query_string):
        return []


def test_plugin_base_defaults(config):
    plugin = _TriggerlessPlugin(config=config)

    assert plugin.handles_query("anything")
    assert plugin.context_menu(None) == []
    plugin.set_config({"enabled": False})
    assert not plugin.handles_query("anything")
    assert plugin.get_config()["enabled"] is False


def test_partial_config_still_activates(stub_api, zoxide_bin):
    manager = PluginManager(api=stub_api, config={"zoxide_binary": "zoxide.exe"})

    assert manager.activate_plugin("zoxide")
    assert manager.plugins["zoxide"].zoxide_path == zoxide_bin
    manager.cleanup()
