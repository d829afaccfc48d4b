from __future__ import annotations

import json

import pytest

import scm_providers.config as config_mod
from scm_providers.config import get_provider_config
from scm_providers.config.env import is_placeholder, resolve_env, seed_group_from_env
from scm_providers.config.schema import CONFIG_GROUP_NAMES, default_config_group, default_config_groups


@pytest.fixture(autouse=True)
def _reset_file_cache(monkeypatch):
    monkeypatch.setattr(config_mod, "_FILE_CACHE", None)
    monkeypatch.setattr(config_mod, "_FILE_CACHE_PATH", None)


def test_defaults():
    gh = get_provider_config("github")
    assert gh["api_base_url"] == "https://api.github.com"
    assert gh["api_version"] == "2022-11-28"
    assert gh["page_size"] == 50
    assert get_provider_config("Bitbucket")["api_base_url"] == "https://api.bitbucket.org/2.0"


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("GITHUB_API_BASE_URL", "https://ghe.example.test/api/v3")
    monkeypatch.setenv("GITHUB_PAGE_SIZE", "20")
    cfg = get_provider_config("github")
    assert cfg["api_base_url"] == "https://ghe.example.test/api/v3"
    assert cfg["page_size"] == 20


def test_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("BITBUCKET_PAGE_SIZE", "10")
    cfg = get_provider_config("bitbucket", overrides={"page_size": 5, "api_base_url": None})
    assert cfg["page_size"] == 5
    assert cfg["api_base_url"] == "https://api.bitbucket.org/2.0"


def test_invalid_page_size_falls_back(monkeypatch):
    monkeypatch.setenv("GITHUB_PAGE_SIZE", "lots")
    assert get_provider_config("github")["page_size"] == 50


def test_yaml_config_file(tmp_path, monkeypatch):
    path = tmp_path / "scm.yaml"
    path.write_text("bitbucket:\n  page_size: 25\n  api_base_url: https://bb.internal/2.0\n", encoding="utf-8")
    monkeypatch.setenv("SCM_PROVIDERS_CONFIG_FILE", str(path))
    cfg = get_provider_config("bitbucket")
    assert cfg["page_size"] == 25
    assert cfg["api_base_url"] == "https://bb.internal/2.0"


def test_json_config_file_loses_to_env(tmp_path, monkeypatch):
    path = tmp_path / "scm.json"
    path.write_text(json.dumps({"github": {"api_version": "2020-01-01", "page_size": 30}}), encoding="utf-8")
    monkeypatch.setenv("SCM_PROVIDERS_CONFIG_FILE", str(path))
    monkeypatch.setenv("GITHUB_PAGE_SIZE", "40")
    cfg = get_provider_config("github")
    assert cfg["api_version"] == "2020-01-01"
    assert cfg["page_size"] == 40


def test_missing_config_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("SCM_PROVIDERS_CONFIG_FILE", str(tmp_path / "absent.yaml"))
    assert get_provider_config("github")["page_size"] == 50


def test_is_placeholder():
    assert is_placeholder("changeme")
    assert is_placeholder(" YOUR_PLACEHOLDER ")
    assert is_placeholder("test_token")
    assert not is_placeholder("ghp_real")
    assert not is_placeholder(None)


def test_resolve_env_prefers_canonical_name(monkeypatch):
    monkeypatch.setenv("GH_TOKEN", "ghp_alias")
    assert resolve_env("github", "token") == ("ghp_alias", "GH_TOKEN")
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_canonical")
    assert resolve_env("github", "token") == ("ghp_canonical", "GITHUB_TOKEN")
    monkeypatch.setenv("GITHUB_OWNER", "changeme")
    assert resolve_env("github", "owner") == (None, None)
    assert resolve_env("gitlab", "token") == (None, None)


def test_seed_group_from_env_fills_only_empty_values(monkeypatch):
    monkeypatch.setenv("BITBUCKET_WORKSPACE", "acme")
    monkeypatch.setenv("BITBUCKET_USERNAME", "from-env")
    group = default_config_group("bitbucket")
    group.get("username").value = ["explicit"]
    seeded = seed_group_from_env("bitbucket", group)
    assert seeded.value_of("owner") == "acme"
    assert seeded.value_of("username") == "explicit"
    assert seeded.value_of("appPassword") == ""
    assert group.value_of("owner") == ""


def test_manifest_groups():
    assert CONFIG_GROUP_NAMES == {"github": "github_config", "bitbucket": "bitbucket_config"}
    names = [g.name for g in default_config_groups()]
    assert names == ["github_config", "bitbucket_config"]
    token = default_config_group("github").get("token")
    assert token.attr.secret and token.attr.required
    with pytest.raises(KeyError):
        default_config_group("gitlab")
