from __future__ import annotations

import pytest

from scm_providers.base.actions import ActionName
from scm_providers.base.dispatch import ActionDispatcher, UnknownActionError
from scm_providers.base.errors import ErrorCode, ProviderError
from scm_providers.base.interfaces import SCMProvider
from scm_providers.bitbucket import BitbucketProvider
from scm_providers.github import GithubProvider
from scm_providers.persistence import InMemoryConfigStore


def _github() -> GithubProvider:
    return GithubProvider(InMemoryConfigStore.from_manifest(use_env=False))


def test_providers_satisfy_protocol():
    assert isinstance(_github(), SCMProvider)
    assert isinstance(BitbucketProvider(InMemoryConfigStore.from_manifest(use_env=False)), SCMProvider)


def test_unknown_action_rejected_before_provider_code():
    dispatcher = ActionDispatcher(_github())
    with pytest.raises(UnknownActionError) as ei:
        dispatcher.invoke("actionDeleteEverything")
    assert ei.value.to_dict()["errorCode"] == "UNKNOWN_ACTION"
    assert ei.value.to_dict()["statusCode"] == 404


def test_bitbucket_only_action_is_unknown_on_github():
    with pytest.raises(UnknownActionError):
        ActionDispatcher(_github()).invoke("actionListBitbucketWorkspaces")


def test_run_with_unbound_action_raises_unknown_action():
    with pytest.raises(UnknownActionError):
        _github().run(ActionName.LIST_WORKSPACES)


def test_invoke_routes_to_provider_and_applies_ordering(opts):
    dispatcher = ActionDispatcher(_github())
    with pytest.raises(ProviderError) as ei:
        dispatcher.invoke("actionGetRepo", opts())
    assert ei.value.code is ErrorCode.MISSING_REQUIRED_PARAMS
    with pytest.raises(ProviderError) as ei:
        dispatcher.invoke("actionGetRepo", opts(repoName="demo"))
    assert ei.value.code is ErrorCode.PROVIDER_NOT_INITIALIZED


def test_legacy_names_dispatch(opts):
    with pytest.raises(ProviderError) as ei:
        ActionDispatcher(_github()).invoke("actionListRepoBranches", opts(repoName="demo"))
    assert ei.value.action == "actionListBranches"


def test_resolve_field_uses_vendor_aliases():
    gh = ActionDispatcher(_github())
    bb = ActionDispatcher(BitbucketProvider(InMemoryConfigStore.from_manifest(use_env=False)))
    assert gh.resolve_field("actionListRepoContents", "revision") == "ref"
    assert gh.resolve_field("actionListBranchCommits", "revision") == "branch"
    assert bb.resolve_field("actionGetCommitDetails", "commit") == "commitSha"
    assert gh.resolve_field("actionGetRepo", "repoName") == "repoName"


def test_describe_is_manifest_of_bound_actions():
    entries = ActionDispatcher(BitbucketProvider(InMemoryConfigStore.from_manifest(use_env=False))).describe()
    names = [e["action"] for e in entries]
    assert "actionListBitbucketWorkspaces" in names
    assert len(names) == len(set(names))
    contents = next(e for e in entries if e["action"] == "actionListRepoContents")
    assert contents["required"] == ["repoName", "ref"]
    assert "notes" in contents


def test_every_github_action_is_bound():
    bound = set(_github().actions())
    assert bound == set(ActionName) - {ActionName.LIST_WORKSPACES}
