from __future__ import annotations

import logging

import pytest

from scm_providers.base.actions import ActionName
from scm_providers.base.errors import ErrorCode, ProviderError
from scm_providers.base.models import MASK, ProviderStatus
from scm_providers.github import GithubProvider
from scm_providers.persistence import InMemoryConfigStore


# ---- init / create_client ----


def test_init_authenticates_with_bearer_token(github_store, github_http):
    provider = GithubProvider(github_store, transport=github_http.transport)
    state = provider.init()
    assert state.status is ProviderStatus.READY
    assert state.owner == "octo"
    assert state.profile["login"] == "octo"
    req = github_http.last()
    assert req.url.path == "/user"
    assert req.headers["Authorization"] == "Bearer ghp_secret"
    assert req.headers["Accept"] == "application/vnd.github+json"
    assert req.headers["X-GitHub-Api-Version"] == "2022-11-28"
    provider.close()


@pytest.mark.parametrize(
    "values,message",
    [
        ({"token": "", "owner": "octo"}, "GitHub token not found in configurations"),
        ({"token": "ghp_x", "owner": ""}, "GitHub owner (account username) not found in configurations"),
    ],
)
def test_init_missing_credentials_is_auth_failed(make_group, github_http, values, message):
    provider = GithubProvider(InMemoryConfigStore([make_group("github", **values)]), transport=github_http.transport)
    with pytest.raises(ProviderError) as ei:
        provider.init()
    assert ei.value.code is ErrorCode.AUTH_FAILED
    assert ei.value.status_code == 401
    assert ei.value.message == message
    assert github_http.requests == []
    assert provider.state.status is ProviderStatus.FAILED_AUTH


def test_init_without_stored_group_is_auth_failed(github_http):
    provider = GithubProvider(InMemoryConfigStore(), transport=github_http.transport)
    with pytest.raises(ProviderError) as ei:
        provider.init()
    assert ei.value.code is ErrorCode.AUTH_FAILED


def test_rejected_token_is_auth_failed(github_store, github_http):
    github_http.add("GET", "/user", status=401, json={"message": "Bad credentials"})
    provider = GithubProvider(github_store, transport=github_http.transport)
    with pytest.raises(ProviderError) as ei:
        provider.init()
    assert ei.value.code is ErrorCode.AUTH_FAILED
    assert ei.value.message == "GitHub authentication failed"
    assert provider.state.client is None


def test_vendor_outage_during_init_is_init_failed(github_store, github_http):
    github_http.add("GET", "/user", status=503)
    provider = GithubProvider(github_store, transport=github_http.transport)
    with pytest.raises(ProviderError) as ei:
        provider.init()
    assert ei.value.code is ErrorCode.INIT_FAILED
    assert ei.value.status_code == 500
    assert ei.value.message == "Failed to initialize GitHub provider"
    assert provider.state.status is ProviderStatus.FAILED


def test_failed_reinit_drops_previous_client(github, github_store, make_group):
    old_client = github.state.client
    github_store.save_configs([make_group("github", token="", owner="octo")])
    with pytest.raises(ProviderError):
        github.init()
    assert github.state.client is None
    assert old_client.is_closed


def test_reinit_replaces_owner_and_client(github, github_store, github_http, make_group, opts):
    old_client = github.state.client
    github_store.save_configs([make_group("github", token="ghp_new", owner="hubot")])
    github.init()
    assert github.state.owner == "hubot"
    assert github.state.client is not old_client
    assert old_client.is_closed
    github_http.add("GET", "/repos/hubot/demo", json={"full_name": "hubot/demo"})
    assert github.get_repo(opts(repoName="demo")) == {"full_name": "hubot/demo"}
    assert github_http.last().headers["Authorization"] == "Bearer ghp_new"


def test_create_client_rejects_empty_token(github_store, github_http):
    provider = GithubProvider(github_store, transport=github_http.transport)
    with pytest.raises(ProviderError) as ei:
        provider.create_client({"token": "", "owner": "octo"})
    assert ei.value.status_code == 401
    assert github_http.requests == []


# ---- ordering guarantees ----


def test_action_before_init_fails_without_http(github_store, github_http, opts):
    provider = GithubProvider(github_store, transport=github_http.transport)
    with pytest.raises(ProviderError) as ei:
        provider.list_repos(opts())
    assert ei.value.code is ErrorCode.PROVIDER_NOT_INITIALIZED
    assert ei.value.status_code == 401
    assert github_http.requests == []


def test_get_repo_without_repo_name_is_400_without_http(github, github_http, opts):
    with pytest.raises(ProviderError) as ei:
        github.get_repo(opts())
    assert ei.value.status_code == 400
    assert ei.value.code is ErrorCode.MISSING_REQUIRED_PARAMS
    assert github_http.requests == []


# ---- actions ----


def test_list_repos_default_query(github, github_http):
    github_http.add("GET", "/user/repos", json=[{"name": "demo"}])
    assert github.list_repos() == [{"name": "demo"}]
    assert dict(github_http.last().url.params) == {
        "visibility": "all",
        "sort": "updated",
        "per_page": "50",
        "page": "1",
    }


def test_list_repos_honours_arguments(github, github_http, opts):
    github_http.add("GET", "/user/repos", json=[])
    github.list_repos(opts(visibility="private", sort="pushed", page="3"))
    params = github_http.last().url.params
    assert params["visibility"] == "private"
    assert params["sort"] == "pushed"
    assert params["page"] == "3"


def test_get_repo_not_found(github, github_http, opts):
    with pytest.raises(ProviderError) as ei:
        github.get_repo(opts(repoName="ghost"))
    assert ei.value.status_code == 404
    assert ei.value.code is ErrorCode.REPOSITORY_NOT_FOUND
    assert ei.value.message == "Repository not found"
    assert ei.value.to_dict()["errorCode"] == "REPOSITORY_NOT_FOUND"


def test_get_repo_server_error(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo", status=502)
    with pytest.raises(ProviderError) as ei:
        github.get_repo(opts(repoName="demo"))
    assert ei.value.status_code == 500
    assert ei.value.code is ErrorCode.FETCH_REPO_FAILED


def test_list_repo_contents(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/contents/src", json=[{"name": "app.py"}])
    assert github.list_repo_contents(opts(repoName="demo", path="/src/", ref="dev")) == [{"name": "app.py"}]
    assert github_http.last().url.params["ref"] == "dev"


def test_list_repo_contents_root_without_ref(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/contents/", json=[])
    github.list_repo_contents(opts(repoName="demo"))
    assert "ref" not in github_http.last().url.params


def test_list_repo_contents_missing_path(github, opts):
    with pytest.raises(ProviderError) as ei:
        github.list_repo_contents(opts(repoName="demo", path="nope"))
    assert ei.value.code is ErrorCode.RESOURCE_NOT_FOUND
    assert ei.value.message == "Repository path or reference not found"


def test_get_repo_file_content_requires_path(github, github_http, opts):
    with pytest.raises(ProviderError) as ei:
        github.get_repo_file_content(opts(repoName="demo"))
    assert ei.value.code is ErrorCode.MISSING_REQUIRED_PARAMS
    github_http.add("GET", "/repos/octo/demo/contents/README.md", json={"type": "file", "content": "SGk="})
    assert github.get_repo_file_content(opts(repoName="demo", path="README.md"))["type"] == "file"


def test_list_branches(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/branches", json=[{"name": "main"}])
    assert github.list_branches(opts(repoName="demo")) == [{"name": "main"}]
    with pytest.raises(ProviderError) as ei:
        github.list_branches(opts(repoName="ghost"))
    assert ei.value.code is ErrorCode.REPOSITORY_NOT_FOUND


def test_list_branch_commits(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/commits", json=[{"sha": "abc"}])
    assert github.list_branch_commits(opts(repoName="demo", branch="feature/x")) == [{"sha": "abc"}]
    assert github_http.last().url.params["sha"] == "feature/x"
    github.list_branch_commits(opts(repoName="demo"))
    assert "sha" not in github_http.last().url.params


_COMMIT = {
    "sha": "abc123",
    "author": {"login": "octo"},
    "committer": {"login": "web-flow"},
    "commit": {
        "message": "Fix bug",
        "author": {"name": "Octo"},
        "committer": {"name": "GitHub"},
        "verification": {"verified": True},
        "tree": {"sha": "t"},
    },
    "stats": {"additions": 3, "deletions": 1, "total": 4},
    "files": [
        {"filename": "a.py", "status": "modified", "additions": 3, "deletions": 1, "changes": 4, "patch": "@@ -1 +1 @@"},
    ],
    "parents": [{"sha": "p1"}],
    "html_url": "https://github.com/octo/demo/commit/abc123",
    "node_id": "C_1",
}


def test_list_commit_modifications_summary(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/commits/abc123", json=_COMMIT)
    out = github.list_commit_modifications(opts(repoName="demo", commitSha="abc123", includeContent="false"))
    assert out == [{"filename": "a.py", "status": "modified", "additions": 3, "deletions": 1, "changes": 4}]


def test_list_commit_modifications_with_content(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/commits/abc123", json=_COMMIT)
    out = github.list_commit_modifications(opts(repoName="demo", commitSha="abc123", includeContent=True))
    assert out[0]["patch"] == "@@ -1 +1 @@"


def test_get_commit_details_shape(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/commits/abc123", json=_COMMIT)
    out = github.get_commit_details(opts(repoName="demo", commitSha="abc123"))
    assert set(out) == {"sha", "author", "committer", "commit", "stats", "files", "parents", "html_url"}
    assert out["commit"] == {
        "message": "Fix bug",
        "author": {"name": "Octo"},
        "committer": {"name": "GitHub"},
        "verification": {"verified": True},
    }


def test_get_commit_details_failure(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/commits/abc123", status=500)
    with pytest.raises(ProviderError) as ei:
        github.get_commit_details(opts(repoName="demo", commitSha="abc123"))
    assert ei.value.code is ErrorCode.FETCH_COMMIT_DETAILS_FAILED


def test_commits_diff_uses_three_dot_compare(github, github_http, opts):
    payload = {"status": "ahead", "files": [{"filename": "a.py"}, {"filename": "b.py"}]}
    github_http.add("GET", "/repos/octo/demo/compare/base1...head2", json=payload)
    full = github.commits_diff(opts(repoName="demo", baseCommit="base1", headCommit="head2"))
    assert len(full["files"]) == 2
    filtered = github.commits_diff(opts(repoName="demo", baseCommit="base1", headCommit="head2", filePath="b.py"))
    assert filtered["files"] == [{"filename": "b.py"}]
    assert filtered["status"] == "ahead"


def test_commits_diff_requires_both_commits(github, opts):
    with pytest.raises(ProviderError) as ei:
        github.commits_diff(opts(repoName="demo", baseCommit="base1"))
    assert "headCommit" in ei.value.message


def test_comment_prs_posts_issue_comment(github, github_http, opts):
    github_http.add("POST", "/repos/octo/demo/issues/7/comments", status=201, json={"id": 99})
    assert github.comment_prs(opts(repoName="demo", prNumber=7, comment="LGTM")) == {"id": 99}
    assert github_http.last().method == "POST"
    assert github_http.last_json() == {"body": "LGTM"}


def test_comment_prs_failure_code(github, github_http, opts):
    github_http.add("POST", "/repos/octo/demo/issues/7/comments", status=422)
    with pytest.raises(ProviderError) as ei:
        github.comment_prs(opts(repoName="demo", prNumber="7", comment="LGTM"))
    assert ei.value.code is ErrorCode.CREATE_COMMENT_FAILED


def test_list_pipelines_reads_actions_workflows(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/actions/workflows", json={"total_count": 1, "workflows": [{"id": 1}]})
    assert github.list_pipelines(opts(repoName="demo"))["total_count"] == 1


def test_list_deployments(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/deployments", json=[{"id": 5}])
    assert github.list_deployments(opts(repoName="demo")) == [{"id": 5}]
    github_http.add("GET", "/repos/octo/demo/deployments", status=500)
    with pytest.raises(ProviderError) as ei:
        github.list_deployments(opts(repoName="demo"))
    assert ei.value.code is ErrorCode.FETCH_DEPLOYMENTS_FAILED


# ---- configuration updates ----


def test_update_plugin_config_reinitializes(github, github_store, make_group):
    new_group = make_group("github", token="ghp_rotated", owner="hubot")
    result = github.update_plugin_config({"configs": [new_group.model_dump()]})
    assert result["message"] == "Configuration updated successfully"
    assert result["configs"][0]["name"] == "github_config"
    assert github.state.owner == "hubot"
    assert github_store.get_config("github_config").value_of("token") == "ghp_rotated"


def test_update_plugin_config_invalid_value_leaves_store(github, github_store, make_group):
    bad = make_group("github", token="ghp_x", owner="not a valid owner!")
    with pytest.raises(ProviderError) as ei:
        github.update_plugin_config({"configs": [bad]})
    assert ei.value.code is ErrorCode.CONFIG_UPDATE_FAILED
    assert ei.value.status_code == 500
    assert github_store.get_config("github_config").value_of("owner") == "octo"
    assert github.state.ready


def test_update_plugin_config_with_rejected_credentials(github, github_http, make_group):
    github_http.add("GET", "/user", status=401)
    with pytest.raises(ProviderError) as ei:
        github.update_plugin_config({"configs": [make_group("github", token="ghp_bad", owner="octo")]})
    assert ei.value.code is ErrorCode.CONFIG_UPDATE_FAILED
    assert github.state.status is ProviderStatus.FAILED_AUTH
    assert github.state.client is None


def test_update_plugin_config_action_works_uninitialized(github_http, make_group):
    provider = GithubProvider(InMemoryConfigStore(), transport=github_http.transport)
    options = {"configs": [make_group("github", token="ghp_x", owner="octo").model_dump()]}
    result = provider.run(ActionName.UPDATE_PLUGIN_CONFIG, options)
    assert result["message"] == "Configuration updated successfully"
    assert provider.state.ready
    provider.close()


def test_update_plugin_config_without_configs(github):
    with pytest.raises(ProviderError) as ei:
        github.update_plugin_config({})
    assert ei.value.code is ErrorCode.CONFIG_UPDATE_FAILED


def test_update_plugin_config_logs_token_masked(github, caplog):
    options = {
        "configs": [
            {
                "name": "github_config",
                "params": [{"key": "token", "value": ["ghp_TOPSECRET"]}, {"key": "owner", "value": ["octo"]}],
            }
        ]
    }
    with caplog.at_level(logging.DEBUG, logger="scm_providers"):
        github.update_plugin_config(options)
    assert "provider.config.updated" in caplog.text
    assert "ghp_TOPSECRET" not in caplog.text
    assert MASK in caplog.text


# ---- request paths stay under the configured owner ----


@pytest.mark.parametrize(
    "action,values",
    [
        (ActionName.GET_REPO, {"repoName": "../victim/private"}),
        (ActionName.LIST_BRANCHES, {"repoName": "demo?per_page=100"}),
        (ActionName.GET_REPO_FILE_CONTENT, {"repoName": "demo", "path": "../../victim/private/contents/x"}),
        (ActionName.GET_COMMIT_DETAILS, {"repoName": "demo", "commitSha": "../../../victim/private"}),
        (ActionName.COMMITS_DIFF, {"repoName": "demo", "baseCommit": "main", "headCommit": "x#frag"}),
        (ActionName.COMMENT_PRS, {"repoName": "demo", "prNumber": "1/../../2", "comment": "hi"}),
    ],
)
def test_values_escaping_the_repository_are_400_without_http(github, github_http, opts, action, values):
    with pytest.raises(ProviderError) as ei:
        github.run(action, opts(**values))
    assert ei.value.status_code == 400
    assert ei.value.code is ErrorCode.MISSING_REQUIRED_PARAMS
    assert github_http.requests == []


def test_path_values_are_percent_encoded(github, github_http, opts):
    github_http.add("GET", "/repos/octo/demo/contents/docs/read me%.md", json={"name": "read me%.md"})
    github.get_repo_file_content(opts(repoName="demo", path="docs/read me%.md"))
    assert github_http.last().url.raw_path.startswith(b"/repos/octo/demo/contents/docs/read%20me%25.md")


# ---- every action ----

_BINDINGS = GithubProvider(InMemoryConfigStore()).actions()
_WITH_REQUIRED = sorted(
    (a for a, b in _BINDINGS.items() if any(f.attr.required for f in b.fields)), key=lambda a: a.value
)
_VENDOR_ACTIONS = sorted((a for a in _BINDINGS if a is not ActionName.UPDATE_PLUGIN_CONFIG), key=lambda a: a.value)


def _required_values(action):
    return {f.key: "1" for f in _BINDINGS[action].fields if f.attr.required}


@pytest.mark.parametrize("action", _WITH_REQUIRED, ids=lambda a: a.value)
def test_every_action_missing_required_is_400_without_http(github, github_http, opts, action):
    with pytest.raises(ProviderError) as ei:
        github.run(action, opts())
    assert ei.value.status_code == 400
    assert ei.value.code is ErrorCode.MISSING_REQUIRED_PARAMS
    assert github_http.requests == []


@pytest.mark.parametrize("action", _VENDOR_ACTIONS, ids=lambda a: a.value)
def test_every_action_keeps_vendor_404(github, github_http, opts, action):
    with pytest.raises(ProviderError) as ei:
        github.run(action, opts(**_required_values(action)))
    assert ei.value.status_code == 404
    assert ei.value.code is _BINDINGS[action].not_found_code
    assert github_http.requests
