"""GitHub provider adapter.

Purpose:
    Implements the :class:`~scm_providers.base.interfaces.SCMProvider`
    contract against the GitHub REST API (default ``https://api.github.com``).

External dependencies:
    - ``httpx`` for the REST client (bearer token authentication).

Configuration:
    - Credentials come from the ``github_config`` group of the configuration
      store: ``token`` and ``owner``.
    - Base URL, API version and page size resolve through
      :func:`scm_providers.config.get_provider_config` (defaults, config file,
      ``GITHUB_*`` environment variables, constructor overrides).

Error handling:
    - Every action runs through :func:`scm_providers.base.actions.execute`;
      failures surface as :class:`~scm_providers.base.errors.ProviderError`
      with the per-action codes declared in :meth:`GithubProvider.actions`.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Dict, Mapping, Optional

import httpx

from ..base.actions import (
    BASE_COMMIT,
    BRANCH,
    COMMENT,
    COMMIT_SHA,
    HEAD_COMMIT,
    INCLUDE_CONTENT,
    PAGE,
    PATH,
    PR_NUMBER,
    REF,
    REPO_NAME,
    REQUIRED_PATH,
    ActionBinding,
    ActionCall,
    ActionName,
    call_field,
)
from ..base.errors import ErrorCode, is_auth_rejection
from ..base.http import build_client, close_quietly
from ..base.lifecycle import auth_failed
from ..base.logging import get_logger
from ..base.models import ProviderState, ProviderStatus
from ..base.runtime import ProviderRuntime
from ..config import get_provider_config
from ..config.defaults import (
    GITHUB_ACCEPT_HEADER,
    GITHUB_CONFIG_GROUP,
    GITHUB_DEFAULT_REPO_SORT,
    GITHUB_DEFAULT_REPO_VISIBILITY,
)
from ..persistence import ConfigStore, InMemoryConfigStore
from . import helpers

_E = ErrorCode

VISIBILITY = call_field(
    "visibility", "Visibility", "all, public or private.", default=GITHUB_DEFAULT_REPO_VISIBILITY
)
REPO_SORT = call_field("sort", "Sort", "created, updated, pushed or full_name.", default=GITHUB_DEFAULT_REPO_SORT)
FILE_PATH = call_field("filePath", "File path", "Restrict the comparison to one file.")


class GithubProvider:
    """GitHub adapter; one instance per configured account."""

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        api_base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> None:
        """Create an uninitialized adapter.

        Parameters
        ----------
        store:
            Configuration store holding ``github_config``. Defaults to an
            in-memory store seeded from the manifest and environment.
        transport:
            Optional ``httpx`` transport (tests, proxies).
        api_base_url, api_version, page_size:
            Overrides applied on top of the layered provider config.
        """
        cfg = get_provider_config(
            "github",
            overrides={"api_base_url": api_base_url, "api_version": api_version, "page_size": page_size},
        )
        self._base_url = str(cfg["api_base_url"])
        self._api_version = str(cfg["api_version"])
        self._page_size = int(cfg["page_size"])
        self._store = store if store is not None else InMemoryConfigStore.from_manifest()
        self._transport = transport
        self._runtime = ProviderRuntime(self.provider_name, "GitHub", self._store, get_logger("scm_providers.github"))
        self._actions = self._build_actions()

    @property
    def provider_name(self) -> str:
        return "github"

    @property
    def config_group_name(self) -> str:
        return GITHUB_CONFIG_GROUP

    @property
    def state(self) -> ProviderState:
        return self._runtime.state

    # ---- Lifecycle ----
    def init(self) -> ProviderState:
        """Read ``token``/``owner`` from the store and authenticate.

        Raises:
            ProviderError: ``AUTH_FAILED`` (401) when either value is missing
                or GitHub rejects the token; ``INIT_FAILED`` (500) otherwise.
        """
        return self._runtime.initialize(self._connect)

    def _connect(self) -> None:
        group = self._store.get_config(self.config_group_name)
        token = group.value_of("token") if group else ""
        owner = group.value_of("owner") if group else ""
        if not token:
            raise auth_failed(self.provider_name, "GitHub token not found in configurations")
        if not owner:
            raise auth_failed(self.provider_name, "GitHub owner (account username) not found in configurations")
        self.create_client({"token": token, "owner": owner})

    def create_client(self, credentials: Mapping[str, str]) -> Dict[str, Any]:
        """Build a bearer-token client, verify it with ``GET /user`` and swap it in.

        Returns:
            The authenticated user's profile.
        """
        token = str(credentials.get("token") or "").strip()
        if not token:
            raise auth_failed(self.provider_name, "GitHub token not found in configurations")
        client = build_client(
            self._base_url,
            headers={"Accept": GITHUB_ACCEPT_HEADER, "X-GitHub-Api-Version": self._api_version},
            bearer_token=token,
            transport=self._transport,
        )
        try:
            resp = client.get("/user")
            resp.raise_for_status()
            profile = resp.json() if resp.content else {}
            if not isinstance(profile, dict):
                profile = {}
        except Exception as exc:
            close_quietly(client)
            if is_auth_rejection(exc):
                raise auth_failed(self.provider_name, "GitHub authentication failed", raw=exc) from exc
            raise
        owner = str(credentials.get("owner") or "").strip() or str(profile.get("login") or "")
        self._runtime.swap(ProviderState(ProviderStatus.READY, client, owner, profile))
        return profile

    def update_plugin_config(self, options: Any = None) -> Dict[str, Any]:
        """Persist replacement config groups and re-run :meth:`init`."""
        return self._runtime.update_config(options, self.init)

    def close(self) -> None:
        """Release the current client and return to UNINITIALIZED."""
        self._runtime.swap(ProviderState.empty())

    # ---- Actions ----
    def actions(self) -> Mapping[ActionName, ActionBinding]:
        return self._actions

    def run(self, action: ActionName, options: Any = None) -> Any:
        return self._runtime.run(self._actions, action, options)

    def _update_config_action(self, call: ActionCall) -> Dict[str, Any]:
        return self.update_plugin_config(call.options)

    def _build_actions(self) -> Dict[ActionName, ActionBinding]:
        paged = {"page_size": self._page_size}
        return {
            ActionName.LIST_REPOS: ActionBinding(
                partial(helpers.list_repos, **paged),
                _E.FETCH_REPOS_FAILED,
                "Failed to fetch repositories",
                fields=(VISIBILITY, REPO_SORT, PAGE),
                not_found_message="Resources not found",
                notes="Lists repositories visible to the authenticated user.",
            ),
            ActionName.GET_REPO: ActionBinding(
                helpers.get_repo,
                _E.FETCH_REPO_FAILED,
                "Failed to fetch repository",
                fields=(REPO_NAME,),
                not_found_code=_E.REPOSITORY_NOT_FOUND,
                not_found_message="Repository not found",
            ),
            ActionName.LIST_REPO_CONTENTS: ActionBinding(
                helpers.list_repo_contents,
                _E.FETCH_CONTENTS_FAILED,
                "Failed to fetch repository contents",
                fields=(REPO_NAME, PATH, REF),
                aliases={"revision": "ref"},
                not_found_message="Repository path or reference not found",
            ),
            ActionName.GET_REPO_FILE_CONTENT: ActionBinding(
                helpers.get_repo_file_content,
                _E.FETCH_CONTENT_FAILED,
                "Failed to fetch file content",
                fields=(REPO_NAME, REQUIRED_PATH, REF),
                aliases={"revision": "ref"},
                not_found_message="File not found or inaccessible",
            ),
            ActionName.LIST_BRANCHES: ActionBinding(
                helpers.list_branches,
                _E.FETCH_BRANCHES_FAILED,
                "Failed to fetch branches",
                fields=(REPO_NAME,),
                not_found_code=_E.REPOSITORY_NOT_FOUND,
                not_found_message="Repository not found",
            ),
            ActionName.LIST_BRANCH_COMMITS: ActionBinding(
                partial(helpers.list_branch_commits, **paged),
                _E.FETCH_COMMITS_FAILED,
                "Failed to fetch branch commits",
                fields=(REPO_NAME, BRANCH, PAGE),
                aliases={"revision": "branch"},
                not_found_message="Branch or repository not found",
            ),
            ActionName.LIST_COMMIT_MODIFICATIONS: ActionBinding(
                helpers.list_commit_modifications,
                _E.FETCH_MODIFICATIONS_FAILED,
                "Failed to fetch commit modifications",
                fields=(REPO_NAME, COMMIT_SHA, INCLUDE_CONTENT),
                aliases={"commit": "commitSha"},
                not_found_message="Commit or repository not found",
            ),
            ActionName.GET_COMMIT_DETAILS: ActionBinding(
                helpers.get_commit_details,
                _E.FETCH_COMMIT_DETAILS_FAILED,
                "Failed to fetch commit details",
                fields=(REPO_NAME, COMMIT_SHA),
                aliases={"commit": "commitSha"},
                not_found_message="Commit or repository not found",
            ),
            ActionName.COMMITS_DIFF: ActionBinding(
                helpers.commits_diff,
                _E.COMPARE_COMMITS_FAILED,
                "Failed to compare commits",
                fields=(REPO_NAME, BASE_COMMIT, HEAD_COMMIT, FILE_PATH),
                not_found_message="Repository or commits not found",
                notes="Returns the compare payload; filePath filters its files list.",
            ),
            ActionName.COMMENT_PRS: ActionBinding(
                helpers.comment_prs,
                _E.CREATE_COMMENT_FAILED,
                "Failed to create pull request comment",
                fields=(REPO_NAME, PR_NUMBER, COMMENT),
                not_found_message="Pull request or repository not found",
            ),
            ActionName.LIST_PIPELINES: ActionBinding(
                helpers.list_pipelines,
                _E.FETCH_PIPELINES_FAILED,
                "Failed to fetch pipelines",
                fields=(REPO_NAME,),
                not_found_message="Repository not found",
                notes="GitHub Actions workflows.",
            ),
            ActionName.LIST_DEPLOYMENTS: ActionBinding(
                helpers.list_deployments,
                _E.FETCH_DEPLOYMENTS_FAILED,
                "Failed to fetch deployments",
                fields=(REPO_NAME,),
                not_found_message="Repository not found",
            ),
            ActionName.UPDATE_PLUGIN_CONFIG: ActionBinding(
                self._update_config_action,
                _E.CONFIG_UPDATE_FAILED,
                "Failed to update plugin configuration",
                requires_client=False,
            ),
        }

    # ---- Named action entry points ----
    def list_repos(self, options: Any = None) -> Any:
        return self.run(ActionName.LIST_REPOS, options)

    def get_repo(self, options: Any = None) -> Any:
        return self.run(ActionName.GET_REPO, options)

    def list_repo_contents(self, options: Any = None) -> Any:
        return self.run(ActionName.LIST_REPO_CONTENTS, options)

    def get_repo_file_content(self, options: Any = None) -> Any:
        return self.run(ActionName.GET_REPO_FILE_CONTENT, options)

    def list_branches(self, options: Any = None) -> Any:
        return self.run(ActionName.LIST_BRANCHES, options)

    def list_branch_commits(self, options: Any = None) -> Any:
        return self.run(ActionName.LIST_BRANCH_COMMITS, options)

    def list_commit_modifications(self, options: Any = None) -> Any:
        return self.run(ActionName.LIST_COMMIT_MODIFICATIONS, options)

    def get_commit_details(self, options: Any = None) -> Any:
        return self.run(ActionName.GET_COMMIT_DETAILS, options)

    def commits_diff(self, options: Any = None) -> Any:
        return self.run(ActionName.COMMITS_DIFF, options)

    def comment_prs(self, options: Any = None) -> Any:
        return self.run(ActionName.COMMENT_PRS, options)

    def list_pipelines(self, options: Any = None) -> Any:
        return self.run(ActionName.LIST_PIPELINES, options)

    def list_deployments(self, options: Any = None) -> Any:
        return self.run(ActionName.LIST_DEPLOYMENTS, options)


__all__ = ["GithubProvider"]
