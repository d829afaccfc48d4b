"""
Normalized SCM provider error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by every vendor adapter. Values are
upper snake case strings and form a stable public contract: callers branch on
them programmatically (for example, prompting for new credentials on
``AUTH_FAILED``).
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes crossing the provider boundary."""

    # Lifecycle
    AUTH_FAILED = "AUTH_FAILED"
    INIT_FAILED = "INIT_FAILED"
    PROVIDER_NOT_INITIALIZED = "PROVIDER_NOT_INITIALIZED"
    CONFIG_UPDATE_FAILED = "CONFIG_UPDATE_FAILED"

    # Caller input
    MISSING_REQUIRED_PARAMS = "MISSING_REQUIRED_PARAMS"

    # Upstream absence
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    REPOSITORY_NOT_FOUND = "REPOSITORY_NOT_FOUND"

    # Action-specific generic failures (500)
    FETCH_REPOS_FAILED = "FETCH_REPOS_FAILED"
    FETCH_REPO_FAILED = "FETCH_REPO_FAILED"
    FETCH_CONTENTS_FAILED = "FETCH_CONTENTS_FAILED"
    FETCH_CONTENT_FAILED = "FETCH_CONTENT_FAILED"
    FETCH_BRANCHES_FAILED = "FETCH_BRANCHES_FAILED"
    FETCH_COMMITS_FAILED = "FETCH_COMMITS_FAILED"
    FETCH_MODIFICATIONS_FAILED = "FETCH_MODIFICATIONS_FAILED"
    FETCH_COMMIT_DETAILS_FAILED = "FETCH_COMMIT_DETAILS_FAILED"
    COMPARE_COMMITS_FAILED = "COMPARE_COMMITS_FAILED"
    CREATE_COMMENT_FAILED = "CREATE_COMMENT_FAILED"
    FETCH_PIPELINES_FAILED = "FETCH_PIPELINES_FAILED"
    FETCH_DEPLOYMENTS_FAILED = "FETCH_DEPLOYMENTS_FAILED"
    FETCH_WORKSPACES_FAILED = "FETCH_WORKSPACES_FAILED"


__all__ = ["ErrorCode"]
