"""GitHub action handlers and response shaping.

Each handler receives an :class:`~scm_providers.base.actions.ActionCall`
whose arguments are already validated and whose client is READY; it performs
the REST call(s) and returns the decoded payload. Handlers raise transport
errors untouched; :func:`scm_providers.base.actions.execute` normalizes them.

Endpoints follow the GitHub REST API v3 under ``/repos/{owner}/{repo}``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..base.actions import ActionCall
from ..base.http import get_json, path_segment, post_json


def repo_path(call: ActionCall, suffix: str = "") -> str:
    """Return ``/repos/{owner}/{repo}`` plus ``suffix``, both names percent-encoded."""
    return f"/repos/{path_segment(call.owner)}/{path_segment(call.args.text('repoName'))}{suffix}"


def summarize_file(entry: Mapping[str, Any]) -> Dict[str, Any]:
    """Reduce a commit file entry to its change counters."""
    return {
        "filename": entry.get("filename"),
        "status": entry.get("status"),
        "additions": entry.get("additions"),
        "deletions": entry.get("deletions"),
        "changes": entry.get("changes"),
    }


def shape_commit_details(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Project a commit payload onto the fields callers rely on."""
    commit = data.get("commit") or {}
    return {
        "sha": data.get("sha"),
        "author": data.get("author"),
        "committer": data.get("committer"),
        "commit": {
            "message": commit.get("message"),
            "author": commit.get("author"),
            "committer": commit.get("committer"),
            "verification": commit.get("verification"),
        },
        "stats": data.get("stats"),
        "files": data.get("files") or [],
        "parents": data.get("parents") or [],
        "html_url": data.get("html_url"),
    }


def list_repos(call: ActionCall, *, page_size: int) -> Any:
    params = {
        "visibility": call.args.text("visibility"),
        "sort": call.args.text("sort"),
        "per_page": page_size,
        "page": call.args.integer("page", 1),
    }
    return get_json(call.client, "/user/repos", params)


def get_repo(call: ActionCall) -> Any:
    return get_json(call.client, repo_path(call))


def _contents(call: ActionCall) -> Any:
    path = path_segment(call.args.text("path").strip("/"), keep_slashes=True)
    return get_json(call.client, repo_path(call, f"/contents/{path}"), {"ref": call.args.text("ref")})


def list_repo_contents(call: ActionCall) -> Any:
    return _contents(call)


def get_repo_file_content(call: ActionCall) -> Any:
    return _contents(call)


def list_branches(call: ActionCall) -> Any:
    return get_json(call.client, repo_path(call, "/branches"))


def list_branch_commits(call: ActionCall, *, page_size: int) -> Any:
    params = {
        "sha": call.args.text("branch"),
        "per_page": page_size,
        "page": call.args.integer("page", 1),
    }
    return get_json(call.client, repo_path(call, "/commits"), params)


def _commit(call: ActionCall) -> Dict[str, Any]:
    return get_json(call.client, repo_path(call, f"/commits/{path_segment(call.args.text('commitSha'))}")) or {}


def list_commit_modifications(call: ActionCall) -> List[Dict[str, Any]]:
    files = _commit(call).get("files") or []
    if call.args.flag("includeContent"):
        return list(files)
    return [summarize_file(f) for f in files]


def get_commit_details(call: ActionCall) -> Dict[str, Any]:
    return shape_commit_details(_commit(call))


def commits_diff(call: ActionCall) -> Any:
    base = path_segment(call.args.text("baseCommit"), keep_slashes=True)
    head = path_segment(call.args.text("headCommit"), keep_slashes=True)
    data = get_json(call.client, repo_path(call, f"/compare/{base}...{head}"))
    file_path: Optional[str] = call.args.text("filePath").strip("/") or None
    if file_path and isinstance(data, dict):
        data = dict(data)
        data["files"] = [f for f in data.get("files") or [] if f.get("filename") == file_path]
    return data


def comment_prs(call: ActionCall) -> Any:
    path = repo_path(call, f"/issues/{path_segment(call.args.text('prNumber'))}/comments")
    return post_json(call.client, path, {"body": call.args.text("comment")})


def list_pipelines(call: ActionCall) -> Any:
    return get_json(call.client, repo_path(call, "/actions/workflows"))


def list_deployments(call: ActionCall) -> Any:
    return get_json(call.client, repo_path(call, "/deployments"))


__all__ = [
    "comment_prs",
    "commits_diff",
    "get_commit_details",
    "get_repo",
    "get_repo_file_content",
    "list_branch_commits",
    "list_branches",
    "list_commit_modifications",
    "list_deployments",
    "list_pipelines",
    "list_repo_contents",
    "list_repos",
    "repo_path",
    "shape_commit_details",
    "summarize_file",
]
