"""Bitbucket Cloud action handlers and response shaping.

Handlers mirror :mod:`scm_providers.github.helpers`: validated arguments in,
decoded payload out, transport errors left for the shared normalizer.
Paged Bitbucket endpoints answer ``{"values": [...], "next": ...}``; list
handlers return the ``values`` page.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from ..base.actions import ActionCall
from ..base.errors import ErrorCode, ProviderError, is_not_found
from ..base.http import get_json, path_segment, post_json

FALLBACK_REF = "master"

_DIFF_HEADER = re.compile(r"^diff --git a/(?P<old>\S+) b/(?P<new>\S+)\s*$", re.MULTILINE)


def repo_path(call: ActionCall, suffix: str = "") -> str:
    """Return ``/repositories/{workspace}/{repo}`` plus ``suffix``, both names percent-encoded."""
    return f"/repositories/{path_segment(call.owner)}/{path_segment(call.args.text('repoName'))}{suffix}"


def values_of(data: Any) -> Any:
    """Return the ``values`` page of a paged answer, or the answer itself."""
    if isinstance(data, Mapping) and "values" in data:
        return data.get("values") or []
    return data


def diffstat_path(entry: Mapping[str, Any]) -> Optional[str]:
    """Return the current path of a diffstat entry (the old path for removals)."""
    for side in ("new", "old"):
        node = entry.get(side)
        if isinstance(node, Mapping) and node.get("path"):
            return node["path"]
    return None


def summarize_diffstat(entry: Mapping[str, Any]) -> Dict[str, Any]:
    """Reduce a diffstat entry to the vendor-neutral change counters."""
    added = entry.get("lines_added") or 0
    removed = entry.get("lines_removed") or 0
    return {
        "filename": diffstat_path(entry),
        "status": entry.get("status"),
        "additions": added,
        "deletions": removed,
        "changes": added + removed,
    }


def split_diff(text: str) -> Dict[str, str]:
    """Split a unified ``git diff`` into per-file chunks keyed by new path."""
    chunks: Dict[str, str] = {}
    matches = list(_DIFF_HEADER.finditer(text or ""))
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        chunks[match.group("new")] = text[match.start():end]
        chunks.setdefault(match.group("old"), chunks[match.group("new")])
    return chunks


def shape_commit_details(data: Mapping[str, Any], repository: str) -> Dict[str, Any]:
    return {
        "hash": data.get("hash"),
        "author": data.get("author"),
        "message": data.get("message"),
        "date": data.get("date"),
        "parents": data.get("parents") or [],
        "repository": repository,
    }


def list_workspaces(call: ActionCall, *, page_size: int) -> Any:
    params = {
        "page": call.args.integer("page", 1),
        "pagelen": page_size,
        "role": call.args.text("role"),
    }
    return values_of(get_json(call.client, "/workspaces", params))


def list_repos(call: ActionCall, *, page_size: int) -> Any:
    params = {
        "sort": call.args.text("sort"),
        "page": call.args.integer("page", 1),
        "pagelen": page_size,
    }
    return values_of(get_json(call.client, f"/repositories/{path_segment(call.owner)}", params))


def get_repo(call: ActionCall) -> Any:
    return get_json(call.client, repo_path(call))


def list_repo_contents(call: ActionCall) -> Any:
    path = path_segment(call.args.text("path").strip("/"), keep_slashes=True)
    ref = path_segment(call.args.text("ref"), keep_slashes=True)
    suffix = f"/src/{ref}/{path + '/' if path else ''}"
    return values_of(get_json(call.client, repo_path(call, suffix)))


def _main_branch(call: ActionCall) -> str:
    repo = get_json(call.client, repo_path(call)) or {}
    main = repo.get("mainbranch") if isinstance(repo, Mapping) else None
    if isinstance(main, Mapping) and main.get("name"):
        return str(main["name"])
    return FALLBACK_REF


def get_repo_file_content(call: ActionCall) -> Any:
    ref = path_segment(call.args.text("ref") or _main_branch(call), keep_slashes=True)
    path = path_segment(call.args.text("path").strip("/"), keep_slashes=True)
    return get_json(call.client, repo_path(call, f"/src/{ref}/{path}"))


def list_branches(call: ActionCall) -> Any:
    return values_of(get_json(call.client, repo_path(call, "/refs/branches")))


def list_branch_commits(call: ActionCall) -> Any:
    branch = path_segment(call.args.text("branch"), keep_slashes=True)
    suffix = f"/commits/{branch}" if branch else "/commits"
    return values_of(get_json(call.client, repo_path(call, suffix), {"page": call.args.integer("page", 1)}))


def list_commit_modifications(call: ActionCall) -> List[Dict[str, Any]]:
    sha = call.args.text("commitSha")
    entries = values_of(get_json(call.client, repo_path(call, f"/diffstat/{path_segment(sha)}"))) or []
    if not call.args.flag("includeContent"):
        return [summarize_diffstat(e) for e in entries]
    diff = get_json(call.client, repo_path(call, f"/diff/{path_segment(sha)}"))
    chunks = split_diff(diff if isinstance(diff, str) else "")
    return [
        {
            **e,
            **summarize_diffstat(e),
            "diffContent": chunks.get(diffstat_path(e) or "", None),
            "commitHash": sha,
            "repository": call.args.text("repoName"),
        }
        for e in entries
    ]


def get_commit_details(call: ActionCall) -> Dict[str, Any]:
    try:
        get_json(call.client, repo_path(call))
    except Exception as exc:
        if is_not_found(exc):
            raise ProviderError(
                code=ErrorCode.REPOSITORY_NOT_FOUND,
                message="Repository not found or access denied",
                status_code=404,
                provider=call.provider,
                action=call.action.value,
                raw=exc,
            ) from exc
        raise
    data = get_json(call.client, repo_path(call, f"/commit/{path_segment(call.args.text('commitSha'))}")) or {}
    return shape_commit_details(data, call.args.text("repoName"))


def commits_diff(call: ActionCall) -> Any:
    base = path_segment(call.args.text("baseCommit"), keep_slashes=True)
    head = path_segment(call.args.text("headCommit"), keep_slashes=True)
    commit_range = f"{base}..{head}"
    return get_json(call.client, repo_path(call, f"/diff/{commit_range}"), {"path": call.args.text("filePath")})


def comment_prs(call: ActionCall) -> Any:
    path = repo_path(call, f"/pullrequests/{path_segment(call.args.text('prNumber'))}/comments")
    return post_json(call.client, path, {"content": {"raw": call.args.text("comment")}})


def list_pipelines(call: ActionCall) -> Any:
    return values_of(get_json(call.client, repo_path(call, "/pipelines/"))) or []


def list_deployments(call: ActionCall) -> Any:
    return values_of(get_json(call.client, repo_path(call, "/deployments"))) or []


__all__ = [
    "FALLBACK_REF",
    "comment_prs",
    "commits_diff",
    "diffstat_path",
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
    "list_workspaces",
    "repo_path",
    "shape_commit_details",
    "split_diff",
    "summarize_diffstat",
    "values_of",
]
