"""Action catalog and the shared action execution path.

Purpose
-------
- :class:`ActionName` is the closed set of actions a caller may invoke. Its
  values are the external action names (``"actionListRepos"``...).
- :class:`ActionBinding` ties one action to a provider handler together with
  the action's declared fields, vendor parameter aliases and error codes.
- :func:`execute` runs a binding: parse and validate arguments, require a
  ready client, call the handler, normalize failures. Every provider runs
  every action through it, so the error policy is identical everywhere.

Ordering guarantees
-------------------
1. Missing required parameters, values that would leave the repository
   path and malformed parameter bags fail with ``MISSING_REQUIRED_PARAMS``
   (400) before anything else happens.
2. A provider without a ready client fails with ``PROVIDER_NOT_INITIALIZED``
   (401) before any HTTP call.
3. Handler failures go through ``normalize_error`` with ``passthrough=None``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import httpx

from .errors import ErrorCode, ProviderError, normalize_error
from .logging import LogContext, log_event
from .models import ParameterAttr, ParameterSpec, ProviderState
from .params import SEGMENT_NAME, SEGMENT_PATH, SEGMENT_REF, ActionArgs


class ActionName(str, Enum):
    """Closed set of invocable actions; values are the external names."""

    LIST_REPOS = "actionListRepos"
    GET_REPO = "actionGetRepo"
    LIST_REPO_CONTENTS = "actionListRepoContents"
    GET_REPO_FILE_CONTENT = "actionGetRepoFileContent"
    LIST_BRANCHES = "actionListBranches"
    LIST_BRANCH_COMMITS = "actionListBranchCommits"
    LIST_COMMIT_MODIFICATIONS = "actionListCommitModifications"
    GET_COMMIT_DETAILS = "actionGetCommitDetails"
    COMMITS_DIFF = "actionCommitsDiff"
    COMMENT_PRS = "actionCommentPrs"
    LIST_PIPELINES = "actionListPipelines"
    LIST_DEPLOYMENTS = "actionListDeployments"
    UPDATE_PLUGIN_CONFIG = "actionUpdatePluginConfig"
    LIST_WORKSPACES = "actionListBitbucketWorkspaces"


# Historical spellings still accepted by the dispatcher.
LEGACY_ACTION_NAMES: Dict[str, ActionName] = {
    "actionListRepoBranches": ActionName.LIST_BRANCHES,
    "actionCommentPRs": ActionName.COMMENT_PRS,
}


def resolve_action_name(name: Any) -> Optional[ActionName]:
    """Return the :class:`ActionName` for an external name, or ``None``."""
    if isinstance(name, ActionName):
        return name
    if not isinstance(name, str):
        return None
    key = name.strip()
    try:
        return ActionName(key)
    except ValueError:
        return LEGACY_ACTION_NAMES.get(key)


def call_field(
    key: str,
    title: str,
    description: Optional[str] = None,
    *,
    required: bool = False,
    default: Any = None,
    input_type: str = "text",
    segment: Optional[str] = None,
) -> ParameterSpec:
    """Declare one per-call parameter of an action.

    ``segment`` marks values that handlers place in the request path
    (``name``, ``ref`` or ``path``); unsafe values are rejected with a 400.
    """
    extra: Dict[str, Any] = {"default": default} if default is not None else {}
    if segment is not None:
        extra["segment"] = segment
    return ParameterSpec(
        key=key,
        title=title,
        description=description,
        attr=ParameterAttr(input_type=input_type, required=required),
        **extra,
    )


# Field templates shared by the vendor adapters.
REPO_NAME = call_field(
    "repoName", "Repository", "Repository slug under the configured owner.", required=True, segment=SEGMENT_NAME
)
PATH = call_field("path", "Path", "Path inside the repository.", segment=SEGMENT_PATH)
REQUIRED_PATH = call_field(
    "path", "Path", "Path of the file inside the repository.", required=True, segment=SEGMENT_PATH
)
REF = call_field("ref", "Reference", "Branch, tag or commit SHA.", segment=SEGMENT_REF)
BRANCH = call_field("branch", "Branch", "Branch name; the default branch when omitted.", segment=SEGMENT_REF)
COMMIT_SHA = call_field("commitSha", "Commit", "Commit SHA.", required=True, segment=SEGMENT_NAME)
INCLUDE_CONTENT = call_field(
    "includeContent", "Include content", "Return full per-file diff content.", default=False, input_type="checkbox"
)
BASE_COMMIT = call_field(
    "baseCommit", "Base commit", "Older side of the comparison.", required=True, segment=SEGMENT_REF
)
HEAD_COMMIT = call_field(
    "headCommit", "Head commit", "Newer side of the comparison.", required=True, segment=SEGMENT_REF
)
PR_NUMBER = call_field(
    "prNumber", "Pull request", "Pull/merge request number.", required=True, segment=SEGMENT_NAME
)
COMMENT = call_field("comment", "Comment", "Comment text.", required=True, input_type="textarea")
PAGE = call_field("page", "Page", "1-based page number.", default=1, input_type="number")


@dataclass(frozen=True)
class ActionCall:
    """Everything a handler needs for one invocation."""

    action: ActionName
    args: ActionArgs
    state: ProviderState
    options: Any = None
    provider: str = "unknown"

    @property
    def client(self) -> httpx.Client:
        if self.state.client is None:
            raise not_initialized(self.provider, self.action)
        return self.state.client

    @property
    def owner(self) -> str:
        return self.state.owner


Handler = Callable[[ActionCall], Any]


@dataclass(frozen=True)
class ActionBinding:
    """Declaration of one action on one provider.

    Attributes:
        handler: Callable receiving an :class:`ActionCall`.
        failure_code: Code of the generic 500 fallback.
        failure_message: Message of the generic 500 fallback.
        fields: Declared per-call parameters (``attr.required`` enforced).
        aliases: Logical field name → physical parameter key on this vendor
            (``revision``, ``commit``).
        not_found_code: Code used when the vendor answers 404.
        not_found_message: Message used when the vendor answers 404.
        requires_client: False for actions that work without a ready client.
        notes: Vendor-specific remarks surfaced in the action manifest.
    """

    handler: Handler
    failure_code: ErrorCode
    failure_message: str
    fields: Tuple[ParameterSpec, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)
    not_found_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND
    not_found_message: str = "Resource not found"
    requires_client: bool = True
    notes: Optional[str] = None

    def describe(self, action: ActionName) -> Dict[str, Any]:
        """Return the manifest entry for this binding."""
        entry: Dict[str, Any] = {
            "action": action.value,
            "fields": [f.model_dump(mode="json", exclude_none=True) for f in self.fields],
            "required": [f.key for f in self.fields if f.attr.required],
            "aliases": dict(self.aliases),
        }
        if self.notes:
            entry["notes"] = self.notes
        return entry


def not_initialized(provider: str, action: ActionName) -> ProviderError:
    return ProviderError(
        code=ErrorCode.PROVIDER_NOT_INITIALIZED,
        message=f"{provider} provider is not initialized; call init() with valid credentials",
        status_code=401,
        provider=provider,
        action=action.value,
    )


def execute(
    provider: str,
    action: ActionName,
    binding: ActionBinding,
    options: Any,
    state: ProviderState,
    logger: logging.Logger,
) -> Any:
    """Run ``binding`` for ``action`` against ``state``.

    ``state`` is read once by the caller; concurrent re-initialization does
    not affect an invocation already in flight.

    Raises:
        ProviderError: always normalized; raw transport errors never escape.
    """
    ctx = LogContext(provider=provider, action=action.value, owner=state.owner or None)
    try:
        args = ActionArgs.parse(options, binding.fields, provider=provider, action=action.value)
        if binding.requires_client and not state.ready:
            raise not_initialized(provider, action)
        return binding.handler(
            ActionCall(action=action, args=args, state=state, options=options, provider=provider)
        )
    except Exception as exc:
        err = normalize_error(
            exc,
            provider=provider,
            action=action.value,
            failure_code=binding.failure_code,
            failure_message=binding.failure_message,
            not_found_code=binding.not_found_code,
            not_found_message=binding.not_found_message,
        )
        log_event(
            logger,
            "provider.action.error",
            ctx,
            level=logging.WARNING,
            error_code=err.code.value,
            status_code=err.status_code,
            cause=type(exc).__name__,
        )
        if err is exc:
            raise
        raise err from exc


__all__ = [
    "ActionBinding",
    "ActionCall",
    "ActionName",
    "Handler",
    "LEGACY_ACTION_NAMES",
    "call_field",
    "execute",
    "not_initialized",
    "resolve_action_name",
]
