"""Built-in plugin manifest: the configuration groups each provider reads.

Each provider owns one ``ConfigGroup`` in the configuration store. The
definitions below are the manifest shipped with the package: titles,
descriptions, secret flags and validation rules. Stores seed themselves from
these templates; values are supplied by users (or the environment).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..base.models import ConfigGroup, ParameterAttr, ParameterSpec, RegexPattern
from .defaults import BITBUCKET_CONFIG_GROUP, GITHUB_CONFIG_GROUP

CONFIG_GROUP_NAMES: Dict[str, str] = {
    "github": GITHUB_CONFIG_GROUP,
    "bitbucket": BITBUCKET_CONFIG_GROUP,
}


def _field(
    key: str,
    title: str,
    description: str,
    *,
    placeholder: Optional[str] = None,
    secret: bool = False,
    pattern: Optional[str] = None,
    message: Optional[str] = None,
) -> ParameterSpec:
    rule = RegexPattern(pattern=pattern, message=message or f"Invalid {title}") if pattern else None
    return ParameterSpec(
        key=key,
        title=title,
        description=description,
        placeholder=placeholder,
        attr=ParameterAttr(
            input_type="password" if secret else "text",
            secret=secret,
            required=True,
            regex_pattern=rule,
        ),
    )


_GITHUB = ConfigGroup(
    name=GITHUB_CONFIG_GROUP,
    title="GitHub",
    description="Personal access token and account used for GitHub API calls.",
    params=[
        _field(
            "token",
            "Access token",
            "Fine-grained or classic personal access token.",
            placeholder="github_pat_...",
            secret=True,
            pattern=r"\S+",
            message="Token must not contain whitespace",
        ),
        _field(
            "owner",
            "Owner",
            "Account or organization that owns the repositories.",
            placeholder="octocat",
            pattern=r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})",
            message="Owner must be a valid GitHub account name",
        ),
    ],
)

_BITBUCKET = ConfigGroup(
    name=BITBUCKET_CONFIG_GROUP,
    title="Bitbucket",
    description="Bitbucket Cloud username, app password and workspace.",
    params=[
        _field(
            "username",
            "Username",
            "Bitbucket account username (not the e-mail address).",
            pattern=r"\S+",
            message="Username must not contain whitespace",
        ),
        _field(
            "appPassword",
            "App password",
            "App password with repository, pull request and pipeline read scopes.",
            secret=True,
            pattern=r"\S+",
            message="App password must not contain whitespace",
        ),
        _field(
            "owner",
            "Workspace",
            "Workspace slug under which repositories are resolved.",
            placeholder="my-workspace",
            pattern=r"[A-Za-z0-9_.-]+",
            message="Workspace must be a valid Bitbucket workspace slug",
        ),
    ],
)

_SCHEMAS: Dict[str, ConfigGroup] = {"github": _GITHUB, "bitbucket": _BITBUCKET}


def default_config_group(provider: str) -> ConfigGroup:
    """Return a fresh copy of the manifest group for ``provider``.

    Raises:
        KeyError: if the provider has no manifest entry.
    """
    return _SCHEMAS[(provider or "").lower().strip()].model_copy(deep=True)


def default_config_groups() -> List[ConfigGroup]:
    """Return fresh copies of every manifest group."""
    return [group.model_copy(deep=True) for group in _SCHEMAS.values()]


__all__ = ["CONFIG_GROUP_NAMES", "default_config_group", "default_config_groups"]
