"""GitHub provider package."""

from .client import GithubProvider

__all__ = ["GithubProvider"]
