"""Bitbucket Cloud provider package."""

from .client import BitbucketProvider

__all__ = ["BitbucketProvider"]
