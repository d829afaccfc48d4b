"""Persistence protocols."""

from .config_store import ConfigStore

__all__ = ["ConfigStore"]
