"""
Provider-agnostic interfaces (Protocols) for the SCM providers layer.

Re-exports the single-class modules under ``interfaces_parts`` to keep
imports stable for upstream code.
"""

from __future__ import annotations

from .interfaces_parts import SCMProvider

__all__ = ["SCMProvider"]
