"""Protocol modules re-exported by ``scm_providers.base.interfaces``."""

from .scm_provider import SCMProvider

__all__ = ["SCMProvider"]
