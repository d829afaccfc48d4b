"""scm_providers.config.defaults
==============================

Central place for small, stable default values used across the package and
the lightweight service layer. These defaults can be overridden via
environment variables or an external configuration file (see
``scm_providers.config.get_provider_config``).

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Vendor endpoints ----
GITHUB_DEFAULT_API_BASE_URL = "https://api.github.com"
GITHUB_DEFAULT_API_VERSION = "2022-11-28"
GITHUB_ACCEPT_HEADER = "application/vnd.github+json"

BITBUCKET_DEFAULT_API_BASE_URL = "https://api.bitbucket.org/2.0"
BITBUCKET_ACCEPT_HEADER = "application/json"

# ---- Config group names (keys in the configuration store) ----
GITHUB_CONFIG_GROUP = "github_config"
BITBUCKET_CONFIG_GROUP = "bitbucket_config"

# ---- Paging / sorting ----
DEFAULT_PAGE_SIZE = 50
GITHUB_DEFAULT_REPO_VISIBILITY = "all"
GITHUB_DEFAULT_REPO_SORT = "updated"
BITBUCKET_DEFAULT_REPO_SORT = "-updated_on"
BITBUCKET_DEFAULT_WORKSPACE_ROLE = "member"

# ---- Service / HTTP layer ----
# Comma-separated list of allowed origins for the FastAPI service.
PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"

# ---- SQLite ----
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"

__all__ = [
    "GITHUB_DEFAULT_API_BASE_URL",
    "GITHUB_DEFAULT_API_VERSION",
    "GITHUB_ACCEPT_HEADER",
    "BITBUCKET_DEFAULT_API_BASE_URL",
    "BITBUCKET_ACCEPT_HEADER",
    "GITHUB_CONFIG_GROUP",
    "BITBUCKET_CONFIG_GROUP",
    "DEFAULT_PAGE_SIZE",
    "GITHUB_DEFAULT_REPO_VISIBILITY",
    "GITHUB_DEFAULT_REPO_SORT",
    "BITBUCKET_DEFAULT_REPO_SORT",
    "BITBUCKET_DEFAULT_WORKSPACE_ROLE",
    "PROVIDER_SERVICE_CORS_DEFAULT_ORIGINS",
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
]
