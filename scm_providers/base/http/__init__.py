"""HTTP utilities package for SCM providers.

Exposes the authenticated httpx client builder and request helpers.
"""

from .calls import clean_params, get_json, path_segment, post_json, read_body
from .client import build_client, close_all_clients, close_quietly

__all__ = [
    "build_client",
    "clean_params",
    "close_all_clients",
    "close_quietly",
    "get_json",
    "path_segment",
    "post_json",
    "read_body",
]
