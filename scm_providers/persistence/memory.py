"""In-process ``ConfigStore`` implementation.

Suitable for tests, embedding and short-lived processes. The store is seeded
with the built-in manifest groups (optionally filled from environment
variables) so a provider can ``init()`` without any prior ``save_configs``.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, Optional

from ..base.models import ConfigGroup
from ..config.env import seed_group_from_env
from ..config.schema import CONFIG_GROUP_NAMES, default_config_group


class InMemoryConfigStore:
    """Thread-safe dictionary of config groups keyed by name."""

    def __init__(self, groups: Optional[Iterable[ConfigGroup]] = None) -> None:
        self._groups: Dict[str, ConfigGroup] = {}
        self._lock = threading.Lock()
        if groups:
            self.save_configs(groups)

    @classmethod
    def from_manifest(cls, *, use_env: bool = True) -> "InMemoryConfigStore":
        """Build a store holding every manifest group.

        When ``use_env`` is true, empty values are filled from the credential
        environment variables declared in ``scm_providers.config.env``.
        """
        groups = []
        for provider in CONFIG_GROUP_NAMES:
            group = default_config_group(provider)
            groups.append(seed_group_from_env(provider, group) if use_env else group)
        return cls(groups)

    def get_config(self, name: str) -> Optional[ConfigGroup]:
        with self._lock:
            group = self._groups.get(name)
            return group.model_copy(deep=True) if group is not None else None

    def save_configs(self, groups: Iterable[ConfigGroup]) -> None:
        parsed = [ConfigGroup.model_validate(g) for g in groups]
        with self._lock:
            for group in parsed:
                self._groups[group.name] = group.model_copy(deep=True)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._groups)


__all__ = ["InMemoryConfigStore"]
