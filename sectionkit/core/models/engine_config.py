"""Engine configuration model.

Holds the behaviour flags of a :class:`CollectionEngine`. Values usually come
from the ``engine`` section of the YAML configuration loaded by
:class:`sectionkit.config.ConfigManager`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from sectionkit.core.exceptions import ConfigurationError


@dataclass
class EngineConfig:
    """Behaviour flags of the reconciliation engine."""

    # Keep deleted items so a later page cannot resurrect them
    retain_deleted_items: bool = False
    # Toggle-next selection instead of replace-selection
    toggle_selection_mode: bool = False
    # Selection only notifies subscribers (ITEM_TAPPED) and leaves state alone
    emit_selection_as_notification_only: bool = True
    # Merge first-page results into held sections instead of replacing them
    merge_stale_fetched_pages: bool = False
    first_page: int = 1

    def __post_init__(self):
        """Validate value types after initialization."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "first_page":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigurationError(f"expected an integer, got {value!r}", key=f.name)
                if value < 0:
                    raise ConfigurationError(f"must not be negative, got {value}", key=f.name)
            elif not isinstance(value, bool):
                raise ConfigurationError(f"expected a boolean, got {value!r}", key=f.name)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "EngineConfig":
        """Create a config from a mapping, ignoring unknown keys.

        Args:
            data: Mapping such as the ``engine`` configuration section

        Returns:
            EngineConfig instance

        Raises:
            ConfigurationError: If a known key holds a value of the wrong type
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in (data or {}).items() if key in known}
        return cls(**values)

    @classmethod
    def load(cls) -> "EngineConfig":
        """Create a config from the ``engine`` section of the active ConfigManager."""
        from sectionkit.config import ConfigManager

        return cls.from_mapping(ConfigManager().get_engine_config())
