"""YAML profile loader — loads house-style profiles from YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from styleguard.errors import ProfileError
from styleguard.models import HouseStyle
from styleguard.rules.builtin import DEFAULT_WILDCARD_THRESHOLD, RULE_NAMES

logger = logging.getLogger(__name__)

BUILTIN_PROFILE = Path(__file__).parent.parent / "profiles" / "house.yml"


class ProfileLoader:
    """Load house-style profiles from YAML files."""

    def load_file(self, filepath: str | Path) -> HouseStyle:
        """Load a profile from a single YAML file."""
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Profile file not found: {filepath}")

        with open(filepath) as f:
            data = yaml.safe_load(f)

        if not data:
            logger.warning("Empty profile %s, using defaults", filepath)
            return HouseStyle(name=filepath.stem)
        if not isinstance(data, dict):
            raise ProfileError(f"{filepath}: profile must be a mapping")

        profile = self._parse_profile(data, default_name=filepath.stem)
        logger.info("Loaded profile '%s' from %s", profile.name, filepath.name)
        return profile

    def load_builtin(self) -> HouseStyle:
        """Load the house profile shipped with StyleGuard."""
        if BUILTIN_PROFILE.exists():
            return self.load_file(BUILTIN_PROFILE)
        logger.warning("Built-in profile not found at %s", BUILTIN_PROFILE)
        return HouseStyle()

    def _parse_profile(self, data: dict[str, Any], default_name: str) -> HouseStyle:
        threshold = data.get("wildcard_threshold", DEFAULT_WILDCARD_THRESHOLD)
        if (isinstance(threshold, bool) or not isinstance(threshold, int)
                or threshold < DEFAULT_WILDCARD_THRESHOLD):
            raise ProfileError(
                f"wildcard_threshold must be an integer >= {DEFAULT_WILDCARD_THRESHOLD}, "
                f"got {threshold!r}")

        disabled = data.get("disabled_rules") or []
        if isinstance(disabled, str):
            disabled = [disabled]
        unknown = [name for name in disabled if name not in RULE_NAMES]
        if unknown:
            raise ProfileError(f"Unknown rules in disabled_rules: {', '.join(unknown)}")

        return HouseStyle(
            name=str(data.get("name", default_name)),
            description=data.get("description", ""),
            wildcard_threshold=threshold,
            disabled_rules=list(disabled),
            notify_on_startup=bool(data.get("notify_on_startup", True)),
            metadata=data.get("metadata", {}),
        )
