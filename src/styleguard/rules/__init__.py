"""House-style rule library, profile loader and compliance engine."""

from styleguard.rules.builtin import build_house_rules
from styleguard.rules.engine import ComplianceEngine
from styleguard.rules.loader import ProfileLoader

__all__ = ["ComplianceEngine", "ProfileLoader", "build_house_rules"]
