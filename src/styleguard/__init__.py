"""StyleGuard — house-style compliance checking and remediation for IDE code-style settings."""

__version__ = "1.0.0"
