"""Configuration package for the FairGrade application."""

from .unified_config import UnifiedConfig, config

__all__ = ["UnifiedConfig", "config"]
