"""
Runtime Configuration Module

Provides configuration loading and management for trees and the CLI.
"""

from .runtime import (
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
)

__all__ = [
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
]
