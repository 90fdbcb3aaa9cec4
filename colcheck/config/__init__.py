"""Configuration management."""
from colcheck.config.loader import (
    ConfigError,
    load_lint_config,
)
from colcheck.config.settings import LintConfig

__all__ = [
    'ConfigError',
    'LintConfig',
    'load_lint_config',
]
