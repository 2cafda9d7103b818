"""Exceptions raised by the scoring package.

Evaluators never raise for document content. These exceptions cover caller
mistakes: malformed configuration files and invalid catalog definitions.
"""


class ScoringError(Exception):
    """Base exception for sbomscore."""


class ConfigError(ScoringError):
    """Configuration could not be decoded or failed validation."""


class ProfileConfigError(ConfigError):
    """A profile configuration file has an invalid shape."""


class CategoryConfigError(ConfigError):
    """A category configuration file has an invalid shape."""
