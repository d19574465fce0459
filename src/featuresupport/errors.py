"""Exceptions raised by the feature-support registry."""

from __future__ import annotations


class FeatureSupportError(Exception):
    """Base class for registry errors."""


class InvalidArgument(FeatureSupportError, ValueError):
    """A query or declaration was given an argument of an unusable shape."""

    code = "invalid_argument"


class ConfigError(FeatureSupportError, ValueError):
    """A declaration file could not be turned into registrations."""
