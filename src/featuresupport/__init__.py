"""Per-type feature support registry."""

from featuresupport.config import Config, LoggingConfig, SupportDeclaration, apply_config, load_config
from featuresupport.directory import (
    RegistryDirectory,
    default_directory,
    get_instance,
    get_registered_types,
)
from featuresupport.errors import ConfigError, FeatureSupportError, InvalidArgument
from featuresupport.query import AND, NOT, OR, ByFilter, ByName, ByNames, as_query, filter_items, values_equal
from featuresupport.registry import Registry

__all__ = [
    "AND",
    "OR",
    "NOT",
    "ByName",
    "ByNames",
    "ByFilter",
    "Config",
    "ConfigError",
    "FeatureSupportError",
    "InvalidArgument",
    "LoggingConfig",
    "Registry",
    "RegistryDirectory",
    "SupportDeclaration",
    "apply_config",
    "as_query",
    "default_directory",
    "filter_items",
    "get_instance",
    "get_registered_types",
    "load_config",
    "values_equal",
]
