"""
Configuration management for Restobaza Python SDK

This module provides the client configuration and its loaders for mappings,
JSON files and environment variables.
"""

from .client_config import (
    ClientConfig,
    DEFAULT_BASE_ADDRESS,
    REQUIRED_PARAMETERS,
    ENV_PREFIX,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
)

__all__ = [
    'ClientConfig',
    'DEFAULT_BASE_ADDRESS',
    'REQUIRED_PARAMETERS',
    'ENV_PREFIX',
    'load_config_from_json',
    'load_config_from_file',
    'load_config_from_env',
]
