"""
Configuration management for the eBay Python SDK
"""

from .signature_config import (
    load_signing_config,
    load_signing_config_from_json,
    load_signing_config_from_file,
)

__all__ = [
    'load_signing_config',
    'load_signing_config_from_json',
    'load_signing_config_from_file',
]
