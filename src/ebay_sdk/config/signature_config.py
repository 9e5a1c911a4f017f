"""
Signature configuration loading for the Python SDK

Builds a ``SigningConfig`` from the ``signature`` section of the SDK's
application config document::

    {
        "appId": "...",
        "signature": {
            "cipher": "sha256",
            "jwe": "eyJ6aXAiOiJERUYiLCJraWQiOi...",
            "privateKey": "MC4CAQAwBQYDK2VwBCIEI..."
        }
    }

A missing ``signature`` section means signing is disabled.
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..exceptions import ConfigError
from ..signing.types import SigningConfig, RsaPadding, DEFAULT_CIPHER


SIGNATURE_SECTION = "signature"


def load_signing_config(data: Mapping[str, Any]) -> Optional[SigningConfig]:
    """
    Load signing configuration from an application config mapping.

    Args:
        data: Application configuration

    Returns:
        SigningConfig: Signing configuration, or None if signing is not configured

    Raises:
        ConfigError: If the signature section is malformed
    """
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration must be a mapping", "INVALID_FORMAT")

    section = data.get(SIGNATURE_SECTION)
    if section is None:
        return None

    if not isinstance(section, Mapping):
        raise ConfigError(
            f"'{SIGNATURE_SECTION}' must be a mapping, got {type(section).__name__}",
            "INVALID_FORMAT"
        )

    try:
        return SigningConfig(
            key_reference=section["jwe"],
            private_key=section["privateKey"],
            cipher=section.get("cipher") or DEFAULT_CIPHER,
            key_id=section.get("keyId"),
            rsa_padding=section.get("rsaPadding") or RsaPadding.PSS,
        )
    except KeyError as e:
        raise ConfigError(
            f"Missing signature setting: {e}",
            "INVALID_FORMAT",
            {"setting": e.args[0]}
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid signature configuration: {e}", "INVALID_FORMAT")


def load_signing_config_from_json(json_string: str) -> Optional[SigningConfig]:
    """Load signing configuration from a JSON string."""
    try:
        data: Dict[str, Any] = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")

    return load_signing_config(data)


def load_signing_config_from_file(file_path: Union[str, Path]) -> Optional[SigningConfig]:
    """Load signing configuration from a JSON file."""
    try:
        path = Path(file_path)
        with open(path, 'r', encoding='utf-8') as f:
            json_string = f.read()
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file: {e}", "FILE_ERROR")

    return load_signing_config_from_json(json_string)
