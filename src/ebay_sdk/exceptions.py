"""
Exception classes for the eBay Python SDK
"""

from typing import Optional, Dict, Any


class EbaySDKError(Exception):
    """Base exception for all eBay SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ConfigError(EbaySDKError):
    """Exception raised when the SDK configuration cannot be loaded or is malformed"""
    pass
