"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from solmarket.shared.validators import validate_address, validate_rpc_url
from solmarket.shared.logging_conf import setup_logging, setup_logging_from_settings

__all__ = [
    "validate_address",
    "validate_rpc_url",
    "setup_logging",
    "setup_logging_from_settings",
]
