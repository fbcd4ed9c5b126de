"""
Utility functions for markpress.
"""

from .env import is_env_ssl_verify, is_env_truthy
from .logging import log_config_param, mask_sensitive

__all__ = [
    "is_env_ssl_verify",
    "is_env_truthy",
    "log_config_param",
    "mask_sensitive",
]
