"""
Formflow Core
=============

Configuration shared by the rest of the package.
"""

from formflow.core.config import Config, config, get_config, reset_config

__all__ = [
    "Config",
    "config",
    "get_config",
    "reset_config",
]
