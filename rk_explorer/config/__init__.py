"""
Configuration: global.json settings and user-defined tableau files.
"""

from .loader import load_global_config, load_tableau_definitions
from .model import GlobalConfig

__all__ = ["GlobalConfig", "load_global_config", "load_tableau_definitions"]
