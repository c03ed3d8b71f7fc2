"""
Configuration module.
"""

from .tree_config import TreeConfig, get_tree_config, load_config

__all__ = ["TreeConfig", "get_tree_config", "load_config"]
