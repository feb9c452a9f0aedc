"""Utility helpers for the analyzer."""

from .fileio import read_yaml_file, read_text_file
from .config import AnalyzerConfig, ConfigError, load_config
from .code import iter_code_files

__all__ = [
    "read_yaml_file",
    "read_text_file",
    "AnalyzerConfig",
    "ConfigError",
    "load_config",
    "iter_code_files",
]
