"""
Utility modules for the DOM kernel.
"""

from dom_kernel.utils.config import Config, get_default_config_path
from dom_kernel.utils.logging import setup_logging, get_default_log_file, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'get_default_config_path',
    'setup_logging',
    'get_default_log_file',
    'log_exception',
    'PerformanceLogger',
]
