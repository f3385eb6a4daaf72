"""
Utility modules for the insurance console
"""
from .config_loader import ApiSettings, ConsoleConfig, PaginationDefaults, load_api_settings

__all__ = [
    'ApiSettings',
    'ConsoleConfig',
    'PaginationDefaults',
    'load_api_settings',
]
