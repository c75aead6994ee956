"""
SectorFS Core Module

Core components including:
- Bootloader
- Configuration Loader
"""

from .config_loader import ConfigLoader, Config, get_config
from .bootloader import Bootloader, BootStage, BootResult, boot_system

__all__ = [
    # Bootloader
    'Bootloader',
    'BootStage',
    'BootResult',
    'boot_system',
    # Config
    'ConfigLoader',
    'Config',
    'get_config',
]
