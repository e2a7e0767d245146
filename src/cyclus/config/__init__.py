from .loaders import load_file
from .settings import SystemSettings
from .setup import setup_logging

__all__ = [
    "SystemSettings",
    "load_file",
    "setup_logging",
]
