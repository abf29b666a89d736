"""Core configuration and factory components."""

from docbuilder.core.config import Settings, get_settings
from docbuilder.core.factory import ComponentFactory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
]
