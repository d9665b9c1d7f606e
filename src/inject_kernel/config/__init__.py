from .base_settings import InjectSettings, get_settings

__all__ = ["InjectSettings", "get_settings"]
