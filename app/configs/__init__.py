from app.configs.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
