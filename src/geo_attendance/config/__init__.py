import os

_MODULES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    """Dotted path of the settings module selected by APP_ENV (development when unset)."""
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"{__name__}.{_MODULES.get(env, 'development')}"
