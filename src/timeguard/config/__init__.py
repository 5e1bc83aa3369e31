import os


def get_settings_module() -> str:
    # Environment is selected by APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "timeguard.config.production"

    if env in {"test", "testing"}:
        return "timeguard.config.testing"

    return "timeguard.config.development"
