import os


def get_settings_module() -> str:
    """Pick the settings module from APP_ENV (default: development)."""
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "catering_personnel.config.production"

    if env in {"test", "testing"}:
        return "catering_personnel.config.testing"

    return "catering_personnel.config.development"
