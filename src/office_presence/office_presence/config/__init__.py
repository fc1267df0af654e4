import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; development is the default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "office_presence.config.production"

    if env in {"test", "testing"}:
        return "office_presence.config.testing"

    return "office_presence.config.development"
