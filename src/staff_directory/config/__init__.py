import os


def get_settings_module() -> str:
    # Environment comes from APP_ENV, defaulting to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "staff_directory.config.production"

    if env in {"test", "testing"}:
        return "staff_directory.config.testing"

    return "staff_directory.config.development"
