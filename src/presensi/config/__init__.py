import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "presensi.config.production"

    if env in {"test", "testing"}:
        return "presensi.config.testing"

    return "presensi.config.development"
