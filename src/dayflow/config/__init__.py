import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; defaults to 'development'.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "dayflow.config.production"

    if env in {"test", "testing"}:
        return "dayflow.config.testing"

    return "dayflow.config.development"


def env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]
