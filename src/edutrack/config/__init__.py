import os


def get_settings_module() -> str:
    # Environment comes from APP_ENV, defaulting to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "edutrack.config.production"

    if env in {"test", "testing"}:
        return "edutrack.config.testing"

    return "edutrack.config.development"


def env_list(name: str, default: str) -> list[str]:
    return [v.strip() for v in os.getenv(name, default).split(",") if v.strip()]
