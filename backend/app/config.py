"""Environment-driven settings for the Flask app."""

import os

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"


def _optional_int(raw):
    return int(raw) if raw not in (None, "") else None


def default_config() -> dict:
    """Read the base settings from the environment at call time."""
    return {
        "CORS_ORIGINS": [
            origin.strip()
            for origin in os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
            if origin.strip()
        ],
        "DEFAULT_HORIZON_END_YEAR": int(os.environ.get("DEFAULT_HORIZON_END_YEAR", "2060")),
        # Pin the first simulated year; None means "current UTC year".
        "AS_OF_YEAR": _optional_int(os.environ.get("AS_OF_YEAR")),
        "LOG_LEVEL": os.environ.get("LOG_LEVEL", "INFO").upper(),
    }


ENV_OVERRIDES = {
    "development": {},
    "testing": {
        "TESTING": True,
        "LOG_LEVEL": "DEBUG",
    },
    "production": {
        "LOG_LEVEL": "WARNING",
    },
}


def load_config(env_name=None, overrides=None) -> dict:
    env_name = (env_name or os.environ.get("APP_ENV", "development")).lower()
    config = default_config()
    config.update(ENV_OVERRIDES.get(env_name, {}))
    config.update(overrides or {})
    return config
