# backend/armory/config.py
from __future__ import annotations
import os


def _split_env(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Only used when RECORD_STORE_BACKEND == "sql"
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",  # optional alternative location
        "sqlite:///armory.sqlite3",  # default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # "memory" keeps movements in process; "sql" persists them through Flask-SQLAlchemy
    RECORD_STORE_BACKEND = os.environ.get("RECORD_STORE_BACKEND", "memory")

    # Fixed base catalog enforced on every write
    BASES = _split_env("ARMORY_BASES", "Base Alpha,Base Bravo,Base Charlie")

    # Viewer directory: username -> role and home base.
    # No authentication: the X-Username header is resolved against this table.
    VIEWERS = {
        "admin": {"role": "Admin", "home_base": None},
        "commander1": {"role": "Base Commander", "home_base": "Base Alpha"},
        "logistics": {"role": "Logistics Officer", "home_base": None},
    }

    SEED_DEMO_DATA = os.environ.get("ARMORY_SEED_DEMO", "false").lower() == "true"

    # Browser origins allowed to call the API (the dashboard dev servers)
    CORS_ORIGINS = set(_split_env(
        "ARMORY_CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
    ))
