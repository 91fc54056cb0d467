"""Deployment preflight checks.

Usage:
    python scripts/db_preflight.py

Mirrors the production-safety rules enforced by chainflow.config.Settings
so they can be verified from a shell before the app boots.
Exits non-zero when any required control fails.
"""

from __future__ import annotations

import os
import sys


DEFAULT_SECRET = "chainflow-super-secret-key-change-in-production"
MIN_SECRET_LENGTH = 32
MIN_BCRYPT_ROUNDS = 10


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def run() -> int:
    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    database_url = os.getenv("DATABASE_URL", "sqlite:///./chainflow.db")
    secret_key = os.getenv("SECRET_KEY", DEFAULT_SECRET)
    auto_create_tables = _bool_env("AUTO_CREATE_TABLES", True)
    debug = _bool_env("DEBUG", True)
    retries = _int_env("STOCK_WRITE_MAX_RETRIES", 3)
    bcrypt_rounds = _int_env("BCRYPT_ROUNDS", 12)

    checks: list[tuple[str, bool, str]] = [
        (
            "STOCK_WRITE_MAX_RETRIES is at least 1",
            retries >= 1,
            f"STOCK_WRITE_MAX_RETRIES={retries}",
        ),
    ]

    if environment in {"production", "prod"}:
        checks.extend(
            [
                (
                    "DATABASE_URL is not SQLite",
                    "sqlite" not in database_url.lower(),
                    "DATABASE_URL uses " + database_url.split(":", 1)[0],
                ),
                (
                    "SECRET_KEY is not the default value",
                    secret_key != DEFAULT_SECRET,
                    "SECRET_KEY is custom" if secret_key != DEFAULT_SECRET else "SECRET_KEY is default",
                ),
                (
                    f"SECRET_KEY has at least {MIN_SECRET_LENGTH} characters",
                    len(secret_key) >= MIN_SECRET_LENGTH,
                    f"length={len(secret_key)}",
                ),
                (
                    "AUTO_CREATE_TABLES is disabled",
                    not auto_create_tables,
                    f"AUTO_CREATE_TABLES={auto_create_tables}",
                ),
                (
                    "DEBUG is disabled",
                    not debug,
                    f"DEBUG={debug}",
                ),
                (
                    f"BCRYPT_ROUNDS is at least {MIN_BCRYPT_ROUNDS}",
                    bcrypt_rounds >= MIN_BCRYPT_ROUNDS,
                    f"BCRYPT_ROUNDS={bcrypt_rounds}",
                ),
            ]
        )

    has_failures = False
    print("ChainFlow preflight")
    print(f"- environment: {environment}")
    for title, ok, detail in checks:
        marker = "PASS" if ok else "FAIL"
        print(f"[{marker}] {title} ({detail})")
        if not ok:
            has_failures = True

    if has_failures:
        print("\nPreflight failed. Resolve failed checks before deployment.")
        return 1

    print("\nPreflight passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
