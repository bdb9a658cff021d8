"""Environment-driven application settings."""

import os

DEFAULT_PROCESSING_DELAY = 2.0


def get_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def checkout_processing_delay() -> float:
    """Seconds the simulated payment processing waits before an order is placed."""
    raw = os.getenv("CHECKOUT_PROCESSING_DELAY")
    if raw is None or raw == "":
        return 0.0 if get_environment() == "test" else DEFAULT_PROCESSING_DELAY
    return max(0.0, float(raw))


def default_admin_credentials() -> tuple[str, str]:
    return (
        os.getenv("DEFAULT_ADMIN_EMAIL", "admin@store.com"),
        os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123"),
    )


def seed_catalogue_on_startup() -> bool:
    return os.getenv("SEED_CATALOGUE", "true").lower() in ("1", "true", "yes")
