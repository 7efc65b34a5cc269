import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)

APP_ENV = os.getenv("APP_ENV", "development")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Simulated round trip for every store operation.
STORE_LATENCY_MS = int(os.getenv("STORE_LATENCY_MS", "500"))
STORE_AUTH_FAILURE_LATENCY_MS = int(os.getenv("STORE_AUTH_FAILURE_LATENCY_MS", "1000"))

STORE_SEED_DEMO_DATA = _get_bool(os.getenv("STORE_SEED_DEMO_DATA"), default=True)
STORE_SEED_RANDOM_SEED = _get_int(os.getenv("STORE_SEED_RANDOM_SEED"))

def validate_runtime_config() -> None:
    if STORE_LATENCY_MS < 0 or STORE_AUTH_FAILURE_LATENCY_MS < 0:
        raise RuntimeError("Store latencies must not be negative.")
