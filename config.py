# config.py
import os
from dotenv import load_dotenv

# Load environment variables from .env file.
load_dotenv()

_config = None


def _int_env(name, default):
    try:
        return int(float(os.getenv(name, default)))
    except (TypeError, ValueError):
        return default


def _float_env(name, default):
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def load_config():
    """
    Loads configuration from environment variables and returns a dictionary.
    """
    detection_store = os.getenv("DETECTION_STORE", "dynamodb").strip().lower()
    if detection_store not in ("dynamodb", "sqlite"):
        # Fallback to the production store on unknown values
        detection_store = "dynamodb"

    config = {
        # General Settings
        "DEBUG_MODE": os.getenv("DEBUG_MODE", "False").lower() == "true",
        "OUTPUT_DIR": os.getenv("OUTPUT_DIR", "/output"),

        # AWS Resources
        "AWS_REGION": os.getenv("AWS_REGION", os.getenv("AWS_DEFAULT_REGION", "us-east-1")),
        "BUCKET_NAME": os.getenv("BUCKET_NAME", ""),
        "TABLE_NAME": os.getenv("TABLE_NAME", ""),

        # AWS Client Behaviour (no retries inside the pipeline)
        "AWS_CONNECT_TIMEOUT": _float_env("AWS_CONNECT_TIMEOUT", 5.0),
        "AWS_READ_TIMEOUT": _float_env("AWS_READ_TIMEOUT", 30.0),
        "AWS_MAX_ATTEMPTS": max(1, _int_env("AWS_MAX_ATTEMPTS", 1)),

        # Detection Store
        "DETECTION_STORE": detection_store,
        "SQLITE_DB_FILENAME": os.getenv("SQLITE_DB_FILENAME", "detections.db"),

        # Label Detection Settings
        "LABEL_MAX_LABELS": _int_env("LABEL_MAX_LABELS", 20),
        "LABEL_MIN_CONFIDENCE": _float_env("LABEL_MIN_CONFIDENCE", 60.0),

        # Ingest Settings
        "INGEST_MAX_WORKERS": max(1, _int_env("INGEST_MAX_WORKERS", 1)),

        # Web Settings
        "WEB_HOST": os.getenv("WEB_HOST", "0.0.0.0"),
        "WEB_PORT": _int_env("WEB_PORT", 8050),
        "CORS_ALLOW_ORIGIN": os.getenv("CORS_ALLOW_ORIGIN", "*"),
    }
    return config


def get_config():
    """Returns the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


if __name__ == "__main__":
    # For testing purposes, print the configuration
    config = load_config()
    from pprint import pprint

    pprint(config)
