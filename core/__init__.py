"""
DeerWatch Core Package.

This package contains the core business logic of the application,
separated from the web layer. Ingestion, verification and listing
are coordinated through core modules.

ARCHITECTURE RULES:
- core/ modules may only import from:
  - Python standard library
  - utils/ (low-level helpers)
  - detectors/ (classifier, collaborator interfaces and services)
  - config (for global configuration)

- core/ modules MUST NOT import from:
  - web/ (no Flask dependencies)
  - flask, werkzeug, or any web-specific packages

- All new business logic should be placed here, not in web/
"""

__all__ = [
    "context",
    "detection_record",
    "detections_core",
    "ingest_core",
]
