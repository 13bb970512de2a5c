"""
minga_api

Top-level package for the minga.red users & health backend.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal; datastore clients are built by the app lifespan, never at import.
