"""
minga_api.api

HTTP transport for the users and health use-cases.

Responsibilities:
- FastAPI app factory and router modules.
- Dependency wiring from the datastore registry to use-cases.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: input parsing, delegation to use-cases, status mapping.
