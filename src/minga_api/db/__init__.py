"""
minga_api.db

Relational persistence package (SQLAlchemy).

Responsibilities:
- Provide the ORM schema, the dev/test schema bootstrap, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Connection lifecycle lives in `minga_api.datastores`; nothing here owns an engine.
