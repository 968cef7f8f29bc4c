"""
secrets_api.storage

In-memory storage package.

Responsibilities:
- Per-user, append-only, concurrency-safe item store.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here outlives the process; a persistent backend would sit behind the same interface.
