"""
secrets_api.services

Service-layer package.

Responsibilities:
- Orchestrate store and encryption calls for names and secrets.
- Log context and re-raise collaborator errors unchanged.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with real in-memory collaborators.
