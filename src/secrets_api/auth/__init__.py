"""
secrets_api.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation (HS256 locally, Auth0 RS256 via JWKS).
- Claim set / Principal types.
- Permission evaluation and named policies.
- FastAPI auth dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# `permissions` has no FastAPI imports so the evaluator can be tested in isolation.
