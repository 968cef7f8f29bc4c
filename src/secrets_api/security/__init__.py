"""
secrets_api.security

Data protection package.

Responsibilities:
- Purpose-bound key derivation and symmetric encryption of secrets at rest.
"""

# Package marker.
