"""graph-policy-keys package.

Manages Azure AD B2C trust framework key sets through Microsoft Graph using
an OAuth2 client-credentials token.
"""

# Intentionally do not re-export symbols from submodules to avoid loading the
# .env file and HTTP stack at package import time. Individual modules (e.g.,
# ``cli``) should be imported directly by consumers as needed.

__all__: list[str] = []
