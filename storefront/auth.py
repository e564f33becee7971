"""
Authentication Module for the Storefront
========================================

HTTP Basic authentication for the back office (/admin/*) endpoints.

Security Features:
------------------
- **Timing Attack Prevention**: Credentials are compared with
  `secrets.compare_digest()`, which takes constant time regardless of how
  many characters match.

- **Shared Realm**: All admin endpoints share one realm so browsers reuse
  the credentials across admin pages.

- **Fail Closed**: If ADMIN_PASSWORD is not configured, admin endpoints
  return 503 Service Unavailable instead of allowing access.

Usage:
------
    from storefront.auth import verify_admin_credentials

    @router.get("/admin/menu")
    def list_items(_admin: str = Depends(verify_admin_credentials)):
        ...
"""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from . import config


security = HTTPBasic(realm="Storefront Admin")


def verify_admin_credentials(
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    Verify HTTP Basic Auth credentials for admin endpoints.

    Returns:
        str: The authenticated username.

    Raises:
        HTTPException (503): ADMIN_PASSWORD is not set.
        HTTPException (401): Invalid credentials. Includes a WWW-Authenticate
            header so browsers prompt for credentials.
    """
    if not config.ADMIN_PASSWORD:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Admin authentication not configured. Set ADMIN_PASSWORD environment variable.",
        )

    username_correct = secrets.compare_digest(
        credentials.username.encode("utf-8"),
        config.ADMIN_USERNAME.encode("utf-8"),
    )
    password_correct = secrets.compare_digest(
        credentials.password.encode("utf-8"),
        config.ADMIN_PASSWORD.encode("utf-8"),
    )

    if not (username_correct and password_correct):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username
