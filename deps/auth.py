from typing import Annotated

from fastapi import Header, HTTPException

import config


def require_admin(
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Strict admin-only guard. Requires the X-Admin-Token header to match ADMIN_TOKEN.
    """
    expected = config.admin_token()
    if not expected:
        raise HTTPException(status_code=500, detail="ADMIN_TOKEN not configured on server.")
    if x_admin_token != expected:
        raise HTTPException(status_code=401, detail="Unauthorized.")


def require_client(
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Client/API guard. Accepts either:
      - X-Admin-Token that matches ADMIN_TOKEN (admins always allowed), or
      - X-Api-Key that matches QBANK_API_KEY.
    """
    admin = config.admin_token()
    if admin and x_admin_token == admin:
        return

    key = config.api_key()
    if not key:
        raise HTTPException(status_code=500, detail="QBANK_API_KEY not configured on server.")
    if x_api_key != key:
        raise HTTPException(status_code=401, detail="Unauthorized.")
