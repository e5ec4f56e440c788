from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from ballot_node.config import get_caller_header


def current_caller_id_optional(request: Request) -> Optional[str]:
    """
    Caller identity as supplied by the fronting auth layer.

    The node does not authenticate; it trusts the configured header.
    """
    header = get_caller_header(request.app.state.config)
    raw = request.headers.get(header)
    if not raw or not raw.strip():
        return None
    return raw.strip()


def require_caller_id(
    caller_id: Optional[str] = Depends(current_caller_id_optional),
) -> str:
    if not caller_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="auth_required")
    return caller_id
