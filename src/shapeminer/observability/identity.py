from typing import Dict, Optional

from jose import jwt
from jose.exceptions import JOSEError


def extract_requester(headers: Optional[Dict[str, str]], payload: Dict) -> str:
    """
    Identify who asked for a synthesis run, in order:
    1. Proxy-authenticated user header
    2. Bearer JWT claims (signature is checked upstream)
    3. Payload `user_id`
    4. Fallback to anonymous
    """
    headers = {k.lower(): v for k, v in (headers or {}).items()}

    user = headers.get("x-authenticated-user")
    if user:
        return user.split(":")[-1]

    auth_header = headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header.split(" ", 1)[1]
        try:
            claims = jwt.get_unverified_claims(token)
            return claims.get("email") or claims.get("sub") or "unknown_user"
        except JOSEError:
            pass

    if payload.get("user_id"):
        return str(payload["user_id"])

    return "anonymous"
