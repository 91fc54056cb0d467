"""
Request dependencies: bearer authentication and role guards.
"""
from typing import List, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from chainflow.core.exceptions import AuthenticationException, AuthorizationException
from chainflow.database import get_db
from chainflow.models.user import User
from chainflow.utils.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationException("Not authorized to access this route")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise AuthenticationException("Invalid or expired token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationException("Invalid or expired token")

    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationException("User no longer exists")
    if not user.is_active:
        raise AuthenticationException("Your account has been deactivated")
    return user


def require_roles(roles: List[str]):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise AuthorizationException(
                f"User role {current_user.role} is not authorized to access this route",
                details={"required_roles": roles},
            )
        return current_user
    return checker
