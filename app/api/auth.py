"""Authentication: JWT bearer tokens carrying a role claim."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.config import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/token", auto_error=False)


@dataclass
class CurrentUser:
    """Identity decoded from an access token."""

    subject: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role in settings.admin_roles_list


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def get_token_from_request(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    access_token: Optional[str] = Cookie(None),
) -> Optional[str]:
    """Get token from Authorization header, cookie, or query parameter."""
    # Try Authorization header first
    if token:
        return token
    # Try cookie
    if access_token:
        return access_token
    # Try query parameter
    token_param = request.query_params.get("token")
    if token_param:
        return token_param
    return None


def get_current_user(token: Optional[str] = Depends(get_token_from_request)) -> CurrentUser:
    """Get current authenticated user."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise credentials_exception
    subject = payload.get("sub")
    if subject is None:
        raise credentials_exception
    return CurrentUser(subject=subject, role=payload.get("role"))


def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Require admin role."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required. The token's role claim must be one of: "
            + ", ".join(settings.admin_roles_list),
        )
    return current_user
