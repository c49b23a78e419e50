"""JWT helpers and the current-player dependency."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from seamless_wallet.core.config import SecuritySettings
from seamless_wallet.core.container import ApplicationContainer
from seamless_wallet.interfaces.http.deps.container import get_app_container
from seamless_wallet.modules.accounts import Account
from seamless_wallet.schemas import TokenData

security = HTTPBearer()


def create_access_token(
    account_id: str,
    username: str,
    settings: SecuritySettings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": account_id,
        "username": username,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: SecuritySettings) -> TokenData:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    account_id = payload.get("sub")
    username = payload.get("username")
    if not all([account_id, username]):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(account_id=account_id, username=username)


async def get_current_account(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    container: ApplicationContainer = Depends(get_app_container),
) -> Account:
    token_data = decode_access_token(credentials.credentials, container.settings.security)
    account = await container.accounts.get_by_id(token_data.account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account does not exist")
    return account
