"""Player registration and login."""
from fastapi import APIRouter, Depends, HTTPException, status

from seamless_wallet.core.container import ApplicationContainer
from seamless_wallet.core.money import format_amount
from seamless_wallet.core.security import create_access_token
from seamless_wallet.interfaces.http.deps import get_app_container
from seamless_wallet.modules.accounts import AccountAlreadyExistsError, AccountCreateInput
from seamless_wallet.schemas import AccountLoginResponse, AccountResponse, LoginRequest, RegisterRequest

router = APIRouter()


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a player with the default balance",
)
async def register(
    payload: RegisterRequest,
    container: ApplicationContainer = Depends(get_app_container),
) -> AccountResponse:
    try:
        account = await container.accounts.register(
            AccountCreateInput(username=payload.username, password=payload.password)
        )
    except AccountAlreadyExistsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists") from exc

    return AccountResponse(
        id=account.id,
        username=account.username,
        balance=format_amount(account.balance),
        currency=account.currency,
    )


@router.post("/login", response_model=AccountLoginResponse, summary="Player login")
async def login(
    payload: LoginRequest,
    container: ApplicationContainer = Depends(get_app_container),
) -> AccountLoginResponse:
    account = await container.accounts.authenticate(payload.username, payload.password)
    if not account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    await container.sessions.reset_session(account)

    access_token = create_access_token(account.id, account.username, container.settings.security)
    return AccountLoginResponse(access_token=access_token, account_id=account.id, username=account.username)
