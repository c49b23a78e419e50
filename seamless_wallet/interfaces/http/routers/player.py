"""Player-facing endpoints: balance, wallet, game catalog, launch, history and transaction detail."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from seamless_wallet.core.container import ApplicationContainer
from seamless_wallet.core.money import format_amount
from seamless_wallet.core.security import get_current_account
from seamless_wallet.infrastructure.upstream import HistoryFilters, UpstreamError, UpstreamErrorKind
from seamless_wallet.interfaces.http.deps import get_app_container
from seamless_wallet.modules.accounts import Account
from seamless_wallet.modules.launch import UnsupportedProviderError, UrlConstructionFailedError
from seamless_wallet.modules.settlement import InsufficientBalanceError
from seamless_wallet.modules.wallets import InvalidAmountError
from seamless_wallet.schemas import (
    GameListResponse,
    HistoryResponse,
    LaunchRequest,
    LaunchResponse,
    PlayerBalanceResponse,
    TransactionDetailResponse,
    WalletAmountRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _balance(account: Account) -> PlayerBalanceResponse:
    return PlayerBalanceResponse(
        username=account.username,
        balance=format_amount(account.balance),
        currency=account.currency,
    )


@router.get("/balance", response_model=PlayerBalanceResponse, summary="Current player's balance")
async def player_balance(account: Account = Depends(get_current_account)) -> PlayerBalanceResponse:
    return _balance(account)


@router.post("/wallet/deposit", response_model=PlayerBalanceResponse, summary="Deposit into the wallet")
async def deposit(
    payload: WalletAmountRequest,
    account: Account = Depends(get_current_account),
    container: ApplicationContainer = Depends(get_app_container),
) -> PlayerBalanceResponse:
    try:
        updated = await container.wallets.deposit(account.id, payload.amount)
    except InvalidAmountError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _balance(updated)


@router.post("/wallet/withdraw", response_model=PlayerBalanceResponse, summary="Withdraw from the wallet")
async def withdraw(
    payload: WalletAmountRequest,
    account: Account = Depends(get_current_account),
    container: ApplicationContainer = Depends(get_app_container),
) -> PlayerBalanceResponse:
    try:
        updated = await container.wallets.withdraw(account.id, payload.amount)
    except InvalidAmountError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except InsufficientBalanceError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Insufficient balance") from exc
    return _balance(updated)


@router.get("/games", response_model=GameListResponse, summary="Games offered by a provider")
async def list_games(
    provider: str = Query("PG"),
    _: Account = Depends(get_current_account),
    container: ApplicationContainer = Depends(get_app_container),
) -> GameListResponse:
    try:
        descriptor = container.providers.get(provider)
    except UnsupportedProviderError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    games = await container.games.list_games(descriptor.code)
    return GameListResponse(provider=descriptor.code.value, games=games)


@router.post("/games/launch", response_model=LaunchResponse, summary="Resolve a game launch URL")
async def launch_game(
    payload: LaunchRequest,
    account: Account = Depends(get_current_account),
    container: ApplicationContainer = Depends(get_app_container),
) -> LaunchResponse:
    game_id = payload.game_id
    try:
        game = await container.games.find_game(payload.provider, payload.game_code)
    except UnsupportedProviderError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UpstreamError as exc:
        logger.warning("Catalog unavailable, launching %s/%s unchecked: %s", payload.provider, payload.game_code, exc)
    else:
        if game is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
        if not game_id and game.get("game_id") is not None:
            game_id = str(game["game_id"])

    try:
        resolved = await container.resolver.resolve_url(payload.provider, payload.game_code, game_id, account)
    except UnsupportedProviderError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UrlConstructionFailedError as exc:
        logger.error("Launch of %s/%s for %s failed: %s", payload.provider, payload.game_code, account.username, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to launch game") from exc
    return LaunchResponse(url=resolved.url, used_fallback=resolved.used_fallback)


@router.get(
    "/history",
    response_model=HistoryResponse,
    response_model_exclude_none=True,
    summary="Player's wager history from upstream",
)
async def player_history(
    start_date: str = Query("", alias="startDate"),
    end_date: str = Query("", alias="endDate"),
    type: str = Query(""),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    account: Account = Depends(get_current_account),
    container: ApplicationContainer = Depends(get_app_container),
) -> HistoryResponse:
    filters = HistoryFilters(start_date=start_date, end_date=end_date, type=type)
    result = await container.history.fetch(account.username, filters, page, limit)
    return HistoryResponse(
        data=result.data,
        total=result.total,
        page=result.page,
        limit=result.limit,
        message=result.message,
    )


@router.get(
    "/history/{transaction_id}",
    response_model=TransactionDetailResponse,
    summary="Detail of one upstream transaction",
)
async def transaction_detail(
    transaction_id: str,
    _: Account = Depends(get_current_account),
    container: ApplicationContainer = Depends(get_app_container),
) -> TransactionDetailResponse:
    try:
        data = await container.history.get_transaction(transaction_id)
    except UpstreamError as exc:
        if exc.kind is UpstreamErrorKind.NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found") from exc
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Cannot load transaction details",
        ) from exc
    return TransactionDetailResponse(data=data)
