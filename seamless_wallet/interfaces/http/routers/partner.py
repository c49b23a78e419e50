"""Callbacks served to the aggregator and partner agents.

Response bodies follow the partner contract rather than FastAPI's default
``{"detail": ...}`` shape, so errors are returned as explicit JSON responses.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from seamless_wallet.core.config import AgentSettings
from seamless_wallet.core.container import ApplicationContainer
from seamless_wallet.core.money import format_amount
from seamless_wallet.infrastructure.upstream import HistoryFilters
from seamless_wallet.interfaces.http.deps import get_agent_by_api_key, get_agent_by_secret, get_app_container
from seamless_wallet.modules.accounts import AccountNotFoundError
from seamless_wallet.modules.settlement import InsufficientBalanceError, InvalidWagerError, WagerSettlement
from seamless_wallet.schemas import (
    CheckBalanceRequest,
    CheckBalanceResponse,
    HistoryResponse,
    PartnerHistoryRequest,
    SettleBetsRequest,
    SettleBetsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_OK = 0
STATUS_UNAUTHORIZED_OR_UNKNOWN = 30001
STATUS_INSUFFICIENT_BALANCE = 30002
STATUS_INVALID_WAGER = 30003
STATUS_INTERNAL_ERROR = 50001


def _settle_error(http_status: int, code: int, message: str) -> JSONResponse:
    body = SettleBetsResponse(success=False, status_code=code, message=message)
    return JSONResponse(status_code=http_status, content=body.model_dump(by_alias=True, exclude_none=True))


@router.post("/checkBalance", response_model=CheckBalanceResponse, summary="Report a player's balance")
async def check_balance(
    payload: CheckBalanceRequest,
    agent: AgentSettings | None = Depends(get_agent_by_secret),
    container: ApplicationContainer = Depends(get_app_container),
):
    if agent is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": "Invalid API Key"},
        )
    account = await container.accounts.get_by_username(payload.username)
    if account is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "User not found"},
        )
    return CheckBalanceResponse(balance=format_amount(account.balance), currency=account.currency)


@router.post(
    "/settleBets",
    response_model=SettleBetsResponse,
    response_model_exclude_none=True,
    summary="Apply a settled wager to a player's balance",
)
async def settle_bets(
    payload: SettleBetsRequest,
    agent: AgentSettings | None = Depends(get_agent_by_secret),
    container: ApplicationContainer = Depends(get_app_container),
):
    if agent is None:
        return _settle_error(status.HTTP_401_UNAUTHORIZED, STATUS_UNAUTHORIZED_OR_UNKNOWN, "Invalid API Key")
    account = await container.accounts.get_by_username(payload.username)
    if account is None:
        return _settle_error(status.HTTP_404_NOT_FOUND, STATUS_UNAUTHORIZED_OR_UNKNOWN, "User not found")

    if len(payload.txns) > 1:
        logger.warning("settleBets %s carries %d txns; only the first is applied", payload.id, len(payload.txns))
    txn = payload.txns[0]

    try:
        wager = WagerSettlement(
            username=account.username,
            wager_id=str(payload.id),
            bet_amount=txn.bet_amount,
            payout_amount=txn.payout_amount,
        )
        result = await container.settlement.settle(account, wager)
    except InsufficientBalanceError as exc:
        balance = format_amount(exc.balance)
        return SettleBetsResponse(
            success=False,
            status_code=STATUS_INSUFFICIENT_BALANCE,
            message="Insufficient balance",
            balance_before=balance,
            balance_after=balance,
            currency=account.currency,
        )
    except InvalidWagerError as exc:
        logger.warning("Rejected wager %s for %s: %s", payload.id, account.username, exc)
        return _settle_error(status.HTTP_400_BAD_REQUEST, STATUS_INVALID_WAGER, str(exc))
    except AccountNotFoundError:
        return _settle_error(status.HTTP_404_NOT_FOUND, STATUS_UNAUTHORIZED_OR_UNKNOWN, "User not found")
    except (SQLAlchemyError, OverflowError):
        logger.exception("Ledger failure while settling wager %s for %s", payload.id, account.username)
        return _settle_error(status.HTTP_500_INTERNAL_SERVER_ERROR, STATUS_INTERNAL_ERROR, "Internal server error")

    return SettleBetsResponse(
        success=True,
        status_code=STATUS_OK,
        balance_before=format_amount(result.balance_before),
        balance_after=format_amount(result.balance_after),
        currency=result.currency,
    )


@router.post(
    "/history",
    response_model=HistoryResponse,
    response_model_exclude_none=True,
    summary="Proxy a player's wager history from upstream",
)
async def partner_history(
    payload: PartnerHistoryRequest,
    agent: AgentSettings | None = Depends(get_agent_by_api_key),
    container: ApplicationContainer = Depends(get_app_container),
):
    if agent is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "error": "Invalid API Key"},
        )
    account = await container.accounts.get_by_username(payload.username)
    if account is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": "User not found"},
        )

    filters = HistoryFilters(start_date=payload.start_date, end_date=payload.end_date, type=payload.type)
    page = await container.history.fetch(account.username, filters, payload.page, payload.limit)
    return HistoryResponse(
        data=page.data,
        total=page.total,
        page=page.page,
        limit=page.limit,
        message=page.message,
    )
