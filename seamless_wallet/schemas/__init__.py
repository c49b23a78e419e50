"""Pydantic schemas used across the project.

Partner-facing payloads keep the aggregator's camelCase field names through
aliases; balances always travel as two-fraction-digit strings.
"""
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TokenData(BaseModel):
    account_id: str
    username: str


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class RegisterRequest(_CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    confirm_password: Optional[str] = Field(default=None, alias="confirmPassword")

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class AccountLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account_id: str
    username: str


class AccountResponse(BaseModel):
    id: str
    username: str
    balance: str
    currency: str


class PlayerBalanceResponse(BaseModel):
    success: bool = True
    username: str
    balance: str
    currency: str


class WalletAmountRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)


class CheckBalanceRequest(BaseModel):
    username: str


class CheckBalanceResponse(BaseModel):
    success: bool = True
    balance: str
    currency: str


class SettleTxn(_CamelModel):
    # validated by WagerSettlement so bad amounts get a partner status code
    bet_amount: Optional[Union[Decimal, str]] = Field(default=None, alias="betAmount")
    payout_amount: Optional[Union[Decimal, str]] = Field(default=None, alias="payoutAmount")


class SettleBetsRequest(BaseModel):
    username: str
    id: Union[str, int]
    txns: list[SettleTxn] = Field(..., min_length=1)

    @field_validator("id")
    @classmethod
    def _id_as_text(cls, value: Union[str, int]) -> str:
        text = str(value).strip()
        if not text:
            raise ValueError("id must not be empty")
        return text


class SettleBetsResponse(_CamelModel):
    success: bool
    status_code: int = Field(alias="statusCode")
    message: Optional[str] = None
    balance_before: Optional[str] = Field(default=None, alias="balanceBefore")
    balance_after: Optional[str] = Field(default=None, alias="balanceAfter")
    currency: Optional[str] = None


class PartnerHistoryRequest(_CamelModel):
    username: str
    start_date: str = Field(default="", alias="startDate")
    end_date: str = Field(default="", alias="endDate")
    type: str = ""
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=200)


class HistoryResponse(BaseModel):
    success: bool = True
    data: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 50
    message: Optional[str] = None


class TransactionDetailResponse(BaseModel):
    success: bool = True
    data: dict[str, Any] = Field(default_factory=dict)


class LaunchRequest(_CamelModel):
    provider: str
    game_code: str = Field(..., min_length=1, alias="gameCode")
    game_id: Optional[str] = Field(default=None, alias="gameId")


class LaunchResponse(_CamelModel):
    url: str
    used_fallback: bool = Field(alias="usedFallback")


class GameListResponse(BaseModel):
    provider: str
    games: list[dict[str, Any]] = Field(default_factory=list)


class DiagnosticLoginRequest(_CamelModel):
    username: str
    game_code: str = Field(..., min_length=1, alias="gameCode")


class UpstreamDiagnosticsResponse(BaseModel):
    reachable: bool
    kind: Optional[str] = None
    detail: Optional[str] = None
    data: Optional[Any] = None
