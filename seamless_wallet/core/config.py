"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./seamless_wallet.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24


class UpstreamSettings(BaseModel):
    """Aggregator endpoint and per-call timeouts (seconds)."""

    endpoint: str = "https://web-api.cryteksoft.cloud"
    catalog_endpoint: Optional[str] = None
    api_key: str = ""
    # The aggregator is a fixed private partner host whose certificate is not
    # publicly anchored; verification is off unless explicitly enabled.
    verify_tls: bool = False
    language: str = "th"
    session_timeout: float = 5.0
    balance_timeout: float = 5.0
    game_url_timeout: float = 10.0
    catalog_timeout: float = 10.0
    login_timeout: float = 10.0
    history_timeout: float = 15.0
    transaction_timeout: float = 5.0


class WalletSettings(BaseModel):
    default_balance: Decimal = Decimal("1000.00")
    currency: str = "THB"
    default_agent_id: str = "agent-001"


class ProviderTemplateSettings(BaseModel):
    display_name: str
    template_kind: Literal["path", "query"] = "query"
    template: str


def _default_provider_templates() -> dict[str, ProviderTemplateSettings]:
    return {
        "PG": ProviderTemplateSettings(
            display_name="PG Soft",
            template_kind="path",
            template=(
                "https://m.pgsoft-th.com/{game_code}/index.html"
                "?language={language}&bet_type=1&operator_token={operator_token}"
                "&operator_player_session={session_token}&or=cdn.pgsoft-th.com"
            ),
        ),
        "JILI": ProviderTemplateSettings(
            display_name="JILI Games",
            template=(
                "https://launch.jili.example/play?gameId={game_id}&gameCode={game_code}"
                "&token={session_token}&operator={operator_token}&lang={language}"
            ),
        ),
        "PP": ProviderTemplateSettings(
            display_name="Pragmatic Play",
            template=(
                "https://launch.pragmatic.example/gs2c/openGame.do?symbol={game_id}"
                "&gameCode={game_code}&token={session_token}&stylename={operator_token}"
                "&language={language}"
            ),
        ),
        "JOKER": ProviderTemplateSettings(
            display_name="Joker Gaming",
            template_kind="path",
            template=(
                "https://launch.joker.example/games/{game_id}/{game_code}"
                "?token={session_token}&operator={operator_token}&lang={language}"
            ),
        ),
    }


class LaunchSettings(BaseModel):
    operator_token: str = "seamless-operator"
    language: str = "th"
    providers: dict[str, ProviderTemplateSettings] = Field(default_factory=_default_provider_templates)
    # provider code -> {game code -> upstream game id}; fallback path only
    game_id_overrides: dict[str, dict[str, str]] = Field(default_factory=dict)


class AgentSettings(BaseModel):
    id: str
    name: str = ""
    api_key: str = Field(..., min_length=8)
    secret: str = Field(..., min_length=8)


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Seamless Wallet"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    upstream: UpstreamSettings = UpstreamSettings()
    wallet: WalletSettings = WalletSettings()
    launch: LaunchSettings = LaunchSettings()
    agents: list[AgentSettings] = Field(default_factory=list)

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes


@lru_cache()
def get_settings() -> Settings:
    return Settings()
