from fastapi import APIRouter

from seamless_wallet.interfaces.http.routers import auth, diagnostics, partner, player


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(player.router, prefix="/player", tags=["player"])
    router.include_router(diagnostics.router, prefix="/diagnostics", tags=["diagnostics"])
    router.include_router(partner.router, tags=["partner"])
    return router


__all__ = [
    "create_api_router",
]
