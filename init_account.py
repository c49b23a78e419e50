"""
Seed a demo player for local testing.
"""
import asyncio

from seamless_wallet.core.container import get_container
from seamless_wallet.infrastructure.database import init_db
from seamless_wallet.modules.accounts import AccountCreateInput

DEMO_USERNAME = "demo-01-player"
DEMO_PASSWORD = "pass123"


async def create_default_account():
    """Create the demo player unless it already exists."""
    await init_db()
    container = get_container()
    try:
        existing = await container.accounts.get_by_username(DEMO_USERNAME)
        if existing:
            print("Demo account already exists")
            return

        account = await container.accounts.register(
            AccountCreateInput(username=DEMO_USERNAME, password=DEMO_PASSWORD)
        )
        print(f"Demo account created: {account.username} / {DEMO_PASSWORD} ({account.balance} {account.currency})")
    finally:
        await container.aclose()


if __name__ == "__main__":
    asyncio.run(create_default_account())
