import asyncio
import unittest
from dataclasses import replace
from decimal import Decimal

from seamless_wallet.modules.accounts import AccountAlreadyExistsError, AccountNotFoundError, WagerReceipt

from tests.support import LedgerTestCase


class LedgerStoreTests(LedgerTestCase):
    async def test_create_account_stores_two_place_balance(self):
        account = await self.create_account(balance="1000")

        loaded = await self.store.get_by_username("demo-01-player")
        self.assertIsNotNone(loaded)
        self.assertEqual(loaded.id, account.id)
        self.assertEqual(loaded.balance, Decimal("1000.00"))
        self.assertEqual(loaded.currency, "THB")
        self.assertIsNone(loaded.session_token)

    async def test_duplicate_username_is_rejected(self):
        await self.create_account()
        with self.assertRaises(AccountAlreadyExistsError):
            await self.create_account()

    async def test_update_applies_mutation(self):
        account = await self.create_account(balance="100.00")

        updated = await self.store.update(account.id, lambda a: replace(a, balance=a.balance + Decimal("25.50")))

        self.assertEqual(updated.balance, Decimal("125.50"))
        self.assertEqual(await self.balance_of(account.id), Decimal("125.50"))

    async def test_failed_mutation_leaves_record_untouched(self):
        account = await self.create_account(balance="100.00")

        def _boom(current):
            raise RuntimeError("abort")

        with self.assertRaises(RuntimeError):
            await self.store.update(account.id, _boom)
        self.assertEqual(await self.balance_of(account.id), Decimal("100.00"))

    async def test_negative_balance_is_never_written(self):
        account = await self.create_account(balance="10.00")

        with self.assertRaises(ValueError):
            await self.store.update(account.id, lambda a: replace(a, balance=Decimal("-0.01")))
        self.assertEqual(await self.balance_of(account.id), Decimal("10.00"))

    async def test_unknown_account_raises(self):
        with self.assertRaises(AccountNotFoundError):
            await self.store.set_session_token("missing", "token")

    async def test_set_session_token_overwrites(self):
        account = await self.create_account(token="first")
        await self.store.set_session_token(account.id, "second")

        loaded = await self.store.get_by_id(account.id)
        self.assertEqual(loaded.session_token, "second")

    async def test_concurrent_updates_do_not_lose_deltas(self):
        account = await self.create_account(balance="0.00")

        async def _add_one():
            await self.store.update(account.id, lambda a: replace(a, balance=a.balance + 1))

        await asyncio.gather(*(_add_one() for _ in range(20)))

        self.assertEqual(await self.balance_of(account.id), Decimal("20.00"))

    async def test_receipts_are_scoped_to_the_transaction_account(self):
        first = await self.create_account(username="player-a")
        second = await self.create_account(username="player-b")

        async with self.store.transaction(first.id) as tx:
            tx.add_receipt(
                WagerReceipt(
                    account_id=first.id,
                    wager_id="w-1",
                    balance_before=Decimal("100.00"),
                    balance_after=Decimal("90.00"),
                )
            )

        async with self.store.transaction(first.id) as tx:
            receipt = await tx.find_receipt("w-1")
        async with self.store.transaction(second.id) as tx:
            other = await tx.find_receipt("w-1")

        self.assertEqual(receipt.balance_after, Decimal("90.00"))
        self.assertIsNone(other)

    async def test_each_account_gets_its_own_lock(self):
        first = await self.create_account(username="player-a")
        second = await self.create_account(username="player-b")

        locks = self.store.locks
        self.assertIs(locks.for_account(first.id), locks.for_account(first.id))
        self.assertIsNot(locks.for_account(first.id), locks.for_account(second.id))

    async def test_idle_locks_are_released(self):
        account = await self.create_account()
        locks = self.store.locks

        held = locks.for_account(account.id)
        self.assertEqual(len(locks), 1)
        self.assertIs(locks.for_account(account.id), held)
        del held

        await self.store.update(account.id, lambda current: current)
        self.assertEqual(len(locks), 0)


if __name__ == "__main__":
    unittest.main()
