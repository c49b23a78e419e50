import asyncio
import unittest
from decimal import Decimal

from seamless_wallet.modules.accounts import AccountNotFoundError
from seamless_wallet.modules.settlement import (
    InsufficientBalanceError,
    InvalidWagerError,
    SettlementService,
    WagerSettlement,
)
from seamless_wallet.modules.wallets import WalletService

from tests.support import LedgerTestCase


def wager(wager_id, bet, payout, username="demo-01-player"):
    return WagerSettlement(username=username, wager_id=wager_id, bet_amount=bet, payout_amount=payout)


class SettlementServiceTests(LedgerTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.settlement = SettlementService(self.store)

    async def test_losing_bet_drains_balance_to_zero(self):
        account = await self.create_account(balance="100.00")

        result = await self.settlement.settle(account, wager("w-1", "100", "0"))

        self.assertEqual(result.balance_before, Decimal("100.00"))
        self.assertEqual(result.balance_after, Decimal("0.00"))
        self.assertFalse(result.replayed)
        self.assertEqual(await self.balance_of(account.id), Decimal("0.00"))

    async def test_winning_bet_credits_net(self):
        account = await self.create_account(balance="100.00")

        result = await self.settlement.settle(account, wager("w-1", "10.50", "42.25"))

        self.assertEqual(result.balance_after, Decimal("131.75"))
        self.assertEqual(result.currency, "THB")

    async def test_loss_above_balance_is_rejected_without_writing(self):
        account = await self.create_account(balance="100.00")

        with self.assertRaises(InsufficientBalanceError) as ctx:
            await self.settlement.settle(account, wager("w-1", "150", "0"))

        self.assertEqual(ctx.exception.balance, Decimal("100.00"))
        self.assertEqual(ctx.exception.required, Decimal("150.00"))
        self.assertEqual(await self.balance_of(account.id), Decimal("100.00"))

    async def test_net_zero_is_a_no_op(self):
        account = await self.create_account(balance="100.00")

        result = await self.settlement.settle(account, wager("w-1", "25", "25"))

        self.assertEqual(result.balance_before, result.balance_after)
        self.assertEqual(result.balance_after, Decimal("100.00"))
        async with self.store.transaction(account.id) as tx:
            self.assertIsNone(await tx.find_receipt("w-1"))

    async def test_missing_amounts_count_as_zero(self):
        account = await self.create_account(balance="100.00")

        result = await self.settlement.settle(account, wager("w-1", None, "5"))

        self.assertEqual(result.balance_after, Decimal("105.00"))

    async def test_concurrent_losses_never_overdraw(self):
        account = await self.create_account(balance="100.00")

        outcomes = await asyncio.gather(
            self.settlement.settle(account, wager("w-1", "60", "0")),
            self.settlement.settle(account, wager("w-2", "60", "0")),
            return_exceptions=True,
        )

        accepted = [o for o in outcomes if not isinstance(o, BaseException)]
        rejected = [o for o in outcomes if isinstance(o, InsufficientBalanceError)]
        self.assertEqual(len(accepted), 1)
        self.assertEqual(len(rejected), 1)
        self.assertEqual(accepted[0].balance_after, Decimal("40.00"))
        self.assertEqual(await self.balance_of(account.id), Decimal("40.00"))

    async def test_final_balance_is_start_plus_accepted_nets(self):
        account = await self.create_account(balance="50.00")
        wagers = [
            wager(f"w-{i}", bet, payout)
            for i, (bet, payout) in enumerate(
                [("20", "0"), ("20", "35"), ("80", "0"), ("10", "0"), ("5", "12.5"), ("60", "0"), ("30", "0")]
            )
        ]

        outcomes = await asyncio.gather(
            *(self.settlement.settle(account, item) for item in wagers),
            return_exceptions=True,
        )

        accepted_net = sum(
            (item.net for item, outcome in zip(wagers, outcomes) if not isinstance(outcome, BaseException)),
            Decimal("0"),
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                self.assertIsInstance(outcome, InsufficientBalanceError)
        final = await self.balance_of(account.id)
        self.assertEqual(final, Decimal("50.00") + accepted_net)
        self.assertGreaterEqual(final, Decimal("0"))

    async def test_replayed_wager_is_applied_once(self):
        account = await self.create_account(balance="100.00")

        first = await self.settlement.settle(account, wager("w-1", "30", "0"))
        second = await self.settlement.settle(account, wager("w-1", "30", "0"))

        self.assertFalse(first.replayed)
        self.assertTrue(second.replayed)
        self.assertEqual(second.balance_before, Decimal("100.00"))
        self.assertEqual(second.balance_after, Decimal("70.00"))
        self.assertEqual(await self.balance_of(account.id), Decimal("70.00"))

    async def test_concurrent_replays_are_applied_once(self):
        account = await self.create_account(balance="100.00")

        results = await asyncio.gather(*(self.settlement.settle(account, wager("w-1", "0", "10")) for _ in range(5)))

        self.assertEqual(sum(1 for result in results if not result.replayed), 1)
        self.assertEqual(await self.balance_of(account.id), Decimal("110.00"))

    async def test_same_wager_id_on_other_account_is_independent(self):
        first = await self.create_account(username="demo-01-alice", balance="100.00")
        second = await self.create_account(username="demo-01-bob", balance="100.00")

        await self.settlement.settle(first, wager("w-1", "10", "0", first.username))
        result = await self.settlement.settle(second, wager("w-1", "10", "0", second.username))

        self.assertFalse(result.replayed)
        self.assertEqual(await self.balance_of(second.id), Decimal("90.00"))

    async def test_rejected_wager_can_be_retried_after_deposit(self):
        account = await self.create_account(balance="10.00")

        with self.assertRaises(InsufficientBalanceError):
            await self.settlement.settle(account, wager("w-1", "50", "0"))
        await WalletService(self.store).deposit(account.id, "40")
        result = await self.settlement.settle(account, wager("w-1", "50", "0"))

        self.assertFalse(result.replayed)
        self.assertEqual(result.balance_after, Decimal("0.00"))

    async def test_unknown_account_is_reported(self):
        account = await self.create_account()
        account.id = "missing"

        with self.assertRaises(AccountNotFoundError):
            await self.settlement.settle(account, wager("w-1", "10", "0"))


class WagerSettlementTests(unittest.TestCase):
    def test_negative_amount_is_invalid(self):
        with self.assertRaises(InvalidWagerError):
            wager("w-1", "-1", "0")

    def test_non_numeric_amount_is_invalid(self):
        with self.assertRaises(InvalidWagerError):
            wager("w-1", "ten", "0")

    def test_sub_cent_amount_is_invalid(self):
        with self.assertRaises(InvalidWagerError):
            wager("w-1", "0.004", "0")

    def test_oversized_amount_is_invalid(self):
        with self.assertRaises(InvalidWagerError):
            wager("w-1", "0", "1e20")

    def test_amounts_are_normalised_to_cents(self):
        item = wager("w-1", 1, "2.5")

        self.assertEqual(item.bet_amount, Decimal("1.00"))
        self.assertEqual(item.payout_amount, Decimal("2.50"))
        self.assertEqual(item.net, Decimal("1.50"))


if __name__ == "__main__":
    unittest.main()
