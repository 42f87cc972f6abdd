"""Tests for Pool.mint and Pool.burn."""

import pytest

from pairpool.constants import LOCK_ADDRESS, MINIMUM_LIQUIDITY
from pairpool.errors import (
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    TransferFailed,
)
from pairpool.events import Deposit, Sync, Withdraw
from tests.helpers import (
    ALICE,
    BOB,
    E18,
    SEED_NATIVE,
    SEED_ROOT,
    SEED_TOKEN,
    deposit,
    make_deployment,
)


class TestFirstDeposit:
    """First deposit mints isqrt(a * b) minus the locked minimum."""

    def test_small_units(self, deployment):
        """30000 / 120000 base units mint 59000 to the depositor."""
        shares = deposit(deployment, ALICE, 30_000, 120_000)
        pool = deployment.pool
        assert shares == 59_000
        assert pool.share_balance_of(ALICE) == 59_000
        assert pool.circulating_supply == 59_000
        assert pool.total_supply == 60_000
        assert pool.share_balance_of(LOCK_ADDRESS) == MINIMUM_LIQUIDITY

    def test_reference_pool(self, deployment):
        shares = deposit(deployment, ALICE, SEED_NATIVE, SEED_TOKEN)
        assert shares == SEED_ROOT - MINIMUM_LIQUIDITY
        assert deployment.pool.get_reserves().native == SEED_NATIVE
        assert deployment.pool.get_reserves().token == SEED_TOKEN

    def test_too_small_first_deposit(self, deployment):
        """isqrt(1000 * 1000) does not exceed the minimum."""
        with pytest.raises(InsufficientLiquidityMinted):
            deposit(deployment, ALICE, 1_000, 1_000)
        assert deployment.pool.total_supply == 0
        assert deployment.pool.reserve_native == 0

    def test_one_sided_first_deposit(self, deployment):
        with pytest.raises(InsufficientLiquidityMinted):
            deposit(deployment, ALICE, 10**6, 0)

    def test_zero_minimum_liquidity(self):
        """A pool configured without a lock gives the depositor everything."""
        deployment = make_deployment(minimum_liquidity=0)
        assert deposit(deployment, ALICE, 30_000, 120_000) == 60_000
        assert deployment.pool.share_balance_of(LOCK_ADDRESS) == 0

    def test_emits_deposit_and_sync(self, deployment):
        deposit(deployment, ALICE, 30_000, 120_000)
        events = deployment.events
        assert events.last(Deposit) == Deposit(
            sender=ALICE, recipient=ALICE, amount_native=30_000, amount_token=120_000, shares=59_000
        )
        assert events.last(Sync) == Sync(reserve_native=30_000, reserve_token=120_000)


class TestLaterDeposit:
    """Later deposits mint min(a * T / Ra, b * T / Rb)."""

    def test_proportional_deposit(self, seeded):
        shares = deposit(seeded, BOB, 3_000 * E18, 12_000 * E18)
        assert shares == 6_000 * E18

    def test_unbalanced_deposit_uses_smaller_side(self, seeded):
        """Excess on one side is donated to existing holders."""
        shares = deposit(seeded, BOB, 3_000 * E18, 24_000 * E18)
        assert shares == 6_000 * E18
        assert seeded.pool.reserve_token == 144_000 * E18

    def test_nothing_deposited(self, seeded):
        with pytest.raises(InsufficientLiquidityMinted):
            seeded.pool.mint(BOB)

    def test_taxed_deposit_counts_what_arrived(self, taxed):
        """Shares follow the token amount that actually reached the pool."""
        shares = deposit(taxed, BOB, 3_000 * E18, 12_000 * E18)
        # 11,760 token arrive; that side binds
        assert shares == 5_880 * E18
        assert taxed.pool.reserve_token == SEED_TOKEN + 11_760 * E18

    def test_grossed_up_deposit_credits_untaxed_shares(self, taxed):
        """Sending gross(100) records exactly 100 and mints as if untaxed."""
        shares = deposit(taxed, BOB, 25 * E18, 100 * E18 * 100 // 98)
        assert taxed.pool.reserve_token - SEED_TOKEN == 100 * E18
        assert taxed.pool.reserve_native - SEED_NATIVE == 25 * E18
        assert shares == 50 * E18
        assert taxed.events.last(Deposit).amount_token == 100 * E18


class TestBurn:
    """Burn pays floor(shares * reserve / total) of each asset."""

    def _send_shares(self, deployment, owner, amount):
        deployment.pool.transfer_shares(owner, deployment.pool.address, amount)

    def test_proportional_withdrawal(self, seeded):
        self._send_shares(seeded, ALICE, 6_000 * E18)
        result = seeded.pool.burn(ALICE)
        assert result.amount_native == 3_000 * E18
        assert result.amount_token == 12_000 * E18
        assert result.token_received == 12_000 * E18
        assert seeded.pool.total_supply == SEED_ROOT - 6_000 * E18

    def test_rounds_down(self, deployment):
        """Payouts are floored against the holders' favour."""
        deposit(deployment, ALICE, 30_000, 120_001)
        self._send_shares(deployment, ALICE, 7)
        result = deployment.pool.burn(BOB)
        total = 60_000
        assert result.amount_native == 7 * 30_000 // total
        assert result.amount_token == 7 * 120_001 // total

    def test_taxed_payout(self, taxed):
        """With the tax on the recipient gets 98% of the token leg."""
        self._send_shares(taxed, ALICE, 50_000 * E18)
        result = taxed.pool.burn(ALICE)
        assert result.amount_token == 100_000 * E18
        assert result.token_received == 98_000 * E18

    def test_donations_are_shared(self, deployment):
        """Unsynced balances are paid out pro rata too."""
        deposit(deployment, ALICE, 30_000, 120_000)
        deployment.native.transfer(BOB, deployment.pool.address, 6_000)
        self._send_shares(deployment, ALICE, 30_000)
        result = deployment.pool.burn(ALICE)
        assert result.amount_native == 18_000
        assert deployment.pool.reserve_native == 18_000

    def test_quote_withdraw_matches_burn(self, seeded):
        """The withdraw quote is what burn then pays."""
        quoted = seeded.pool.quote_withdraw(6_000 * E18)
        assert quoted == (3_000 * E18, 12_000 * E18)
        self._send_shares(seeded, ALICE, 6_000 * E18)
        result = seeded.pool.burn(ALICE)
        assert (result.amount_native, result.amount_token) == quoted

    def test_quote_withdraw_includes_donations(self, deployment):
        """Quotes price against balances, like burn."""
        deposit(deployment, ALICE, 30_000, 120_000)
        deployment.native.transfer(BOB, deployment.pool.address, 6_000)
        assert deployment.pool.quote_withdraw(30_000) == (18_000, 60_000)
        self._send_shares(deployment, ALICE, 30_000)
        assert deployment.pool.burn(ALICE).amount_native == 18_000

    def test_quote_withdraw_empty(self, deployment):
        assert deployment.pool.quote_withdraw(10) == (0, 0)
        assert deployment.pool.quote_withdraw(0) == (0, 0)

    def test_no_shares_sent(self, seeded):
        with pytest.raises(InsufficientLiquidityBurned):
            seeded.pool.burn(ALICE)

    def test_dust_burn_rejected(self, deployment):
        """Shares worth zero of either asset cannot be burned."""
        deposit(deployment, ALICE, 1_000_000, 4_000)
        self._send_shares(deployment, ALICE, 1)
        with pytest.raises(InsufficientLiquidityBurned):
            deployment.pool.burn(ALICE)

    def test_locked_shares_unmovable(self, seeded):
        with pytest.raises(TransferFailed):
            seeded.pool.transfer_shares(LOCK_ADDRESS, BOB, 1)

    def test_rejected_native_payout_rolls_back(self, seeded):
        """A recipient refusing native aborts the burn completely."""
        self._send_shares(seeded, ALICE, 6_000 * E18)
        seeded.native.reject_payments(BOB)
        bob_token = seeded.token.balance_of(BOB)
        events_before = len(seeded.events)
        with pytest.raises(TransferFailed):
            seeded.pool.burn(BOB)
        assert seeded.pool.share_balance_of(seeded.pool.address) == 6_000 * E18
        assert seeded.pool.reserve_native == SEED_NATIVE
        assert seeded.token.balance_of(BOB) == bob_token
        assert len(seeded.events) == events_before

    def test_emits_withdraw(self, seeded):
        self._send_shares(seeded, ALICE, 6_000 * E18)
        seeded.pool.burn(BOB, sender=ALICE)
        assert seeded.events.last(Withdraw) == Withdraw(
            sender=ALICE,
            recipient=BOB,
            amount_native=3_000 * E18,
            amount_token=12_000 * E18,
            shares=6_000 * E18,
        )
