"""
Tests for fee reservation and the 1/3 : 2/3 vault split.
"""
import pytest

from distributor.errors import InsufficientFunds
from distributor.models import GasEstimate
from distributor.splitter import compute_distribution, fee_reserve


class TestFeeReserve:
    """Tests for the transfer fee reserve."""

    def test_reserve_covers_two_transfers(self):
        assert fee_reserve(gas_price=10, gas_limit=21000) == 420000

    def test_matches_gas_estimate(self):
        gas = GasEstimate(gas_price=7, gas_limit=21000)
        assert gas.fee_reserve == fee_reserve(7, 21000)

    def test_negative_inputs_rejected(self):
        with pytest.raises(ValueError):
            fee_reserve(gas_price=-1, gas_limit=21000)


class TestComputeDistribution:
    """Tests for compute_distribution."""

    def test_reference_values(self):
        """900000 wei at 10 wei gas price leaves 480000 to split."""
        result = compute_distribution(900000, gas_price=10, gas_limit=21000)

        assert result.net_balance == 480000
        assert result.primary_share == 160000
        assert result.secondary_share == 320000
        assert result.undistributed == 0

    @pytest.mark.parametrize(
        "balance,gas_price,gas_limit",
        [
            (420001, 10, 21000),
            (420002, 10, 21000),
            (1_000_000_000_000_000_007, 3_000_000_000, 21000),
            (10, 0, 21000),
            (5, 1, 0),
        ],
    )
    def test_shares_fit_in_net_balance(self, balance, gas_price, gas_limit):
        result = compute_distribution(balance, gas_price, gas_limit)
        net = balance - gas_limit * 2 * gas_price

        assert result.net_balance == net
        assert result.secondary_share == 2 * result.primary_share
        assert result.primary_share + result.secondary_share <= net
        assert result.primary_share == net // 3

    def test_remainder_stays_in_vault(self):
        """net balance of 5 splits 1 / 2 and leaves 2 wei behind."""
        result = compute_distribution(420005, gas_price=10, gas_limit=21000)

        assert result.primary_share == 1
        assert result.secondary_share == 2
        assert result.undistributed == 2

    def test_net_balance_below_three_gives_zero_shares(self):
        result = compute_distribution(420002, gas_price=10, gas_limit=21000)

        assert result.net_balance == 2
        assert result.primary_share == 0
        assert result.secondary_share == 0

    @pytest.mark.parametrize("balance", [0, 1, 419999, 420000])
    def test_insufficient_funds(self, balance):
        """Zero net balance is insufficient as well as negative."""
        with pytest.raises(InsufficientFunds, match="Not enough balance"):
            compute_distribution(balance, gas_price=10, gas_limit=21000)
