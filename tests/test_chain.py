"""
Test suite for the execution environment and numeric helpers
"""

import pytest

from sunswap import uint
from sunswap.chain import Chain, Contract, atomic
from sunswap.constants import Q112, UINT112_MAX, UINT256_MAX
from sunswap.exceptions import DeploymentError, MathError, ValidationError

from utilities import BANKER, START_TIME


class Counter(Contract):

    def __init__(self, chain, address):
        super().__init__(chain, address)
        self.value = 0
        self.history = []

    @atomic
    def bump(self, fail: bool = False) -> int:
        self.value += 1
        self.history.append(self.value)
        self.chain.emit(("Bumped", self.value))
        if fail:
            raise ValidationError("bump failed")
        return self.value

    @atomic
    def bump_twice_tolerating_failure(self) -> None:
        self.bump()
        try:
            self.bump(fail=True)
        except ValidationError:
            pass


class TestBlocks:

    def test_mine_defaults_to_next_second(self):
        chain = Chain(timestamp=START_TIME)
        assert chain.mine() == 2
        assert chain.timestamp == START_TIME + 1

    def test_mine_rejects_time_travel(self):
        chain = Chain(timestamp=START_TIME)
        with pytest.raises(ValidationError):
            chain.mine(START_TIME - 1)

    def test_default_chain_id(self):
        assert Chain().chain_id == 1


class TestRegistry:

    def test_create_address_bumps_nonce(self, chain):
        first = chain.create_address(BANKER)
        second = chain.create_address(BANKER)
        assert first != second
        assert chain.nonce_of(BANKER) == 2

    def test_register_and_lookup(self, chain):
        counter = Counter(chain, chain.create_address(BANKER))
        assert chain.get_contract(counter.address.lower()) is counter
        assert chain.is_contract(counter.address)
        assert not chain.is_contract(BANKER)
        assert chain.get_contract(BANKER) is None

    def test_address_collision(self, chain):
        address = chain.create_address(BANKER)
        Counter(chain, address)
        with pytest.raises(DeploymentError):
            Counter(chain, address)


class TestTransactions:

    def test_failed_call_rolls_back(self, chain):
        counter = Counter(chain, chain.create_address(BANKER))
        counter.bump()
        with pytest.raises(ValidationError):
            counter.bump(fail=True)
        assert counter.value == 1
        assert counter.history == [1]
        assert chain.logs == [("Bumped", 1)]

    def test_nested_failure_can_be_caught(self, chain):
        counter = Counter(chain, chain.create_address(BANKER))
        counter.bump_twice_tolerating_failure()
        assert counter.value == 1
        assert chain.logs == [("Bumped", 1)]

    def test_deployment_rolled_back(self, chain):
        with pytest.raises(ValidationError):
            with chain.transaction():
                Counter(chain, chain.create_address(BANKER))
                raise ValidationError("abort")
        assert chain.nonce_of(BANKER) == 0
        assert chain.logs == []
        assert len(chain._contracts) == 0

    def test_references_between_contracts_survive_revert(self, chain):
        a = Counter(chain, chain.create_address(BANKER))
        b = Counter(chain, chain.create_address(BANKER))
        a.peer = b
        with pytest.raises(ValidationError):
            with chain.transaction():
                a.value = 99
                raise ValidationError("abort")
        assert a.peer is b
        assert a.value == 0

    def test_snapshots_released(self, chain):
        counter = Counter(chain, chain.create_address(BANKER))
        counter.bump()
        counter.bump_twice_tolerating_failure()
        assert chain._snapshots == []

    def test_revert_unknown_snapshot(self, chain):
        with pytest.raises(ValueError):
            chain.revert(3)


class TestUint:

    def test_checked_arithmetic(self):
        assert uint.add(1, 2) == 3
        with pytest.raises(MathError, match="ds-math-add-overflow"):
            uint.add(UINT256_MAX, 1)
        with pytest.raises(MathError, match="ds-math-sub-underflow"):
            uint.sub(1, 2)
        with pytest.raises(MathError, match="ds-math-mul-overflow"):
            uint.mul(2**128, 2**128)

    def test_sqrt(self):
        assert uint.sqrt(0) == 0
        assert uint.sqrt(4 * 10**36) == 2 * 10**18
        assert uint.sqrt(8) == 2

    def test_require_uint(self):
        assert uint.require_uint(5) == 5
        for bad in (-1, UINT256_MAX + 1, 1.5, True):
            with pytest.raises(MathError):
                uint.require_uint(bad)

    def test_uq112x112(self):
        assert uint.encode(3) == 3 * Q112
        assert uint.uqdiv(uint.encode(1), 4) == Q112 // 4
        assert str(uint.decode(uint.uqdiv(uint.encode(1), 4))) == "0.25"
        with pytest.raises(MathError):
            uint.encode(UINT112_MAX + 1)
        with pytest.raises(MathError):
            uint.uqdiv(Q112, 0)
