"""
Test suite for the Sunswap V2 factory

Covers:
  - Initial fee configuration
  - Pair creation at the CREATE2 address, in both token orders
  - Duplicate / identical / zero-address rejection
  - Fee setter permissions
"""

import pytest
from eth_utils import keccak, to_canonical_address, to_checksum_address

from sunswap.constants import PAIR_CODE, ZERO_ADDRESS
from sunswap.exceptions import (
    Forbidden,
    ForbiddenInit,
    IdenticalAddresses,
    PairExists,
    ValidationError,
    ZeroAddress,
)
from sunswap.exchange import SunswapV2Factory, SunswapV2Pair

from utilities import BANKER, FEE_TO, FEE_TO_SETTER, assert_event

TEST_ADDRESSES = [
    "0x1000000000000000000000000000000000000000",
    "0x2000000000000000000000000000000000000000",
]


def get_create2_address(factory_address, tokens, bytecode):
    token0, token1 = sorted(tokens, key=lambda t: int(t, 16))
    salt = keccak(to_canonical_address(token0) + to_canonical_address(token1))
    data = b"\xff" + to_canonical_address(factory_address) + salt + keccak(bytecode)
    return to_checksum_address(keccak(data)[12:])


class TestConstructor:

    def test_fee_to_fee_to_setter_all_pairs_length(self, factory):
        assert factory.fee_to == ZERO_ADDRESS
        assert factory.fee_to_setter == BANKER
        assert factory.all_pairs_length() == 0

    def test_protocol_fee_divisor_default(self, factory):
        assert factory.protocol_fee_divisor == 5

    def test_nonpositive_fee_divisor_rejected(self, chain):
        with pytest.raises(ValidationError):
            SunswapV2Factory(chain, BANKER, protocol_fee_divisor=0)

    def test_address_from_deployer_nonce(self, chain):
        first = SunswapV2Factory(chain, BANKER, deployer=FEE_TO_SETTER)
        second = SunswapV2Factory(chain, BANKER, deployer=FEE_TO_SETTER)
        assert first.address != second.address
        assert chain.nonce_of(FEE_TO_SETTER) == 2


class TestCreatePair:

    def _create_pair(self, chain, factory, tokens):
        create2_address = get_create2_address(factory.address, tokens, PAIR_CODE)

        start = len(chain.logs)
        assert factory.create_pair(*tokens) == create2_address
        logs = chain.logs_since(start)
        assert len(logs) == 1
        assert_event(logs[0], factory, "PairCreated",
                     [TEST_ADDRESSES[0], TEST_ADDRESSES[1], create2_address, 1])

        with pytest.raises(PairExists, match="SunswapV2: PAIR_EXISTS"):
            factory.create_pair(*tokens)
        with pytest.raises(PairExists, match="SunswapV2: PAIR_EXISTS"):
            factory.create_pair(*reversed(tokens))

        assert factory.get_pair(*tokens) == create2_address
        assert factory.get_pair(*reversed(tokens)) == create2_address
        assert factory.all_pairs(0) == create2_address
        assert factory.all_pairs_length() == 1

        pair = chain.get_contract(create2_address)
        assert isinstance(pair, SunswapV2Pair)
        assert pair.factory == factory.address
        assert pair.token0 == TEST_ADDRESSES[0]
        assert pair.token1 == TEST_ADDRESSES[1]

    def test_create_pair(self, chain, factory):
        self._create_pair(chain, factory, list(TEST_ADDRESSES))

    def test_create_pair_reverse(self, chain, factory):
        self._create_pair(chain, factory, list(reversed(TEST_ADDRESSES)))

    def test_identical_addresses(self, factory):
        with pytest.raises(IdenticalAddresses, match="SunswapV2: IDENTICAL_ADDRESSES"):
            factory.create_pair(TEST_ADDRESSES[0], TEST_ADDRESSES[0])

    def test_zero_address(self, factory):
        with pytest.raises(ZeroAddress, match="SunswapV2: ZERO_ADDRESS"):
            factory.create_pair(ZERO_ADDRESS, TEST_ADDRESSES[0])
        with pytest.raises(ZeroAddress):
            factory.create_pair(TEST_ADDRESSES[0], ZERO_ADDRESS)
        assert factory.all_pairs_length() == 0

    def test_get_pair_missing(self, factory):
        assert factory.get_pair(*TEST_ADDRESSES) == ZERO_ADDRESS
        assert factory.get_pair_contract(*TEST_ADDRESSES) is None

    def test_all_pairs_in_creation_order(self, factory):
        third = "0x3000000000000000000000000000000000000000"
        first = factory.create_pair(*TEST_ADDRESSES)
        second = factory.create_pair(third, TEST_ADDRESSES[0])
        assert [factory.all_pairs(i) for i in range(factory.all_pairs_length())] == [first, second]
        with pytest.raises(ValidationError):
            factory.all_pairs(2)

    def test_pair_cannot_be_initialized_again(self, chain, factory):
        pair = chain.get_contract(factory.create_pair(*TEST_ADDRESSES))
        with pytest.raises(ForbiddenInit, match="SunswapV2: FORBIDDEN"):
            pair.initialize(factory.address, *TEST_ADDRESSES)
        with pytest.raises(ForbiddenInit):
            pair.initialize(BANKER, *TEST_ADDRESSES)

    def test_pair_address_depends_on_factory(self, chain, factory):
        other = SunswapV2Factory(chain, BANKER)
        assert factory.create_pair(*TEST_ADDRESSES) != other.create_pair(*TEST_ADDRESSES)


class TestSetFeeTo:

    def test_forbidden(self, factory):
        with pytest.raises(Forbidden, match="SunswapV2: FORBIDDEN"):
            factory.set_fee_to(FEE_TO, FEE_TO)
        assert factory.fee_to == ZERO_ADDRESS

    def test_success(self, factory):
        factory.set_fee_to(BANKER, FEE_TO)
        assert factory.fee_to == FEE_TO


class TestSetFeeToSetter:

    def test_forbidden(self, factory):
        with pytest.raises(Forbidden, match="SunswapV2: FORBIDDEN"):
            factory.set_fee_to_setter(FEE_TO_SETTER, FEE_TO_SETTER)

    def test_success(self, factory):
        factory.set_fee_to_setter(BANKER, FEE_TO_SETTER)
        assert factory.fee_to_setter == FEE_TO_SETTER
        with pytest.raises(Forbidden, match="SunswapV2: FORBIDDEN"):
            factory.set_fee_to_setter(BANKER, BANKER)
        factory.set_fee_to(FEE_TO_SETTER, FEE_TO)
        assert factory.fee_to == FEE_TO
