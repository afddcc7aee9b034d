"""
Sunswap Constants

This module consolidates the environment configuration and the protocol
constants used throughout the codebase. Constants are organized by
category for easy reference and maintenance.
"""
import ast

from dotenv import dotenv_values
from eth_utils import keccak

# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================
# Load environment variables once at module import
_config = dotenv_values(".env")

PROTOCOL_DEFAULTS = {
    'SUNSWAP_CHAIN_ID':                '1',
    'SUNSWAP_PROTOCOL_FEE_DIVISOR':    '5',
}

LOGGER_DEFAULTS = {
    'LOG_LEVEL':                       'INFO',
    'LOG_FORMAT':                      '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    'LOG_DATE_FORMAT':                 '%Y-%m-%dT%H:%M:%S',
    'LOG_CONSOLE_HIGHLIGHTING':        'True',
    'LOG_FILE_OUTPUT':                 'False',
}

LOG_MAX_FILE_SIZE = 10 * 1024 * 1024 # 10MB
LOG_BACKUP_COUNT = 5


# =============================================================================
# CONFIGURATION WRAPPERS
# =============================================================================
class ConfigString(str):
    """
    String subclass that stores a default value.
    """
    def __new__(cls, value, default):
        obj = str.__new__(cls, value)
        obj._default = default
        return obj

    def default(self):
        return self._default

class ConfigBool(int):
    """
    Int subclass acting as a boolean that stores a default value.
    """
    def __new__(cls, value, default):
        obj = int.__new__(cls, bool(value))
        obj._default = default
        return obj

    def default(self):
        return self._default

    def __repr__(self):
        return str(bool(self))

    def __str__(self):
        return str(bool(self))

    def __eq__(self, other):
        return bool(self) == other

    __hash__ = int.__hash__


# =============================================================================
# DYNAMIC CONFIGURATION LOADING
# =============================================================================
DEFAULTS = PROTOCOL_DEFAULTS | LOGGER_DEFAULTS
namespace = globals()

def parse_bool(v):
    """
    Convert "True"/"False" (any casing, with surrounding whitespace) into bool.
    Avoids exceptions by only calling ast.literal_eval for known literals.
    """
    if not isinstance(v, str):
        return v
    s = v.strip()
    if not s:
        return v
    if s.casefold() in {"true", "false"}:
        return ast.literal_eval(s.title())
    return v

for key, default_raw in DEFAULTS.items():
    # dotenv_values returns strings or None. None is treated as missing.
    raw = _config.get(key)
    value_raw = default_raw if raw is None else raw

    value = parse_bool(value_raw)
    default_val = parse_bool(default_raw)

    if isinstance(value, bool):
        namespace[key] = ConfigBool(value, default_val)
    else:
        namespace[key] = ConfigString(value_raw, default_val)

CHAIN_ID = int(namespace['SUNSWAP_CHAIN_ID'])
PROTOCOL_FEE_DIVISOR = int(namespace['SUNSWAP_PROTOCOL_FEE_DIVISOR'])


# WARNING: THE VALUES BELOW ARE PART OF THE PAIR'S PRICING AND ADDRESSING RULES.
# CHANGING THEM CHANGES EVERY PAIR ADDRESS AND EVERY SWAP QUOTE.

# ==================================================================================
# FIXED-WIDTH INTEGER LIMITS
# ==================================================================================
UINT32_MODULUS = 2**32
UINT112_MAX = 2**112 - 1
UINT224_MODULUS = 2**224
UINT256_MAX = 2**256 - 1
Q112 = 2**112


# ==================================================================================
# PAIR PARAMETERS
# ==================================================================================
MINIMUM_LIQUIDITY = 10**3  # shares locked at the zero address on first mint
SWAP_FEE_NUMERATOR = 3     # 0.3% of input, scaled by SWAP_FEE_DENOMINATOR
SWAP_FEE_DENOMINATOR = 1000


# ==================================================================================
# SHARE TOKEN (EIP-20 / EIP-2612)
# ==================================================================================
LEDGER_NAME = 'Sunswap V2'
LEDGER_SYMBOL = 'UNI-V2'
LEDGER_DECIMALS = 18
LEDGER_VERSION = '1'

EIP712_DOMAIN_TYPEHASH = keccak(
    text='EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)'
)
PERMIT_TYPEHASH = keccak(
    text='Permit(address owner,address spender,uint256 value,uint256 nonce,uint256 deadline)'
)


# ==================================================================================
# DEPLOYMENT
# ==================================================================================
ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'

# Code identity of the pair; its hash is the CREATE2 init-code hash
PAIR_CODE = b'sunswap.exchange.pair.SunswapV2Pair/1'
PAIR_INIT_CODE_HASH = keccak(PAIR_CODE)
