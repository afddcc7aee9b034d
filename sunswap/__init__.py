"""
Sunswap Package

Core imports are lazily loaded so that importing a submodule does not
pull in the whole exchange. For direct module access, import from
submodules:

    from sunswap.chain import Chain
    from sunswap.exchange import SunswapV2Factory, SunswapV2Pair
    from sunswap.tokens import ERC20
"""

__version__ = "1.0.0"


# Lazy imports to avoid loading everything at package import
def __getattr__(name):
    """Lazy module loading."""
    if name == 'Chain':
        from .chain import Chain
        return Chain
    elif name == 'SunswapV2Factory':
        from .exchange import SunswapV2Factory
        return SunswapV2Factory
    elif name == 'SunswapV2Pair':
        from .exchange import SunswapV2Pair
        return SunswapV2Pair
    elif name == 'SunswapError':
        from .exceptions import SunswapError
        return SunswapError
    raise AttributeError(f"module 'sunswap' has no attribute {name!r}")

__all__ = ['Chain', 'SunswapV2Factory', 'SunswapV2Pair', 'SunswapError']
