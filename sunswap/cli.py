#!/usr/bin/env python3
"""
Sunswap CLI

Off-line helpers for integrators: pair addresses and swap quotes,
computed exactly as the pair and factory compute them.

Usage:
    sunswap init-code-hash
    sunswap pair-address <factory> <token_a> <token_b>
    sunswap amount-out <amount_in> <reserve_in> <reserve_out>
    sunswap amount-in <amount_out> <reserve_in> <reserve_out>
"""

import click

from . import __version__
from .constants import PAIR_INIT_CODE_HASH
from .exceptions import SunswapError
from .exchange import library


@click.group()
@click.version_option(version=__version__, prog_name="sunswap")
def main():
    """Sunswap V2 command line interface

    Compute pair addresses and swap quotes without a node.
    """
    pass


@main.command("init-code-hash")
def init_code_hash_cmd():
    """Print the pair init-code hash used for CREATE2 addresses."""
    click.echo("0x" + PAIR_INIT_CODE_HASH.hex())


@main.command("pair-address")
@click.argument("factory")
@click.argument("token_a")
@click.argument("token_b")
def pair_address_cmd(factory: str, token_a: str, token_b: str):
    """Print the address of the pair for TOKEN_A and TOKEN_B.

    Token order does not matter; FACTORY is the deployed factory address.
    """
    try:
        token0, token1 = library.sort_tokens(token_a, token_b)
        address = library.pair_for(factory, token0, token1)
    except SunswapError as e:
        raise click.ClickException(e.message)
    click.echo(address)


@main.command("amount-out")
@click.argument("amount_in", type=int)
@click.argument("reserve_in", type=int)
@click.argument("reserve_out", type=int)
def amount_out_cmd(amount_in: int, reserve_in: int, reserve_out: int):
    """Print the maximum output for an exact AMOUNT_IN."""
    try:
        click.echo(library.get_amount_out(amount_in, reserve_in, reserve_out))
    except SunswapError as e:
        raise click.ClickException(e.message)


@main.command("amount-in")
@click.argument("amount_out", type=int)
@click.argument("reserve_in", type=int)
@click.argument("reserve_out", type=int)
def amount_in_cmd(amount_out: int, reserve_in: int, reserve_out: int):
    """Print the minimum input needed for an exact AMOUNT_OUT."""
    try:
        click.echo(library.get_amount_in(amount_out, reserve_in, reserve_out))
    except SunswapError as e:
        raise click.ClickException(e.message)


if __name__ == "__main__":
    main()
