
#
# Python-yieldfarming -- Ethereum Yield Farming Contract Model and Deployment
#
# Copyright (c) 2022, Dominion Research & Development Corp.
#
# Python-yieldfarming is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  It is also available under alternative (eg. Commercial) licenses, at
# your option.  See the LICENSE file at the top of the source tree.
#
# Python-yieldfarming is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
#


from __future__          import annotations

import click
import json
import logging
import os

from ..			import defaults
from ..contracts	import Revert, mocked_deploy
from ..ethereum		import deploy as ethereum_deploy, w3_provider
from ..records		import RecordList
from ..util		import commas, log_cfg, log_level, parse_shares

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Provide basic CLI access to the yieldfarming model and deployment.

Output generally defaults to JSON.  Use -v for more details, and --no-json to emit standard text output instead.
"""

log				= logging.getLogger( __package__ )


@click.group()
@click.option('-v', '--verbose', count=True)
@click.option('-q', '--quiet', count=True)
@click.option( '--json/--no-json', default=True, help="Output JSON (the default)")
def cli( verbose, quiet, json ):
    cli.verbosity		= verbose - quiet
    log_cfg['level']		= log_level( cli.verbosity )
    logging.basicConfig( **log_cfg )
    if verbose or quiet:
        logging.getLogger().setLevel( log_cfg['level'] )
    cli.json			= json
cli.verbosity			= 0  # noqa: E305
cli.json			= False


@click.command()
@click.option( "--multiplier", type=int, default=defaults.MOCKED_MULTIPLIER, help="The reward multiplier (default: 1E12)" )
@click.option( "--deposit", "deposits", type=int, multiple=True, help="Deposit this amount (default: the whole initial balance); may be repeated" )
def simulate( multiplier, deposits ):
    """Deploy the mocked YieldFarming scenario, make the deposits one day after deployment, and release
    each deposit's reward after it unlocks."""
    deployed			= mocked_deploy( multiplier )
    yf				= deployed.yield_farming
    deposits			= deposits or ( deployed.constants.initial_balance, )
    deployed.accepted_token.increaseAllowance( yf.address, sum( deposits ))
    deployed.timestamp.returns( deployed.constants.deposit_timestamp )
    for amount in deposits:
        try:
            yf.deposit( amount )
        except Revert as exc:
            raise click.ClickException( f"Deposit of {amount} failed: {exc.reason}" )
    log.info( f"Deposited {commas( deposits, final='and' )} from {deployed.first}" )
    deployed.timestamp.returns( deployed.constants.unlock_timestamp )
    releases			= []
    for i,amount in enumerate( deposits ):
        try:
            receipt		= yf.releaseTokens( i )
        except Revert as exc:
            releases.append( dict( deposit=amount, reward=None, reason=exc.reason ))
        else:
            releases.append( dict( deposit=amount, reward=receipt.event( 'YieldFarmingTokenRelease' )[1] ))
    if cli.json:
        click.echo( json.dumps( releases, indent=4 ))
    else:
        for r in releases:
            click.echo( f"{r['deposit']:>10} --> {r['reward'] if r['reward'] is not None else r['reason']}" )


@click.command()
@click.argument( "specs", nargs=-1, required=True )
def payees( specs ):
    """Tabulate the payees' ADDRESS=SHARES, and their fractions of the total shares."""
    records			= RecordList.from_dict( list( parse_shares( specs )))
    if cli.json:
        click.echo( json.dumps( [
            dict( address=a, shares=s, fraction=str( f ))
            for (a,f),s in zip( records.fractions(), records.shares_list() )
        ], indent=4 ))
    else:
        click.echo( str( records ))


@click.command()
@click.option( "--provider", default=lambda: os.getenv( 'YIELDFARMING_PROVIDER' ), help="The Web3 provider URL (default: $YIELDFARMING_PROVIDER)" )
@click.option( "--agent", required=True, help="The Ethereum account address deploying the Contracts" )
@click.option( "--prvkey", help="The agent's hex private key (default: $YIELDFARMING_PRVKEY); '-' reads it from stdin" )
@click.option( "--artifacts", default=defaults.ARTIFACTS, help="The Hardhat artifacts directory" )
@click.option( "--accepted-token", default=defaults.ACCEPTED_TOKEN, help="The accepted ERC-20 token address (default: USDC on Polygon)" )
@click.option( "--payee", "specs", multiple=True, required=True, help="A payee ADDRESS=SHARES; may be repeated" )
@click.option( "--multiplier", type=int, default=defaults.MULTIPLIER )
@click.option( "--lock-time", type=int, default=defaults.LOCK_TIME, help="Seconds from deposit until the reward unlocks" )
def deploy( provider, agent, prvkey, artifacts, accepted_token, specs, multiplier, lock_time ):
    """Deploy the ABDKMathQuad, Timestamp, RewardCalculator and YieldFarming Contracts."""
    if not provider:
        raise click.UsageError( "Supply a Web3 provider URL via --provider, or $YIELDFARMING_PROVIDER" )
    if prvkey == '-':
        prvkey			= click.prompt( 'Agent private key', hide_input=True )
    elif prvkey:
        log.warning( "It is recommended to not use '--prvkey <hex>'; specify '-' to read from input, or set $YIELDFARMING_PRVKEY" )
    else:
        prvkey			= os.getenv( 'YIELDFARMING_PRVKEY' )
    deployed			= ethereum_deploy(
        w3_provider( provider ), agent,
        agent_prvkey		= prvkey,
        accepted_token		= accepted_token,
        payees			= RecordList.from_dict( list( parse_shares( specs ))),
        multiplier		= multiplier,
        lock_time		= lock_time,
        artifacts		= artifacts,
    )
    addresses			= { name: contract._address for name,contract in deployed.items() }
    if cli.json:
        click.echo( json.dumps( addresses, indent=4 ))
    else:
        for name,address in addresses.items():
            click.echo( f"{name:20} {address}" )


cli.add_command( simulate )
cli.add_command( payees )
cli.add_command( deploy )
