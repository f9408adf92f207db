
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


from __future__		import annotations

import logging
import textwrap

from ..contracts	import quad
from ..defaults		import (
    TOKEN_NAME, TOKEN_SYMBOL, INTEREST_NUMERATOR, INTEREST_DENOMINATOR, MULTIPLIER, LOCK_TIME,
    GAS_LIBRARY, GAS_TIMESTAMP, GAS_CALCULATOR, GAS_YIELDFARMING, GAS_PAYEE,
)
from ..records		import RecordList
from .contract		import Contract

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'deploy' )


class YieldFarmingContract( Contract ):
    """Provide access to a YieldFarming Contract; either a pre-existing deployed Contract via
    address, or _deploy a new contract by specifying its parameters and payees RecordList.

    Once deployed (or connected), the payees are recovered from the Contract.
    """
    def __init__(
        self, *args,
        address			= None,
        timestamp		= None,		# Contract addresses of the clock oracle, accepted ERC-20 and RewardCalculator
        accepted_token		= None,
        reward_calculator	= None,
        token_name		= TOKEN_NAME,
        token_symbol		= TOKEN_SYMBOL,
        interest_rate		= None,		# bytes16 binary128 values, from ABDKMathQuad
        multiplier		= None,
        lock_time		= LOCK_TIME,
        payees: RecordList	= None,
        gas			= GAS_YIELDFARMING,
        **kwds
    ):
        assert bool( address ) ^ bool( payees ), \
            "Either a Contract address, or details of desired payees must be supplied"

        self._payees		= payees		# Updated from the Contract, once deployed
        self._token		= None

        super().__init__(
            *args, name='YieldFarming', address=address, **kwds	# If address supplied, will invoke self._update()
        )

        if not self._address:
            self._deploy(
                timestamp, accepted_token, reward_calculator,
                token_name, token_symbol,
                interest_rate, multiplier, lock_time,
                payees.addresses(), payees.shares_list(),
                gas=gas,
            )

        log.warning( f"{self}" )

    def _update( self ):
        """Recover the payees (in order) and the YieldFarmingToken address from the Contract."""
        total			= self.totalShares()
        pairs,found		= [],0
        while found < total:
            address		= self.payee( len( pairs ))
            shares		= self.shares( address )
            pairs.append( (address,shares) )
            found	       += shares
        payees			= RecordList.from_dict( pairs )
        if self._payees and payees.addresses() != self._payees.addresses():
            log.warning( f"Deployed payees differ from those supplied:\n{self._payees}" )
        self._payees		= payees
        self._token		= self.yieldFarmingToken()

    def _administer( self, name, *args, gas=GAS_PAYEE ):
        """Transact one of the owner-only payee administration functions, and recover the resultant
        payees.  Returns the transaction receipt."""
        receipt			= self._transact( name, *args, gas=gas )
        self._update()
        log.warning( f"{self}" )
        return receipt

    def _add_payee( self, account, shares, **kwds ):
        return self._administer( 'addPayee', account, shares, **kwds )

    def _update_payee( self, account, shares, **kwds ):
        return self._administer( 'updatePayee', account, shares, **kwds )

    def _remove_payee( self, account, **kwds ):
        return self._administer( 'removePayee', account, **kwds )

    def __str__( self ):
        return f"""\
{self._name} at {self._address}, w/ YieldFarmingToken at {self._token}:
{textwrap.indent( str( self._payees ), ' ' * 4 )}"""


def deploy(
    w3_provider,
    agent,
    agent_prvkey		= None,
    accepted_token		= None,		# The ERC-20 accepted for deposit
    payees: RecordList		= None,
    token_name			= TOKEN_NAME,
    token_symbol		= TOKEN_SYMBOL,
    interest_numerator		= INTEREST_NUMERATOR,
    interest_denominator	= INTEREST_DENOMINATOR,
    multiplier			= MULTIPLIER,
    lock_time			= LOCK_TIME,
    artifacts			= None,
    timestamp			= None,		# An existing clock oracle Contract address
):
    """Deploy the ABDKMathQuad library, the Timestamp clock oracle (unless supplied), the
    RewardCalculator (linked to ABDKMathQuad) and finally the YieldFarming Contract.  The interest
    rate and multiplier are computed in binary128 by the deployed ABDKMathQuad library.

    Returns a dict of the deployed Contracts, by name.

    """
    assert accepted_token and payees, \
        "Must supply an accepted ERC-20 token address, and a RecordList of payees"
    common			= dict( agent=agent, agent_prvkey=agent_prvkey, artifacts=artifacts )

    math			= Contract( w3_provider, name='ABDKMathQuad', **common )._deploy( gas=GAS_LIBRARY )
    if timestamp:
        clock			= Contract( w3_provider, name='Timestamp', address=timestamp, **common )
    else:
        clock			= Contract( w3_provider, name='Timestamp', **common )._deploy( gas=GAS_TIMESTAMP )
    calculator			= Contract(
        w3_provider, name='RewardCalculator', libraries=dict( ABDKMathQuad=math._address ), **common
    )._deploy( gas=GAS_CALCULATOR )

    interest_rate		= math.div( math.fromInt( interest_numerator ), math.fromInt( interest_denominator ))
    quad_multiplier		= math.fromInt( multiplier )
    log.info( f"Interest rate {interest_numerator}/{interest_denominator} == {quad.from_bytes16( interest_rate )},"
              f" multiplier {quad.from_bytes16( quad_multiplier )}" )

    yield_farming		= YieldFarmingContract(
        w3_provider,
        timestamp		= clock._address,
        accepted_token		= accepted_token,
        reward_calculator	= calculator._address,
        token_name		= token_name,
        token_symbol		= token_symbol,
        interest_rate		= interest_rate,
        multiplier		= quad_multiplier,
        lock_time		= lock_time,
        payees			= payees,
        **common
    )
    return dict(
        ABDKMathQuad		= math,
        Timestamp		= clock,
        RewardCalculator	= calculator,
        YieldFarming		= yield_farming,
    )
