
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


import logging

from ..defaults		import DAY
from .			import quad
from .evm		import Contract, ZERO_ADDRESS, checksum, external, require, uint256, view
from .ownable		import Ownership
from .splitter		import PaymentSplitter
from .timelock		import TokenTimeLock
from .token		import YieldFarmingToken

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'farming' )


class YieldFarming( Contract ):
    """Accepts deposits of an ERC-20 token, locking each deposit's reward in a new TokenTimeLock
    until lockTime seconds after the deposit.  Once unlocked, the depositor may releaseTokens to
    mint the reward in YieldFarmingToken, which they may later burn.

    The accepted tokens deposited are split among the payees, in proportion to their shares.  Payees
    may transfer their shares; the owner may add, update and remove payees.

    The reward for each deposit is computed at deposit time by the RewardCalculator, from the whole
    days elapsed since the YieldFarming Contract was deployed.
    """
    def constructor(
        self,
        timestamp,		# The clock oracle Contract address
        accepted_token,		# The ERC-20 Contract address accepted for deposit
        reward_calculator,	# The RewardCalculator Contract address
        name,			# The YieldFarmingToken name and symbol
        symbol,
        interest_rate,		# quad daily interest rate (eg. 0.0025), or its bytes16
        multiplier,		# quad reward multiplier, or its bytes16
        lock_time,		# seconds
        payees,
        shares,
    ):
        owner			= self._sender
        self._ownership		= Ownership( owner )
        self._emit( 'OwnershipTransferred', ZERO_ADDRESS, owner )
        self._splitter		= PaymentSplitter( payees, shares, self._emit )
        self._timestamp		= checksum( timestamp )
        self._accepted_token	= checksum( accepted_token )
        self._reward_calculator	= checksum( reward_calculator )
        self._interest_rate	= quad.into_quad( interest_rate )
        self._multiplier	= quad.into_quad( multiplier )
        self._lock_time		= lock_time
        self._start_time	= self._call( self._timestamp, 'getTimestamp' )
        self._token		= self._create( YieldFarmingToken, name, symbol )
        self._time_locks	= dict()	# { <beneficiary>: [<TokenTimeLock address>, ...], ... }

    #
    # Ownership
    #
    @view
    def owner( self ):
        return self._ownership.owner

    @external
    def transferOwnership( self, new_owner ):
        self._emit( 'OwnershipTransferred', *self._ownership.transfer( self._sender, new_owner ))

    @external
    def renounceOwnership( self ):
        self._emit( 'OwnershipTransferred', *self._ownership.renounce( self._sender ))

    #
    # Deployment parameters
    #
    @view
    def yieldFarmingToken( self ):
        return self._token

    @view
    def acceptedToken( self ):
        return self._accepted_token

    @view
    def interestRate( self ):
        return quad.to_bytes16( self._interest_rate )

    @view
    def multiplier( self ):
        return quad.to_bytes16( self._multiplier )

    @view
    def lockTime( self ):
        return self._lock_time

    @view
    def startTime( self ):
        return self._start_time

    #
    # Deposits, and reward TokenTimeLocks
    #
    @external
    def deposit( self, amount ):
        sender			= self._sender
        self._call( self._accepted_token, 'transferFrom', sender, self._address, uint256( amount ))
        now			= self._call( self._timestamp, 'getTimestamp' )
        days			= max( 0, now - self._start_time ) // DAY
        quantity		= self._call(
            self._reward_calculator, 'calculateQuantity', amount, self._multiplier, self._interest_rate, days )
        lock			= self._create(
            TokenTimeLock, self._timestamp, sender, amount, quantity, now + self._lock_time )
        self._time_locks.setdefault( sender, [] ).append( lock )
        log.info( f"Deposit of {amount} by {sender} after {days} days; {quantity} reward locked in {lock}" )
        self._emit( 'AcceptedTokenDeposit', sender, amount )

    @view
    def getMyTokenTimeLocks( self ):
        return list( self._time_locks.get( self._sender, [] ))

    @view
    def getMyTokenTimeLock( self, index ):
        return self._my_time_lock( index )

    @external
    def releaseTokens( self, index ):
        sender			= self._sender
        amount			= self._call( self._my_time_lock( index ), 'release' )
        self._call( self._token, 'mint', sender, amount )
        self._emit( 'YieldFarmingTokenRelease', sender, amount )

    @external
    def burn( self, amount ):
        sender			= self._sender
        self._call( self._token, 'burnFrom', sender, uint256( amount ))
        self._emit( 'YieldFarmingTokenBurn', sender, amount )

    def _my_time_lock( self, index ):
        locks			= self._time_locks.get( self._sender, [] )
        require( 0 <= index < len( locks ), "Index out of bounds!" )
        return locks[index]

    #
    # Payees
    #
    @view
    def totalShares( self ):
        return self._splitter.total_shares

    @view
    def totalReleased( self ):
        return self._splitter.total_released

    @view
    def shares( self, account ):
        return self._splitter.shares( account )

    @view
    def released( self, account ):
        return self._splitter.released( account )

    @view
    def payee( self, index ):
        return self._splitter.payee( index )

    @view
    def payees( self ):
        return self._splitter.payees()

    @external
    def release( self, account ):
        total_received		= self._call( self._accepted_token, 'balanceOf', self._address ) \
                                  + self._splitter.total_released
        payment			= self._splitter.release( account, total_received )
        self._call( self._accepted_token, 'transfer', account, payment )
        self._emit( 'PaymentReleased', checksum( account ), payment )

    @external
    def transferShares( self, to, amount ):
        self._splitter.transfer_shares( self._sender, to, amount, self._emit )

    @external
    def addPayee( self, account, shares ):
        self._ownership.check( self._sender )
        self._splitter.add_payee( account, shares, self._emit )

    @external
    def updatePayee( self, account, shares ):
        self._ownership.check( self._sender )
        self._splitter.update_payee( account, shares, self._emit )

    @external
    def removePayee( self, account ):
        self._ownership.check( self._sender )
        self._splitter.remove_payee( account, self._emit )
