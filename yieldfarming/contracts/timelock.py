
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


from .evm		import Contract, ZERO_ADDRESS, external, require, view
from .ownable		import Ownership

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


class TokenTimeLock( Contract ):
    """Locks one deposit's reward until its release time.  Owned by its creator (the YieldFarming
    Contract), which alone may release it; the reward may only be released once.
    """
    def constructor( self, timestamp, beneficiary, principal, amount, release_time ):
        self._timestamp		= timestamp
        self._created		= self._call( timestamp, 'getTimestamp' )
        require( release_time > self._created, "TokenTimeLock: release time is before current time" )
        self._ownership		= Ownership( self._sender )
        self._emit( 'OwnershipTransferred', ZERO_ADDRESS, self._sender )
        self._beneficiary	= beneficiary
        self._principal		= principal
        self._amount		= amount
        self._release_time	= release_time
        self._released		= False

    @view
    def owner( self ):
        return self._ownership.owner

    @view
    def beneficiary( self ):
        return self._beneficiary

    @view
    def principal( self ):
        return self._principal

    @view
    def amount( self ):
        return self._amount

    @view
    def createdTime( self ):
        return self._created

    @view
    def releaseTime( self ):
        return self._release_time

    @view
    def released( self ):
        return self._released

    @external
    def release( self ):
        """Release the locked reward, returning the amount for the owner to mint to the beneficiary."""
        self._ownership.check( self._sender )
        now			= self._call( self._timestamp, 'getTimestamp' )
        require( now >= self._release_time, "TokenTimeLock: current time is before release time" )
        require( self._amount > 0 and not self._released, "TokenTimeLock: no tokens to release" )
        self._released		= True
        return self._amount
