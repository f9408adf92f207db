
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


from dataclasses	import dataclass

from .evm		import ZERO_ADDRESS, require

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


@dataclass
class Ownership:
    """Single-owner access control, held by a Contract as a record.  Each mutation returns the
    (previous, new) owner, for the Contract to emit OwnershipTransferred.

        >>> o = Ownership( '0xA' )
        >>> o.transfer( '0xA', '0xB' )
        ('0xA', '0xB')
        >>> o.check( '0xA' )
        Traceback (most recent call last):
            ...
        yieldfarming.contracts.evm.Revert: Ownable: caller is not the owner
    """
    owner: str

    def check( self, caller ):
        require( caller == self.owner, "Ownable: caller is not the owner" )

    def transfer( self, caller, new_owner ):
        self.check( caller )
        require( new_owner != ZERO_ADDRESS, "Ownable: new owner is the zero address" )
        previous,self.owner	= self.owner,new_owner
        return previous,new_owner

    def renounce( self, caller ):
        self.check( caller )
        previous,self.owner	= self.owner,ZERO_ADDRESS
        return previous,ZERO_ADDRESS
