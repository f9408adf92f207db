
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


import time

from .evm		import Contract, view, external

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


class Timestamp( Contract ):
    """The clock oracle: the current (wall-clock) block time in whole seconds."""
    @view
    def getTimestamp( self ):
        return int( time.time() )


class MockTimestamp( Timestamp ):
    """A clock oracle returning a programmed time, for tests."""
    def constructor( self, value=0 ):
        self._value		= value

    @external
    def returns( self, value ):
        self._value		= value

    @view
    def getTimestamp( self ):
        return self._value
