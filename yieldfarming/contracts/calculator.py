
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


from .			import quad
from .evm		import Contract, view

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


class RewardCalculator( Contract ):
    """Computes the reward token quantity for a deposit.  The reward for an accepted token amount
    deposited days after deployment is discounted by the compounded daily interest rate:

        amount x multiplier / ( 1 + interestRate ) ^ days

    rounded to the nearest integer.  The multiplier and interestRate are quad fixed-point values.
    """
    @view
    def calculateQuantity( self, amount, multiplier, interest_rate, days ):
        discount		= quad.pow( quad.add( quad.from_int( 1 ), quad.into_quad( interest_rate )), days )
        return quad.to_uint(
            quad.div(
                quad.mul( quad.from_uint( amount ), quad.into_quad( multiplier )),
                discount
            )
        )
