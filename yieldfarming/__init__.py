
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

from .version		import __version__		# noqa F401
from .records		import Record, RecordList	# noqa F401
from .contracts		import (			# noqa F401
    Machine, Revert, Receipt, Event,
    YieldFarming, YieldFarmingToken, TokenTimeLock, RewardCalculator, PaymentSplitter,
    ERC20, ERC20Mock, Timestamp, MockTimestamp,
    raw_deploy, mocked_deploy,
)

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"
