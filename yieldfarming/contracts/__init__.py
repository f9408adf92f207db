
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

from __future__         import annotations

from .evm		import (		# noqa F401
    ZERO_ADDRESS, Revert, require, checksum, contract_address, account_address,
    Event, Receipt, Contract, Machine, external, view,
)
from .			import quad		# noqa F401
from .ownable		import Ownership	# noqa F401
from .timestamp		import Timestamp, MockTimestamp	# noqa F401
from .token		import ERC20, ERC20Mock, YieldFarmingToken	# noqa F401
from .calculator	import RewardCalculator	# noqa F401
from .timelock		import TokenTimeLock	# noqa F401
from .splitter		import Payee, PaymentSplitter	# noqa F401
from .farming		import YieldFarming	# noqa F401
from .scenario		import (		# noqa F401
    Constants, Deployment, raw_deploy, mocked_deploy,
)

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"
