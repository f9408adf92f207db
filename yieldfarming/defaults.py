
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

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

#
# Time
#
DAY				= 24 * 60 * 60		# The interest rate compounds per whole day since deployment

#
# YieldFarming deployment parameters (for a production deployment)
#
TOKEN_NAME			= "Let's Go Brandon"
TOKEN_SYMBOL			= "LGBC"
INTEREST_NUMERATOR		= 100			# 1% per day, as 100/10000
INTEREST_DENOMINATOR		= 10000
MULTIPLIER			= 10 ** 12		# Reward tokens per accepted token unit, before interest
LOCK_TIME			= DAY			# seconds between deposit and unlock

# The accepted ERC-20 token; USDC on Polygon.  Its upgradeable proxy is deployed externally.
ACCEPTED_TOKEN			= '0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174'

#
# The mocked test deployment parameters
#
MOCKED_TOKEN_NAME		= 'A Token name'
MOCKED_TOKEN_SYMBOL		= 'A Token symbol'
MOCKED_INTEREST_NUMERATOR	= 25
MOCKED_INTEREST_DENOMINATOR	= 10000
MOCKED_MULTIPLIER		= 10 ** 12
MOCKED_LOCK_TIME		= 1
MOCKED_INITIAL_BALANCE		= 1000
MOCKED_SHARES			= ( 100, 100, 100 )
MOCKED_DEPLOY_TIMESTAMP		= 1
MOCKED_DEPOSIT_TIMESTAMP	= MOCKED_DEPLOY_TIMESTAMP + DAY		# one day later
MOCKED_UNLOCK_TIMESTAMP		= MOCKED_DEPOSIT_TIMESTAMP + DAY	# one day later
MOCKED_ACCOUNTS			= 4

#
# Fixed-point math.  The ABDKMathQuad library uses IEEE-754 binary128 (113-bit significand); our
# decimal model uses the equivalent IEEE-754 decimal128 precision of 34 significant digits.
#
QUAD_PRECISION			= 34

#
# Solidity deployment
#
ARTIFACTS			= 'artifacts'		# Hardhat artifacts directory
GAS_LIBRARY			= 3000000		# Estimated gas to deploy each contract
GAS_TIMESTAMP			= 200000
GAS_CALCULATOR			= 1000000
GAS_YIELDFARMING		= 6000000
GAS_PAYEE			= 200000		# Estimated gas for each payee administration transaction
