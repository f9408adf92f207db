
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


from dataclasses	import dataclass, field, replace
from typing		import Tuple

from ..			import defaults
from ..records		import RecordList
from .			import quad
from .calculator	import RewardCalculator
from .evm		import Contract, Machine
from .farming		import YieldFarming
from .timestamp		import MockTimestamp
from .token		import ERC20Mock

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


@dataclass
class Constants:
    """The parameters of a mocked YieldFarming deployment."""
    multiplier: int		= defaults.MOCKED_MULTIPLIER
    lock_time: int		= defaults.MOCKED_LOCK_TIME
    initial_balance: int	= defaults.MOCKED_INITIAL_BALANCE
    interest_numerator: int	= defaults.MOCKED_INTEREST_NUMERATOR
    interest_denominator: int	= defaults.MOCKED_INTEREST_DENOMINATOR
    token_name: str		= defaults.MOCKED_TOKEN_NAME
    token_symbol: str		= defaults.MOCKED_TOKEN_SYMBOL
    shares: Tuple[int,...]	= field( default=defaults.MOCKED_SHARES )
    deploy_timestamp: int	= defaults.MOCKED_DEPLOY_TIMESTAMP
    deposit_timestamp: int	= defaults.MOCKED_DEPOSIT_TIMESTAMP
    unlock_timestamp: int	= defaults.MOCKED_UNLOCK_TIMESTAMP


@dataclass
class Deployment:
    machine: Machine
    constants: Constants
    first: str
    second: str
    third: str
    fourth: str
    payees: RecordList
    timestamp: Contract
    accepted_token: Contract
    reward_calculator: Contract
    yield_farming: Contract
    yield_farming_token: Contract


def raw_deploy( machine, timestamp, accepted_token, payees, accounts, constants=None ):
    """Deploy a RewardCalculator and a YieldFarming (creating its YieldFarmingToken) from the first
    account, w/ the supplied clock oracle, accepted token and payees.  The payees RecordList is
    used as-is; a test may corrupt it to exercise the YieldFarming constructor's checks.

    """
    constants			= constants or Constants()
    first,second,third,fourth	= accounts[:4]
    reward_calculator		= machine.deploy( RewardCalculator, sender=first )
    interest_rate		= quad.div(
        quad.from_int( constants.interest_numerator ),
        quad.from_int( constants.interest_denominator ),
    )
    yield_farming		= machine.deploy(
        YieldFarming,
        timestamp.address,
        accepted_token.address,
        reward_calculator.address,
        constants.token_name,
        constants.token_symbol,
        interest_rate,
        quad.from_int( constants.multiplier ),
        constants.lock_time,
        payees.addresses(),
        payees.shares_list(),
        sender		= first,
    )
    return Deployment(
        machine			= machine,
        constants		= constants,
        first			= first,
        second			= second,
        third			= third,
        fourth			= fourth,
        payees			= payees,
        timestamp		= timestamp,
        accepted_token		= accepted_token,
        reward_calculator	= reward_calculator,
        yield_farming		= yield_farming,
        yield_farming_token	= machine.at( yield_farming.yieldFarmingToken() ),
    )


def mocked_deploy( multiplier=None, constants=None, payees=None ):
    """Deploy a complete YieldFarming scenario on a new Machine: a MockTimestamp reading the deploy
    timestamp, an ERC20Mock w/ the initial balance held by the first account, and a YieldFarming
    w/ the first, second and third accounts as equal payees.  Optionally, supply a payees function
    taking the accounts and returning a RecordList, to deploy w/ other payees.

        >>> d = mocked_deploy()
        >>> d.yield_farming.totalShares()
        300
        >>> d.accepted_token.balanceOf( d.first )
        1000

    """
    constants			= constants or Constants()
    if multiplier is not None:
        constants		= replace( constants, multiplier=multiplier )
    machine			= Machine( accounts=defaults.MOCKED_ACCOUNTS )
    accounts			= machine.accounts
    first			= accounts[0]
    timestamp			= machine.deploy( MockTimestamp, constants.deploy_timestamp, sender=first )
    accepted_token		= machine.deploy(
        ERC20Mock, 'ERC20Mock name', 'ERC20Mock symbol', first, constants.initial_balance, sender=first )
    if payees is None:
        records			= RecordList( accounts[:3], constants.shares )
    else:
        records			= payees( accounts )
    return raw_deploy( machine, timestamp, accepted_token, records, accounts, constants )
