
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

from dataclasses	import dataclass
from fractions		import Fraction

from tabulate		import tabulate

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


@dataclass
class Record:
    address: str
    shares: int


class RecordList:
    """An ordered list of payee (address, shares) Records, used to shape the parallel payee address
    and shares lists supplied to the YieldFarming constructor.

        >>> payees = RecordList( [ '0xa', '0xb', '0xc' ], [ 10, 10, 30 ] )
        >>> payees.addresses()
        ['0xa', '0xb', '0xc']
        >>> payees.shares_list()
        [10, 10, 30]
        >>> payees.total_shares()
        50

    The Records are mutable, so that a test may deliberately corrupt a payee list:

        >>> payees.records[1].shares = 0
        >>> payees.shares_list()
        [10, 0, 30]
    """
    def __init__( self, addresses, shares_list ):
        addresses		= list( addresses )
        shares_list		= list( shares_list )
        assert len( addresses ) == len( shares_list ), \
            f"Mismatched {len( addresses )} payee addresses and {len( shares_list )} shares"
        self.records		= list(
            Record( address, shares )
            for address,shares in zip( addresses, shares_list )
        )

    @classmethod
    def from_dict( cls, payees ):
        """Create a RecordList from an (ordered) { <address>: <shares>, ... } dict, or a sequence of
        (<address>, <shares>) pairs."""
        pairs			= list( payees.items() if hasattr( payees, 'items' ) else payees )
        return cls(
            ( a for a,s in pairs ),
            ( s for a,s in pairs ),
        )

    def __len__( self ):
        return len( self.records )

    def __iter__( self ):
        return iter( self.records )

    def addresses( self ):
        return list( record.address for record in self.records )

    def shares_list( self ):
        return list( record.shares for record in self.records )

    def total_shares( self ):
        return sum( record.shares for record in self.records )

    def fractions( self ):
        """The (address, Fraction) of the total shares held by each payee, in order."""
        total			= self.total_shares()
        return list(
            (record.address, Fraction( record.shares, total ) if total else Fraction( 0 ))
            for record in self.records
        )

    @property
    def _payees_table( self ):
        return tabulate(
            list(
                (a,s,f"{float( f * 100 ):10.6f}")
                for (a,f),s in zip( self.fractions(), self.shares_list() )
            ),
            headers	= [ 'Payee', 'Shares', 'Frac. %' ],
            tablefmt	= 'orgtbl'
        )

    def __str__( self ):
        return f"""\
{self.__class__.__name__} Payees ({self.total_shares()} shares):
{self._payees_table}"""
