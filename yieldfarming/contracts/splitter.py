
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
from typing		import Dict, List

from .evm		import ZERO_ADDRESS, checksum, require, uint256

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


@dataclass
class Payee:
    account: str
    shares: int


class PaymentSplitter:
    """A weighted payee ledger, splitting all value received pro-rata by shares.

    Payees are held in insertion order, and are indexed by account for O(1) lookup; removal compacts
    the list, preserving the order of the remaining payees.  Each mutating method emits its Events
    via the supplied emit( name, *args ) callable, which is never retained (the ledger must remain
    plain, deep-copyable data).

    Holds no tokens; the owning Contract supplies the total received on release, and transfers the
    payment.
    """
    def __eq__( self, other ):
        return isinstance( other, PaymentSplitter ) and vars( self ) == vars( other )

    def __init__( self, payees, shares, emit ):
        payees,shares		= list( payees ),list( shares )
        require( len( payees ) == len( shares ), "PaymentSplitter: payees and shares length mismatch" )
        require( len( payees ) > 0, "PaymentSplitter: no payees" )
        self._payees: List[Payee] = list()
        self._index: Dict[str,int] = dict()	# { <account>: <slot in _payees>, ... }
        self._total_shares	= 0
        self._total_released	= 0
        self._released: Dict[str,int] = dict()
        for account,amount in zip( payees, shares ):
            self.add_payee( account, amount, emit )

    @property
    def total_shares( self ):
        return self._total_shares

    @property
    def total_released( self ):
        return self._total_released

    def shares( self, account ):
        slot			= self._index.get( checksum( account ))
        return 0 if slot is None else self._payees[slot].shares

    def released( self, account ):
        return self._released.get( checksum( account ), 0 )

    def payee( self, index ):
        require( 0 <= index < len( self._payees ), "PaymentSplitter: index out of bounds" )
        return self._payees[index].account

    def payees( self ):
        return list( p.account for p in self._payees )

    def pending( self, account, total_received ):
        """The payment due account, of the total_received (truncated to an integer)."""
        account			= checksum( account )
        return total_received * self.shares( account ) // self._total_shares - self.released( account )

    def add_payee( self, account, shares, emit ):
        require( account != ZERO_ADDRESS, "PaymentSplitter: account is the zero address" )
        require( uint256( shares ) > 0, "PaymentSplitter: shares are 0" )
        account			= checksum( account )
        require( account not in self._index, "PaymentSplitter: account is already payee" )
        self._index[account]	= len( self._payees )
        self._payees.append( Payee( account, shares ))
        self._total_shares     += shares
        emit( 'PayeeAdded', account, shares )

    def remove_payee( self, account, emit ):
        require( self._payees, "PaymentSplitter: empty payee list" )
        require( checksum( account ) in self._index, "PaymentSplitter: account not found" )
        self._remove( checksum( account ), emit )

    def update_payee( self, account, shares, emit ):
        account			= checksum( account )
        require( account in self._index, "PaymentSplitter: not a payee" )
        uint256( shares )
        payee			= self._payees[self._index[account]]
        require( payee.shares != shares, "PaymentSplitter: account already has that many shares" )
        if shares == 0:
            self._remove( account, emit )
            return
        delta			= shares - payee.shares
        payee.shares		= shares
        self._total_shares     += delta
        emit( 'PayeeUpdated', account, delta )

    def transfer_shares( self, sender, to, amount, emit ):
        sender			= checksum( sender )
        require( sender in self._index, "PaymentSplitter: transferrer not a payee" )
        require( to != ZERO_ADDRESS, "PaymentSplitter: account is the zero address" )
        require( uint256( amount ) > 0, "PaymentSplitter: shares are 0" )
        payee			= self._payees[self._index[sender]]
        require( payee.shares >= amount, "PaymentSplitter: not enough shares balance" )
        to			= checksum( to )
        payee.shares	       -= amount
        if to in self._index:
            self._payees[self._index[to]].shares += amount
            added		= False
        else:
            self._index[to]	= len( self._payees )
            self._payees.append( Payee( to, amount ))
            added		= True
        emit( 'SharesTransferred', sender, to, amount )
        if added:
            emit( 'PayeeAdded', to, amount )
        if not payee.shares:
            self._remove( sender, emit )

    def release( self, account, total_received ):
        """Account for the release of the payment due account; returns the payment amount."""
        account			= checksum( account )
        require( self.shares( account ) > 0, "PaymentSplitter: account is not a payee" )
        payment			= self.pending( account, total_received )
        require( payment > 0, "PaymentSplitter: account is not due payment" )
        self._released[account]	= self.released( account ) + payment
        self._total_released   += payment
        return payment

    def _remove( self, account, emit ):
        slot			= self._index.pop( account )
        payee			= self._payees.pop( slot )
        for i in range( slot, len( self._payees )):
            self._index[self._payees[i].account] = i
        self._total_shares     -= payee.shares
        emit( 'PayeeRemoved', account )
