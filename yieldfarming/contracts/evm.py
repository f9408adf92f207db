
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

import copy
import logging

from collections	import defaultdict
from contextlib		import contextmanager
from dataclasses	import dataclass, field
from functools		import wraps
from typing		import Any, Dict, List, Optional

import eth_account

from rlp		import encode as rlp_encode
from web3		import Web3

from ..util		import commas, into_bytes

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
A serialized, atomic transaction machine hosting simulated Ethereum contracts.

Each Contract lives at the address an Ethereum CREATE would assign it, from its creator's address
and nonce.  Every external call is a transaction: it either completes and commits its state changes
and events, or raises Revert, leaving every Contract's state exactly as it was before the call.
"""

log				= logging.getLogger( 'evm' )

ZERO_ADDRESS			= '0x' + '00' * 20
UINT256_MAX			= 2 ** 256 - 1


class Revert( RuntimeError ):
    """A Contract call was reverted; no state was changed.  The revert reason is in .reason."""
    def __init__( self, reason ):
        super().__init__( reason )
        self.reason		= reason


def require( condition, reason ):
    if not condition:
        raise Revert( reason )


def uint256( value ):
    """Validate a uint256 argument; anything else reverts, as would its ABI decoding.

        >>> uint256( 10 )
        10
        >>> uint256( -1 )
        Traceback (most recent call last):
            ...
        yieldfarming.contracts.evm.Revert: Invalid uint256 value -1
    """
    require(
        isinstance( value, int ) and not isinstance( value, bool ) and 0 <= value <= UINT256_MAX,
        f"Invalid uint256 value {value!r}"
    )
    return value


def checksum( address ):
    """Normalize an Ethereum address to its EIP-55 checksum form."""
    return Web3.to_checksum_address( address )


def contract_address(
    address,			# Address that is constructing the contract
    nonce,			# The creator's nonce (count of prior transactions / creations)
):
    """Deduces the Contract Address that will result from a creator's 'address' and a
    transaction/CREATE (given a 'nonce').

        >>> contract_address( '0x6ac7ea33f8831ea9dcc53393aaa88b25a785dbf0', nonce=0 )
        '0xcd234A471b72ba2F1Ccf0A70FCABA648a5eeCD8d'

    """
    b_address			= into_bytes( address )
    assert isinstance( b_address, bytes ) and len( b_address ) == 20, \
        f"Expected 20-byte adddress, got {b_address!r}"
    assert isinstance( nonce, int ), \
        f"The nonce for CREATE must be an integer, not {nonce!r}"
    b_result			= Web3.keccak( rlp_encode([ b_address, nonce ]) )
    return Web3.to_checksum_address( b_result[12:].hex() )


def account_address( key ):
    """The Ethereum account address for an integer (or 32-byte) private key.  Private keys 1, 2,
    ... produce the same accounts as the Ethereum tester.

        >>> account_address( 1 )
        '0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf'

    """
    if isinstance( key, int ):
        key			= key.to_bytes( 32, 'big' )
    return eth_account.Account.from_key( key ).address


@dataclass( frozen=True )
class Event:
    address: str		# The emitting Contract
    name: str
    args: tuple


@dataclass
class Receipt:
    """The outcome of a successful state-changing transaction."""
    sender: str
    address: str
    function: str
    result: Any			= None
    events: List[Event]		= field( default_factory=list )

    def emitted( self, name, *args, address=None ):
        """Was the named Event emitted (w/ exactly these args, if any supplied), optionally by the
        Contract at address?"""
        return any(
            e.name == name
            and ( not args or e.args == args )
            and ( address is None or e.address == address )
            for e in self.events
        )

    def event( self, name ):
        """The args of the first Event emitted w/ the given name"""
        for e in self.events:
            if e.name == name:
                return e.args
        raise KeyError( f"No {name} Event emitted by {self.function}" )


def external( func ):
    """A state-changing Contract function; each call from outside the Machine is run as a transaction
    from the Machine's default_account, returning a Receipt."""
    @wraps( func )
    def wrapper( self, *args ):
        assert not self._machine._frames, \
            f"Use ._call( <address>, {func.__name__!r}, ... ) to call another Contract's functions"
        return self._machine.call( self._machine.default_account, self, func, args )
    wrapper.function		= func
    wrapper.mutating		= True
    return wrapper


def view( func ):
    """A read-only Contract function; returns its result directly."""
    @wraps( func )
    def wrapper( self, *args ):
        assert not self._machine._frames, \
            f"Use ._call( <address>, {func.__name__!r}, ... ) to call another Contract's functions"
        return self._machine.call( self._machine.default_account, self, func, args, mutating=False )
    wrapper.function		= func
    wrapper.mutating		= False
    return wrapper


class Connected:
    """A Contract, w/ all its external/view functions called from the supplied account."""
    def __init__( self, contract, account ):
        self._contract		= contract
        self._account		= account

    def __getattr__( self, name ):
        """Any of the Contract's external/view functions are called from our account; anything else
        comes straight from the Contract."""
        method			= getattr( type( self._contract ), name, None )
        if not hasattr( method, 'function' ):
            return getattr( self._contract, name )

        def curry( *args ):
            return self._contract._machine.call(
                self._account, self._contract, method.function, args, mutating=method.mutating )
        return curry


class Contract:
    """A simulated Ethereum Contract, hosted at an address by a Machine.

    Subclasses implement constructor( ... ) and their external/view functions.  All Contract
    state must be held in plain, deep-copyable attributes (never references to other Contracts;
    use their addresses), so that the Machine can snapshot and restore it.

    Does not clutter up the object() API with names, to avoid shadowing any Contract API functions
    starting with letters.
    """
    _machine: Machine
    _address: str

    def constructor( self, *args ):
        pass

    def __repr__( self ):
        return f"<{self.__class__.__name__} at {self._address}>"

    @property
    def address( self ):
        return self._address

    def connect( self, account ):
        """Call this Contract's functions from account."""
        return Connected( self, account )

    @property
    def _sender( self ):
        """The msg.sender of the function currently executing"""
        return self._machine.sender

    def _emit( self, name, *args ):
        self._machine.emit( Event( self._address, name, tuple( args )))

    def _call( self, address, name, *args ):
        """Call the named function of the Contract at address, w/ this Contract as msg.sender."""
        target			= self._machine.at( address )
        method			= getattr( type( target ), name )
        return self._machine.call( self._address, target, method.function, args, mutating=method.mutating )

    def _create( self, cls, *args ):
        """Create a new Contract w/ this Contract as its creator, returning its address."""
        return self._machine.deploy( cls, *args, sender=self._address )._address

    def _state( self ):
        return copy.deepcopy( {
            k: v
            for k,v in vars( self ).items()
            if k != '_machine'
        } )

    def _restore( self, state ):
        self.__dict__		= dict( state, _machine=self._machine )


class Machine:
    """Hosts Contracts by address, and runs all calls as serialized, atomic transactions.

    WARNING: Not thread-safe; a Machine must be driven by a single thread.
    """
    def __init__( self, accounts=10 ):
        self.contracts: Dict[str,Contract] = dict()
        self.nonces		= defaultdict( int )
        self.accounts		= list( account_address( k ) for k in range( 1, accounts + 1 ))
        self.default_account	= self.accounts[0] if self.accounts else None
        self.logs: List[Event]	= list()		# All committed Events
        self._frames		= list()		# The msg.sender stack
        self._events: Optional[List[Event]] = None

    @property
    def sender( self ):
        assert self._frames, \
            "No Contract function is executing; there is no msg.sender"
        return self._frames[-1]

    def at( self, address ):
        try:
            return self.contracts[checksum( address )]
        except KeyError:
            raise Revert( f"No Contract at address {address}" )

    def emit( self, event ):
        assert self._events is not None, \
            f"Cannot emit {event.name} outside of a transaction"
        log.debug( f"Emitted {event.name}( {commas( event.args )} ) from {event.address}" )
        self._events.append( event )

    def _snapshot( self ):
        return (
            dict( self.contracts ),
            dict( self.nonces ),
            {
                address: contract._state()
                for address,contract in self.contracts.items()
            },
        )

    def _restore( self, snapshot ):
        contracts,nonces,states	= snapshot
        self.contracts		= contracts
        self.nonces		= defaultdict( int, nonces )
        for address,state in states.items():
            self.contracts[address]._restore( state )

    @contextmanager
    def _transaction( self, sender, mutating=True ):
        """Run a transaction (or a nested call within one) from sender.  The outermost transaction
        snapshots all state, and restores it if any Exception occurs; only then are its Events
        committed.  Yields the transaction's Events list if outermost and mutating, else None.

        """
        outermost		= not self._frames
        snapshot		= None
        if outermost:
            self._events	= list()
            if mutating:
                snapshot	= self._snapshot()
        self._frames.append( sender )
        try:
            yield self._events if outermost and mutating else None
        except BaseException:
            if snapshot is not None:
                self._restore( snapshot )
            raise
        else:
            if outermost and mutating:
                self.logs.extend( self._events )
        finally:
            self._frames.pop()
            if outermost:
                self._events	= None

    def call( self, sender, contract, func, args, mutating=True ):
        """Invoke func on contract w/ msg.sender.  If outermost and mutating, returns a Receipt; if
        a view or nested call, returns the function's result.  Raises Revert if the call fails.

        """
        name			= f"{contract.__class__.__name__}.{func.__name__}"
        nested			= bool( self._frames )
        log.info( f"{'  ' * len( self._frames )}Calling {name}( {commas( args )} ) from {sender}" )
        result,success		= None,False
        try:
            with self._transaction( sender, mutating=mutating ) as events:
                result		= func( contract, *args )
                success		= True
        except Exception as exc:
            result		= repr( exc )
            raise
        finally:
            log.info( f"{'  ' * len( self._frames )}Called  {name}( {commas( args )} ) -{'-' if success else 'x'}> {result}" )
        if nested or events is None:
            return result
        return Receipt(
            sender	= sender,
            address	= contract._address,
            function	= func.__name__,
            result	= result,
            events	= events,
        )

    def deploy( self, cls, *args, sender=None ):
        """Create a Contract of class cls, running its constructor w/ args from sender (default:
        the default_account).  Returns the Contract.

        """
        sender			= sender or self.default_account
        with self._transaction( sender ):
            address		= contract_address( sender, nonce=self.nonces[sender] )
            self.nonces[sender] += 1
            contract		= cls.__new__( cls )
            contract._machine	= self
            contract._address	= address
            self.contracts[address] = contract
            self.nonces[address] = 1		# EIP-161: a new Contract starts at nonce 1
            log.info( f"{'  ' * len( self._frames )}Construct {cls.__name__}( {commas( args )} ) from {sender}, at {address}" )
            cls.constructor( contract, *args )
        return contract
