
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

import json
import logging
import time

from pathlib		import Path
from typing		import Dict, Optional, Union

import eth_account
from web3		import Web3, HTTPProvider, IPCProvider, LegacyWebSocketProvider
from web3.middleware	import SignAndSendRawMiddlewareBuilder

from ..util		import memoize, commas, into_bytes, timer
from ..defaults		import ARTIFACTS

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( 'ethereum' )

GWEI_WEI			= 10 ** 9	# GWEI, in WEI

#
# An example of one way to cache Web3 connections
#
# WARNING:
# - Not thread-safe.  These cached providers need to be used by a single thread
# - Caches results w/ differing use_provider=, for the same w3_url
#
@memoize( maxage=None, maxsize=None, log_at=logging.INFO )
def w3_provider( w3_url, use_provider=None ):
    """Return a Web3.*Provider associated with the specified URL, optionally using the specified
    provider.  A path (with no URL scheme) is assumed to be an IPC socket."""
    if use_provider is None:
        scheme			= w3_url.split( ':', 1 )[0].lower() if ':' in w3_url else 'ipc'
        use_provider		= dict(
            ws		= LegacyWebSocketProvider,
            wss		= LegacyWebSocketProvider,
            http	= HTTPProvider,
            https	= HTTPProvider,
            ipc		= IPCProvider,
        )[scheme]
    return use_provider( w3_url )


def load_artifact( name, artifacts=None ):
    """Find and load the unique Hardhat artifact for Contract name, eg.

        artifacts/contracts/YieldFarming.sol/YieldFarming.json
        artifacts/contracts/abdk-libraries-solidity/ABDKMathQuad.sol/ABDKMathQuad.json

    """
    base			= Path( artifacts or ARTIFACTS )
    try:
        path,			= base.glob( f"**/{name}.sol/{name}.json" )
    except ValueError as exc:
        raise FileNotFoundError( f"Failed to find a unique Hardhat artifact for Contract {name} under {base}" ) from exc
    artifact			= json.loads( path.read_text() )
    log.info( f"{name} Loaded: {path}" )
    return artifact


def link_bytecode( bytecode, link_references, libraries ):
    """Substitute the deployed address of each library into the bytecode, at each offset given by the
    artifact's linkReferences:

        { "<source>.sol": { "<Library>": [ { "start": <byte offset>, "length": 20 }, ... ] } }

    The libraries dict supplies { "<Library>": <address>, ... }.  Returns the linked '0x...' bytecode.

    """
    code			= bytecode[2:] if bytecode[:2].lower() == '0x' else bytecode
    for source,refs in ( link_references or {} ).items():
        for library,offsets in refs.items():
            assert library in ( libraries or {} ), \
                f"Missing address for library {library} (from {source}), required to link bytecode"
            address		= into_bytes( libraries[library] ).hex()
            assert len( address ) == 40, \
                f"Expected 20-byte address for library {library}, got {libraries[library]!r}"
            for offset in offsets:
                beg		= offset['start'] * 2
                end		= beg + offset['length'] * 2
                code		= code[:beg] + address + code[end:]
            log.info( f"Linked {library} at {libraries[library]} into {len( offsets )} location(s)" )
    return '0x' + code


class Contract:
    """Interact with Ethereum contracts, via web3.py's web3.Web3 instance.

    The abi and bytecode may be supplied; otherwise, they're loaded from the named Contract's
    Hardhat artifact (under artifacts).  Any libraries { "<Library>": <address>, ... } are linked
    into the bytecode before deployment.

    Does not clutter up the object() API with names, to avoid shadowing any normal Contract API
    functions starting with letters.

    Gas pricing always uses the connected network's EIP-1559 estimates, capped at the base fee plus
    a multiple of the priority fee.
    """

    def __init__(
        self,
        w3_provider,
        agent				= None,		# The Ethereum account of the agent accessing the Contract (if Gas required)
        agent_prvkey: Optional[Union[bytes,str]] = None,  # Can only query public data, view methods without
        name: Optional[str]		= None,
        address: Optional[str]		= None,
        abi: Optional[Dict]		= None,
        bytecode: Optional[str]		= None,
        artifacts: Optional[Path]	= None,		# The Hardhat artifacts directory
        libraries: Optional[Dict]	= None,		# { "<Library>": <address>, ... }
    ):
        self._w3		= Web3( w3_provider )
        self._agent		= agent
        if self._agent is not None:
            self._w3.eth.default_account = str( self._agent )

        if agent_prvkey:
            account_signing	= eth_account.Account.from_key( into_bytes( agent_prvkey ))
            assert account_signing.address == agent, \
                f"The agent Ethereum Account private key isn't related to agent account address {agent}"
            self._w3.middleware_onion.inject(
                SignAndSendRawMiddlewareBuilder.build( account_signing ), layer=0 )

        self._address		= address		# An existing deployed contract

        self._name		= name or self.__class__.__name__
        self._abi		= abi
        self._bytecode		= bytecode
        self._link_references	= None
        self._libraries		= libraries or dict()

        self._contract		= None
        if not self._abi:
            self._load( artifacts )

        if self._address:
            # A deployed contract; update any cached data, etc.
            self._contract	= self._w3.eth.contract( address=self._address, abi=self._abi )
            self._update()
        else:
            # Not yet deployed; lets use the provided or loaded ABI and (linked) bytecode
            assert self._bytecode, \
                "Must provide abi and bytecode, or a Hardhat artifact"
            if self._link_references:
                self._bytecode	= link_bytecode( self._bytecode, self._link_references, self._libraries )
            self._contract	= self._w3.eth.contract( abi=self._abi, bytecode=self._bytecode )

    def _load( self, artifacts ):
        """Load the abi, bytecode and library linkReferences from a Hardhat artifact."""
        artifact		= load_artifact( self._name, artifacts )
        self._abi		= artifact['abi']
        self._bytecode		= artifact.get( 'bytecode' )
        self._link_references	= artifact.get( 'linkReferences' )

    def _call( self, name, *args, **kwds ):
        """Invoke view function name on deployed contract w/ supplied positional args.  For example,
        to call a function we'd normally use:

            self._contract.functions.payee( 0 ).call({ 'from': "0x", ... })
                                   *args --^       ^-- **kwds

        """
        try:
            func		= getattr( self._contract.functions, name )
            log.info( f"Calling {self._name}.{name}( {commas( args )} ) w/ tx: {kwds!r}" )
            result		= func( *args ).call( kwds )
            success		= True
        except Exception as exc:
            result		= repr( exc )
            success		= False
            raise
        finally:
            log.info( f"Called  {self._name}.{name}( {commas( args )} ) -{'-' if success else 'x'}> {result}" )
        return result

    def _transact( self, name, *args, gas=None, **kwds ):
        """Invoke state-changing function name on the deployed contract, passing any kwds as
        transaction options.  Waits for, and returns the transaction's successful receipt.

        """
        assert gas, \
            f"You must specify an estimated gas amount to transact {self._name}.{name}, found: {gas}"
        try:
            func		= getattr( self._contract.functions, name )
            tx			= kwds | self._gas_price( gas=gas )
            log.info( f"Transact {self._name}.{name}( {commas( args )} ) w/ tx: {tx!r}" )
            tx_hash		= func( *args ).transact( tx )
            result		= self._w3.eth.wait_for_transaction_receipt( tx_hash )
            assert result.status, \
                f"Transaction {self._name}.{name} was not successful; status == {result.status}"
            success		= True
        except Exception as exc:
            result		= repr( exc )
            success		= False
            raise
        finally:
            log.info( f"Transact {self._name}.{name}( {commas( args )} ) -{'-' if success else 'x'}> {result}" )
        return result

    def __getattr__( self, name ):
        """Assume any unknown attribute (not found in any normal way) .name is assumed to be a call to
        a Contract's API view function.  State-changing functions are called via

            ._transact( name, *args, gas=..., **kwds )

        All positional args are passed to the Contract API function.

        """
        if name.startswith( '_' ):
            raise AttributeError( name )

        def curry( *args, **kwds ):
            return self._call( name, *args, **kwds )
        return curry

    def _update( self ):
        pass

    def _gas_price(
        self,
        gas,				# Estimated Gas required
        max_factor	= None		# How much can Gas price increase before failing Tx?
    ):
        """Establish maxPriorityFeePerGas Gas fees for a transaction, w/ a computed maxFeePerGas for
        the given estimated (max) amount of Gas required by the transaction.

        Gets the latest gas pricing information from the connected network to compute the Priority
        Fee required and the estimated Base Fee per Gas that the next block is likely to consume.

        """
        latest			= self._w3.eth.get_block( 'latest' )
        base_fee		= latest['baseFeePerGas']
        max_priority_fee	= self._w3.eth.max_priority_fee
        gas_info		= dict(
            maxPriorityFeePerGas	= max_priority_fee,     # Priority fee we're willing to pay, in Wei
            maxFeePerGas		= base_fee + max_priority_fee * ( max_factor or 2 ),
        )
        log.info( "Contract Transaction Gas Price: {}".format( json.dumps( {
            k: f"{v / GWEI_WEI:,.4f} Gwei == {v:,} Wei"
            for k,v in gas_info.items()
        }, indent=4 )))

        # Finally, if a transaction gas limit was supplied, we are assuming this is a Gas-using
        # transaction -- pass it through as the starting Gas.
        if gas is not None:
            gas_info.update( gas=gas )
        return gas_info

    def _deploy( self, *args, gas=None, **kwds ):
        """Create an instance of Contract, passing args to the constructor, and kwds to the transaction.

        Once deployed, we can _update.  However, the contract will not be available for subsequent
        calls until the block is accepted.  Returns self, for chaining.

        """
        assert not self._address, \
            f"You already have an instance of Contract {self._name}: {self._address}"
        assert gas, \
            f"You must specify an estimated gas amount to deploy a Contract, found: {gas}"

        cons_hash		= self._contract.constructor( *args ).transact( kwds | self._gas_price( gas=gas ))
        log.info( f"Web3 Construct {self._name} hash: {cons_hash.hex()}" )
        cons_receipt		= self._w3.eth.wait_for_transaction_receipt( cons_hash )
        log.info( f"Web3 Construct {self._name} receipt: {json.dumps( cons_receipt, indent=4, default=str )}" )
        assert cons_receipt.status, \
            f"Deployment of contract was not successful; status == {cons_receipt.status}"

        # The Contract was successfully deployed.  Get its address, and provide an interface to it.
        self._address		= cons_receipt.contractAddress
        self._contract		= self._w3.eth.contract( address=self._address, abi=self._abi )
        log.warning( f"Web3 Construct {self._name} Contract: {len( self._bytecode )} bytes, at Address: {self._address}" )
        log.info( f"Web3 Construct {self._name} Gas Used: {cons_receipt.gasUsed:,} == {cons_receipt.gasUsed * cons_receipt.effectiveGasPrice / GWEI_WEI:,.4f} Gwei" )

        # Wait for the next block to be mined, to ensure contract is available for use.
        beg			= timer()
        while ( block_number := self._w3.eth.block_number ) < cons_receipt.blockNumber:
            time.sleep( 1 )
        log.info( f"Waited {timer()-beg:.2f}s for block {block_number} to be mined, vs. Contract block: {cons_receipt.blockNumber}" )

        self._update()
        return self
