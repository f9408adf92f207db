
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


from .evm		import Contract, ZERO_ADDRESS, UINT256_MAX, checksum, external, require, uint256, view
from .ownable		import Ownership

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"


class ERC20( Contract ):
    """An ERC-20 token ledger, w/ the OpenZeppelin 4.x revert reasons."""
    def constructor( self, name, symbol ):
        self._name		= name
        self._symbol		= symbol
        self._total_supply	= 0
        self._balances		= dict()	# { <account>: <balance>, ... }
        self._allowances	= dict()	# { (<owner>, <spender>): <allowance>, ... }

    @view
    def name( self ):
        return self._name

    @view
    def symbol( self ):
        return self._symbol

    @view
    def decimals( self ):
        return 18

    @view
    def totalSupply( self ):
        return self._total_supply

    @view
    def balanceOf( self, account ):
        return self._balances.get( checksum( account ), 0 )

    @view
    def allowance( self, owner, spender ):
        return self._allowance( owner, spender )

    @external
    def transfer( self, to, amount ):
        self._transfer( self._sender, to, amount )
        return True

    @external
    def approve( self, spender, amount ):
        self._approve( self._sender, spender, amount )
        return True

    @external
    def transferFrom( self, owner, to, amount ):
        self._spend_allowance( owner, self._sender, amount )
        self._transfer( owner, to, amount )
        return True

    @external
    def increaseAllowance( self, spender, added ):
        owner			= self._sender
        self._approve( owner, spender, self._allowance( owner, spender ) + uint256( added ))
        return True

    @external
    def decreaseAllowance( self, spender, subtracted ):
        owner			= self._sender
        current			= self._allowance( owner, spender )
        require( current >= uint256( subtracted ), "ERC20: decreased allowance below zero" )
        self._approve( owner, spender, current - subtracted )
        return True

    def _allowance( self, owner, spender ):
        return self._allowances.get( (checksum( owner ), checksum( spender )), 0 )

    def _transfer( self, owner, to, amount ):
        require( owner != ZERO_ADDRESS, "ERC20: transfer from the zero address" )
        require( to != ZERO_ADDRESS, "ERC20: transfer to the zero address" )
        owner,to		= checksum( owner ),checksum( to )
        balance			= self._balances.get( owner, 0 )
        require( balance >= uint256( amount ), "ERC20: transfer amount exceeds balance" )
        self._balances[owner]	= balance - amount
        self._balances[to]	= self._balances.get( to, 0 ) + amount
        self._emit( 'Transfer', owner, to, amount )

    def _mint( self, account, amount ):
        require( account != ZERO_ADDRESS, "ERC20: mint to the zero address" )
        account			= checksum( account )
        require( self._total_supply + uint256( amount ) <= UINT256_MAX, "ERC20: total supply overflow" )
        self._total_supply     += amount
        self._balances[account]	= self._balances.get( account, 0 ) + amount
        self._emit( 'Transfer', ZERO_ADDRESS, account, amount )

    def _burn( self, account, amount ):
        require( account != ZERO_ADDRESS, "ERC20: burn from the zero address" )
        account			= checksum( account )
        balance			= self._balances.get( account, 0 )
        require( balance >= uint256( amount ), "ERC20: burn amount exceeds balance" )
        self._balances[account]	= balance - amount
        self._total_supply     -= amount
        self._emit( 'Transfer', account, ZERO_ADDRESS, amount )

    def _approve( self, owner, spender, amount ):
        require( owner != ZERO_ADDRESS, "ERC20: approve from the zero address" )
        require( spender != ZERO_ADDRESS, "ERC20: approve to the zero address" )
        owner,spender		= checksum( owner ),checksum( spender )
        self._allowances[owner,spender] = uint256( amount )
        self._emit( 'Approval', owner, spender, amount )

    def _spend_allowance( self, owner, spender, amount ):
        current			= self._allowance( owner, spender )
        if current != UINT256_MAX:
            require( current >= uint256( amount ), "ERC20: insufficient allowance" )
            self._approve( owner, spender, current - amount )


class ERC20Mock( ERC20 ):
    """An ERC-20 w/ an initial balance, and unrestricted mint and burn; for tests."""
    def constructor( self, name, symbol, initial_account, initial_balance ):
        super().constructor( name, symbol )
        self._mint( initial_account, initial_balance )

    @external
    def mint( self, account, amount ):
        self._mint( account, amount )

    @external
    def burn( self, account, amount ):
        self._burn( account, amount )


class YieldFarmingToken( ERC20 ):
    """The reward token.  Only its owner (the YieldFarming Contract that created it) may mint;
    any holder may burn their own tokens, or an approved spender may burnFrom them."""
    def constructor( self, name, symbol ):
        super().constructor( name, symbol )
        self._ownership		= Ownership( self._sender )
        self._emit( 'OwnershipTransferred', ZERO_ADDRESS, self._sender )

    @view
    def owner( self ):
        return self._ownership.owner

    @external
    def mint( self, to, amount ):
        self._ownership.check( self._sender )
        self._mint( to, amount )

    @external
    def burn( self, amount ):
        self._burn( self._sender, amount )

    @external
    def burnFrom( self, account, amount ):
        self._spend_allowance( account, self._sender, amount )
        self._burn( account, amount )
