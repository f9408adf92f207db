import json
import os

import pytest

from web3		import Web3, HTTPProvider, IPCProvider, LegacyWebSocketProvider

from ..records		import RecordList
from .contract		import Contract, link_bytecode, load_artifact, w3_provider
from .deploy		import deploy


def test_link_bytecode():
    address			= '0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf'
    placeholder			= '__$' + 'ab' * 17 + '$__'
    assert len( placeholder ) == 40
    bytecode			= '0x6080' + placeholder + '6000' + placeholder
    refs			= {
        'contracts/abdk-libraries-solidity/ABDKMathQuad.sol': {
            'ABDKMathQuad': [
                { 'start': 2, 'length': 20 },
                { 'start': 24, 'length': 20 },
            ],
        },
    }
    linked			= link_bytecode( bytecode, refs, dict( ABDKMathQuad=address ))
    assert linked == '0x6080' + address[2:].lower() + '6000' + address[2:].lower()
    assert link_bytecode( bytecode, None, None ) == bytecode

    with pytest.raises( AssertionError ):
        link_bytecode( bytecode, refs, dict() )


def test_load_artifact( tmp_path ):
    artifact			= dict(
        contractName	= 'Timestamp',
        sourceName	= 'contracts/Timestamp.sol',
        abi		= [{
            "inputs": [], "name": "getTimestamp",
            "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
            "stateMutability": "view", "type": "function",
        }],
        bytecode	= '0x6080',
        linkReferences	= {},
    )
    path			= tmp_path / 'contracts' / 'Timestamp.sol'
    path.mkdir( parents=True )
    ( path / 'Timestamp.json' ).write_text( json.dumps( artifact ))
    assert load_artifact( 'Timestamp', tmp_path ) == artifact
    with pytest.raises( FileNotFoundError ):
        load_artifact( 'YieldFarming', tmp_path )

    # A Contract loads its ABI and bytecode from its artifact, ready to deploy
    timestamp			= Contract( Web3.EthereumTesterProvider(), name='Timestamp', artifacts=tmp_path )
    assert timestamp._abi == artifact['abi']
    assert timestamp._bytecode == '0x6080'
    assert timestamp._address is None

    # State-changing transactions require an estimated gas limit
    with pytest.raises( AssertionError, match="estimated gas amount" ):
        timestamp._transact( 'returns', 5 )
    with pytest.raises( AssertionError, match="estimated gas amount" ):
        timestamp._deploy()


@pytest.mark.parametrize( "url, provider", [
    ( "http://localhost:8545",		HTTPProvider ),
    ( "https://polygon-rpc.com",	HTTPProvider ),
    ( "ws://localhost:8546",		LegacyWebSocketProvider ),
    ( "/tmp/geth.ipc",			IPCProvider ),
])
def test_w3_provider( url, provider ):
    assert isinstance( w3_provider( url ), provider )
    assert w3_provider( url ) is w3_provider( url )


#
# Deploy the complete YieldFarming system to the Web3 tester.  Requires the Hardhat artifacts of the
# Solidity contracts (including the ERC20Mock); eg. after 'npx hardhat compile':
#
#     YIELDFARMING_ARTIFACTS=.../artifacts make test
#
artifacts			= os.getenv( 'YIELDFARMING_ARTIFACTS' )


@pytest.mark.skipif( not artifacts,
                     reason="Specify YIELDFARMING_ARTIFACTS=<dir> to deploy YieldFarming to the Web3 tester" )
def test_deploy_web3_tester():
    provider			= Web3.EthereumTesterProvider()
    first,second,third,*_	= Web3( provider ).eth.accounts
    accepted			= Contract( provider, agent=first, name='ERC20Mock', artifacts=artifacts )._deploy(
        'ERC20Mock name', 'ERC20Mock symbol', first, 1000, gas=2000000 )
    payees			= RecordList( [ first, second, third ], [ 100, 100, 100 ] )
    deployed			= deploy(
        provider, first,
        accepted_token		= accepted._address,
        payees			= payees,
        artifacts		= artifacts,
    )
    yield_farming		= deployed['YieldFarming']
    assert yield_farming._payees.addresses() == payees.addresses()
    assert yield_farming.totalShares() == 300
    assert yield_farming.owner() == first

    # The owner administers the payees; the payees are recovered from the Contract after each
    fourth			= Web3( provider ).eth.accounts[3]
    receipt			= yield_farming._add_payee( fourth, 50 )
    assert receipt.status
    assert yield_farming._payees.addresses() == payees.addresses() + [ fourth ]
    assert yield_farming.totalShares() == 350
    yield_farming._update_payee( second, 25 )
    assert yield_farming._payees.shares_list() == [ 100, 25, 100, 50 ]
    yield_farming._remove_payee( first )
    assert yield_farming._payees.addresses() == [ second, third, fourth ]
    assert yield_farming.totalShares() == 175
