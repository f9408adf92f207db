import logging

import pytest

from ..records		import RecordList
from .			import quad
from .calculator	import RewardCalculator
from .evm		import Machine, Revert, ZERO_ADDRESS
from .farming		import YieldFarming
from .scenario		import Constants, mocked_deploy, raw_deploy
from .timestamp		import Timestamp
from .token		import ERC20Mock

log				= logging.getLogger( 'farming_test' )


#
# Payment splitter construction, w/ a wall-clock Timestamp
#
def undeployed():
    machine			= Machine( accounts=4 )
    first			= machine.accounts[0]
    timestamp			= machine.deploy( Timestamp, sender=first )
    accepted_token		= machine.deploy( ERC20Mock, 'ERC20Mock name', 'ERC20Mock symbol', first, 1000 )
    payees			= RecordList( machine.accounts[:3], [ 100, 100, 100 ] )
    return machine, timestamp, accepted_token, payees


def construct( machine, timestamp, accepted_token, payees ):
    return raw_deploy( machine, timestamp, accepted_token, payees, machine.accounts, Constants() )


def test_shares_0():
    machine,timestamp,accepted_token,payees = undeployed()
    payees.records[1].shares	= 0
    with pytest.raises( Revert, match="PaymentSplitter: shares are 0" ):
        construct( machine, timestamp, accepted_token, payees )


def test_account_is_the_zero_address():
    machine,timestamp,accepted_token,payees = undeployed()
    payees.records[1].address	= ZERO_ADDRESS
    with pytest.raises( Revert, match="PaymentSplitter: account is the zero address" ):
        construct( machine, timestamp, accepted_token, payees )


def test_account_is_already_payee():
    machine,timestamp,accepted_token,payees = undeployed()
    payees.records[1].address	= payees.records[0].address
    with pytest.raises( Revert, match="PaymentSplitter: account is already payee" ):
        construct( machine, timestamp, accepted_token, payees )


def test_payees_shares_length_mismatch():
    machine,timestamp,accepted_token,payees = undeployed()
    calculator			= machine.deploy( RewardCalculator )
    with pytest.raises( Revert, match="PaymentSplitter: payees and shares length mismatch" ):
        machine.deploy(
            YieldFarming, timestamp.address, accepted_token.address, calculator.address, 'name', 'symbol',
            quad.from_int( 0 ), quad.from_int( 1 ), 1,
            payees.addresses()[:-1], payees.shares_list(),
        )


def test_no_payees():
    machine,timestamp,accepted_token,_ = undeployed()
    with pytest.raises( Revert, match="PaymentSplitter: no payees" ):
        construct( machine, timestamp, accepted_token, RecordList( [], [] ))
    assert not any( isinstance( c, YieldFarming ) for c in machine.contracts.values() )


#
# With multiplier 1E12
#
@pytest.fixture
def deploy():
    return mocked_deploy()


@pytest.fixture
def deposited( deploy ):
    """One deposit of the whole initial balance, one day after deployment"""
    deposit			= deploy.constants.initial_balance
    deploy.accepted_token.increaseAllowance( deploy.yield_farming.address, deposit )
    deploy.timestamp.returns( deploy.constants.deposit_timestamp )
    deploy.yield_farming.connect( deploy.first ).deposit( deposit )
    return deploy


@pytest.fixture
def unlocked( deposited ):
    deposited.timestamp.returns( deposited.constants.unlock_timestamp )
    return deposited


@pytest.fixture
def released( unlocked ):
    unlocked.yield_farming.releaseTokens( 0 )
    return unlocked


def test_deployment( deploy ):
    yf				= deploy.yield_farming
    assert yf.owner() == deploy.first
    assert yf.acceptedToken() == deploy.accepted_token.address
    assert yf.lockTime() == 1
    assert yf.startTime() == deploy.constants.deploy_timestamp
    assert quad.from_bytes16( yf.multiplier() ) == 10 ** 12
    assert yf.payees() == [ deploy.first, deploy.second, deploy.third ]
    assert deploy.yield_farming_token.owner() == yf.address
    assert deploy.yield_farming_token.name() == deploy.constants.token_name
    assert deploy.yield_farming_token.symbol() == deploy.constants.token_symbol
    assert deploy.payees.total_shares() == yf.totalShares() == 300


@pytest.mark.parametrize( "destinatary", [ 'third', 'fourth' ] )
def test_shares_transfer( deploy, destinatary ):
    transferrer			= deploy.second
    to				= getattr( deploy, destinatary )
    yf				= deploy.yield_farming
    receipt			= yf.connect( transferrer ).transferShares( to, 1 )
    assert receipt.emitted( 'SharesTransferred', transferrer, to, 1 )
    assert receipt.emitted( 'PayeeAdded', to, 1 ) == ( destinatary == 'fourth' )
    assert yf.shares( transferrer ) == 99
    assert yf.shares( to ) == ( 101 if destinatary == 'third' else 1 )
    assert yf.totalShares() == 300


def test_shares_transfer_reverts( deploy ):
    yf				= deploy.yield_farming
    with pytest.raises( Revert, match="PaymentSplitter: transferrer not a payee" ):
        yf.connect( deploy.fourth ).transferShares( deploy.third, 1 )
    with pytest.raises( Revert, match="PaymentSplitter: not enough shares balance" ):
        yf.connect( deploy.second ).transferShares( deploy.third, 101 )
    assert yf.shares( deploy.second ) == 100


def test_shares_transfer_all( deploy ):
    yf				= deploy.yield_farming
    receipt			= yf.connect( deploy.second ).transferShares( deploy.fourth, 100 )
    assert receipt.emitted( 'PayeeRemoved', deploy.second )
    assert yf.payees() == [ deploy.first, deploy.third, deploy.fourth ]


def test_ownership_transfer( deploy ):
    yf				= deploy.yield_farming
    assert yf.owner() == deploy.first
    receipt			= yf.transferOwnership( deploy.second )
    assert receipt.emitted( 'OwnershipTransferred', deploy.first, deploy.second )
    assert yf.owner() == deploy.second
    with pytest.raises( Revert, match="Ownable: caller is not the owner" ):
        yf.transferOwnership( deploy.first )
    with pytest.raises( Revert, match="Ownable: new owner is the zero address" ):
        yf.connect( deploy.second ).transferOwnership( ZERO_ADDRESS )
    receipt			= yf.connect( deploy.second ).renounceOwnership()
    assert receipt.emitted( 'OwnershipTransferred', deploy.second, ZERO_ADDRESS )
    with pytest.raises( Revert, match="Ownable: caller is not the owner" ):
        yf.connect( deploy.second ).addPayee( deploy.fourth, 1 )


def test_add_payee( deploy ):
    yf				= deploy.yield_farming
    assert yf.addPayee( deploy.fourth, 50 ).emitted( 'PayeeAdded', deploy.fourth, 50 )
    assert yf.payee( 3 ) == deploy.fourth
    assert yf.totalShares() == 350
    with pytest.raises( Revert, match="PaymentSplitter: account is already payee" ):
        yf.addPayee( deploy.fourth, 50 )
    with pytest.raises( Revert, match="Ownable: caller is not the owner" ):
        yf.connect( deploy.second ).addPayee( deploy.fourth, 50 )


def test_deposit( deploy ):
    deposit			= deploy.constants.initial_balance
    deploy.accepted_token.increaseAllowance( deploy.yield_farming.address, deposit )
    receipt			= deploy.yield_farming.deposit( deposit )
    assert receipt.emitted( 'AcceptedTokenDeposit', deploy.first, deposit )
    assert deploy.accepted_token.balanceOf( deploy.yield_farming.address ) == deposit
    assert deploy.accepted_token.balanceOf( deploy.first ) == 0


def test_deposit_reverts( deploy ):
    yf				= deploy.yield_farming
    with pytest.raises( Revert, match="ERC20: insufficient allowance" ):
        yf.deposit( 1 )
    deploy.accepted_token.increaseAllowance( yf.address, 2000 )
    with pytest.raises( Revert, match="ERC20: transfer amount exceeds balance" ):
        yf.deposit( 1001 )
    assert deploy.accepted_token.balanceOf( deploy.first ) == 1000


def test_deposit_without_lock_time():
    """With no lock time, each TokenTimeLock's release time is not after its creation; the deposit's
    transfer is undone."""
    deploy			= mocked_deploy( constants=Constants( lock_time=0 ))
    yf				= deploy.yield_farming
    deploy.accepted_token.increaseAllowance( yf.address, 1 )
    with pytest.raises( Revert, match="TokenTimeLock: release time is before current time" ):
        yf.deposit( 1 )
    assert yf.getMyTokenTimeLocks() == []
    assert deploy.accepted_token.balanceOf( deploy.first ) == 1000
    assert deploy.accepted_token.allowance( deploy.first, yf.address ) == 1


def test_release_without_deposit( deploy ):
    with pytest.raises( Revert, match="Index out of bounds!" ):
        deploy.yield_farming.releaseTokens( 0 )
    with pytest.raises( Revert, match="Index out of bounds!" ):
        deploy.yield_farming.getMyTokenTimeLock( 0 )


def test_release_before_unlock( deposited ):
    with pytest.raises( Revert, match="TokenTimeLock: current time is before release time" ):
        deposited.yield_farming.releaseTokens( 0 )


def test_release_at_release_time( deposited ):
    """Release is rejected until the clock reaches the releaseTime, and succeeds exactly then."""
    yf				= deposited.yield_farming
    release_time		= deposited.constants.deposit_timestamp + deposited.constants.lock_time
    assert deposited.machine.at( yf.getMyTokenTimeLock( 0 )).releaseTime() == release_time
    deposited.timestamp.returns( release_time - 1 )
    with pytest.raises( Revert, match="TokenTimeLock: current time is before release time" ):
        yf.releaseTokens( 0 )
    deposited.timestamp.returns( release_time )
    assert yf.releaseTokens( 0 ).emitted( 'YieldFarmingTokenRelease', deposited.first, 997506234413965 )


def test_negative_amounts( released ):
    """Negative amounts cannot burn reward tokens into existence, nor corrupt the payee shares."""
    yf				= released.yield_farming
    token			= released.yield_farming_token
    supply			= token.totalSupply()
    with pytest.raises( Revert, match="Invalid uint256 value" ):
        yf.burn( -10 ** 18 )
    with pytest.raises( Revert, match="Invalid uint256 value" ):
        yf.updatePayee( released.third, -50 )
    with pytest.raises( Revert, match="Invalid uint256 value" ):
        yf.connect( released.second ).transferShares( released.first, -1 )
    assert token.totalSupply() == supply
    assert token.balanceOf( released.first ) == supply
    assert yf.totalShares() == sum( yf.shares( p ) for p in yf.payees() ) == 300
    assert all( yf.shares( p ) > 0 for p in yf.payees() )


def test_token_time_locks( unlocked ):
    yf				= unlocked.yield_farming
    locks			= yf.getMyTokenTimeLocks()
    assert len( locks ) == 1
    assert yf.getMyTokenTimeLock( 0 ) == locks[0]
    assert yf.connect( unlocked.second ).getMyTokenTimeLocks() == []
    with pytest.raises( Revert, match="Index out of bounds!" ):
        yf.getMyTokenTimeLock( 1 )
    for address in locks:
        lock			= unlocked.machine.at( address )
        assert lock.beneficiary() == unlocked.first
        assert lock.principal() == 1000
        assert lock.owner() == yf.address
        assert lock.releaseTime() == unlocked.constants.deposit_timestamp + 1
        with pytest.raises( Revert, match="Ownable: caller is not the owner" ):
            lock.release()


def test_release_tokens( unlocked ):
    yf				= unlocked.yield_farming
    receipt			= yf.releaseTokens( 0 )
    assert receipt.emitted( 'YieldFarmingTokenRelease', unlocked.first, 997506234413965 )
    assert unlocked.yield_farming_token.balanceOf( unlocked.first ) == 997506234413965
    assert unlocked.machine.at( yf.getMyTokenTimeLock( 0 )).released()
    with pytest.raises( Revert, match="TokenTimeLock: no tokens to release" ):
        yf.releaseTokens( 0 )
    assert unlocked.yield_farming_token.totalSupply() == 997506234413965


def test_burn( released ):
    yf				= released.yield_farming
    token			= released.yield_farming_token
    with pytest.raises( Revert, match="ERC20: insufficient allowance" ):
        yf.burn( 1 )
    token.increaseAllowance( yf.address, 1 )
    receipt			= yf.burn( 1 )
    assert receipt.emitted( 'YieldFarmingTokenBurn', released.first, 1 )
    assert token.balanceOf( released.first ) == 997506234413964
    token.connect( released.second ).increaseAllowance( yf.address, 1 )
    with pytest.raises( Revert, match="ERC20: burn amount exceeds balance" ):
        yf.connect( released.second ).burn( 1 )


def test_payees_read( released ):
    yf				= released.yield_farming
    assert [ yf.payee( i ) for i in range( 3 ) ] == [ released.first, released.second, released.third ]
    with pytest.raises( Revert, match="PaymentSplitter: index out of bounds" ):
        yf.payee( 3 )
    with pytest.raises( Revert, match="PaymentSplitter: account is not a payee" ):
        yf.release( released.fourth )


def test_update_payee( released ):
    yf				= released.yield_farming
    with pytest.raises( Revert, match="PaymentSplitter: not a payee" ):
        yf.updatePayee( released.fourth, 0 )
    with pytest.raises( Revert, match="PaymentSplitter: account already has that many shares" ):
        yf.updatePayee( released.third, 100 )
    with pytest.raises( Revert, match="Ownable: caller is not the owner" ):
        yf.connect( released.second ).updatePayee( released.first, 105 )
    assert yf.updatePayee( released.third, 110 ).emitted( 'PayeeUpdated', released.third, 10 )
    assert yf.shares( released.third ) == 110
    assert yf.updatePayee( released.third, 90 ).emitted( 'PayeeUpdated', released.third, -20 )
    assert yf.shares( released.third ) == 90
    assert yf.updatePayee( released.third, 0 ).emitted( 'PayeeRemoved', released.third )
    assert yf.totalShares() == 200


def test_remove_payee( released ):
    yf				= released.yield_farming
    with pytest.raises( Revert, match="Ownable: caller is not the owner" ):
        yf.connect( released.second ).removePayee( released.third )
    with pytest.raises( Revert, match="PaymentSplitter: account not found" ):
        yf.removePayee( released.fourth )
    assert yf.removePayee( released.third ).emitted( 'PayeeRemoved', released.third )
    yf.removePayee( released.second )
    yf.removePayee( released.first )
    assert yf.payees() == []
    with pytest.raises( Revert, match="PaymentSplitter: empty payee list" ):
        yf.removePayee( ZERO_ADDRESS )


def test_release_payment( released ):
    yf				= released.yield_farming
    expected			= released.constants.initial_balance * 100 // released.payees.total_shares()
    assert expected == 333
    receipt			= yf.release( released.first )
    assert receipt.emitted( 'PaymentReleased', released.first, expected )
    assert receipt.emitted( 'Transfer', yf.address, released.first, expected )
    assert yf.totalReleased() == expected
    assert yf.released( released.first ) == expected
    assert released.accepted_token.balanceOf( released.first ) == expected
    assert yf.totalShares() == 300

    yf.release( released.second )
    with pytest.raises( Revert, match="PaymentSplitter: account is not due payment" ):
        yf.release( released.second )


def test_two_deposits( deploy ):
    yf				= deploy.yield_farming
    total			= deploy.constants.initial_balance
    first			= round( total / 3 )
    deploy.accepted_token.increaseAllowance( yf.address, total )
    deploy.timestamp.returns( deploy.constants.deposit_timestamp )
    yf.connect( deploy.first ).deposit( first )
    yf.connect( deploy.first ).deposit( total - first )
    deploy.timestamp.returns( deploy.constants.unlock_timestamp )

    locks			= yf.getMyTokenTimeLocks()
    assert [ deploy.machine.at( a ).beneficiary() for a in locks ] == [ deploy.first, deploy.first ]
    # Each TokenTimeLock is released independently, in any order
    assert yf.releaseTokens( 1 ).emitted( 'YieldFarmingTokenRelease', deploy.first, 665336658354115 )
    assert yf.releaseTokens( 0 ).emitted( 'YieldFarmingTokenRelease', deploy.first, 332169576059850 )


def test_later_deposits_earn_less( deploy ):
    yf				= deploy.yield_farming
    deploy.accepted_token.increaseAllowance( yf.address, 1000 )
    rewards			= []
    for day in range( 4 ):
        deploy.timestamp.returns( deploy.constants.deploy_timestamp + day * 86400 )
        yf.deposit( 250 )
        rewards.append( deploy.machine.at( yf.getMyTokenTimeLock( day )).amount() )
    assert rewards[0] == 250 * 10 ** 12
    assert rewards == sorted( rewards, reverse=True )
    assert len( set( rewards )) == 4


def test_mocked_deploy_preserves_constants():
    constants			= Constants()
    deploy			= mocked_deploy( 0, constants=constants )
    assert constants.multiplier == 10 ** 12
    assert deploy.constants.multiplier == 0
    assert deploy.constants is not constants


def test_multiplier_0():
    deploy			= mocked_deploy( 0 )
    deposit			= deploy.constants.initial_balance
    deploy.accepted_token.increaseAllowance( deploy.yield_farming.address, deposit )
    deploy.yield_farming.connect( deploy.first ).deposit( deposit )
    deploy.timestamp.returns( deploy.constants.deposit_timestamp )
    with pytest.raises( Revert, match="TokenTimeLock: no tokens to release" ):
        deploy.yield_farming.releaseTokens( 0 )


def test_revert_changes_nothing( unlocked ):
    """A reverted call leaves every balance, share and time-lock unchanged, and records no Events."""
    machine			= unlocked.machine
    yf				= unlocked.yield_farming
    second			= unlocked.second
    # Allowances that are spent by a burn or deposit, before it fails
    unlocked.yield_farming_token.connect( second ).increaseAllowance( yf.address, 1 )
    unlocked.accepted_token.connect( second ).increaseAllowance( yf.address, 5 )

    before			= {
        address: contract._state()
        for address,contract in machine.contracts.items()
    }
    nonces			= dict( machine.nonces )
    logs			= list( machine.logs )
    for call in (
        lambda: yf.releaseTokens( 1 ),
        lambda: yf.connect( unlocked.fourth ).transferShares( unlocked.first, 1 ),
        lambda: yf.connect( second ).transferShares( unlocked.first, 101 ),
        lambda: yf.connect( second ).removePayee( unlocked.first ),
        lambda: yf.release( unlocked.fourth ),
        lambda: yf.connect( second ).burn( 1 ),
        lambda: yf.connect( second ).deposit( 5 ),
        lambda: yf.burn( -10 ** 18 ),
        lambda: yf.deposit( -1 ),
        lambda: yf.updatePayee( unlocked.third, -50 ),
        lambda: yf.connect( second ).transferShares( unlocked.first, -100 ),
        lambda: unlocked.accepted_token.connect( second ).transfer( unlocked.first, -500 ),
    ):
        with pytest.raises( Revert ):
            call()
    after			= {
        address: contract._state()
        for address,contract in machine.contracts.items()
    }
    assert after == before
    assert dict( machine.nonces ) == nonces
    assert machine.logs == logs
