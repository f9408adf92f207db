import os

from setuptools import setup

#
# All platforms
#
HERE				= os.path.dirname( os.path.abspath( __file__ ))

install_requires		= open( os.path.join( HERE, "requirements.txt" )).readlines()
tests_require			= open( os.path.join( HERE, "requirements-tests.txt" )).readlines()
extras_require			= {}

# Since setuptools is retiring tests_require, add it as another option
extras_require['tests']		= tests_require

# Must work if setup.py is run in the source distribution context, or from
# within the packaged distribution directory.
__version__			= None
try:
    exec( open( 'yieldfarming/version.py', 'r' ).read() )
except FileNotFoundError:
    exec( open( 'version.py', 'r' ).read() )

console_scripts			= [
    'yieldfarming-cli	= yieldfarming.cli:cli',
]

entry_points			= {
    'console_scripts': 		console_scripts,
}

package_dir			= {
    "yieldfarming":		"./yieldfarming",
    "yieldfarming.cli":		"./yieldfarming/cli",
    "yieldfarming.contracts":	"./yieldfarming/contracts",
    "yieldfarming.ethereum":	"./yieldfarming/ethereum",
}

long_description_content_type	= 'text/markdown'
long_description		= """\
Yield Farming Contract Model and Deployment
===========================================

A transactional Python model of the YieldFarming Ethereum Smart Contract system, and the tooling
to deploy its compiled Solidity counterpart to an Ethereum network.

Users deposit an accepted ERC-20 token into time-locks; once each time-lock expires, the user may
claim newly minted reward tokens, whose quantity is discounted by a compounded daily interest rate
since the deployment of the YieldFarming contract.  The accumulated deposits are distributed to a
mutable list of payees, in proportion to their (transferable) shares.

    $ yieldfarming-cli simulate --deposit 333 --deposit 667
    $ yieldfarming-cli payees 0x...=10 0x...=30
    $ yieldfarming-cli deploy --provider http://localhost:8545 --payee 0x...=100 ...
"""

classifiers			= [
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    "License :: Other/Proprietary License",
    "Programming Language :: Python :: 3",
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Environment :: Console",
    "Topic :: Office/Business :: Financial",
]

setup(
    name			= "yieldfarming",
    version			= __version__,
    install_requires		= install_requires,
    tests_require		= tests_require,
    extras_require		= extras_require,
    packages			= package_dir.keys(),
    package_dir			= package_dir,
    include_package_data	= True,
    zip_safe			= True,
    entry_points		= entry_points,
    author			= "Perry Kundert",
    author_email		= "perry@dominionrnd.com",
    description			= "Ethereum Yield Farming Smart Contract model, simulation and deployment",
    long_description		= long_description,
    long_description_content_type = long_description_content_type,
    license			= "Dual License; GPLv3 and Proprietary",
    keywords			= "Ethereum ERC-20 yield farming payment splitter time-lock Smart Contract",
    classifiers			= classifiers,
    python_requires		= ">=3.9",
)
