
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

from decimal		import Decimal, Context, ROUND_HALF_EVEN, InvalidOperation, DivisionByZero
from fractions		import Fraction
from typing		import Union

from ..defaults		import QUAD_PRECISION
from ..util		import into_bytes
from .evm		import Revert

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2022 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Quadruple precision fixed-point math, for the reward interest formula.

Values are Decimals in the IEEE-754 decimal128 context (34 significant digits, round-half-even).
On-chain, the ABDKMathQuad library represents the same values as IEEE-754 binary128 bytes16; use
to_bytes16/from_bytes16 to convert to/from that representation.
"""

QUAD				= Context(
    prec	= QUAD_PRECISION,
    rounding	= ROUND_HALF_EVEN,
    Emax	= 6144,
    Emin	= -6143,
    traps	= [ InvalidOperation, DivisionByZero ],
)

# IEEE-754 binary128: 1 sign bit, 15 exponent bits, 112 (+1 implicit) significand bits
BINARY128_BIAS			= 16383
BINARY128_SIGNIFICAND		= 112
BINARY128_EXPONENT_MAX		= 0x7FFF


def from_int( value: int ) -> Decimal:
    """
        >>> from_int( 10 ** 12 )
        Decimal('1000000000000')
    """
    assert isinstance( value, int ), \
        f"Expected an integer, not {value!r}"
    return QUAD.create_decimal( value )


def from_uint( value: int ) -> Decimal:
    if value < 0:
        raise Revert( f"Cannot convert negative {value} from an unsigned integer" )
    return from_int( value )


def into_quad( value: Union[Decimal,int,str,bytes] ) -> Decimal:
    """Accept a Decimal, an int, a numeric str, or an IEEE-754 binary128 bytes16 value."""
    if isinstance( value, Decimal ):
        return QUAD.plus( value )
    if isinstance( value, int ):
        return from_int( value )
    if isinstance( value, bytes ) or ( isinstance( value, str ) and value[:2].lower() == '0x' ):
        return from_bytes16( value )
    return QUAD.create_decimal( value )


def add( x: Decimal, y: Decimal ) -> Decimal:
    return QUAD.add( x, y )


def sub( x: Decimal, y: Decimal ) -> Decimal:
    return QUAD.subtract( x, y )


def mul( x: Decimal, y: Decimal ) -> Decimal:
    return QUAD.multiply( x, y )


def div( x: Decimal, y: Decimal ) -> Decimal:
    """
        >>> div( from_int( 25 ), from_int( 10000 ))
        Decimal('0.0025')
    """
    if y.is_zero():
        raise Revert( f"Division of {x} by zero" )
    return QUAD.divide( x, y )


def pow( x: Decimal, n: int ) -> Decimal:
    """Raise x to the non-negative integer power n, by repeated squaring; each intermediate product
    is rounded to the quad context.

        >>> pow( div( from_int( 10025 ), from_int( 10000 )), 2 )
        Decimal('1.00500625')
        >>> pow( from_int( 3 ), 0 )
        Decimal('1')
    """
    assert isinstance( n, int ) and n >= 0, \
        f"Expected a non-negative integer power, not {n!r}"
    result			= from_int( 1 )
    while n:
        if n & 1:
            result		= mul( result, x )
        x			= mul( x, x )
        n		      >>= 1
    return result


def to_uint( x: Decimal ) -> int:
    """Round x to the nearest unsigned integer (ties to even).

        >>> to_uint( Decimal( '997506234413965.0872817955112219451' ))
        997506234413965
        >>> to_uint( Decimal( '2.5' )), to_uint( Decimal( '3.5' ))
        (2, 4)
    """
    if x.is_signed() and not x.is_zero():
        raise Revert( f"Cannot convert negative {x} to an unsigned integer" )
    return int( x.to_integral_value( rounding=ROUND_HALF_EVEN ))


def to_bytes16( x: Decimal ) -> bytes:
    """Encode x as the nearest IEEE-754 binary128 value (ties to even), as used by ABDKMathQuad.

        >>> to_bytes16( from_int( 1 )).hex()
        '3fff0000000000000000000000000000'
        >>> to_bytes16( Decimal( '0.1' )).hex()
        '3ffb999999999999999999999999999a'
    """
    if x.is_nan():
        return bytes.fromhex( '7fff8000000000000000000000000000' )
    sign			= 1 if x.is_signed() else 0
    if x.is_infinite():
        return (( sign << 127 ) | ( BINARY128_EXPONENT_MAX << BINARY128_SIGNIFICAND )).to_bytes( 16, 'big' )
    f				= abs( Fraction( x ))
    if f == 0:
        return ( sign << 127 ).to_bytes( 16, 'big' )

    # Find e, such that 2^e <= f < 2^(e+1)
    n,d				= f.numerator,f.denominator
    e				= n.bit_length() - d.bit_length()
    if ( n << -e if e < 0 else n ) < ( d << e if e > 0 else d ):
        e		       -= 1

    if e < 1 - BINARY128_BIAS:
        # Subnormal; a rounded significand of 2^112 carries into the smallest normal exponent
        significand		= round( f * 2 ** ( BINARY128_BIAS - 1 + BINARY128_SIGNIFICAND ))
        bits			= significand
    else:
        significand		= round( f * Fraction( 2 ) ** ( BINARY128_SIGNIFICAND - e ))
        if significand >> ( BINARY128_SIGNIFICAND + 1 ):
            significand	      >>= 1
            e		       += 1
        biased			= e + BINARY128_BIAS
        if biased >= BINARY128_EXPONENT_MAX:
            biased,significand	= BINARY128_EXPONENT_MAX,0	# Overflow to infinity
        bits			= ( biased << BINARY128_SIGNIFICAND ) | ( significand & (( 1 << BINARY128_SIGNIFICAND ) - 1 ))
    return (( sign << 127 ) | bits ).to_bytes( 16, 'big' )


def from_bytes16( data: Union[bytes,str] ) -> Decimal:
    """Decode an IEEE-754 binary128 value (eg. as returned by ABDKMathQuad), rounded to the quad
    context.

        >>> from_bytes16( '0x3fff0000000000000000000000000000' )
        Decimal('1')
        >>> from_bytes16( 'c0000000000000000000000000000000' )
        Decimal('-2')
    """
    b				= into_bytes( data )
    assert len( b ) == 16, \
        f"Expected 16 bytes of IEEE-754 binary128, not {len( b )}"
    bits			= int.from_bytes( b, 'big' )
    sign			= bits >> 127
    biased			= ( bits >> BINARY128_SIGNIFICAND ) & BINARY128_EXPONENT_MAX
    significand			= bits & (( 1 << BINARY128_SIGNIFICAND ) - 1 )
    if biased == BINARY128_EXPONENT_MAX:
        return Decimal( 'NaN' ) if significand else Decimal( '-Infinity' if sign else 'Infinity' )
    if biased:
        significand	       |= 1 << BINARY128_SIGNIFICAND
    else:
        biased			= 1
    exponent			= biased - BINARY128_BIAS - BINARY128_SIGNIFICAND
    if exponent >= 0:
        value			= QUAD.create_decimal( significand << exponent )
    else:
        value			= QUAD.divide( Decimal( significand ), Decimal( 1 << -exponent ))
    return QUAD.minus( value ) if sign else value
