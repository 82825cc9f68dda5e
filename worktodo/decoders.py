# -*- coding: utf-8 -*-
"""Decoders for the value fields of each worktodo line type.

Every decoder consumes the fields left to right through a FieldCursor and
fills in the Entry. Any failure raises LineRejected, which skips that line
only. Decoders return a list of (reason, message) warnings for problems that
do not reject the line.

    Test=[AID,]exponent,how_far_factored,has_been_pminus1ed
    DoubleCheck=[AID,]exponent,how_far_factored,has_been_pminus1ed
    PRP[DC]=[AID,]k,b,n,c[,how_far_factored,tests_saved[,base,residue_type]][,"factors"]
    PFactor=[AID,]{exponent|1,k,b,n,c},how_far_factored,tests_saved,B1,B2[,"factors"]
    Pminus1=[AID,]k,b,n,c,B1,B2,how_far_factored[,B2_start][,"factors"]
"""

################################################################################
#                                                                              #
#   (C) 2017-2024 by Daniel Connelly and Teal Dulcet.                          #
#                                                                              #
#  This program is free software; you can redistribute it and/or modify it     #
#  under the terms of the GNU General Public License as published by the       #
#  Free Software Foundation; either version 2 of the License, or (at your      #
#  option) any later version.                                                  #
#                                                                              #
#  This program is distributed in the hope that it will be useful, but WITHOUT #
#  ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or       #
#  FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License for   #
#  more details.                                                               #
#                                                                              #
#  You should have received a copy of the GNU General Public License along     #
#  with this program; see the file GPL.txt.  If not, you may view one at       #
#  http://www.fsf.org/licenses/licenses.html, or obtain one by writing to the  #
#  Free Software Foundation, Inc., 59 Temple Place - Suite 330, Boston, MA     #
#  02111-1307, USA.                                                            #
#                                                                              #
################################################################################

import logging
import re
from decimal import Decimal

from .cofactor import FactorCheckError
from .entry import RESIDUE_TYPE_COFACTOR, exponent_to_str
from .tokenizer import FieldCursor, parse_factor_list
from .validation import REASON, LineRejected

INT_RE = re.compile(r"^[-+]?[0-9]+$")
NUMBER_RE = re.compile(r"^[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?$")


def parse_int(field, what, unsigned=False):
    field = field.strip()
    if not INT_RE.match(field) or (unsigned and field.startswith("-")):
        raise LineRejected(REASON.INVALID_NUMBER, "invalid {0}: {1!r}".format(what, field))
    return int(field)


def parse_bound(field, what):
    """Parses a possibly fractional bound like "1.3" or "1e6", truncated to an integer."""
    field = field.strip()
    if not NUMBER_RE.match(field):
        raise LineRejected(REASON.INVALID_NUMBER, "invalid {0}: {1!r}".format(what, field))
    return int(Decimal(field))


def decode_exponent(entry, cursor):
    entry.k, entry.b, entry.c = 1, 2, -1
    entry.n = parse_int(cursor.take_one("exponent"), "exponent", unsigned=True)
    if entry.n < 1:
        raise LineRejected(REASON.INVALID_CANDIDATE, "invalid exponent {0}".format(entry.n))


def decode_kbnc(entry, cursor):
    k, b, n, c = cursor.take(4, "k,b,n,c")
    entry.k = parse_int(k, "k", unsigned=True)
    entry.b = parse_int(b, "b", unsigned=True)
    entry.n = parse_int(n, "n", unsigned=True)
    entry.c = parse_int(c, "c")
    if entry.k < 1 or entry.b < 2 or entry.n < 1:
        raise LineRejected(
            REASON.INVALID_CANDIDATE, "invalid k,b,n,c values: {0.k},{0.b},{0.n},{0.c}".format(entry)
        )


def decode_exponent_or_kbnc(entry, cursor):
    """Reads a full k,b,n,c when the first field is "1" and they decode, else a bare exponent."""
    if cursor.peek() == "1":
        trial = FieldCursor(cursor.remaining)
        try:
            decode_kbnc(entry, trial)
        except LineRejected as e:
            logging.debug("Not a k,b,n,c candidate ({0}), reading an exponent".format(e.message))
        else:
            cursor.fields = trial.fields
            return
    decode_exponent(entry, cursor)


def decode_bounds(entry, cursor):
    B1, B2 = cursor.take(2, "B1,B2")
    entry.factoring.B1 = parse_int(B1, "B1", unsigned=True)
    entry.factoring.B2 = parse_bound(B2, "B2")
    if entry.factoring.B1 < 1 or entry.factoring.B2 < entry.factoring.B1:
        raise LineRejected(REASON.INVALID_BOUNDS, "invalid B1,B2 values: {0.B1},{0.B2}".format(entry.factoring))


def decode_optional_factors(entry, cursor):
    if cursor:
        factors = parse_factor_list(cursor.remaining[-1])
        if factors is not None:
            cursor.pop_last("known factors")
            entry.known_factors = factors


def require_mersenne(entry):
    if not entry.is_mersenne:
        raise LineRejected(
            REASON.UNSUPPORTED_FORM,
            "unsupported {0} line for {1} (only Mersenne supported)".format(entry.key, exponent_to_str(entry)),
        )


def decode_ll(entry, cursor, policy):
    decode_exponent(entry, cursor)
    cursor.skip(1, "how_far_factored")
    cursor.skip(1, "has_been_pminus1ed")
    return []


def decode_pfactor(entry, cursor, policy):
    decode_exponent_or_kbnc(entry, cursor)
    require_mersenne(entry)
    cursor.skip(1, "how_far_factored")
    cursor.skip(1, "tests_saved")
    decode_bounds(entry, cursor)
    decode_optional_factors(entry, cursor)
    return []


def decode_pminus1(entry, cursor, policy):
    decode_kbnc(entry, cursor)
    require_mersenne(entry)
    decode_bounds(entry, cursor)
    cursor.skip(1, "how_far_factored")
    # Anything before the factors (B2_start) is not used
    decode_optional_factors(entry, cursor)
    return []


def check_known_factors(entry, policy):
    try:
        failed = policy.check_factors(entry.n, entry.known_factors)
    except FactorCheckError as e:
        raise LineRejected(REASON.FACTOR_CHECK_UNAVAILABLE, "could not check known factors: {0}".format(e))
    if failed:
        raise LineRejected(
            REASON.FACTOR_CHECK_FAILED,
            "invalid known factors for {0}: {1}".format(exponent_to_str(entry), ", ".join(failed)),
        )


def decode_prp(entry, cursor, policy):
    warnings = []
    decode_kbnc(entry, cursor)
    if len(cursor) in {1, 3, 5}:
        # An unquoted last field is left for the fields below
        decode_optional_factors(entry, cursor)
        if entry.known_factors and entry.is_mersenne:
            check_known_factors(entry, policy)
            entry.primality.residue_type = RESIDUE_TYPE_COFACTOR
    if not entry.is_mersenne and not entry.is_wagstaff:
        raise LineRejected(
            REASON.UNSUPPORTED_FORM,
            "unsupported PRP line for {0} (only Mersenne and Wagstaff supported)".format(exponent_to_str(entry)),
        )
    if len(cursor) >= 2:
        cursor.skip(2, "how_far_factored,tests_saved")
    if len(cursor) >= 2:
        base, residue_type = cursor.take(2, "base,residue_type")
        base = parse_int(base, "PRP base", unsigned=True)
        residue_type = parse_int(residue_type, "residue type", unsigned=True)
        if base < 2:
            raise LineRejected(REASON.INVALID_BASE, "invalid PRP base {0} < 2".format(base))
        if base not in policy.prp_bases:
            raise LineRejected(
                REASON.UNSUPPORTED_BASE,
                "PRP base {0} is not supported (supported: {1})".format(base, ", ".join(map(str, sorted(policy.prp_bases)))),
            )
        if residue_type != entry.primality.residue_type:
            warnings.append((
                REASON.RESIDUE_TYPE_MISMATCH,
                "PRP line residue type {0} does not match expected {1}".format(residue_type, entry.primality.residue_type),
            ))
    return warnings


DECODERS = {
    "Test": decode_ll,
    "DoubleCheck": decode_ll,
    "PRP": decode_prp,
    "PRPDC": decode_prp,
    "PFactor": decode_pfactor,
    "Pminus1": decode_pminus1,
}
