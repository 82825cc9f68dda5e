# -*- coding: utf-8 -*-
"""Diagnostics, rejection reasons and the validation policy used while parsing."""

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
from collections import namedtuple

from .cofactor import LocalFactorValidator


class REASON:
    # Accepted
    LOADED = "loaded"
    RESIDUE_TYPE_MISMATCH = "residue-type-mismatch"  # non-fatal
    # Line rejected
    MALFORMED_LINE = "malformed-line"
    UNSUPPORTED_TYPE = "unsupported-type"
    MISSING_FIELD = "missing-field"
    INVALID_NUMBER = "invalid-number"
    INVALID_CANDIDATE = "invalid-candidate"
    UNSUPPORTED_FORM = "unsupported-form"
    INVALID_BOUNDS = "invalid-bounds"
    FACTOR_CHECK_FAILED = "factor-check-failed"
    FACTOR_CHECK_UNAVAILABLE = "factor-check-unavailable"
    INVALID_BASE = "invalid-base"
    UNSUPPORTED_BASE = "unsupported-base"
    # Whole file
    FILE_OPEN_FAILED = "file-open-failed"
    NO_ENTRY = "no-entry"


DEFAULT_PRP_BASES = frozenset([3])


class Diagnostic(namedtuple("Diagnostic", ("level", "reason", "line_num", "line", "message"))):
    """Diagnostic(level, reason, line_num, line, message): the outcome of a skip or accept decision."""

    __slots__ = ()

    def __str__(self):
        return self.message

    @property
    def is_rejection(self):
        return self.level >= logging.ERROR


class LineRejected(Exception):
    """A worktodo line failed to decode or validate."""

    def __init__(self, reason, message):
        super(LineRejected, self).__init__(message)
        self.reason = reason
        self.message = message


class ValidationPolicy(object):
    """ValidationPolicy(prp_bases, factor_validator): the capabilities the parser enforces."""

    __slots__ = ("prp_bases", "factor_validator")

    def __init__(self, prp_bases=DEFAULT_PRP_BASES, factor_validator=None):
        self.prp_bases = frozenset(prp_bases)
        self.factor_validator = factor_validator if factor_validator is not None else LocalFactorValidator()

    def check_factors(self, exponent, factors):
        """Returns the factors of 2^exponent-1 the validator did not confirm."""
        verdicts = list(self.factor_validator(exponent, factors))
        if len(verdicts) != len(factors):
            raise LineRejected(
                REASON.FACTOR_CHECK_UNAVAILABLE,
                "Factor validator returned {0} verdicts for {1} factors".format(len(verdicts), len(factors)),
            )
        return [factor for factor, ok in zip(factors, verdicts) if not ok]

    def __repr__(self):
        return "ValidationPolicy(prp_bases={0!r}, factor_validator={1!r})".format(sorted(self.prp_bases), self.factor_validator)
