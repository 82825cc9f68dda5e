# -*- coding: utf-8 -*-
"""Known factor validators for Mersenne cofactor assignments.

A validator is any callable taking an exponent p and a list of decimal
factor strings and returning one boolean per factor, True when the factor
divides 2^p-1. Validators that cannot give an answer raise FactorCheckError.
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

import requests
from requests.exceptions import RequestException

mersenne_ca_baseurl = "https://www.mersenne.ca/"

FACTOR_SOURCES = ("local", "mersenne.ca")
DIGITS_RE = re.compile(r"^[0-9]+$")


class FactorCheckError(Exception):
    """The validator could not decide whether the factors divide 2^p-1."""


class LocalFactorValidator(object):
    """Checks each factor f with 2^p mod f == 1."""

    __slots__ = ()

    def __call__(self, exponent, factors):
        verdicts = []
        for factor in factors:
            if not DIGITS_RE.match(factor):
                verdicts.append(False)
                continue
            f = int(factor)
            verdicts.append(f > 1 and pow(2, exponent, f) == 1)
        return verdicts

    def __repr__(self):
        return "LocalFactorValidator()"


class MersenneCaFactorValidator(object):
    """Checks the factors against the prime factors mersenne.ca lists for the exponent."""

    __slots__ = ("session", "timeout")

    def __init__(self, session=None, timeout=180):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def get_exponent(self, n):
        """Fetches and returns the JSON data for a given Mersenne exponent."""
        try:
            r = self.session.get(mersenne_ca_baseurl + "exponent/{0}/json".format(n), timeout=self.timeout)
            r.raise_for_status()
            result = r.json()
        except (RequestException, ValueError) as e:
            logging.debug("Failed to get exponent data from mersenne.ca: {0}: {1}".format(type(e).__name__, e))
            raise FactorCheckError("Failed to get exponent data for M{0} from mersenne.ca: {1}".format(n, e))
        return result

    def __call__(self, exponent, factors):
        json = self.get_exponent(exponent)
        try:
            if int(json["exponent"]) != exponent:
                raise FactorCheckError("mersenne.ca returned data for exponent {0}, expected {1}".format(json["exponent"], exponent))
            known = frozenset(int(factor["factor"]) for factor in json.get("factors_prime", ()))
        except (KeyError, TypeError, ValueError) as e:
            raise FactorCheckError("Unexpected exponent data from mersenne.ca: {0}: {1}".format(type(e).__name__, e))
        logging.debug("mersenne.ca lists {0:n} prime factors for M{1}".format(len(known), exponent))
        return [bool(DIGITS_RE.match(factor)) and int(factor) in known for factor in factors]

    def close(self):
        self.session.close()

    def __repr__(self):
        return "MersenneCaFactorValidator(timeout={0!r})".format(self.timeout)


def get_factor_validator(source):
    """Returns the factor validator for a FactorSource setting."""
    if source == "local":
        return LocalFactorValidator()
    if source == "mersenne.ca":
        return MersenneCaFactorValidator()
    raise ValueError("Unknown factor source: {0!r}".format(source))
