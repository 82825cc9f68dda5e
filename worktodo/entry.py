# -*- coding: utf-8 -*-
"""Work assignment entries read from the worktodo file."""

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


class JOB_TYPE:
    PRP = 1
    LL = 2
    PM1 = 3


job_type_names = {JOB_TYPE.PRP: "PRP", JOB_TYPE.LL: "LL", JOB_TYPE.PM1: "P-1"}

RESIDUE_TYPE_DEFAULT = 1
RESIDUE_TYPE_COFACTOR = 5  # Mersenne cofactor


class FactoringOptions(object):
    """FactoringOptions(B1, B2): stage bounds of a P-1 entry."""

    __slots__ = ("B1", "B2")

    def __init__(self, B1=0, B2=0):
        self.B1 = B1
        self.B2 = B2

    def __eq__(self, other):
        return isinstance(other, FactoringOptions) and (self.B1, self.B2) == (other.B1, other.B2)

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return "FactoringOptions(B1={0.B1!r}, B2={0.B2!r})".format(self)


class PrimalityOptions(object):
    """PrimalityOptions(residue_type): options of a PRP or LL entry."""

    __slots__ = ("residue_type",)

    def __init__(self, residue_type=RESIDUE_TYPE_DEFAULT):
        self.residue_type = residue_type

    def __eq__(self, other):
        return isinstance(other, PrimalityOptions) and self.residue_type == other.residue_type

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return "PrimalityOptions(residue_type={0.residue_type!r})".format(self)


class Entry(object):
    """Entry(job_type, key, k, b, n, c, aid, raw_line, known_factors, options)."""

    __slots__ = ("job_type", "key", "k", "b", "n", "c", "aid", "raw_line", "known_factors", "options")

    def __init__(self, job_type, key=None, raw_line=""):
        """Create new instance of Entry with the options arm matching job_type."""
        if job_type not in job_type_names:
            raise ValueError("Unsupported job type: {0!r}".format(job_type))
        self.job_type = job_type
        self.key = key
        # k*b^n+c
        self.k = 1
        self.b = 2
        self.n = 0
        self.c = -1
        self.aid = None
        self.raw_line = raw_line
        self.known_factors = []
        self.options = FactoringOptions() if job_type == JOB_TYPE.PM1 else PrimalityOptions()

    @property
    def exponent(self):
        return self.n

    @property
    def is_mersenne(self):
        return self.k == 1 and self.b == 2 and self.c == -1

    @property
    def is_wagstaff(self):
        return self.k == 1 and self.b == 2 and self.c == 1 and bool(self.known_factors) and self.known_factors[0] == "3"

    @property
    def factoring(self):
        if not isinstance(self.options, FactoringOptions):
            raise TypeError("{0} entry has no factoring options".format(job_type_names[self.job_type]))
        return self.options

    @property
    def primality(self):
        if not isinstance(self.options, PrimalityOptions):
            raise TypeError("{0} entry has no primality options".format(job_type_names[self.job_type]))
        return self.options

    def __str__(self):
        return entry_to_str(self)

    def __repr__(self):
        return "Entry({0!r})".format(self.raw_line)


def exponent_to_str(entry):
    """Converts an entry's candidate to a short string representation."""
    if entry.k != 1:
        buf = "{0.k}*{0.b}^{0.n}{0.c:+}".format(entry)
    elif entry.b == 2 and entry.c == -1:
        buf = "M{0.n}".format(entry)
    else:
        buf = "{0.b}^{0.n}{0.c:+}".format(entry)
    return buf


def entry_to_str(entry):
    """Converts an entry to a one-line human-readable summary."""
    buf = "{0} on {1.k}*{1.b}^{1.n}{1.c:+}".format(entry.key or job_type_names[entry.job_type], entry)
    if entry.is_mersenne:
        buf += " (Mersenne)"
    if entry.is_wagstaff:
        buf += " (Wagstaff)"
    if entry.known_factors:
        buf += " with {0:n} known factor{1}".format(len(entry.known_factors), "s" if len(entry.known_factors) != 1 else "")
    if entry.job_type == JOB_TYPE.PM1:
        buf += ", B1={0.B1}, B2={0.B2}".format(entry.options)
    else:
        buf += ", residue type {0.residue_type}".format(entry.options)
    if entry.aid:
        buf += ", AID: {0}".format(entry.aid)
    return buf
