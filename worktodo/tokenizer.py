# -*- coding: utf-8 -*-
"""Splits worktodo lines into a key and its quote-aware value fields."""

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

import re

from .validation import REASON, LineRejected

AID_RE = re.compile(r"^[0-9A-Fa-f]{32}$")
DIGITS_RE = re.compile(r"^[0-9]+$")
AID_LITERAL = "AID"
NO_AID = "N/A"


def split_top_level(line):
    """Splits a line on its first "=" into (key, value_spec), or None if either part is empty."""
    key, sep, value_spec = line.partition("=")
    key = key.strip()
    value_spec = value_spec.strip()
    if not sep or not key or not value_spec:
        return None
    return key, value_spec


def split_fields(value_spec, delim=","):
    """Splits on delim, except inside double quotes. Quotes are kept in the fields."""
    fields = []
    current = []
    quoted = False
    for char in value_spec:
        if char == '"':
            quoted = not quoted
            current.append(char)
        elif char == delim and not quoted:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    if current:
        fields.append("".join(current))
    return fields


def trim_sentinel(fields):
    if fields and fields[0] in {"", NO_AID}:
        del fields[0]
    return fields


def extract_aid(fields, allow_literal=False):
    """Removes and returns the assignment ID at the front of fields, if there is one."""
    if fields and (AID_RE.match(fields[0]) or (allow_literal and fields[0] == AID_LITERAL)):
        return fields.pop(0)
    return None


def parse_factor_list(field):
    """Returns the factors of a quoted list like "36357263,145429049", or None if field is not one."""
    field = field.strip()
    if len(field) < 2 or field[0] != '"' or field[-1] != '"':
        return None
    factors = [factor.strip() for factor in field[1:-1].split(",")]
    if not all(DIGITS_RE.match(factor) for factor in factors):
        return None
    return factors


class FieldCursor(object):
    """Consumes value fields from the front, checking how many remain before each step."""

    __slots__ = ("fields",)

    def __init__(self, fields):
        self.fields = list(fields)

    def __len__(self):
        return len(self.fields)

    @property
    def remaining(self):
        return tuple(self.fields)

    def peek(self):
        return self.fields[0] if self.fields else None

    def take(self, count, what):
        if len(self.fields) < count:
            raise LineRejected(
                REASON.MISSING_FIELD,
                "not enough fields for {0} ({1} needed, {2} left)".format(what, count, len(self.fields)),
            )
        taken = self.fields[:count]
        del self.fields[:count]
        return taken

    def take_one(self, what):
        return self.take(1, what)[0]

    def skip(self, count, what):
        self.take(count, what)

    def pop_last(self, what):
        if not self.fields:
            raise LineRejected(REASON.MISSING_FIELD, "missing {0}".format(what))
        return self.fields.pop()
