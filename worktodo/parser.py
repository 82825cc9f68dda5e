# -*- coding: utf-8 -*-
"""Reads the worktodo file and returns the first valid work assignment."""

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

import io
import logging
from collections import namedtuple

from .decoders import DECODERS
from .entry import JOB_TYPE, Entry, entry_to_str
from .tokenizer import FieldCursor, extract_aid, split_fields, split_top_level, trim_sentinel
from .validation import REASON, Diagnostic, LineRejected, ValidationPolicy
from .workfile import remove_first_processed

logger = logging.getLogger(__name__)

KEY_JOB_TYPES = {
    "Test": JOB_TYPE.LL,
    "DoubleCheck": JOB_TYPE.LL,
    "PRP": JOB_TYPE.PRP,
    "PRPDC": JOB_TYPE.PRP,
    "PFactor": JOB_TYPE.PM1,  # P-1 before a primality test
    "Pminus1": JOB_TYPE.PM1,
}

LineResult = namedtuple("LineResult", ("line_num", "line", "entry", "diagnostics"))


class ParseResult(namedtuple("ParseResult", ("entry", "diagnostics"))):
    """ParseResult(entry, diagnostics): the first valid entry, or None, and every decision made finding it."""

    __slots__ = ()

    @property
    def warnings(self):
        return [d for d in self.diagnostics if d.level == logging.WARNING]

    @property
    def rejections(self):
        return [d for d in self.diagnostics if d.is_rejection and d.line_num is not None]


def is_ignored(line):
    """Returns if a line is blank or a comment."""
    return not line.strip() or line.startswith("#")


def classify(key):
    """Returns the job type for a line key, or None if it is not supported."""
    return KEY_JOB_TYPES.get(key)


def parse_line(line, policy=None, line_num=None):
    """Parses one worktodo line into (entry or None, diagnostics)."""
    if is_ignored(line):
        return None, []
    if policy is None:
        policy = ValidationPolicy()

    def diagnostic(level, reason, message):
        return Diagnostic(level, reason, line_num, line, message)

    top = split_top_level(line)
    if top is None:
        return None, [diagnostic(logging.ERROR, REASON.MALFORMED_LINE, "expected key=value")]
    key, value_spec = top

    job_type = classify(key)
    if job_type is None:
        return None, [diagnostic(logging.ERROR, REASON.UNSUPPORTED_TYPE, "unsupported test type: {0}".format(key))]

    fields = trim_sentinel(split_fields(value_spec))
    entry = Entry(job_type, key, line)
    entry.aid = extract_aid(fields, allow_literal=job_type == JOB_TYPE.PM1)

    try:
        warnings = DECODERS[key](entry, FieldCursor(fields), policy)
    except LineRejected as e:
        return None, [diagnostic(logging.ERROR, e.reason, "bad {0} line: {1}".format(key, e.message))]

    diagnostics = [diagnostic(logging.WARNING, reason, message) for reason, message in warnings]
    diagnostics.append(diagnostic(logging.INFO, REASON.LOADED, "Loaded {0}".format(entry_to_str(entry))))
    return entry, diagnostics


def log_diagnostics(diagnostics):
    for diag in diagnostics:
        adapter = logging.LoggerAdapter(logger, {"line_num": diag.line_num} if diag.line_num is not None else {})
        if diag.is_rejection and diag.line is not None:
            adapter.log(diag.level, "Skipping {0!r}: {1}".format(diag.line, diag.message))
        else:
            adapter.log(diag.level, diag.message)


def read_workfile(workfile, policy=None):
    """Reads and parses every line of the workfile, yielding a LineResult per assignment line."""
    if policy is None:
        policy = ValidationPolicy()
    with io.open(workfile, encoding="utf-8", errors="replace") as file:
        for line_num, line in enumerate(file, 1):
            line = line.rstrip("\r\n")
            if is_ignored(line):
                continue
            entry, diagnostics = parse_line(line, policy, line_num)
            yield LineResult(line_num, line, entry, diagnostics)


def parse_workfile(workfile, policy=None):
    """Returns the first valid entry of the workfile. Invalid lines before it are skipped, not removed."""
    diagnostics = []
    try:
        for result in read_workfile(workfile, policy):
            log_diagnostics(result.diagnostics)
            diagnostics.extend(result.diagnostics)
            if result.entry is not None:
                return ParseResult(result.entry, diagnostics)
    except (IOError, OSError) as e:
        diag = Diagnostic(logging.ERROR, REASON.FILE_OPEN_FAILED, None, None, "Cannot open {0!r}: {1}".format(workfile, e))
        log_diagnostics([diag])
        diagnostics.append(diag)
        return ParseResult(None, diagnostics)
    diag = Diagnostic(logging.ERROR, REASON.NO_ENTRY, None, None, "No valid entry found in {0!r}".format(workfile))
    log_diagnostics([diag])
    diagnostics.append(diag)
    return ParseResult(None, diagnostics)


class WorktodoParser(object):
    """Binds a worktodo file, its archive and the validation policy."""

    __slots__ = ("filename", "archive_file", "policy")

    def __init__(self, filename, archive_file=None, policy=None):
        self.filename = filename
        self.archive_file = archive_file
        self.policy = policy if policy is not None else ValidationPolicy()

    def parse(self):
        return parse_workfile(self.filename, self.policy)

    def remove_first_processed(self):
        return remove_first_processed(self.filename, self.archive_file)
