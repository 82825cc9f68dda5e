# -*- coding: utf-8 -*-
"""Consumes processed lines from the worktodo file."""

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
import os
import tempfile

logger = logging.getLogger(__name__)

ARCHIVE_FILE = "worktodo_save.txt"


def default_archive_file(workfile):
    return os.path.join(os.path.dirname(os.path.abspath(workfile)), ARCHIVE_FILE)


def remove_first_processed(workfile, archive_file=None):
    """Moves the first non-blank line of the workfile to the archive file.

    The workfile is rewritten through a temporary file in the same directory
    which then replaces it, so readers see either the old or the new file.
    The line is appended to the archive only once the replace succeeded.
    Bytes that are not valid UTF-8 are copied unchanged.
    Returns if a line was archived. Nothing is changed if a file cannot be
    opened or there is no such line. There is no locking, callers must not
    run this concurrently on the same file.

    A line of only whitespace counts as blank, as it does for the parser, and
    is copied rather than archived.
    """
    if archive_file is None:
        archive_file = default_archive_file(workfile)
    adir = os.path.dirname(os.path.abspath(workfile))
    try:
        infile = io.open(workfile, encoding="utf-8", errors="surrogateescape", newline="")
    except (IOError, OSError) as e:
        logger.error("Cannot open {0!r} file: {1}".format(workfile, e))
        return False
    try:
        archive = io.open(archive_file, "a", encoding="utf-8", errors="surrogateescape")
    except (IOError, OSError) as e:
        infile.close()
        logger.error("Cannot open {0!r} file: {1}".format(archive_file, e))
        return False
    try:
        tmp = tempfile.NamedTemporaryFile(
            "w",
            dir=adir,
            prefix=os.path.basename(workfile) + ".",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
            errors="surrogateescape",
            newline="",
        )
    except (IOError, OSError) as e:
        infile.close()
        archive.close()
        logger.error("Cannot create a temporary file in {0!r}: {1}".format(adir, e))
        return False

    archived = None
    try:
        with archive:
            with infile, tmp:
                for line in infile:
                    if archived is None and line.strip():
                        archived = line.rstrip("\r\n")
                        continue
                    tmp.write(line)
            if archived is None:
                logger.debug("No line to remove from {0!r}".format(workfile))
                return False
            os.replace(tmp.name, workfile)
            archive.write(archived + "\n")
    except (IOError, OSError, ValueError) as e:
        logger.error("Error rewriting {0!r} file: {1}".format(workfile, e))
        return False
    finally:
        if os.path.exists(tmp.name):
            os.remove(tmp.name)
    logger.debug("Archived {0!r} to {1!r}".format(archived, archive_file))
    return True
