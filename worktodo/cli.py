# -*- coding: utf-8 -*-
"""Reads the next work assignment from a worktodo file and optionally archives it.

[*] Examples:
    * Show the next valid assignment:
        python3 -m worktodo -w ~/mlucas
    * Report the decision for every line:
        python3 -m worktodo --list
    * Archive the first pending line after it has been processed:
        python3 -m worktodo --pop
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

import logging.handlers
import optparse
import os
import sys

from . import __version__
from .cofactor import FACTOR_SOURCES
from .config import SEC, config_read, config_write, merge_config_and_options, policy_from_options, workdir_path
from .parser import log_diagnostics, parse_workfile, read_workfile
from .workfile import remove_first_processed

VERSION = __version__


class Formatter(logging.Formatter):
    def format(self, record):
        record.location = ", line #{0:n}".format(record.line_num) if hasattr(record, "line_num") else ""
        return super(Formatter, self).format(record)


def build_parser():
    parser = optparse.OptionParser(
        usage="%prog [options]\nUse -h/--help to see all options",
        version="%prog " + VERSION,
        description="This program reads the worktodo file of a GIMPS program and reports the first valid Test, DoubleCheck, PRP, PRPDC, PFactor or Pminus1 assignment in it. Invalid lines are reported and skipped, but never removed. After the assignment has been processed, the --pop option moves the first pending line to the archive file. It also saves its configuration to a “local.ini” file by default, so it is only necessary to give most of the arguments once.",
    )

    # options not saved to local.ini
    parser.add_option(
        "-d",
        "--debug",
        action="count",
        dest="debug",
        default=0,
        help="Output detailed information. Provide multiple times for even more verbose output.",
    )
    parser.add_option(
        "-w",
        "--workdir",
        dest="workdir",
        default=os.curdir,
        help="Working directory with the work, archive and local files, Default: %default (current directory)",
    )
    parser.add_option("-l", "--localfile", dest="localfile", default="local.ini", help="Local configuration file filename, Default: “%default”")
    parser.add_option("--list", action="store_true", dest="list", help="Report the decision for every line of the work file instead of stopping at the first valid one.")
    parser.add_option("--pop", action="store_true", dest="pop", help="Move the first pending line of the work file to the archive file and exit.")

    # all other options are saved to local.ini
    parser.add_option("-i", "--work-file", dest="worktodo_file", default="worktodo.txt", help="Work file filename, Default: “%default”")
    parser.add_option(
        "-a", "--archive-file", dest="archive_file", default="worktodo_save.txt", help="Archive file filename, Default: “%default”"
    )
    parser.add_option("-L", "--logfile", dest="logfile", default="worktodo.log", help="Log file filename, Default: “%default”")
    parser.add_option(
        "--prp-base",
        dest="prp_bases",
        action="append",
        default=[],
        help="Supported PRP base. Use multiple times for multiple bases, Default: 3",
    )
    parser.add_option(
        "--factor-source",
        dest="factor_source",
        type="choice",
        choices=FACTOR_SOURCES,
        default="local",
        help="How to check the known factors of Mersenne PRP cofactor assignments: 'local' computes 2^p mod f, 'mersenne.ca' looks them up on https://www.mersenne.ca/. Default: %default",
    )
    return parser


def setup_logging(options, config):
    logger = logging.getLogger()
    logger.setLevel(max(logging.INFO - options.debug * 10, 0))
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        Formatter(
            "%(filename)s: " + ("%(funcName)s:\t" if options.debug > 1 else "") + "[%(asctime)s%(location)s]  %(levelname)s: %(message)s"
        )
    )
    logger.addHandler(console_handler)

    if options.debug > 1:
        # Show the requests made to mersenne.ca
        requests_log = logging.getLogger("urllib3")
        requests_log.setLevel(logging.DEBUG)
        requests_log.propagate = True

    logfile = workdir_path(options, options.logfile)
    maxBytes = config.getint(SEC.Worktodo, "MaxLogFileSize") if config.has_option(SEC.Worktodo, "MaxLogFileSize") else 2 * 1024 * 1024
    file_handler = logging.handlers.RotatingFileHandler(logfile, maxBytes=maxBytes, backupCount=5, encoding="utf-8")
    file_handler.setFormatter(Formatter("[%(asctime)s%(location)s]  %(levelname)s: %(message)s"))
    logger.addHandler(file_handler)
    return [console_handler, file_handler]


def list_workfile(workfile, policy):
    """Logs the decision for every line and returns the number of valid entries."""
    count = 0
    try:
        for result in read_workfile(workfile, policy):
            log_diagnostics(result.diagnostics)
            if result.entry is not None:
                count += 1
    except (IOError, OSError) as e:
        logging.error("Cannot open {0!r}: {1}".format(workfile, e))
        return 0
    logging.info("{0:n} valid entr{1} in {2!r}".format(count, "y" if count == 1 else "ies", workfile))
    return count


def main(argv=None):
    parser = build_parser()
    opts_no_defaults = optparse.Values()
    _, args = parser.parse_args(argv, values=opts_no_defaults)
    if args:
        parser.error("Unexpected argument: {0!r}".format(args[0]))
    options = optparse.Values(parser.get_default_values().__dict__)
    options._update_careful(opts_no_defaults.__dict__)

    workdir = os.path.expanduser(options.workdir)
    if not os.path.isdir(workdir):
        parser.error("Directory {0!r} does not exist".format(workdir))

    # load local.ini and update options
    localfile = workdir_path(options, options.localfile)
    config = config_read(localfile)
    config_updated = merge_config_and_options(config, options, opts_no_defaults)
    if not options.prp_bases:
        options.prp_bases = ["3"]
        config.set(SEC.Worktodo, "PRPBases", "3")
        config_updated = True
    if options.factor_source not in FACTOR_SOURCES:
        parser.error("Unsupported factor source = {0}".format(options.factor_source))
    try:
        policy = policy_from_options(options)
    except ValueError as e:
        parser.error(str(e))

    handlers = setup_logging(options, config)
    try:
        if config_updated:
            config_write(config, localfile)

        workfile = workdir_path(options, options.worktodo_file)
        archive_file = workdir_path(options, options.archive_file)

        if options.pop:
            if remove_first_processed(workfile, archive_file):
                logging.info("Moved the first line of {0!r} to {1!r}".format(workfile, archive_file))
                return 0
            logging.error("No line removed from {0!r}".format(workfile))
            return 1

        if options.list:
            return 0 if list_workfile(workfile, policy) else 1

        result = parse_workfile(workfile, policy)
        if result.entry is None:
            return 1
        print(result.entry)
        return 0
    finally:
        logger = logging.getLogger()
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()


if __name__ == "__main__":
    sys.exit(main())
