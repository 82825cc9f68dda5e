# -*- coding: utf-8 -*-
"""local.ini configuration settings."""

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
import os
from configparser import ConfigParser
from configparser import Error as ConfigParserError

from .cofactor import get_factor_validator
from .validation import ValidationPolicy


class SEC:
    Worktodo = "Worktodo"


attr_to_copy = {
    SEC.Worktodo: {
        "worktodo_file": "workfile",
        "archive_file": "archivefile",
        "logfile": "logfile",
        "prp_bases": "PRPBases",
        "factor_source": "FactorSource",
    }
}

# allows us to give hints for config types that don't have a default optparse value
OPTIONS_TYPE_HINTS = {SEC.Worktodo: {"PRPBases": list}}


def config_read(localfile):
    """Reads and parses the configuration settings from a file."""
    config = ConfigParser()
    config.optionxform = lambda option: option
    try:
        config.read([localfile])
    except ConfigParserError as e:
        logging.exception("ERROR reading {0!r} file: {1}".format(localfile, e))
    for section in (SEC.Worktodo,):
        if not config.has_section(section):
            # Create the section to avoid having to test for it later
            config.add_section(section)
    return config


def config_write(config, localfile):
    """Writes the configuration settings to a file."""
    with open(localfile, "w") as configfile:
        config.write(configfile)


def merge_config_and_options(config, options, opts_no_defaults):
    """Merges command-line options with configuration file settings.

    Options given on the command line win and are copied to the config,
    otherwise the value from the config replaces the option default.
    Returns if the config was updated.
    """
    updated = False
    for section, value in attr_to_copy.items():
        for attr, option in value.items():
            attr_val = getattr(options, attr)
            type_hint = OPTIONS_TYPE_HINTS[section].get(option)
            if not hasattr(opts_no_defaults, attr) and config.has_option(section, option):
                # If no option is given and the option exists in local.ini, take it
                # from local.ini
                if isinstance(attr_val, (list, tuple)) or type_hint in {list, tuple}:
                    val = config.get(section, option)
                    new_val = [v.strip() for v in val.split(",")] if val else []
                else:
                    new_val = config.get(section, option)
                setattr(options, attr, new_val)
            elif attr_val not in (None, []):
                # If an option is given (even default value) and it is not already
                # identical in local.ini, update local.ini
                if isinstance(attr_val, (list, tuple)):
                    new_val = ",".join(map(str, attr_val))
                else:
                    new_val = str(attr_val)
                if not config.has_option(section, option) or config.get(section, option) != new_val:
                    logging.debug("update {0!r} with {1}={2}".format(options.localfile, option, new_val))
                    config.set(section, option, new_val)
                    updated = True
    return updated


def policy_from_options(options):
    """Builds the validation policy from the merged options."""
    try:
        prp_bases = frozenset(int(base) for base in options.prp_bases)
    except ValueError:
        raise ValueError("PRP bases must be integers: {0!r}".format(options.prp_bases))
    if not prp_bases or min(prp_bases) < 2:
        raise ValueError("PRP bases must be at least 2: {0!r}".format(options.prp_bases))
    return ValidationPolicy(prp_bases, get_factor_validator(options.factor_source))


def workdir_path(options, filename):
    return os.path.join(os.path.expanduser(options.workdir), filename)
