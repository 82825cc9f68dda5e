# -*- coding: utf-8 -*-
"""Parser and validator for GIMPS worktodo files."""

__version__ = "1.0.0"

from .cofactor import FactorCheckError, LocalFactorValidator, MersenneCaFactorValidator
from .entry import JOB_TYPE, RESIDUE_TYPE_COFACTOR, Entry, FactoringOptions, PrimalityOptions, entry_to_str, exponent_to_str
from .parser import ParseResult, WorktodoParser, parse_line, parse_workfile, read_workfile
from .validation import REASON, Diagnostic, ValidationPolicy
from .workfile import remove_first_processed
