"""Tests for the entry model and its summaries."""

import pytest

from worktodo.entry import (
    JOB_TYPE,
    Entry,
    FactoringOptions,
    PrimalityOptions,
    entry_to_str,
    exponent_to_str,
)


def _entry(job_type: int, key: str, k: int = 1, b: int = 2, n: int = 11, c: int = -1) -> Entry:
    entry = Entry(job_type, key, "{0}=...".format(key))
    entry.k, entry.b, entry.n, entry.c = k, b, n, c
    return entry


class TestOptionsArms:
    def test_arm_follows_job_type(self) -> None:
        assert isinstance(Entry(JOB_TYPE.PM1).options, FactoringOptions)
        assert isinstance(Entry(JOB_TYPE.PRP).options, PrimalityOptions)
        assert isinstance(Entry(JOB_TYPE.LL).options, PrimalityOptions)
        assert Entry(JOB_TYPE.PRP).options.residue_type == 1

    def test_wrong_arm_raises(self) -> None:
        with pytest.raises(TypeError):
            Entry(JOB_TYPE.PM1).primality
        with pytest.raises(TypeError):
            Entry(JOB_TYPE.LL).factoring
        with pytest.raises(AttributeError):
            Entry(JOB_TYPE.PRP).options.B1

    def test_unsupported_job_type(self) -> None:
        with pytest.raises(ValueError):
            Entry(0)


class TestForms:
    def test_mersenne(self) -> None:
        entry = _entry(JOB_TYPE.PRP, "PRP")
        assert entry.is_mersenne
        assert not entry.is_wagstaff
        assert entry.exponent == 11

    def test_wagstaff_needs_factor_three_first(self) -> None:
        entry = _entry(JOB_TYPE.PRP, "PRP", c=1)
        assert not entry.is_wagstaff
        entry.known_factors = ["3"]
        assert entry.is_wagstaff
        entry.known_factors = ["683", "3"]
        assert not entry.is_wagstaff

    def test_exponent_to_str(self) -> None:
        assert exponent_to_str(_entry(JOB_TYPE.LL, "Test")) == "M11"
        assert exponent_to_str(_entry(JOB_TYPE.PRP, "PRP", c=1)) == "2^11+1"
        assert exponent_to_str(_entry(JOB_TYPE.PRP, "PRP", k=3, b=5, n=7, c=2)) == "3*5^7+2"


class TestSummary:
    def test_pm1_summary(self) -> None:
        entry = _entry(JOB_TYPE.PM1, "Pminus1")
        entry.factoring.B1, entry.factoring.B2 = 40000, 1000000
        entry.aid = "AID"
        assert entry_to_str(entry) == "Pminus1 on 1*2^11-1 (Mersenne), B1=40000, B2=1000000, AID: AID"

    def test_prp_summary_with_factors(self) -> None:
        entry = _entry(JOB_TYPE.PRP, "PRP")
        entry.known_factors = ["23", "89"]
        entry.primality.residue_type = 5
        assert str(entry) == "PRP on 1*2^11-1 (Mersenne) with 2 known factors, residue type 5"

    def test_wagstaff_summary(self) -> None:
        entry = _entry(JOB_TYPE.PRP, "PRPDC", c=1)
        entry.known_factors = ["3"]
        assert str(entry) == "PRPDC on 1*2^11+1 (Wagstaff) with 1 known factor, residue type 1"

    def test_every_job_type_has_summary(self) -> None:
        for job_type in (JOB_TYPE.PRP, JOB_TYPE.LL, JOB_TYPE.PM1):
            summary = entry_to_str(Entry(job_type))
            assert isinstance(summary, str)
            assert summary
