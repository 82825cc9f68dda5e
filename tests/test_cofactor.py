"""Tests for the known factor validators."""

from unittest.mock import MagicMock

import pytest
import requests

from worktodo.cofactor import (
    FactorCheckError,
    LocalFactorValidator,
    MersenneCaFactorValidator,
    get_factor_validator,
)
from worktodo.parser import parse_line
from worktodo.validation import REASON, ValidationPolicy


def _session(payload: object = None, error: Exception = None) -> MagicMock:
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value.json.return_value = payload
    return session


class TestLocalFactorValidator:
    def test_divisors_of_m11(self) -> None:
        # 2^11-1 = 2047 = 23 * 89
        assert LocalFactorValidator()(11, ["23", "89"]) == [True, True]

    def test_non_divisors(self) -> None:
        assert LocalFactorValidator()(11, ["3", "1", "0", "2047x"]) == [False, False, False, False]

    def test_m29(self) -> None:
        # 2^29-1 = 233 * 1103 * 2089
        assert LocalFactorValidator()(29, ["233", "1103", "2089", "2087"]) == [True, True, True, False]


class TestMersenneCaFactorValidator:
    def test_known_prime_factors(self) -> None:
        session = _session({"exponent": "29", "factors_prime": [{"factor": "233"}, {"factor": "1103"}]})
        validator = MersenneCaFactorValidator(session=session)

        assert validator(29, ["233", "1103", "2089"]) == [True, True, False]
        url = session.get.call_args[0][0]
        assert url == "https://www.mersenne.ca/exponent/29/json"
        assert session.get.call_args[1]["timeout"] == 180

    def test_no_factors_listed(self) -> None:
        validator = MersenneCaFactorValidator(session=_session({"exponent": 29}))
        assert validator(29, ["233"]) == [False]

    def test_request_error(self) -> None:
        validator = MersenneCaFactorValidator(session=_session(error=requests.exceptions.ConnectionError("down")))
        with pytest.raises(FactorCheckError):
            validator(29, ["233"])

    def test_http_error(self) -> None:
        session = _session({})
        session.get.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        with pytest.raises(FactorCheckError):
            MersenneCaFactorValidator(session=session)(29, ["233"])

    def test_wrong_exponent(self) -> None:
        validator = MersenneCaFactorValidator(session=_session({"exponent": "31", "factors_prime": []}))
        with pytest.raises(FactorCheckError):
            validator(29, ["233"])

    def test_unexpected_payload(self) -> None:
        validator = MersenneCaFactorValidator(session=_session({"factors_prime": []}))
        with pytest.raises(FactorCheckError):
            validator(29, ["233"])

    def test_unavailable_rejects_line(self) -> None:
        validator = MersenneCaFactorValidator(session=_session(error=requests.exceptions.Timeout("slow")))
        entry, diagnostics = parse_line('PRP=1,2,29,-1,"233"', ValidationPolicy(factor_validator=validator))
        assert entry is None
        assert diagnostics[0].reason == REASON.FACTOR_CHECK_UNAVAILABLE


class TestGetFactorValidator:
    def test_sources(self) -> None:
        assert isinstance(get_factor_validator("local"), LocalFactorValidator)
        assert isinstance(get_factor_validator("mersenne.ca"), MersenneCaFactorValidator)

    def test_unknown_source(self) -> None:
        with pytest.raises(ValueError):
            get_factor_validator("factordb")
