"""Tests for local.ini handling and the command line."""

import logging
import optparse
from pathlib import Path

import pytest

from worktodo.cli import build_parser, main
from worktodo.cofactor import LocalFactorValidator, MersenneCaFactorValidator
from worktodo.config import SEC, config_read, config_write, merge_config_and_options, policy_from_options


def _options(argv: list):
    parser = build_parser()
    opts_no_defaults = optparse.Values()
    parser.parse_args(argv, values=opts_no_defaults)
    options = optparse.Values(parser.get_default_values().__dict__)
    options._update_careful(opts_no_defaults.__dict__)
    return options, opts_no_defaults


@pytest.fixture(autouse=True)
def _restore_root_level():
    level = logging.getLogger().level
    yield
    logging.getLogger().setLevel(level)


class TestMergeConfigAndOptions:
    def test_config_values_used_without_options(self, tmp_path: Path) -> None:
        localfile = tmp_path / "local.ini"
        localfile.write_text("[Worktodo]\nworkfile = todo.txt\nPRPBases = 3, 5\nFactorSource = mersenne.ca\n")
        config = config_read(str(localfile))
        options, opts_no_defaults = _options([])

        merge_config_and_options(config, options, opts_no_defaults)

        assert options.worktodo_file == "todo.txt"
        assert options.prp_bases == ["3", "5"]
        assert options.factor_source == "mersenne.ca"

    def test_options_override_and_update_config(self, tmp_path: Path) -> None:
        localfile = tmp_path / "local.ini"
        localfile.write_text("[Worktodo]\nworkfile = todo.txt\n")
        config = config_read(str(localfile))
        options, opts_no_defaults = _options(["-i", "other.txt", "--prp-base", "3", "--prp-base", "7"])

        assert merge_config_and_options(config, options, opts_no_defaults)
        config_write(config, str(localfile))

        assert options.worktodo_file == "other.txt"
        reread = config_read(str(localfile))
        assert reread.get(SEC.Worktodo, "workfile") == "other.txt"
        assert reread.get(SEC.Worktodo, "PRPBases") == "3,7"

    def test_missing_file_gives_empty_section(self, tmp_path: Path) -> None:
        config = config_read(str(tmp_path / "missing.ini"))
        assert config.has_section(SEC.Worktodo)


class TestPolicyFromOptions:
    def test_bases_and_source(self) -> None:
        options, _ = _options(["--prp-base", "3", "--prp-base", "5", "--factor-source", "mersenne.ca"])
        policy = policy_from_options(options)
        assert policy.prp_bases == frozenset([3, 5])
        assert isinstance(policy.factor_validator, MersenneCaFactorValidator)

    def test_default_source(self) -> None:
        options, _ = _options(["--prp-base", "3"])
        assert isinstance(policy_from_options(options).factor_validator, LocalFactorValidator)

    @pytest.mark.parametrize("base", ["x", "1"])
    def test_invalid_bases(self, base: str) -> None:
        options, _ = _options(["--prp-base", base])
        with pytest.raises(ValueError):
            policy_from_options(options)


class TestMain:
    def test_prints_first_valid_entry(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        (tmp_path / "worktodo.txt").write_text("Bogus=1\nPminus1=1,2,9999999,-1,40000,1000000,74\n")

        assert main(["-w", str(tmp_path)]) == 0

        out = capsys.readouterr().out
        assert out.strip() == "Pminus1 on 1*2^9999999-1 (Mersenne), B1=40000, B2=1000000"
        assert (tmp_path / "local.ini").exists()
        assert "PRPBases = 3" in (tmp_path / "local.ini").read_text()
        assert (tmp_path / "worktodo.log").exists()

    def test_no_entry(self, tmp_path: Path) -> None:
        (tmp_path / "worktodo.txt").write_text("# nothing\n")
        assert main(["-w", str(tmp_path)]) == 1

    def test_pop(self, tmp_path: Path) -> None:
        (tmp_path / "worktodo.txt").write_text("Test=70100001,74,1\nTest=70100003,74,1\n")

        assert main(["-w", str(tmp_path), "--pop"]) == 0

        assert (tmp_path / "worktodo.txt").read_text() == "Test=70100003,74,1\n"
        assert (tmp_path / "worktodo_save.txt").read_text() == "Test=70100001,74,1\n"

    def test_list(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / "worktodo.txt").write_text("Test=70100001,74,1\nBogus=1\nPRP=1,2,11,-1\n")
        with caplog.at_level(logging.INFO):
            assert main(["-w", str(tmp_path), "--list"]) == 0
        assert "2 valid entries" in caplog.text

    def test_missing_workdir(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["-w", str(tmp_path / "missing")])

    def test_unexpected_argument(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["-w", str(tmp_path), "extra"])
