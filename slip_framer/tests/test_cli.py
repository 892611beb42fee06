"""
Tests for the slip-framer command-line tool.
"""

import pytest

from slip_framer import cli


class TestCli:
    """Test encode/decode commands."""

    def test_encode(self, capsys):
        """Test encoding prints one hex datagram per line."""
        assert cli.main(["encode", "aaaaaac0"]) == 0

        out = capsys.readouterr().out
        assert out.splitlines() == ["aaaaaadbdcc0"]

    def test_encode_split(self, capsys):
        """Test long input prints several datagrams."""
        assert cli.main(["encode", "01" * 1064]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[1] == "c0"

    def test_decode(self, capsys):
        """Test decoding prints the recovered payload."""
        assert cli.main(["decode", "aaaaaac0dbdcc0"]) == 0

        assert capsys.readouterr().out.strip() == "aaaaaac0"

    def test_decode_invalid(self, capsys):
        """Test malformed stream exits with an error."""
        assert cli.main(["decode", "55555555"]) == 1

        assert "Error:" in capsys.readouterr().err

    def test_invalid_hex(self, capsys):
        """Test non-hex input is rejected."""
        assert cli.main(["encode", "zz"]) == 1

        assert "Invalid hex" in capsys.readouterr().err

    def test_invalid_max_size(self, capsys):
        """Test --max-size below 2 is rejected."""
        assert cli.main(["--max-size", "1", "encode", "01"]) == 1

        assert "at least 2" in capsys.readouterr().err

    def test_config_file(self, tmp_path, capsys):
        """Test --config is loaded."""
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "WARNING"\n')

        assert cli.main(["--config", str(path), "decode", "01c0"]) == 0

        assert capsys.readouterr().out.strip() == "01"

    def test_bad_config_file(self, tmp_path, capsys):
        """Test invalid config values exit with an error."""
        path = tmp_path / "config.toml"
        path.write_text("[framer]\nmax_datagram_size = 0\n")

        assert cli.main(["--config", str(path), "encode", "01"]) == 1

        assert "Invalid config" in capsys.readouterr().err

    def test_unknown_log_level(self, capsys):
        """Test an unknown --log-level is rejected by the parser."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--log-level", "BOGUS", "encode", "01"])

        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_log_level_case_insensitive(self, capsys):
        """Test --log-level accepts lowercase names."""
        assert cli.main(["--log-level", "warning", "encode", "01"]) == 0

        assert capsys.readouterr().out.strip() == "01c0"

    def test_bad_log_level_in_config(self, tmp_path, capsys):
        """Test an unknown level in the config file exits with an error."""
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "LOUD"\n')

        assert cli.main(["--config", str(path), "encode", "01"]) == 1

        assert "Invalid config" in capsys.readouterr().err
