"""Tests for main.py -- the single-decision CLI.

main() takes an argv list and returns the exit status, so no subprocess is
needed. Output is captured with capsys.
"""

import json

from main import main


class TestCli:
    def test_success_json(self, capsys):
        code = main(["10.0.1.42", "--base", "10.0.1.0", "--mask", "255.255.255.0", "--json"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {"status": "SUCCESS", "attributes": {"ip_address": "10.0.1.42", "role": "GUEST"}}

    def test_username_assigns_corp_user(self, capsys):
        code = main(["10.0.1.42", "--base", "10.0.1.0", "--username", "alice", "--json"])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["attributes"]["role"] == "CORP_USER"

    def test_failure_exit_code(self, capsys):
        code = main(["10.0.2.1", "--base", "10.0.1.0", "--mask", "255.255.255.0"])
        assert code == 1
        out = capsys.readouterr().out
        assert "FAILURE" in out

    def test_terminal_output(self, capsys):
        main(["::1", "--base", "127.0.0.0", "--mask", "255.0.0.0"])
        out = capsys.readouterr().out
        assert "SUCCESS" in out
        assert "127.0.0.1" in out
        assert "GUEST" in out

    def test_defaults_come_from_settings(self, monkeypatch, capsys):
        monkeypatch.setenv("NETWORK_BASE_ADDRESS", "192.168.0.0")
        monkeypatch.setenv("SUBNET_MASK", "255.255.0.0")
        assert main(["192.168.4.20", "--json"]) == 0

    def test_bad_mask_exit_code(self, capsys):
        code = main(["10.0.1.42", "--base", "10.0.1.0", "--mask", "999.255.255.0"])
        assert code == 2
        assert "Bad subnet configuration" in capsys.readouterr().err

    def test_malformed_address_exit_code(self, capsys):
        code = main(["not-an-ip", "--base", "10.0.1.0"])
        assert code == 2
        assert "not-an-ip" in capsys.readouterr().err

    def test_bad_environment_exit_code(self, monkeypatch, capsys):
        """A malformed SUBNET_MASK in the environment is a configuration fault, not a traceback."""
        monkeypatch.setenv("SUBNET_MASK", "999.255.255.0")
        code = main(["10.0.1.42", "--base", "10.0.1.0", "--mask", "255.255.255.0"])
        assert code == 2
        assert "[!] Bad subnet configuration" in capsys.readouterr().err

    def test_empty_username_still_chained(self, capsys):
        """Any username value, even an empty one, marks the identity as chained."""
        code = main(["10.0.1.42", "--base", "10.0.1.0", "--username", "", "--json"])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["attributes"]["role"] == "CORP_USER"
