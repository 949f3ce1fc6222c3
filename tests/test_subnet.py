"""Unit tests for core/subnet.py -- base/mask subnet membership."""

import pytest

from core.address import parse_ipv4
from core.subnet import contains


def _contains(addr: str, base: str, mask: str) -> bool:
    return contains(parse_ipv4(addr), parse_ipv4(base), parse_ipv4(mask))


class TestContains:
    @pytest.mark.parametrize("addr", ["10.0.1.0", "10.0.1.5", "10.0.1.42", "10.0.1.255"])
    def test_class_c_members(self, addr):
        assert _contains(addr, "10.0.1.0", "255.255.255.0") is True

    @pytest.mark.parametrize("addr", ["10.0.2.1", "10.1.1.5", "11.0.1.5", "0.0.0.0"])
    def test_class_c_non_members(self, addr):
        assert _contains(addr, "10.0.1.0", "255.255.255.0") is False

    def test_host_bits_of_base_are_ignored(self):
        """A base with host bits set still describes the same network."""
        assert _contains("10.0.1.7", "10.0.1.99", "255.255.255.0") is True

    @pytest.mark.parametrize("addr", ["0.0.0.0", "8.8.8.8", "255.255.255.255", "10.0.1.42"])
    def test_zero_mask_matches_everything(self, addr):
        assert _contains(addr, "0.0.0.0", "0.0.0.0") is True

    def test_full_mask_matches_only_base(self):
        assert _contains("192.168.1.1", "192.168.1.1", "255.255.255.255") is True
        assert _contains("192.168.1.2", "192.168.1.1", "255.255.255.255") is False

    def test_non_octet_aligned_mask(self):
        # 172.16.0.0/12 covers 172.16.0.0 - 172.31.255.255
        assert _contains("172.31.255.255", "172.16.0.0", "255.240.0.0") is True
        assert _contains("172.32.0.1", "172.16.0.0", "255.240.0.0") is False

    def test_matches_bitwise_definition(self):
        base, mask = parse_ipv4("10.20.30.40"), parse_ipv4("255.192.255.0")
        for text in ("10.20.30.1", "10.63.30.200", "10.64.30.1", "10.20.31.40"):
            addr = parse_ipv4(text)
            expected = all((a & m) == (b & m) for a, b, m in zip(addr.octets, base.octets, mask.octets))
            assert contains(addr, base, mask) is expected
