import socket

import pytest

import sleet.utils.network as network
from sleet.utils.errors import MalformedAddressError
from sleet.utils.network import address_to_integer, resolve_default_data_center


class TestAddressToInteger:
    def test_packs_octets_in_reverse(self):
        assert address_to_integer("1.2.3.4") == (4 << 24) + (3 << 16) + (2 << 8) + 1

    def test_loopback(self):
        assert address_to_integer("127.0.0.1") == (1 << 24) + 127

    def test_accepts_highest_octets(self):
        assert address_to_integer("255.255.255.255") == (1 << 32) - 1

    @pytest.mark.parametrize(
        "address",
        ["", None, "1.2.3", "1.2.3.4.5", "a.b.c.d", "1..3.4", "999.1.1.1", "256.0.0.1", "\u0661.2.3.4", "-1.2.3.4"],
    )
    def test_rejects_malformed(self, address):
        with pytest.raises(MalformedAddressError):
            address_to_integer(address)


class TestResolveDefaultDataCenter:
    def test_uses_local_address(self, monkeypatch):
        monkeypatch.setattr(network, "local_address", lambda: "10.0.0.37")
        assert resolve_default_data_center() == 10

    def test_matches_packed_address(self, monkeypatch):
        monkeypatch.setattr(network, "local_address", lambda: "172.16.5.99")
        assert resolve_default_data_center() == address_to_integer("172.16.5.99") % 32

    def test_falls_back_to_random_on_lookup_failure(self, monkeypatch, caplog):
        def fail():
            raise socket.gaierror("no such host")

        monkeypatch.setattr(network, "local_address", fail)
        monkeypatch.setattr(network, "randbelow", lambda limit: limit - 1)
        assert resolve_default_data_center() == 31
        assert "collisions are possible" in caplog.text

    def test_falls_back_on_malformed_address(self, monkeypatch):
        monkeypatch.setattr(network, "local_address", lambda: "fe80::1")
        for _ in range(50):
            assert 0 <= resolve_default_data_center() <= 31

    def test_falls_back_when_hostname_cannot_be_encoded(self, monkeypatch, caplog):
        monkeypatch.setattr(network.socket, "gethostname", lambda: "a" * 70)
        assert 0 <= resolve_default_data_center() <= 31
        assert "collisions are possible" in caplog.text
