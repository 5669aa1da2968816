"""Tests for request fingerprinting."""

import hashlib

import pytest
from starlette.datastructures import Headers

from k2auth.core.modules.device.extractor import (
    extract_descriptor,
    get_client_ip,
    get_device_name,
    get_real_ip,
    get_unique_device_id,
    get_user_agent,
    is_vpn_connection,
)


class TestClientIp:
    """Tests for client IP resolution."""

    def test_forwarded_for_first_hop(self):
        """Test that the first X-Forwarded-For entry wins."""
        headers = Headers({"X-Forwarded-For": "10.0.0.1, 10.0.0.2", "X-Real-IP": "10.0.0.9"})
        assert get_client_ip(headers, "192.0.2.1") == "10.0.0.1"

    def test_real_ip_fallback(self):
        """Test that X-Real-IP is used without X-Forwarded-For."""
        assert get_client_ip(Headers({"X-Real-IP": "10.0.0.9"}), "192.0.2.1") == "10.0.0.9"

    def test_peer_fallback(self):
        """Test that the socket peer is used without proxy headers."""
        assert get_client_ip(Headers({}), "192.0.2.1") == "192.0.2.1"

    def test_unknown_without_peer(self):
        """Test that a missing peer yields unknown."""
        assert get_client_ip(Headers({}), None) == "unknown"

    def test_empty_forwarded_entries_skipped(self):
        """Test that blank list entries are ignored."""
        assert get_client_ip(Headers({"X-Forwarded-For": " , 10.0.0.3"}), None) == "10.0.0.3"


class TestRealIp:
    """Tests for original client IP behind proxy chains."""

    def test_last_hop_of_chain(self):
        """Test that the last entry of a multi-hop chain is returned."""
        headers = Headers({"X-Forwarded-For": "10.0.0.1, 10.0.0.2, 10.0.0.3"})
        assert get_real_ip(headers, None) == "10.0.0.3"

    def test_single_hop_uses_client_ip(self):
        """Test that a single entry falls back to the client IP."""
        assert get_real_ip(Headers({"X-Forwarded-For": "10.0.0.1"}), None) == "10.0.0.1"
        assert get_real_ip(Headers({}), "192.0.2.1") == "192.0.2.1"


class TestHeaders:
    """Tests for user agent, VPN flag and device name."""

    def test_user_agent(self):
        assert get_user_agent(Headers({"User-Agent": "curl/8.0"})) == "curl/8.0"
        assert get_user_agent(Headers({})) == "unknown"

    @pytest.mark.parametrize("header", ["X-Forwarded-For", "X-Real-IP", "Via"])
    def test_proxy_headers_mark_vpn(self, header):
        """Test that any proxy header flags a VPN connection."""
        assert is_vpn_connection(Headers({header: "x"})) is True

    def test_direct_connection_not_vpn(self):
        assert is_vpn_connection(Headers({"User-Agent": "curl/8.0"})) is False

    def test_device_name_header_wins(self):
        """Test that X-Device-Name overrides user agent guessing."""
        headers = Headers({"X-Device-Name": "Front Desk PC", "User-Agent": "Windows"})
        assert get_device_name(headers) == "Front Desk PC"

    @pytest.mark.parametrize(
        ("user_agent", "expected"),
        [
            ("Mozilla/5.0 (Windows NT 10.0; Win64; x64)", "Windows Device"),
            ("Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0)", "Mac Device"),
            ("Mozilla/5.0 (X11; Linux x86_64)", "Linux Device"),
            ("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)", "Mac Device"),
            ("Mozilla/5.0 (iPad; CPU OS 17_0)", "iOS Device"),
            ("curl/8.0", "Unknown Device"),
        ],
    )
    def test_device_name_from_user_agent(self, user_agent, expected):
        """Test device guessing order: Windows, Mac, Linux, Android, iOS."""
        assert get_device_name(Headers({"User-Agent": user_agent})) == expected

    def test_android_reports_linux(self):
        """Test that Android user agents match the earlier Linux marker."""
        headers = Headers({"User-Agent": "Mozilla/5.0 (Linux; Android 14; Pixel 8)"})
        assert get_device_name(headers) == "Linux Device"


class TestFingerprint:
    """Tests for fingerprint-derived device ids."""

    def test_device_id_format(self):
        """Test that the id is the first 16 hex chars of SHA-256(ip_ua), upper case."""
        headers = Headers({"User-Agent": "curl/8.0"})
        expected = hashlib.sha256(b"192.0.2.1_curl/8.0").hexdigest()[:16].upper()

        assert get_unique_device_id(headers, "192.0.2.1") == expected

    def test_device_id_stable_and_distinct(self):
        """Test that the same request maps to the same id and different agents do not."""
        a = Headers({"User-Agent": "agent-a"})
        b = Headers({"User-Agent": "agent-b"})

        assert get_unique_device_id(a, "192.0.2.1") == get_unique_device_id(a, "192.0.2.1")
        assert get_unique_device_id(a, "192.0.2.1") != get_unique_device_id(b, "192.0.2.1")

    def test_extract_descriptor(self):
        """Test that the descriptor collects every extracted field."""
        headers = Headers({"User-Agent": "Mozilla/5.0 (X11; Linux x86_64)", "Via": "1.1 proxy"})

        descriptor = extract_descriptor(headers, "192.0.2.1")

        assert descriptor.ip_address == "192.0.2.1"
        assert descriptor.real_ip_address == "192.0.2.1"
        assert descriptor.user_agent == "Mozilla/5.0 (X11; Linux x86_64)"
        assert descriptor.device_name == "Linux Device"
        assert descriptor.is_vpn_connection is True

    def test_plain_dict_with_lowercase_keys(self):
        """Test that a lowercase-keyed dict works as a header mapping."""
        assert get_client_ip({"x-real-ip": "10.0.0.9"}, None) == "10.0.0.9"
