"""
Tests for the cluster member registry.
"""

import pytest

from chronos.cluster.members import Member, parse_cluster_url
from chronos.errors import ConfigurationError


class TestMember:
    """Tests for Member."""

    def test_starts_active(self):
        """A new member is active."""
        member = Member("host1:8080")
        assert member.active is True
        assert member.host == "host1:8080"

    def test_host_is_read_only(self):
        """Host cannot be reassigned after construction."""
        member = Member("host1:8080")
        with pytest.raises(AttributeError):
            member.host = "other:8080"

    def test_active_is_mutable(self):
        member = Member("host1:8080")
        member.active = False
        assert member.active is False
        assert "inactive" in repr(member)


class TestParseClusterUrl:
    """Tests for parse_cluster_url."""

    def test_single_host(self):
        """Single host URL yields one member."""
        protocol, members = parse_cluster_url("http://127.0.0.1:8080")

        assert protocol == "http"
        assert [m.host for m in members] == ["127.0.0.1:8080"]

    @pytest.mark.parametrize(
        "url,hosts",
        [
            ("http://host1:8080,host2:8081", ["host1:8080", "host2:8081"]),
            ("https://a:1,b:2,c:3", ["a:1", "b:2", "c:3"]),
            ("http://a,b", ["a", "b"]),
        ],
    )
    def test_comma_separated_hosts(self, url, hosts):
        """One member per host token, in configuration order, all active."""
        protocol, members = parse_cluster_url(url)

        assert protocol == url.split("://")[0]
        assert [m.host for m in members] == hosts
        assert all(m.active for m in members)

    def test_https_scheme(self):
        protocol, _ = parse_cluster_url("https://secure:4400")
        assert protocol == "https"

    def test_path_and_userinfo_ignored(self):
        """Only the host segment produces members."""
        _, members = parse_cluster_url("http://user:secret@h1:4400,h2:4400/chronos")
        assert [m.host for m in members] == ["h1:4400", "h2:4400"]

    def test_whitespace_around_hosts_stripped(self):
        _, members = parse_cluster_url("http://h1:4400, h2:4400")
        assert [m.host for m in members] == ["h1:4400", "h2:4400"]

    @pytest.mark.parametrize("url", ["ftp://host:21", "tcp://host:4400", "host:4400", ""])
    def test_unsupported_scheme(self, url):
        """Anything but http/https is rejected."""
        with pytest.raises(ConfigurationError):
            parse_cluster_url(url)

    @pytest.mark.parametrize("url", ["http://host:notaport", "http://a:4400,b:99999", "http://a:-1"])
    def test_invalid_port(self, url):
        """A host entry whose port is not a valid number fails at parse time."""
        with pytest.raises(ConfigurationError, match="invalid host entry"):
            parse_cluster_url(url)

    def test_unsupported_scheme_message(self):
        with pytest.raises(ConfigurationError, match="scheme ftp is not supported"):
            parse_cluster_url("ftp://host:21")

    def test_unparseable_url(self):
        """Malformed URL raises ConfigurationError, not ValueError."""
        with pytest.raises(ConfigurationError):
            parse_cluster_url("http://[::1")

    def test_no_hosts(self):
        with pytest.raises(ConfigurationError, match="no hosts"):
            parse_cluster_url("http://")

    def test_empty_host_entry(self):
        with pytest.raises(ConfigurationError, match="empty host entry"):
            parse_cluster_url("http://h1:4400,,h2:4400")
