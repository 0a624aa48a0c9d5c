"""Tests for the secure random sources."""

# Standard library imports
import subprocess
from types import SimpleNamespace

# Third-party imports
import pytest

# Local imports
import password_depth
from password_depth import (
    EntropySourceError,
    OpenSSLRandomSource,
    PasswordDepthError,
    UrandomRandomSource,
    default_random_source,
)


class TestUrandomRandomSource:
    """Test cases for the os.urandom source."""

    def test_returns_requested_number_of_bytes(self):
        """Test that exactly n bytes come back."""
        source = UrandomRandomSource()
        assert len(source.next_bytes(32)) == 32

    def test_zero_bytes(self):
        """Test that a zero-length request is empty."""
        assert UrandomRandomSource().next_bytes(0) == b""

    def test_next_byte_is_in_range(self):
        """Test that next_byte returns a single byte value."""
        value = UrandomRandomSource().next_byte()
        assert isinstance(value, int)
        assert 0 <= value <= 255

    def test_unavailable_urandom_raises(self, monkeypatch):
        """Test that a missing kernel source surfaces as EntropySourceError."""

        def no_entropy(n):
            raise NotImplementedError("no randomness source")

        monkeypatch.setattr(password_depth.os, "urandom", no_entropy)
        with pytest.raises(EntropySourceError):
            UrandomRandomSource().next_bytes(4)

    def test_getrandom_failure_raises(self, monkeypatch):
        """Test that an OSError from the kernel is wrapped, not leaked."""

        def failing_urandom(n):
            raise OSError(5, "getrandom failed")

        monkeypatch.setattr(password_depth.os, "urandom", failing_urandom)
        with pytest.raises(EntropySourceError):
            UrandomRandomSource().next_bytes(4)


class TestOpenSSLRandomSource:
    """Test cases for the openssl rand source."""

    def test_invokes_openssl_rand(self, monkeypatch):
        """Test that bytes are read from `openssl rand <n>`."""
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return SimpleNamespace(stdout=b"\x01\x02\x03")

        monkeypatch.setattr(password_depth.subprocess, "run", fake_run)
        source = OpenSSLRandomSource()

        assert source.next_bytes(3) == b"\x01\x02\x03"
        assert calls == [["openssl", "rand", "3"]]

    def test_zero_bytes_skips_subprocess(self, monkeypatch):
        """Test that no process is spawned for an empty request."""

        def fake_run(cmd, **kwargs):
            raise AssertionError("subprocess should not run")

        monkeypatch.setattr(password_depth.subprocess, "run", fake_run)
        assert OpenSSLRandomSource().next_bytes(0) == b""

    def test_process_failure_raises(self, monkeypatch):
        """Test that a failing openssl binary raises EntropySourceError."""

        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd)

        monkeypatch.setattr(password_depth.subprocess, "run", fake_run)
        with pytest.raises(EntropySourceError):
            OpenSSLRandomSource().next_bytes(8)

    def test_missing_binary_raises(self):
        """Test that a nonexistent executable is reported, not swallowed."""
        source = OpenSSLRandomSource(executable="/nonexistent/openssl-binary")
        with pytest.raises(PasswordDepthError):
            source.next_byte()

    def test_short_read_raises(self, monkeypatch):
        """Test that a truncated output is rejected."""
        monkeypatch.setattr(
            password_depth.subprocess,
            "run",
            lambda cmd, **kwargs: SimpleNamespace(stdout=b"\x00"),
        )
        with pytest.raises(EntropySourceError):
            OpenSSLRandomSource().next_bytes(4)


class TestDefaultRandomSource:
    """Test cases for source selection."""

    def test_prefers_openssl_when_available(self, monkeypatch):
        monkeypatch.setattr(password_depth.shutil, "which", lambda name: "/usr/bin/openssl")
        assert isinstance(default_random_source(), OpenSSLRandomSource)

    def test_falls_back_to_urandom(self, monkeypatch):
        monkeypatch.setattr(password_depth.shutil, "which", lambda name: None)
        assert isinstance(default_random_source(), UrandomRandomSource)
