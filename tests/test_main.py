"""Tests for command line parsing."""

from yamactrl.__main__ import build_parser


class TestBuildParser:
    """Test the argument parser."""

    def test_positional_host(self) -> None:
        """Test the host can be given positionally."""
        args = build_parser().parse_args(["192.168.1.86"])
        assert args.host == "192.168.1.86"
        assert args.host_flag is None
        assert args.timeout is None
        assert args.debug is False

    def test_host_flag_and_options(self) -> None:
        """Test the flag form with timeout and debug."""
        args = build_parser().parse_args(["--host", "receiver.local", "--timeout", "2.5", "--debug"])
        assert args.host_flag == "receiver.local"
        assert args.timeout == 2.5
        assert args.debug is True

    def test_no_arguments(self) -> None:
        """Test no host is allowed so config can supply it."""
        args = build_parser().parse_args([])
        assert args.host is None
        assert args.host_flag is None
