"""Tests for main module."""

from weather_relay.main import main


def test_main_prints_report(container, capsys) -> None:
    """Test that main prints a report line for every default city."""
    main(container)
    captured = capsys.readouterr()
    assert captured.out.strip() == "London: 12°C, Tokyo: 12°C"
