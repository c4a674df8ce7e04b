"""Test that the project setup is working correctly."""

import heartbeat_notifier


def test_version() -> None:
    """Test that version is defined."""
    assert heartbeat_notifier.__version__ == "0.1.0"


def test_import_modules() -> None:
    """Test that all submodules can be imported."""
    from heartbeat_notifier import alerter, formatter, storage

    # Just verify imports work
    assert formatter is not None
    assert alerter is not None
    assert storage is not None
