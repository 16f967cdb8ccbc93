"""Test public API surface - ensure imports work and exports stay stable."""

import bizresolve


def test_package_exports():
    """Test that the package root exposes the run entry point and core types."""
    for name in bizresolve.__all__:
        assert hasattr(bizresolve, name), name
    assert callable(bizresolve.parse_model)


def test_version_is_a_string():
    """Test that __version__ resolves whether or not the package is installed."""
    assert isinstance(bizresolve.__version__, str)
    assert bizresolve.__version__


def test_error_codes_have_messages():
    """Test that every error code renders a message."""
    from bizresolve.codes import MESSAGES, ErrorCode

    assert set(MESSAGES) == set(ErrorCode)


def test_error_record_str_includes_severity():
    """Test the printable form of an error record."""
    from bizresolve.contracts import ErrorRecord, ErrorSeverity

    record = ErrorRecord(code="X", message="Something failed for 'k1'.", severity=ErrorSeverity.WARNING)
    assert str(record) == "Warning: Something failed for 'k1'."


def test_context_add_error_embeds_key_and_kind():
    """Test that context records carry the key and kind they name."""
    from bizresolve.codes import ErrorCode
    from bizresolve.kernel.context import ParseContext

    context = ParseContext()
    record = context.add_error(ErrorCode.UNABLE_TO_FIND_RESOURCE, key="k1", kind="kind1")

    assert context.errors == [record]
    assert record.key == "k1"
    assert "'k1'" in record.message
    assert "'kind1'" in record.message
    assert context.has_errors()
