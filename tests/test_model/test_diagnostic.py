"""Tests for the Diagnostic model."""

from stylezx.model.diagnostic import Diagnostic, Severity


class TestDiagnostic:
    def test_warning_flags(self) -> None:
        diag = Diagnostic(rule="malformed_theme_reference", severity=Severity.WARNING, message="msg")
        assert diag.is_warning
        assert not diag.is_error

    def test_error_flags(self) -> None:
        diag = Diagnostic(rule="r", severity=Severity.ERROR, message="msg")
        assert diag.is_error
        assert not diag.is_warning

    def test_located_keeps_content(self) -> None:
        diag = Diagnostic(rule="r", severity=Severity.WARNING, message="msg")
        located = diag.located("a.tsx", 1, 6)
        assert located.path == "a.tsx"
        assert (located.line, located.column) == (1, 6)
        assert located.rule == "r"
        assert diag.path is None

    def test_str_with_location(self) -> None:
        diag = Diagnostic(rule="r", severity=Severity.WARNING, message="msg").located("a.tsx", 1, 6)
        assert str(diag) == "WARNING [a.tsx:1:6]: msg"

    def test_str_with_path_only(self) -> None:
        diag = Diagnostic(rule="r", severity=Severity.ERROR, message="msg", path="a.tsx")
        assert str(diag) == "ERROR [a.tsx]: msg"

    def test_str_without_location(self) -> None:
        diag = Diagnostic(rule="r", severity=Severity.ERROR, message="msg")
        assert str(diag) == "ERROR: msg"
