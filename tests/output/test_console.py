"""Tests for Rich Console factory and theme."""

from io import StringIO

from typectl.output.console import TYPECTL_THEME, create_console, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestTheme:
    def test_defines_styles_used_by_renderers(self) -> None:
        for name in ("tc.ok", "tc.error", "tc.op", "tc.id", "tc.alias", "tc.standard"):
            assert name in TYPECTL_THEME.styles
