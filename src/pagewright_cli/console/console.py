"""
Flexoki-themed Console class for Rich library
Uses the warm, inky Flexoki color scheme by Steph Ango
https://stephango.com/flexoki
"""

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# Flexoki color palette (400 series)
COLORS = {
    'tx': '#E6E4D9',
    'tx_2': '#CECDC3',
    'tx_3': '#B7B5AC',
    'ui_2': '#403E3C',
    'red': '#D14D41',
    'orange': '#DA702C',
    'yellow': '#D0A215',
    'green': '#879A39',
    'cyan': '#3AA99F',
    'blue': '#4385BE',
}


class Console:
    """Rich console with the message helpers used by the commands."""

    COLORS = COLORS

    def __init__(self, **kwargs):
        self.theme = Theme(
            {
                'default': f'{COLORS["tx"]}',
                'muted': f'{COLORS["tx_2"]}',
                'faint': f'{COLORS["tx_3"]}',
                'blue': f'{COLORS["blue"]}',
                'success': f'bold {COLORS["green"]}',
                'info': f'{COLORS["cyan"]}',
                'warning': f'bold {COLORS["orange"]}',
                'error': f'bold {COLORS["red"]}',
                'highlight': f'bold {COLORS["yellow"]}',
            }
        )
        self.console = RichConsole(theme=self.theme, **kwargs)

    def print(self, *args, style=None, **kwargs):
        """Print with optional style."""
        self.console.print(*args, style=style, **kwargs)

    def _icon_and_text(self, message: str, icon: str, icon_style: str):
        grid = Table.grid(padding=(0, 1), expand=False)
        grid.add_column(width=1)
        grid.add_column()
        grid.add_row(Text(icon, style=icon_style), Text(message))
        return grid

    def _emit(self, message: str, icon: str, style: str, panel: bool):
        formatted = self._icon_and_text(message=message, icon=icon, icon_style=style)
        if panel:
            self.print(Panel(formatted, border_style=style, expand=False))
        else:
            self.print(formatted)

    def success(self, message: str, prefix: str = '✓', panel: bool = False):
        """Print a success message."""
        self._emit(message, prefix, 'success', panel)

    def info(self, message: str, prefix: str = 'ℹ', panel: bool = False):
        """Print an info message."""
        self._emit(message, prefix, 'info', panel)

    def warning(self, message: str, prefix: str = '⚠', panel: bool = False):
        """Print a warning message."""
        self._emit(message, prefix, 'warning', panel)

    def error(self, message: str, prefix: str = '✗', panel: bool = False):
        """Print an error message."""
        self._emit(message, prefix, 'error', panel)

    def muted(self, message: str):
        """Print muted text."""
        self.print(message, style='muted')

    def action(self, message: str, style: str = 'faint'):
        """Print a highlighted action."""
        self.print(f'[{style}]▣[/{style}] {message}')
