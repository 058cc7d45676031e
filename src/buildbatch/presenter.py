from __future__ import annotations

import math
from collections.abc import Callable
from typing import Final

from attrs import define, field
from rich.console import Console
from rich.control import Control
from rich.errors import MarkupError
from rich.markup import escape
from rich.segment import ControlType
from rich.text import Text

from buildbatch.settings import Settings

ELLIPSIS: Final = "..."
PROGRESS_STYLE: Final = "bold green"


def status_text(fmt: str, *args: object) -> str:
    """Format a status message as markup that displays literally, brackets included."""
    return escape(fmt % args if args else fmt)


def progress_text(progress: float, fmt: str, *args: object) -> str:
    """Format a status message prefixed with its progress, e.g. `[ 42%]: compiling a.c`."""
    prefix = f"[{PROGRESS_STYLE}][{math.floor(progress):3d}%]:[/]"
    return f"{prefix} {status_text(fmt, *args)}"


def markup_text(text: str) -> Text:
    """Parse status markup. Text that is not valid markup is shown as is."""
    try:
        return Text.from_markup(text, emoji=False)
    except MarkupError:
        return Text(text)


def truncate_middle(text: Text, width: int) -> Text:
    """Elide the middle of `text` so its plain form fits in `width` columns.

    The first `width // 2 - 3` and the last `width // 2 - 2` characters are kept
    with their styles.
    """
    length = len(text.plain)
    if length <= width:
        return text

    partlen = max(width // 2 - 3, 0)
    head, _, tail = text.divide([partlen, length - partlen - 1])
    line = Text.assemble(head, ELLIPSIS, tail)
    line.truncate(width)
    return line


def _console() -> Console:
    return Console(highlight=False)


@define
class Presenter:
    """Renders build status lines, either scrolling or on a single overwritten line."""

    console: Console = field(factory=_console)

    progress_style: Callable[[], str] | None = None
    """Resolves the display style on first render. Defaults to `Settings.progress_style`."""

    _is_scroll: bool | None = field(init=False, default=None)
    _mid_line: bool = field(init=False, default=False)

    @property
    def is_scroll(self) -> bool:
        # resolved once, the style never changes during a run
        if self._is_scroll is None:
            resolve = self.progress_style or self._default_progress_style
            self._is_scroll = resolve() == "scroll"
        return self._is_scroll

    @property
    def mid_line(self) -> bool:
        return self._mid_line

    def _default_progress_style(self) -> str:
        style = Settings.from_env().progress_style
        if style is None:
            style = "overwrite" if self.console.is_terminal else "scroll"
        return style

    def render(
        self, text: str, progress: float | None = None, *, verbose: bool = False
    ) -> None:
        line = markup_text(text)
        if verbose or self.is_scroll:
            self.console.print(line, soft_wrap=True)
            return

        self.console.control(
            Control.move_to_column(0),
            Control((ControlType.ERASE_IN_LINE, 2)),
        )
        self.console.print(
            truncate_middle(line, self.console.width), end="", soft_wrap=True
        )
        if progress is None or math.floor(progress) == 100:
            self.console.print()
            self._mid_line = False
        else:
            self._mid_line = True
        self.console.file.flush()

    def echo(self, text: str) -> None:
        """Print raw text, such as a command line, on its own line."""
        self.finish()
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def finish(self) -> None:
        """Terminate a pending overwritten progress line."""
        if self._mid_line:
            self.console.print()
            self._mid_line = False
