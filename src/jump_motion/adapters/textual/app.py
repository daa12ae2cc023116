"""Executable Textual app demonstrating jump labels over a text file."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use jump_motion.adapters.textual.app"
    ) from exc

from jump_motion.host.commands import CommandExecutor, StaticCommandSurface
from jump_motion.host.view import Position
from jump_motion.labels import LabelAssignment
from jump_motion.runtime import telemetry
from jump_motion.runtime.config import JumpConfig

from .controller import TextualJumpAdapter, TextualUIHooks
from .view import TextualEditorView

LABEL_STYLE = "bold black on yellow"
CARET_STYLE = "reverse"

SAMPLE_TEXT = """\
Press the trigger key, then type the yellow label to jump there.
Any control key (arrows, escape) cancels the jump without moving.

The quick brown fox jumps over the lazy dog.
Pack my box with five dozen liquor jugs.
"""


def render_lines(
    first_row: int,
    lines: Sequence[str],
    caret: Position,
    labels: Sequence[LabelAssignment],
) -> Text:
    """Compose visible lines with labels painted over their targets."""

    by_row: Dict[int, list[LabelAssignment]] = {}
    for assignment in labels:
        by_row.setdefault(assignment.target.row, []).append(assignment)

    text = Text()
    for offset, line in enumerate(lines):
        row = first_row + offset
        chars = list(line)
        painted: list[tuple[int, int]] = []
        for assignment in by_row.get(row, ()):
            col = assignment.target.column
            for index, char in enumerate(assignment.code):
                if col + index < len(chars):
                    chars[col + index] = char
                else:
                    chars.append(char)
            painted.append((col, col + len(assignment.code)))

        rendered = "".join(chars)
        if row == caret[0] and caret[1] >= len(rendered):
            rendered += " "
        start = len(text)
        text.append(rendered)
        for begin, end in painted:
            text.stylize(LABEL_STYLE, start + begin, start + end)
        if row == caret[0] and not labels:
            text.stylize(CARET_STYLE, start + caret[1], start + caret[1] + 1)
        text.append("\n")
    return text


class JumpMotionApp(App[None]):
    """Minimal Textual UI hosting one jump-enabled text view."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#text-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, text: str, *, config: Optional[JumpConfig] = None) -> None:
        super().__init__()
        self.config = config or JumpConfig.from_env()
        self.view = TextualEditorView.from_text(text, name="demo")
        self.adapter: TextualJumpAdapter | None = None
        self._labels: tuple[LabelAssignment, ...] = ()
        self._text_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="text-area"):
            self._text_widget = Static("", id="text-view")
            yield self._text_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        # Demo surface with no competing modal extension installed.
        commands = CommandExecutor(StaticCommandSurface())
        hooks = TextualUIHooks(
            refresh_view=self._refresh_view,
            update_status=self._update_status,
            show_labels=self._show_labels,
            log=self._log_line,
        )
        self.adapter = TextualJumpAdapter(
            self.view, hooks, config=self.config, commands=commands
        )
        self._update_status(f"{self.config.trigger_key} to jump")

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.shutdown()

    def on_resize(self, event: events.Resize) -> None:
        self.view.resize(max(1, event.size.height - 4))
        self._refresh_view(self.view)

    def on_app_blur(self, event: events.AppBlur) -> None:
        del event
        if self.adapter:
            self.adapter.handle_focus_lost()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        text = event.character if event.is_printable else None
        if self.adapter.handle_textual_key(event.key, text=text):
            event.stop()

    def _refresh_view(self, view: TextualEditorView) -> None:
        if self._text_widget is None:
            return
        first_row, lines = view.visible_lines()
        self._text_widget.update(
            render_lines(first_row, lines, view.caret, self._labels)
        )

    def _show_labels(self, labels: Sequence[LabelAssignment]) -> None:
        self._labels = tuple(labels)
        self._refresh_view(self.view)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("textual.adapter", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the jump_motion Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Text file to open (defaults to a built-in sample)",
    )
    parser.add_argument(
        "--trigger-key",
        default=None,
        help="Textual key name that starts a jump (default: ctrl+j)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telelog preset to use instead of JUMP_MOTION_* variables",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = JumpConfig.from_env()
    if args.trigger_key:
        config = replace(config, trigger_key=args.trigger_key)
    text = args.path.read_text(encoding="utf-8") if args.path else SAMPLE_TEXT
    JumpMotionApp(text, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
