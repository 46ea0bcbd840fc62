"""Translation of keyboard input into the editor's key notation."""

from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Union

from gridview.settings import SETTINGS
from gridview.window_settings import KeyboardSettings

logger = logging.getLogger(__name__)

_CONTROL_KEYS = {
    "Backspace": "BS",
    "Escape": "Esc",
    "Delete": "Del",
    "ArrowUp": "Up",
    "ArrowDown": "Down",
    "ArrowLeft": "Left",
    "ArrowRight": "Right",
    "F1": "F1",
    "F2": "F2",
    "F3": "F3",
    "F4": "F4",
    "F5": "F5",
    "F6": "F6",
    "F7": "F7",
    "F8": "F8",
    "F9": "F9",
    "F10": "F10",
    "F11": "F11",
    "F12": "F12",
    "Insert": "Insert",
    "Home": "Home",
    "End": "End",
    "PageUp": "PageUp",
    "PageDown": "PageDown",
    "Tab": "Tab",
}

_SPECIAL_TEXT = {
    " ": "Space",
    "<": "lt",
    "\\": "Bslash",
    "|": "Bar",
    "\t": "Tab",
    "\n": "CR",
}


def is_control_key(key: str | None) -> str | None:
    """Key-notation name of a named key that never produces text, if it is one."""
    if key is None:
        return None
    return _CONTROL_KEYS.get(key)


def is_special(text: str) -> str | None:
    """Key-notation name for text that must be escaped, if it needs escaping."""
    return _SPECIAL_TEXT.get(text)


class KeyState(enum.Enum):
    """Whether a key went down or came up."""

    PRESSED = "pressed"
    RELEASED = "released"


@dataclass(frozen=True)
class KeyEvent:
    """A physical key event as delivered by the windowing layer.

    ``key`` names a non-character key such as ``"Backspace"`` or ``"ArrowUp"``.
    ``is_dead`` marks a dead key, whose pending character is ``dead_char``.
    """

    state: KeyState
    key: str | None = None
    text: str | None = None
    text_with_all_modifiers: str | None = None
    is_dead: bool = False
    dead_char: str | None = None


@dataclass(frozen=True)
class _ImeInput:
    text: str


_QueuedInput = Union[KeyEvent, _ImeInput]


def _or_empty(condition: bool, text: str) -> str:
    return text if condition else ""


class KeyboardManager:
    """Collects key events during a frame and turns them into keybindings.

    Keybindings are produced by :meth:`flush`, which returns them and also
    passes each one to ``send`` when that callback is given.
    """

    def __init__(
        self,
        send: Callable[[str], None] | None = None,
        settings: KeyboardSettings | None = None,
        alt_as_meta: bool | None = None,
    ) -> None:
        self._send = send
        self._settings = settings
        # On macOS the option key selects alternate characters instead of acting as Meta.
        self._alt_as_meta = sys.platform != "darwin" if alt_as_meta is None else alt_as_meta
        self.shift = False
        self.ctrl = False
        self.alt = False
        self.logo = False
        self.prev_dead_key: str | None = None
        self._ignore_input_this_frame = False
        self._queued: list[_QueuedInput] = []

    def set_modifiers(
        self, shift: bool = False, ctrl: bool = False, alt: bool = False, logo: bool = False
    ) -> None:
        """Record the current modifier state."""
        self.shift = shift
        self.ctrl = ctrl
        self.alt = alt
        self.logo = logo

    def focus_changed(self) -> None:
        """Ignore the input queued this frame, as the window focus just changed."""
        self._ignore_input_this_frame = True

    def queue_key_event(self, event: KeyEvent) -> None:
        """Queue a key event for the next flush."""
        self._queued.append(event)

    def queue_ime_input(self, text: str) -> None:
        """Queue committed input-method text for the next flush."""
        self._queued.append(_ImeInput(text))

    def flush(self) -> list[str]:
        """Turn the queued input into keybindings and clear the queue."""
        produced: list[str] = []
        if not self._should_ignore_input():
            for item in self._queued:
                next_dead_key = self.prev_dead_key
                if isinstance(item, KeyEvent):
                    if item.state is KeyState.PRESSED:
                        keybinding = self._keybinding_for(item)
                        if keybinding is not None:
                            produced.append(keybinding)
                        next_dead_key = None
                    elif item.is_dead:
                        next_dead_key = item.dead_char
                elif self.prev_dead_key is None:
                    produced.append(item.text)
                self.prev_dead_key = next_dead_key

        self._ignore_input_this_frame = False
        self._queued.clear()

        if self._send is not None:
            for keybinding in produced:
                self._send(keybinding)
        return produced

    def format_modifier_string(self, use_shift: bool) -> str:
        """The modifier prefix, such as ``C-M-``, for the current modifiers."""
        return (
            _or_empty(self.shift and use_shift, "S-")
            + _or_empty(self.ctrl, "C-")
            + _or_empty(self._use_alt(), "M-")
            + _or_empty(self.logo, "D-")
        )

    def _use_alt(self) -> bool:
        return self.alt and self._alt_as_meta

    def _current_settings(self) -> KeyboardSettings:
        if self._settings is not None:
            return self._settings
        try:
            return SETTINGS.get(KeyboardSettings)
        except KeyError:
            return KeyboardSettings()

    def _should_ignore_input(self) -> bool:
        settings = self._current_settings()
        return self._ignore_input_this_frame or (self.logo and not settings.use_logo)

    def _keybinding_for(self, event: KeyEvent) -> str | None:
        control_text = is_control_key(event.key)
        if control_text is not None:
            keybinding = self._format_keybinding(True, True, control_text)
            if self.prev_dead_key is not None:
                return self.prev_dead_key + keybinding
            return keybinding

        key_text = event.text if self.prev_dead_key is None else event.text_with_all_modifiers
        if key_text is None:
            return None
        if self.alt and event.text_with_all_modifiers is not None:
            key_text = event.text_with_all_modifiers

        escaped = is_special(key_text)
        if escaped is not None:
            return self._format_keybinding(True, False, escaped)
        return self._format_keybinding(False, False, key_text)

    def _format_keybinding(self, special: bool, use_shift: bool, text: str) -> str:
        special = special or self.ctrl or self._use_alt() or self.logo
        return (
            _or_empty(special, "<")
            + self.format_modifier_string(use_shift)
            + text
            + _or_empty(special, ">")
        )