"""Translation of terminal keys into logical explorer actions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Action(str, Enum):
    """Closed set of logical key actions understood by the navigator."""

    SUBMIT = "submit"
    NETWORK_UP = "network_up"
    NETWORK_DOWN = "network_down"
    TAB_NEXT = "tab_next"
    TAB_PREV = "tab_prev"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    RETURN_TO_INPUT = "return_to_input"
    QUIT = "quit"

    # Input line editing
    INSERT_CHAR = "insert_char"
    INSERT_TEXT = "insert_text"
    DELETE_CHAR = "delete_char"
    DELETE_FORWARD = "delete_forward"
    CLEAR_INPUT = "clear_input"
    CURSOR_LEFT = "cursor_left"
    CURSOR_RIGHT = "cursor_right"
    CURSOR_START = "cursor_start"
    CURSOR_END = "cursor_end"


@dataclass(frozen=True)
class KeyEvent:
    """A logical action; ``text`` carries the typed or pasted characters."""

    action: Action
    text: Optional[str] = None


# Keys that mean the same thing on every screen
_GLOBAL_KEYS = {
    "ctrl+c": Action.QUIT,
}

_INPUT_KEYS = {
    "enter": Action.SUBMIT,
    "up": Action.NETWORK_UP,
    "down": Action.NETWORK_DOWN,
    "escape": Action.QUIT,
    "backspace": Action.DELETE_CHAR,
    "delete": Action.DELETE_FORWARD,
    "ctrl+u": Action.CLEAR_INPUT,
    "left": Action.CURSOR_LEFT,
    "right": Action.CURSOR_RIGHT,
    "home": Action.CURSOR_START,
    "end": Action.CURSOR_END,
}

_BROWSE_KEYS = {
    "tab": Action.TAB_NEXT,
    "shift+tab": Action.TAB_PREV,
    "up": Action.SCROLL_UP,
    "down": Action.SCROLL_DOWN,
    "pageup": Action.PAGE_UP,
    "pagedown": Action.PAGE_DOWN,
    "home": Action.HOME,
    "r": Action.RETURN_TO_INPUT,
    "escape": Action.RETURN_TO_INPUT,
    "q": Action.QUIT,
}

# Keys the application shell must bind with priority so focus handling never eats them
BOUND_KEYS = tuple(sorted(set(_GLOBAL_KEYS) | set(_INPUT_KEYS) | set(_BROWSE_KEYS) - {"r", "q"}))


def translate_key(key: str, character: Optional[str] = None, on_input: bool = False) -> Optional[KeyEvent]:
    """Map a terminal key to a logical action.

    On the input screen every printable character is text, so ``q`` and
    ``r`` are typed rather than interpreted.

    Args:
        key: Key name as reported by the terminal (``enter``, ``shift+tab``, ``a``)
        character: Printable character for the key, if any
        on_input: Whether the input screen is live

    Returns:
        The key event, or None if the key means nothing here
    """
    if key in _GLOBAL_KEYS:
        return KeyEvent(_GLOBAL_KEYS[key])

    if on_input:
        if key in _INPUT_KEYS:
            return KeyEvent(_INPUT_KEYS[key])
        if character is not None and len(character) == 1 and character.isprintable():
            return KeyEvent(Action.INSERT_CHAR, text=character)
        return None

    action = _BROWSE_KEYS.get(key)
    return KeyEvent(action) if action is not None else None


def translate_paste(text: str, on_input: bool = False) -> Optional[KeyEvent]:
    """Map pasted text to an insertion on the input screen.

    Line breaks and other control characters are dropped, so a signature
    copied with its trailing newline still submits with Enter.
    """
    if not on_input:
        return None
    printable = "".join(c for c in text if c.isprintable())
    return KeyEvent(Action.INSERT_TEXT, text=printable) if printable else None
