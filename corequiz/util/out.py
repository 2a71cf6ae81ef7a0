from __future__ import annotations

"""Terminal output helpers: colored log and error lines."""

from colorama import Fore, Style, init as colorama_init

COLORS = {
    "red": Fore.RED,
    "green": Fore.GREEN,
    "yellow": Fore.YELLOW,
    "blue": Fore.BLUE,
    "magenta": Fore.MAGENTA,
    "cyan": Fore.CYAN,
    "white": Fore.WHITE,
}

_COLOR_ENABLED = True


def configure(color: bool = True) -> None:
    """Initialise colorama and switch coloring on or off."""
    global _COLOR_ENABLED
    _COLOR_ENABLED = bool(color)
    if _COLOR_ENABLED:
        colorama_init(autoreset=True)


def colorize(msg: object, color: str | None = None) -> str:
    """Return ``msg`` as a string, bold and colored when coloring is on."""
    text = str(msg)
    if color is None or not _COLOR_ENABLED:
        return text
    return f"{Style.BRIGHT}{COLORS.get(color, '')}{text}{Style.RESET_ALL}"


def log(msg: object, color: str | None = None) -> None:
    print(colorize(msg, color))


def errorlog(emsg: str) -> None:
    log(f"{colorize('Error', 'red')}: {colorize(emsg, 'red')}")
