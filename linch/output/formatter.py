import shlex
from typing import Optional
from urllib.parse import unquote
from colorama import Fore, Style
from ..validator.action import (
    Action,
    Success,
    PermanentRedirect,
    TemporaryRedirect,
    LinkError,
)


class PrettyFormatter:
    """One tagged line per action, optionally coloured"""

    def __init__(self, color: bool = True):
        self.color = color

    def _paint(self, value, color: str) -> str:
        if not self.color:
            return str(value)
        return f"{color}{value}{Style.RESET_ALL}"

    def format(self, action: Action) -> Optional[str]:
        if isinstance(action, Success):
            return f"SUCCE {self._paint(action.status, Fore.GREEN)}: {action.link.url}"

        if isinstance(action, PermanentRedirect):
            return (f"REDIR {self._paint(action.status, Fore.YELLOW)}: "
                    f"{action.link.url} -> {unquote(action.target)}")

        if isinstance(action, TemporaryRedirect):
            return (f"SEMIR {self._paint(action.status, Fore.BLUE)}: "
                    f"{action.link.url} -> {unquote(action.target)}")

        if isinstance(action, LinkError):
            if action.is_internal:
                code = action.status if action.status else "XXX"
                return f"INTER {self._paint(code, Fore.MAGENTA)}: {action.link.url} ({action.message})"
            return f"ERROR {self._paint(action.status, Fore.RED)}: {action.link.url}"

        raise TypeError(f"unexpected action: {action!r}")


def _sed_escape_pattern(text: str) -> str:
    """Escape text for a basic-regex sed pattern using '|' as delimiter"""
    escaped = []
    for char in text:
        if char in '\\|.*[]^$':
            escaped.append('\\' + char)
        else:
            escaped.append(char)
    return ''.join(escaped)


def _sed_escape_replacement(text: str) -> str:
    return text.replace('\\', '\\\\').replace('|', '\\|').replace('&', '\\&')


class FixFormatter:
    """Shell commands that apply permanent redirects to their source files"""

    def format(self, action: Action) -> Optional[str]:
        if isinstance(action, PermanentRedirect):
            script = (f"s|{_sed_escape_pattern(action.link.url)}"
                      f"|{_sed_escape_replacement(action.target)}|g")
            return f"sed -i {shlex.quote(script)} {shlex.quote(action.link.path)}"

        if isinstance(action, LinkError) and action.is_internal:
            message = action.message.replace('\n', ' ')
            return f"# INTER {action.link.url}: {message}"

        return None


def build_formatter(fix: bool = False, color: bool = True):
    """Select the output formatter for a run"""
    if fix:
        return FixFormatter()
    return PrettyFormatter(color=color)
