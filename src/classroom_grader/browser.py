"""
Launch repositories in the system web browser.
"""

import logging
import webbrowser

from classroom_grader.exceptions import BrowserLaunchError

logger = logging.getLogger(__name__)


def _is_console_browser(controller: webbrowser.BaseBrowser) -> bool:
    """Text browsers (lynx, w3m, ...) run in the foreground and take over the terminal."""
    return isinstance(controller, webbrowser.GenericBrowser) and not isinstance(
        controller, webbrowser.BackgroundBrowser
    )


def open_in_browser(url: str) -> None:
    """
    Open a URL with the platform's default browser without waiting for it.

    Raises:
        BrowserLaunchError: If no graphical browser could be launched
    """
    logger.debug(f"Opening {url}")
    try:
        controller = webbrowser.get()
    except webbrowser.Error as e:
        raise BrowserLaunchError(f"Could not open {url}: {e}") from e

    if _is_console_browser(controller):
        raise BrowserLaunchError(
            f"Could not open {url}: only the console browser "
            f"{controller.name!r} is available (is a display available?)"
        )

    try:
        opened = controller.open(url)
    except webbrowser.Error as e:
        raise BrowserLaunchError(f"Could not open {url}: {e}") from e
    if not opened:
        raise BrowserLaunchError(
            f"Could not open {url}: no usable browser found (is a display available?)"
        )
