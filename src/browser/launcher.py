"""One-shot default-browser launcher.

Hard rules:
  - At most one open attempt per launcher, whatever the outcome.
  - Failures are logged, never raised.
"""

import asyncio
import logging
import webbrowser

logger = logging.getLogger(__name__)


class BrowserLauncher:
    """Opens the default web browser at ``url`` the first time ``open()`` is awaited."""

    def __init__(self, url: str, *, enabled: bool = True) -> None:
        self._url = url
        self._enabled = enabled
        self._attempted = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def attempted(self) -> bool:
        return self._attempted

    async def open(self) -> bool:
        """Try to open the browser. Returns True if this call made the attempt."""
        if self._attempted:
            logger.debug("Browser already opened once; ignoring")
            return False
        self._attempted = True

        if not self._enabled:
            logger.info("Browser launch disabled; open %s manually", self._url)
            return False

        try:
            # webbrowser.open can block on some platforms; keep it off the event loop
            opened = await asyncio.to_thread(webbrowser.open, self._url)
        except Exception:
            logger.warning("Failed to open browser at %s", self._url, exc_info=True)
            return True

        if opened:
            logger.info("Opened browser at %s", self._url)
        else:
            logger.warning("No browser available; open %s manually", self._url)
        return True
