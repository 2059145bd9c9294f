"""
HTTP transport for serialized plotter commands.
Posts the command string to the plotter endpoint without waiting on the caller.
"""
import threading
from typing import Optional

import requests

from config import HTTP_TIMEOUT, POST_IN_BACKGROUND
from utils.logger import get_logger

logger = get_logger(__name__)


class HttpTransport:
    """
    Fire-and-forget POST of raw command text.

    Failures are logged here and never reach the engine.
    """

    def __init__(self, timeout: Optional[float] = None, background: Optional[bool] = None):
        """
        Args:
            timeout: Request timeout in seconds (default from config)
            background: If True, post from a daemon thread (default from config)
        """
        self.timeout = timeout if timeout is not None else HTTP_TIMEOUT
        self.background = background if background is not None else POST_IN_BACKGROUND

    def send(self, url: str, body: str) -> None:
        """Post body to url. Returns immediately when running in background."""
        if self.background:
            thread = threading.Thread(target=self._post, args=(url, body), daemon=True)
            thread.start()
        else:
            self._post(url, body)

    def _post(self, url: str, body: str) -> None:
        logger.info(f"Posting {len(body)} bytes of plotter commands to {url}")
        try:
            response = requests.post(
                url,
                data=body.encode("ascii"),
                headers={"Content-Type": "text/plain"},
                timeout=self.timeout
            )
            response.raise_for_status()
            logger.debug(f"Plotter accepted commands ({response.status_code})")
        except requests.Timeout:
            logger.error(f"Timeout posting commands to {url}")
        except requests.RequestException as e:
            logger.error(f"Failed to post commands to {url}: {e}")
