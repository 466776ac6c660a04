"""Browser automation using Playwright."""
import logging
from abc import ABC, abstractmethod
from typing import Optional
from playwright.async_api import (
    async_playwright,
    Browser,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeout,
)
from intake.core.errors import AcquisitionError, AcquisitionTimeoutError

logger = logging.getLogger(__name__)


class Renderer(ABC):
    """Renders a URL and returns the page's visible text."""

    name: str = "browser"

    @abstractmethod
    async def render(self, url: str) -> str:
        """
        Render a page and return its visible text.

        Raises:
            AcquisitionTimeoutError: navigation did not settle in time
            AcquisitionError: the page could not be reached or rendered
        """
        pass


class BrowserManager:
    """Manages one browser instance for the lifetime of an async context."""

    def __init__(self, headless: bool = True, ws_endpoint: Optional[str] = None):
        self.headless = headless
        self.ws_endpoint = ws_endpoint
        self.playwright = None
        self.browser: Optional[Browser] = None

    async def __aenter__(self):
        """Start browser context."""
        self.playwright = await async_playwright().start()
        try:
            if self.ws_endpoint:
                self.browser = await self.playwright.chromium.connect_over_cdp(self.ws_endpoint)
            else:
                self.browser = await self.playwright.chromium.launch(headless=self.headless)
        except BaseException:
            await self.playwright.stop()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close browser context."""
        try:
            if self.browser:
                await self.browser.close()
        finally:
            if self.playwright:
                await self.playwright.stop()

    async def get_page_text(self, url: str, timeout: int = 30000) -> str:
        """
        Navigate to a URL, wait for the network to go idle and read the visible text.

        Args:
            url: The URL to render
            timeout: Navigation timeout in milliseconds

        Returns:
            document.body.innerText, or an empty string for a bodiless page
        """
        if not self.browser:
            raise RuntimeError("Browser not initialized. Use async context manager.")

        page = await self.browser.new_page()
        try:
            await page.goto(url, wait_until="networkidle", timeout=timeout)
            return await page.evaluate("() => document.body ? document.body.innerText : ''") or ""
        finally:
            await page.close()


class PlaywrightRenderer(Renderer):
    """Renderer backed by a local or remote headless Chromium."""

    def __init__(self, headless: bool = True, timeout: int = 30000, ws_endpoint: Optional[str] = None):
        self.headless = headless
        self.timeout = timeout
        self.ws_endpoint = ws_endpoint

    async def render(self, url: str) -> str:
        try:
            async with BrowserManager(headless=self.headless, ws_endpoint=self.ws_endpoint) as browser:
                return await browser.get_page_text(url, timeout=self.timeout)
        except PlaywrightTimeout as e:
            logger.error(f"Timeout rendering {url} after {self.timeout}ms: {e}")
            raise AcquisitionTimeoutError(
                f"Timeout loading page: {e}", backend=self.name
            ) from e
        except PlaywrightError as e:
            logger.error(f"Error rendering {url}: {e}")
            raise AcquisitionError(
                f"Error loading page: {e}", backend=self.name
            ) from e
