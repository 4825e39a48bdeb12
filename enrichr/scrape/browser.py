"""Headless Chrome rendering for JavaScript-dependent pages."""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from enrichr.config import ScrapeConfig
from enrichr.core.errors import FetchTimeoutError, RenderError

logger = logging.getLogger(__name__)

# No new resource entries for this long counts as network idle
NETWORK_QUIET_PERIOD = 0.5
_POLL_INTERVAL = 0.25

_RESOURCE_COUNT_JS = "return window.performance.getEntriesByType('resource').length"


def chrome_driver(config: ScrapeConfig):
    """Launch a headless Chrome driver configured for scraping."""
    options = Options()
    options.add_argument("--headless")
    options.add_argument("--disable-gpu")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument(f"user-agent={config.user_agent}")

    return webdriver.Chrome(service=Service(ChromeDriverManager().install()), options=options)


class BrowserRenderer:
    """Renders pages in a headless browser and returns the final HTML."""

    def __init__(
        self,
        config: Optional[ScrapeConfig] = None,
        driver_factory: Optional[Callable[[ScrapeConfig], object]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize browser renderer.

        Args:
            config: Scraping configuration (uses defaults if None)
            driver_factory: Builds a WebDriver from the config (headless Chrome by default)
            sleep: Sleep function used for the settle delay and idle polling
        """
        self.config = config or ScrapeConfig()
        self.driver_factory = driver_factory or chrome_driver
        self.sleep = sleep

    @contextmanager
    def session(self) -> Iterator[object]:
        """Yield a browser driver that is always shut down on exit."""
        try:
            driver = self.driver_factory(self.config)
        except WebDriverException as e:
            raise RenderError("<browser launch>", e.msg or str(e)) from e
        except Exception as e:
            # webdriver-manager resolves and downloads chromedriver at launch
            raise RenderError("<browser launch>", f"{type(e).__name__}: {e}") from e

        try:
            driver.set_page_load_timeout(self.config.timeout)
            yield driver
        finally:
            driver.quit()

    def render(self, url: str) -> str:
        """
        Render a URL and return the HTML after scripts have settled.

        Args:
            url: URL to render

        Returns:
            Rendered page source

        Raises:
            FetchTimeoutError: Page load exceeded the configured timeout
            RenderError: Browser failed to launch or navigate
        """
        logger.info(f"Rendering with headless browser: {url}")

        with self.session() as driver:
            try:
                driver.get(url)
                self._wait_for_network_idle(driver)
                self.sleep(self.config.settle_delay)
                return driver.page_source
            except TimeoutException as e:
                raise FetchTimeoutError(url, self.config.timeout) from e
            except WebDriverException as e:
                raise RenderError(url, e.msg or str(e)) from e

    def _wait_for_network_idle(self, driver) -> None:
        """Wait for document ready, then for resource loading to go quiet."""
        timeout = self.config.network_idle_timeout
        try:
            WebDriverWait(driver, timeout).until(
                lambda d: d.execute_script("return document.readyState") == "complete"
            )
        except TimeoutException:
            logger.debug(f"Document not ready within {timeout}s, reading it anyway")
            return

        deadline = time.monotonic() + timeout
        last_count = driver.execute_script(_RESOURCE_COUNT_JS)
        quiet_since = time.monotonic()

        while time.monotonic() < deadline:
            self.sleep(_POLL_INTERVAL)
            count = driver.execute_script(_RESOURCE_COUNT_JS)
            if count != last_count:
                last_count = count
                quiet_since = time.monotonic()
            elif time.monotonic() - quiet_since >= NETWORK_QUIET_PERIOD:
                return

        logger.debug(f"Network did not go idle within {timeout}s, continuing")
