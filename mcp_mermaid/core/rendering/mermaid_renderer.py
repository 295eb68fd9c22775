"""
Mermaid Renderer
================

Playwright-based mermaid.js rendering. Manages browser instances, loads
mermaid.js into a page and captures both the SVG markup and a PNG screenshot.
"""

from typing import Optional, Any, List, AsyncGenerator
import asyncio
import uuid
from contextlib import asynccontextmanager

from playwright.async_api import async_playwright, Browser, Page

from mcp_mermaid.config.logging import get_logger
from mcp_mermaid.config.settings import Settings, get_settings
from mcp_mermaid.core.rendering.backend import MermaidRenderError
from mcp_mermaid.core.rendering.html_generator import (
    CONTAINER_ID,
    DEFAULT_BACKGROUND_COLOR,
    MermaidPageGenerator,
)
from mcp_mermaid.models.schemas import RenderResult

logger = get_logger(__name__)

DEFAULT_THEME = "default"
TRANSPARENT = "transparent"

RENDER_SCRIPT = """
async ({ id, source, theme, containerId }) => {
  window.mermaid.initialize({ startOnLoad: false, theme: theme });
  const { svg } = await window.mermaid.render(id, source);
  document.getElementById(containerId).innerHTML = svg;
  return svg;
}
"""


class BrowserPool:
    """Browser instance pool. Its size is also the concurrent render limit."""

    def __init__(self, pool_size: int = 2, settings: Optional[Settings] = None):
        self.pool_size = pool_size
        self.browsers: List[Browser] = []
        self._semaphore = asyncio.Semaphore(pool_size)
        self._playwright: Any = None
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="browser_pool")

    async def initialize(self) -> None:
        """Initialize browser pool."""
        try:
            self._playwright = await async_playwright().start()

            for _ in range(self.pool_size):
                browser = await self._playwright.chromium.launch(
                    headless=self.settings.playwright_headless,
                    args=[
                        "--no-sandbox",
                        "--disable-setuid-sandbox",
                        "--disable-dev-shm-usage",
                    ],
                )
                self.browsers.append(browser)

            self.logger.info("Browser pool initialized", pool_size=self.pool_size)
        except Exception as e:
            self.logger.error("Failed to initialize browser pool", error=str(e))
            await self._release_partial()
            raise MermaidRenderError(f"Browser pool initialization failed: {e}") from e

    async def _release_partial(self) -> None:
        """Close whatever a failed initialize managed to start."""
        browsers, self.browsers = self.browsers, []
        for browser in browsers:
            try:
                await browser.close()
            except Exception as e:
                self.logger.warning("Failed to close browser", error=str(e))

        playwright, self._playwright = self._playwright, None
        if playwright:
            try:
                await playwright.stop()
            except Exception as e:
                self.logger.warning("Failed to stop playwright", error=str(e))

    async def close(self) -> None:
        """Close all browsers in the pool."""
        for browser in self.browsers:
            await browser.close()
        self.browsers = []

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        self.logger.info("Browser pool closed")

    @asynccontextmanager
    async def get_browser(self) -> AsyncGenerator[Browser, None]:
        """Get a browser instance from the pool."""
        async with self._semaphore:
            if not self.browsers:
                raise MermaidRenderError("Browser pool not initialized")

            browser = self.browsers.pop()
            try:
                yield browser
            finally:
                self.browsers.append(browser)


class PlaywrightMermaidRenderer:
    """Render backend running mermaid.js in headless Chromium."""

    def __init__(
        self, settings: Optional[Settings] = None, browser_pool: Optional[BrowserPool] = None
    ):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(renderer="playwright")
        self.page_generator = MermaidPageGenerator()
        self.browser_pool = browser_pool
        self._own_pool = browser_pool is None
        self._initialized = browser_pool is not None
        self._init_lock = asyncio.Lock()

        if self._own_pool:
            self.browser_pool = BrowserPool(self.settings.browser_pool_size, self.settings)

    async def initialize(self) -> None:
        """Start the browser pool if this renderer owns it."""
        async with self._init_lock:
            if self._initialized:
                return
            if self._own_pool and self.browser_pool:
                await self.browser_pool.initialize()
            self._initialized = True
            self.logger.info("Mermaid renderer initialized")

    async def close(self) -> None:
        """Close the renderer."""
        if self._own_pool and self.browser_pool and self._initialized:
            await self.browser_pool.close()
        self._initialized = not self._own_pool
        self.logger.info("Mermaid renderer closed")

    async def render(
        self,
        mermaid: str,
        theme: Optional[str] = None,
        background_color: Optional[str] = None,
    ) -> RenderResult:
        """
        Render mermaid source to SVG markup and a PNG screenshot.

        Args:
            mermaid: Mermaid diagram source
            theme: mermaid.js theme name, "default" when absent
            background_color: CSS color behind the diagram, "white" when absent

        Returns:
            RenderResult with the diagram id, SVG markup and PNG bytes

        Raises:
            MermaidRenderError: If the source is invalid or rendering fails
        """
        await self.initialize()

        theme = theme or DEFAULT_THEME
        background_color = background_color or DEFAULT_BACKGROUND_COLOR
        diagram_id = f"mermaid-{uuid.uuid4().hex}"

        try:
            if not self.browser_pool:
                raise MermaidRenderError("Browser pool not available")

            async with self.browser_pool.get_browser() as browser:
                context = await browser.new_context()

                try:
                    page = await context.new_page()
                    page.set_default_timeout(self.settings.playwright_timeout)

                    await page.set_content(
                        self.page_generator.generate(background_color),
                        wait_until="domcontentloaded",
                    )
                    await self._load_mermaid(page)

                    svg = await page.evaluate(
                        RENDER_SCRIPT,
                        {
                            "id": diagram_id,
                            "source": mermaid,
                            "theme": theme,
                            "containerId": CONTAINER_ID,
                        },
                    )

                    element = await page.query_selector(f"#{CONTAINER_ID} svg")
                    if element is None:
                        raise MermaidRenderError("Rendered diagram contains no svg element")

                    screenshot = await element.screenshot(
                        type="png", omit_background=background_color == TRANSPARENT
                    )

                    self.logger.debug(
                        "Mermaid diagram rendered",
                        diagram_id=diagram_id,
                        svg_length=len(svg),
                        screenshot_size=len(screenshot),
                    )

                    return RenderResult(id=diagram_id, svg=svg, screenshot=screenshot)

                finally:
                    await context.close()

        except MermaidRenderError:
            raise
        except Exception as e:
            self.logger.error("Mermaid rendering error", diagram_id=diagram_id, error=str(e))
            raise MermaidRenderError(f"Mermaid rendering failed: {e}") from e

    async def _load_mermaid(self, page: Page) -> None:
        """Inject mermaid.js into the page."""
        if self.settings.mermaid_js_path is not None:
            await page.add_script_tag(path=str(self.settings.mermaid_js_path))
        else:
            await page.add_script_tag(url=self.settings.mermaid_js_url)
        await page.wait_for_function("() => window.mermaid !== undefined")
