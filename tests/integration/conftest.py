"""
Pytest configuration for integration tests

Browser tests need Playwright with Chromium installed
(``playwright install chromium``); they are skipped otherwise.
"""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


def pytest_collection_modifyitems(config, items):
    for item in items:
        item.add_marker(pytest.mark.integration)


async def save_contact(request):
    form = await request.post()
    invalid = [name for name in ("name", "email") if not form.get(name)]
    if invalid:
        return web.json_response({
            "success": False,
            "message": "Please fill in the highlighted fields",
            "invalid": invalid,
        })
    return web.json_response({"success": True, "message": f"Thanks, {form['name']}!"})


@pytest.fixture
async def api_server():
    """JSON endpoint the test forms post to"""
    app = web.Application()
    app.router.add_post("/contact", save_contact)
    async with TestServer(app) as srv:
        yield srv


@pytest.fixture
async def browser_page():
    """Provide a browser page for tests"""
    async_api = pytest.importorskip("playwright.async_api")

    async with async_api.async_playwright() as p:
        try:
            browser = await p.chromium.launch(headless=True)
        except Exception as e:
            pytest.skip(f"Chromium is not available: {e}")
        page = await browser.new_page()
        yield page
        await browser.close()
