"""
End-to-end tests for the orchestrator with stubbed model calls and image search
"""
import json
import re

import pytest
from bs4 import BeautifulSoup
from unittest.mock import AsyncMock, Mock

from sitegen.base_agent import AgentError
from sitegen.models.errors import ApplicationError, ErrorCode
from sitegen.models.schemas import BusinessSiteRequest, GenerationRequest
from sitegen.orchestrator.orchestrator_agent import SiteOrchestrator
from sitegen.stylesheet.design_system import DESIGN_SYSTEM_CSS, OVERRIDES_CSS

PHOTO = "https://images.unsplash.com/photo-42"
TEAM_IMAGE = '<img src="https://source.unsplash.com/1200x600/?team,people">'


def _fragment(page_number):
    image = TEAM_IMAGE if page_number in (1, 2) else ""
    return (
        f'<header><a class="logo" href="#">Brand {page_number}</a>'
        f'<nav><a href="#">Home</a></nav></header>'
        f'<main><section class="hero"><h1>Page {page_number}</h1>'
        f'<a class="btn" href="#">Contact us</a>'
        f'<a href="tel:+999999999">Call</a>{image}</section></main>'
    )


def _page_number(prompt):
    return int(re.search(r"You are writing page (\d+) of", prompt).group(1))


def _orchestrator(search_configured=True, stylesheet_mode="design_system"):
    search = Mock()
    search.configured = search_configured
    search.search = AsyncMock(return_value=PHOTO)
    orchestrator = SiteOrchestrator(client=Mock(), image_search=search, stylesheet_mode=stylesheet_mode)
    orchestrator.planner._call_model = AsyncMock(return_value="PLAN")
    orchestrator.generator._call_model = AsyncMock(side_effect=lambda prompt, **kwargs: _fragment(_page_number(prompt)))
    orchestrator.stylesheet._call_model = AsyncMock(return_value="body { margin: 0; }")
    return orchestrator


class TestGenerateSite:
    """Multi-page flow"""

    @pytest.mark.asyncio
    async def test_single_page_contact_wiring(self):
        orchestrator = _orchestrator()
        bundle = await orchestrator.generate_site(
            GenerationRequest(description="A bakery\nPhone: 0700123456", page_count=1)
        )

        assert bundle.pages == ["page1.html"]
        html = bundle.html[0]
        assert 'href="tel:0700123456"' in html
        assert 'href="https://wa.me/0700123456"' in html
        assert "tel:+999999999" not in html
        assert html.startswith("<!DOCTYPE html>")

    @pytest.mark.asyncio
    async def test_three_pages(self):
        orchestrator = _orchestrator()
        bundle = await orchestrator.generate_site(GenerationRequest(description="A bakery", pageCount=3))

        assert bundle.pages == ["page1.html", "page2.html", "page3.html"]
        assert len(bundle.html) == 3
        assert orchestrator.planner._call_model.call_count == 1
        assert orchestrator.generator._call_model.call_count == 3
        for filename, html in zip(bundle.pages, bundle.html):
            soup = BeautifulSoup(html, "html.parser")
            assert [a["href"] for a in soup.select("nav a.active")] == [filename]
            assert soup.select_one("header .logo").get_text() == "Brand 1"
            assert "Brand 2" not in html

    @pytest.mark.asyncio
    async def test_page_count_inferred_from_description(self):
        orchestrator = _orchestrator()
        bundle = await orchestrator.generate_site(GenerationRequest(description="A 2-page site for my bakery"))
        assert bundle.pages == ["page1.html", "page2.html"]

    @pytest.mark.asyncio
    async def test_single_page_retry_is_transparent(self):
        orchestrator = _orchestrator()
        failed = []

        def flaky(prompt, **kwargs):
            number = _page_number(prompt)
            if number == 2 and not failed:
                failed.append(number)
                raise AgentError("rate limited")
            return _fragment(number)

        orchestrator.generator._call_model = AsyncMock(side_effect=flaky)
        bundle = await orchestrator.generate_site(GenerationRequest(description="A bakery", pageCount=3))

        assert bundle.pages == ["page1.html", "page2.html", "page3.html"]
        assert orchestrator.generator._call_model.call_count == 4

        clean = await _orchestrator().generate_site(GenerationRequest(description="A bakery", pageCount=3))
        assert bundle.html == clean.html

    @pytest.mark.asyncio
    async def test_duplicate_images_across_pages_single_lookup(self):
        orchestrator = _orchestrator()
        bundle = await orchestrator.generate_site(GenerationRequest(description="A bakery", pageCount=3))

        assert orchestrator.image_search.search.await_count == 1
        resolved = f"{PHOTO}?w=1200&amp;h=600&amp;fit=crop&amp;auto=format&amp;q=80"
        assert resolved in bundle.html[0]
        assert resolved in bundle.html[1]
        assert "source.unsplash.com" not in bundle.html[0]

    @pytest.mark.asyncio
    async def test_missing_image_credential_keeps_placeholders(self):
        orchestrator = _orchestrator(search_configured=False)
        bundle = await orchestrator.generate_site(GenerationRequest(description="A bakery", pageCount=2))

        orchestrator.image_search.search.assert_not_awaited()
        assert "source.unsplash.com/1200x600" in bundle.html[0]

    @pytest.mark.asyncio
    async def test_page_failing_twice_aborts_request(self):
        orchestrator = _orchestrator()

        def broken(prompt, **kwargs):
            if _page_number(prompt) == 3:
                raise AgentError("down")
            return _fragment(_page_number(prompt))

        orchestrator.generator._call_model = AsyncMock(side_effect=broken)
        with pytest.raises(ApplicationError) as exc_info:
            await orchestrator.generate_site(GenerationRequest(description="A bakery", pageCount=3))

        assert exc_info.value.code == ErrorCode.GENERATION_FAILED
        orchestrator.stylesheet._call_model.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_planner_failure_aborts_before_fan_out(self):
        orchestrator = _orchestrator()
        orchestrator.planner._call_model = AsyncMock(side_effect=AgentError("down"))

        with pytest.raises(ApplicationError) as exc_info:
            await orchestrator.generate_site(GenerationRequest(description="A bakery", pageCount=2))

        assert exc_info.value.code == ErrorCode.GENERATION_FAILED
        orchestrator.generator._call_model.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generated_stylesheet_mode(self):
        orchestrator = _orchestrator(stylesheet_mode="generated")
        bundle = await orchestrator.generate_site(GenerationRequest(description="A bakery", pageCount=1))

        assert bundle.css.startswith("body { margin: 0; }")
        assert bundle.css.endswith(OVERRIDES_CSS)
        assert "postMessage" in bundle.js


class TestGenerateBusinessSite:
    """Single-page structured flow"""

    CONTENT = {
        "business_name": "Model Name",
        "sections": [
            {"type": "hero", "headline": "Fresh bread", "image_keywords": "bakery"},
            {"type": "about", "body": "Since 1998."},
            {"type": "services", "items": [{"name": "Cakes", "description": "Birthday cakes"}]},
            {"type": "contact"},
        ],
    }

    @pytest.mark.asyncio
    async def test_business_bundle(self):
        orchestrator = _orchestrator()
        orchestrator.business._call_model = AsyncMock(return_value="```json\n" + json.dumps(self.CONTENT) + "\n```")

        bundle = await orchestrator.generate_business_site(
            BusinessSiteRequest(description="A bakery\nBusiness Name: Sunrise Bakery\nWhatsApp: +256 700 111 222")
        )

        assert bundle.pages == ["index.html"]
        html = bundle.html[0]
        assert 'href="https://wa.me/256700111222"' in html
        assert "Sunrise Bakery" in html
        assert "Model Name" not in html
        assert bundle.css.startswith(DESIGN_SYSTEM_CSS.rstrip())
        orchestrator.stylesheet._call_model.assert_not_awaited()
        orchestrator.image_search.search.assert_awaited_once_with("bakery", "landscape")

    @pytest.mark.asyncio
    async def test_undecodable_content_is_fatal(self):
        orchestrator = _orchestrator()
        orchestrator.business._call_model = AsyncMock(return_value="Here is your website!")

        with pytest.raises(ApplicationError) as exc_info:
            await orchestrator.generate_business_site(BusinessSiteRequest(description="A bakery"))
        assert exc_info.value.code == ErrorCode.INVALID_CONTENT_FORMAT

    @pytest.mark.asyncio
    async def test_upstream_failure(self):
        orchestrator = _orchestrator()
        orchestrator.business._call_model = AsyncMock(side_effect=AgentError("down"))

        with pytest.raises(ApplicationError) as exc_info:
            await orchestrator.generate_business_site(BusinessSiteRequest(description="A bakery"))
        assert exc_info.value.code == ErrorCode.GENERATION_FAILED
