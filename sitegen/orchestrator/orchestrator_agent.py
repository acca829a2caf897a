"""Orchestrator - coordinates planner, page generator, post-processing, images and stylesheet"""
import logging
import time
from typing import List, Optional

from openai import OpenAI

from sitegen.base_agent import AgentError, create_client
from sitegen.business.business_agent import BusinessContentAgent
from sitegen.business.business_renderer import render_business_page
from sitegen.config.rules import design_guide_for
from sitegen.core.bundle import assemble_bundle
from sitegen.core.config import settings
from sitegen.core.contact_extractor import ContactInfo, extract_contact_and_brand, infer_page_count
from sitegen.core.contact_wiring import wire_contacts
from sitegen.core.cta_rewiring import rewire_ctas
from sitegen.core.image_resolver import ImageCache, resolve_images
from sitegen.core.image_search import ImageSearchClient
from sitegen.core.navigation import normalize_site
from sitegen.core.page_document import PageDocument
from sitegen.generator.generator_agent import PageGeneratorAgent
from sitegen.models.errors import ApplicationError, ErrorCode
from sitegen.models.schemas import BusinessSiteRequest, GenerationRequest, SiteBundle
from sitegen.planner.planner_agent import PlannerAgent
from sitegen.stylesheet.stylesheet_agent import DESIGN_SYSTEM, StylesheetAgent

logger = logging.getLogger(__name__)


def _wire_page(page: PageDocument, contact: ContactInfo) -> PageDocument:
    """Per-page stages, strictly in order: contact wiring then CTA rewiring"""
    return rewire_ctas(wire_contacts(page, contact), contact)


class SiteOrchestrator:
    """Runs one request end to end; never returns a partial bundle"""

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        image_search: Optional[ImageSearchClient] = None,
        stylesheet_mode: Optional[str] = None,
    ):
        client = client or create_client()
        self.image_search = image_search or ImageSearchClient()
        self.stylesheet_mode = stylesheet_mode or settings.stylesheet_mode

        self.planner = PlannerAgent(client)
        self.generator = PageGeneratorAgent(client)
        self.business = BusinessContentAgent(client)
        self.stylesheet = StylesheetAgent(client)

    async def _resolve_images(self, pages: List[PageDocument]) -> List[PageDocument]:
        # One cache per bundle build
        return await resolve_images(pages, self.image_search, ImageCache(), settings.image_fallback_keyword)

    async def generate_site(self, request: GenerationRequest) -> SiteBundle:
        """
        Multi-page flow: plan → pages → contact/CTA wiring → nav normalization → images → stylesheet → bundle.

        Raises:
            ApplicationError: GENERATION_FAILED when any model call fails for good
        """
        started = time.monotonic()
        description = request.description
        contact, business_name = extract_contact_and_brand(description)
        guide = design_guide_for(description)
        page_count = request.page_count or infer_page_count(description) or guide.default_pages

        logger.info(
            f"[Orchestrator] Starting multi-page build | "
            f"category: {guide.category} | "
            f"page_count: {page_count} | "
            f"contact_fields: {[k for k, v in contact.model_dump().items() if v]} | "
            f"business_name: {business_name}"
        )

        try:
            logger.info("[Orchestrator] Phase 1/5: planning")
            plan = await self.planner.run(description, page_count, guide)

            logger.info("[Orchestrator] Phase 2/5: page generation")
            drafts = await self.generator.run(description, plan, guide, contact, page_count)

            logger.info("[Orchestrator] Phase 3/5: post-processing")
            wired = [_wire_page(page, contact) for page in drafts]
            normalized, brand = normalize_site(wired, business_name)

            logger.info("[Orchestrator] Phase 4/5: image resolution")
            pages = await self._resolve_images(normalized)

            logger.info(f"[Orchestrator] Phase 5/5: stylesheet ({self.stylesheet_mode})")
            html = "\n".join(page.render() for page in pages)
            css = await self.stylesheet.run(description, html, self.stylesheet_mode)
        except AgentError as e:
            logger.error(f"[Orchestrator] ✗ Build failed | error: {e}")
            raise ApplicationError(
                ErrorCode.GENERATION_FAILED,
                f"Site generation failed: {e}",
                retryable=True,
                hint="Retry the request",
            ) from e

        bundle = assemble_bundle(pages, css)
        logger.info(
            f"[Orchestrator] ✓ Build complete | "
            f"brand: {brand} | "
            f"pages: {bundle.pages} | "
            f"elapsed: {time.monotonic() - started:.1f}s"
        )
        return bundle

    async def generate_business_site(self, request: BusinessSiteRequest) -> SiteBundle:
        """
        Single-page flow: structured JSON content → deterministic renderer → wiring → images → design system.

        Raises:
            ApplicationError: GENERATION_FAILED or INVALID_CONTENT_FORMAT
        """
        started = time.monotonic()
        description = request.description
        contact, business_name = extract_contact_and_brand(description)

        logger.info(
            f"[Orchestrator] Starting business site build | "
            f"contact_fields: {[k for k, v in contact.model_dump().items() if v]} | "
            f"business_name: {business_name}"
        )

        try:
            content = await self.business.run(description)
            page = _wire_page(render_business_page(content, contact, business_name), contact)
            pages = await self._resolve_images([page])
            css = await self.stylesheet.run(description, "", DESIGN_SYSTEM)
        except AgentError as e:
            logger.error(f"[Orchestrator] ✗ Business build failed | error: {e}")
            raise ApplicationError(
                ErrorCode.GENERATION_FAILED,
                f"Site generation failed: {e}",
                retryable=True,
                hint="Retry the request",
            ) from e

        bundle = assemble_bundle(pages, css)
        logger.info(
            f"[Orchestrator] ✓ Business build complete | "
            f"pages: {bundle.pages} | "
            f"elapsed: {time.monotonic() - started:.1f}s"
        )
        return bundle
