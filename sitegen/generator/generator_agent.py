"""Page generator agent - fans out one request per page"""
import asyncio
import logging
from typing import List, Optional

from sitegen.base_agent import AgentError, BaseAgent
from sitegen.config.rules import DesignGuide
from sitegen.core.config import settings
from sitegen.core.contact_extractor import ContactInfo
from sitegen.core.page_document import PageDocument, clean_fragment, new_page, page_filenames
from sitegen.generator.generator_prompt import GENERATOR_SYSTEM_PROMPT, build_page_prompt

logger = logging.getLogger(__name__)


class PageGeneratorAgent(BaseAgent):
    """Generator agent - one fragment per page, bounded concurrency, one retry per page"""

    # A failed or unusable page is retried once with the identical prompt; the second failure is fatal.
    def __init__(self, client, model: Optional[str] = None, max_concurrency: Optional[int] = None):
        super().__init__(client, model or settings.content_model, agent_name="Generator")
        self.max_attempts = 2
        self.max_concurrency = max_concurrency or settings.max_concurrent_generations

    async def _attempt(self, prompt: str, filename: str) -> str:
        raw = await self._call_model(prompt, system_prompt=GENERATOR_SYSTEM_PROMPT)
        fragment = clean_fragment(raw)
        if not fragment:
            raise AgentError(f"Unusable fragment for {filename}")
        return fragment

    async def generate_page(self, prompt: str, index: int, filename: str) -> PageDocument:
        """
        Generate one page, retrying once on failure.

        Raises:
            AgentError: When both attempts fail
        """
        last_error: Optional[AgentError] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                fragment = await self._attempt(prompt, filename)
            except AgentError as e:
                last_error = e
                logger.warning(
                    f"[Generator] ✗ Page attempt failed | "
                    f"page: {filename} | "
                    f"attempt: {attempt}/{self.max_attempts} | "
                    f"error: {e}"
                )
                continue
            logger.info(
                f"[Generator] ✓ Page generated | "
                f"page: {filename} | "
                f"attempt: {attempt} | "
                f"fragment_length: {len(fragment)} chars"
            )
            return new_page(index, filename, fragment)

        raise AgentError(f"Page {filename} failed after {self.max_attempts} attempts: {last_error}")

    async def run(
        self,
        description: str,
        site_plan: str,
        guide: DesignGuide,
        contact: ContactInfo,
        page_count: int,
    ) -> List[PageDocument]:
        """
        Generate every page concurrently.

        Returns:
            PageDocuments in DRAFT state, in filename order

        Raises:
            AgentError: When any page fails twice; no partial result is returned
        """
        filenames = page_filenames(page_count)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        logger.info(
            f"[Generator] Fanning out page requests | "
            f"pages: {page_count} | "
            f"max_concurrency: {self.max_concurrency}"
        )

        async def bounded(index: int, filename: str) -> PageDocument:
            prompt = build_page_prompt(description, site_plan, guide, index + 1, filenames, contact)
            async with semaphore:
                return await self.generate_page(prompt, index, filename)

        pages = await asyncio.gather(*(bounded(i, name) for i, name in enumerate(filenames)))
        return list(pages)
