"""Planner agent - produces the SitePlan shared by every page request"""
import logging
from typing import Optional

from sitegen.base_agent import AgentError, BaseAgent, strip_code_fences
from sitegen.config.rules import DesignGuide
from sitegen.core.config import settings
from sitegen.core.page_document import page_filenames
from sitegen.planner.planner_prompt import PLANNER_SYSTEM_PROMPT, build_planner_prompt

logger = logging.getLogger(__name__)


class PlannerAgent(BaseAgent):
    """Planner agent - one call, no retry"""

    def __init__(self, client, model: Optional[str] = None):
        super().__init__(client, model or settings.planner_model, agent_name="Planner")

    async def run(self, description: str, page_count: int, guide: DesignGuide) -> str:
        """
        Plan the site.

        Args:
            description: User's site description
            page_count: Number of pages to plan (1..5)
            guide: Design guide for the detected category

        Returns:
            SitePlan text; treated as opaque by every later stage

        Raises:
            AgentError: When the call fails or returns nothing usable
        """
        filenames = page_filenames(page_count)
        logger.info(
            f"[Planner] Planning site | "
            f"category: {guide.category} | "
            f"page_count: {page_count}"
        )

        raw = await self._call_model(
            build_planner_prompt(description, page_count, guide, filenames),
            system_prompt=PLANNER_SYSTEM_PROMPT,
        )
        plan = strip_code_fences(raw)
        if not plan:
            raise AgentError("Planner returned an empty site plan")

        logger.info(f"[Planner] ✓ Site plan ready | length: {len(plan)} chars")
        return plan
