"""Stylesheet agent - generated or design-system stylesheet plus the fixed overrides"""
import logging
from typing import Optional

from sitegen.base_agent import AgentError, BaseAgent, strip_code_fences
from sitegen.core.config import settings
from sitegen.models.errors import ApplicationError, ErrorCode
from sitegen.stylesheet.design_system import DESIGN_SYSTEM_CSS, OVERRIDES_CSS
from sitegen.stylesheet.stylesheet_prompt import STYLESHEET_SYSTEM_PROMPT, build_stylesheet_prompt

logger = logging.getLogger(__name__)

GENERATED = "generated"
DESIGN_SYSTEM = "design_system"
STYLESHEET_MODES = (GENERATED, DESIGN_SYSTEM)


class StylesheetAgent(BaseAgent):
    """Stylesheet agent - one call in generated mode, none in design-system mode"""

    def __init__(self, client, model: Optional[str] = None):
        super().__init__(client, model or settings.style_model, agent_name="Stylesheet")

    async def run(self, description: str, html: str, mode: str = GENERATED) -> str:
        """
        Produce the shared stylesheet.

        Args:
            description: User's site description
            html: Assembled markup of every page
            mode: "generated" or "design_system"

        Returns:
            CSS text ending with the override block

        Raises:
            AgentError: When generation fails (never falls back silently)
        """
        if mode not in STYLESHEET_MODES:
            raise ApplicationError(
                ErrorCode.CONFIGURATION_ERROR,
                f"Unknown stylesheet mode: {mode}",
                hint=f"Set STYLESHEET_MODE to one of {list(STYLESHEET_MODES)}",
            )

        if mode == DESIGN_SYSTEM:
            base = DESIGN_SYSTEM_CSS
        else:
            raw = await self._call_model(
                build_stylesheet_prompt(description, html, settings.stylesheet_html_budget),
                system_prompt=STYLESHEET_SYSTEM_PROMPT,
            )
            base = strip_code_fences(raw)
            if not base:
                raise AgentError("Stylesheet generation returned no CSS")

        css = base.rstrip() + "\n" + OVERRIDES_CSS
        logger.info(f"[Stylesheet] ✓ Stylesheet ready | mode: {mode} | length: {len(css)} chars")
        return css
