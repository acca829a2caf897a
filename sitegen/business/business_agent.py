"""Business content agent - structured JSON sections for the single-page flow"""
import logging
from typing import Optional

from sitegen.base_agent import BaseAgent
from sitegen.business.business_prompt import BUSINESS_SYSTEM_PROMPT, build_business_prompt
from sitegen.business.business_schemas import PageContent, decode_page_content
from sitegen.core.config import settings
from sitegen.models.errors import ApplicationError, ErrorCode

logger = logging.getLogger(__name__)


class BusinessContentAgent(BaseAgent):
    """Structured content agent - one call, decode failures are fatal"""

    def __init__(self, client, model: Optional[str] = None):
        super().__init__(client, model or settings.content_model, agent_name="Business")

    async def run(self, description: str) -> PageContent:
        """
        Generate structured page content.

        Raises:
            AgentError: When the call itself fails
            ApplicationError: INVALID_CONTENT_FORMAT when the output does not decode
        """
        raw = await self._call_model(build_business_prompt(description), system_prompt=BUSINESS_SYSTEM_PROMPT)
        result = decode_page_content(raw)
        if not result.ok:
            logger.error(f"[Business] ✗ Content decode failed | error: {result.error} | preview: {raw[:200]}")
            raise ApplicationError(
                ErrorCode.INVALID_CONTENT_FORMAT,
                f"Generated content could not be decoded: {result.error}",
                retryable=True,
                hint="Retry the request",
            )

        content = result.content
        logger.info(
            f"[Business] ✓ Content decoded | "
            f"sections: {[section.type for section in content.sections]} | "
            f"business_name: {content.business_name}"
        )
        return content
