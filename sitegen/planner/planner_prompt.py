"""Planner system prompt and prompt builder"""
from typing import Sequence

from sitegen.config.rules import DesignGuide

PLANNER_SYSTEM_PROMPT = """
You are a senior web strategist planning a small static website.

Produce a concise site plan that a front-end engineer can build page by page
without further questions. The plan is shared verbatim with every page writer,
so it must be self-contained.

### The plan MUST include
- Brand: name (if given), one-line positioning, tone of voice
- Palette: primary, secondary and accent colors as hex values
- Typography: heading and body font families (Google Fonts)
- For EVERY allowed filename, in order:
  - page purpose (one sentence)
  - ordered list of sections with one line of intent each
  - the primary call-to-action of the page
- Shared header and footer contents

### Rules
- Use ONLY the allowed filenames; never invent other pages or routes
- Do not invent phone numbers, emails or addresses; refer to "the contact details" instead
- No lorem ipsum, no code, no HTML
- Plain text or Markdown only
"""


def build_planner_prompt(
    description: str,
    page_count: int,
    guide: DesignGuide,
    filenames: Sequence[str],
) -> str:
    sections = "\n".join(f"- {section}" for section in guide.sections)
    return (
        f"Website description:\n{description.strip()}\n\n"
        f"Site category: {guide.label}\n"
        f"Tone: {guide.tone}\n\n"
        f"Number of pages: {page_count}\n"
        f"Allowed filenames (in navigation order): {', '.join(filenames)}\n\n"
        f"Reference structure for this kind of site:\n{sections}\n\n"
        f"Write the site plan now."
    )
