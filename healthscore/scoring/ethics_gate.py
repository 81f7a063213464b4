"""Ethics firewall: keyword screen over company name and description."""

from typing import Iterable, Optional

from healthscore.config import settings


def passes_ethics_screen(
    company_name: str,
    description: str = "",
    keywords: Optional[Iterable[str]] = None,
) -> bool:
    """False when any excluded keyword appears (case-insensitive) in name or description."""
    keywords = settings.ETHICS_KEYWORDS if keywords is None else keywords
    search_text = f"{company_name} {description}".lower()
    return not any(keyword.lower() in search_text for keyword in keywords)
