"""
Candidate Generator

Asks Claude for real high-ticket dropshipping stores in a niche.

Generation is best effort: API failures, unparseable responses and
missing credentials all produce an empty list, never an exception.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from src.scoring.dropshipping import dropshipping_score
from src.utils.domain_filter import EXCLUDED_RETAILERS, is_excluded_domain
from .models import StoreRecord

if TYPE_CHECKING:
    from src.llm.client import ClaudeClient

logger = logging.getLogger(__name__)

MAX_GENERATED = 5


# =============================================================================
# PROMPTS
# =============================================================================

GENERATION_SYSTEM_PROMPT = """You are an e-commerce market researcher specializing in high-ticket dropshipping.
You only name stores that really exist and you answer with JSON only."""


GENERATION_USER_PROMPT = """Find 5 real, existing HIGH-TICKET dropshipping stores in the "{niche}" niche.

Focus ONLY on dropshipping businesses, NOT traditional retailers or manufacturers.

Dropshipping store characteristics:
- They don't manufacture products themselves
- They sell products from suppliers, wholesalers or authorized brand programs
- Broad catalogs from multiple brands
- Online sales with minimal physical presence

Requirements:
- Must be REAL stores that exist today
- HIGH-TICKET items ($500+ products; preference for $1,000+)
- AVOID: Amazon, Walmart, Target, Best Buy, Home Depot, Wayfair and manufacturer websites
- PREFER: independent specialty online retailers that resell premium brands

Return a JSON array with this EXACT structure:
```json
[
    {{
        "name": "Store Name",
        "url": "https://website.com",
        "domain": "website.com",
        "description": "One line on their reseller model and price range"
    }}
]
```"""


# =============================================================================
# RESPONSE PARSING
# =============================================================================

def parse_store_array(content: str) -> List[Dict[str, Any]]:
    """
    Extract the JSON array embedded in a free-text response.

    Raises:
        ValueError: No array present
        json.JSONDecodeError: Array text is not valid JSON
    """
    json_match = re.search(r'\[[\s\S]*\]', content or "")
    if not json_match:
        raise ValueError("No JSON array found in response")

    parsed = json.loads(json_match.group())
    if not isinstance(parsed, list):
        raise ValueError("Response JSON is not an array")
    return parsed


def clean_generated_stores(
    items: List[Any],
    excluded=EXCLUDED_RETAILERS,
    limit: int = MAX_GENERATED,
) -> List[StoreRecord]:
    """
    Keep complete entries, drop excluded retailers and rank the rest by
    dropshipping score (stable for equal scores).
    """
    records = []
    for item in items:
        if not isinstance(item, dict):
            continue
        if not (item.get("name") and item.get("url") and item.get("domain")):
            continue
        record = StoreRecord.from_dict(item)
        if record is None or is_excluded_domain(record.domain, excluded):
            continue
        records.append(record)

    records.sort(
        key=lambda r: dropshipping_score(r.name, r.domain, r.description),
        reverse=True,
    )
    return records[:limit]


# =============================================================================
# GENERATORS
# =============================================================================

class CandidateGenerator(ABC):
    """Source of unverified store candidates for a niche."""

    @abstractmethod
    async def generate(self, niche: str) -> List[StoreRecord]:
        """Return candidates; must not raise."""


class NullCandidateGenerator(CandidateGenerator):
    """Generator used when no LLM is configured."""

    async def generate(self, niche: str) -> List[StoreRecord]:
        return []


class ClaudeCandidateGenerator(CandidateGenerator):
    """Claude-backed candidate generation."""

    def __init__(
        self,
        claude_client: Optional["ClaudeClient"] = None,
        max_tokens: int = 2000,
        temperature: float = 0.3,
    ):
        self.claude_client = claude_client
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(self, niche: str) -> List[StoreRecord]:
        if not self.claude_client:
            logger.debug(f"No Claude client, skipping generation for '{niche}'")
            return []

        try:
            response = await self.claude_client.complete_with_retry(
                prompt=GENERATION_USER_PROMPT.format(niche=niche),
                system=GENERATION_SYSTEM_PROMPT,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )

            if not response.success:
                logger.warning(f"Candidate generation failed for '{niche}': {response.error}")
                return []

            stores = clean_generated_stores(parse_store_array(response.content))
            logger.info(f"Generated {len(stores)} candidate stores for '{niche}'")
            return stores

        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse generated stores JSON for '{niche}': {e}")
        except ValueError as e:
            logger.warning(f"Unusable generation response for '{niche}': {e}")
        except Exception as e:
            logger.error(f"Candidate generation failed for '{niche}': {e}")

        return []


def create_candidate_generator(claude_client: Optional["ClaudeClient"] = None) -> CandidateGenerator:
    """
    Build the configured generator.

    Falls back to NullCandidateGenerator when no client is given and no
    ANTHROPIC_API_KEY is configured.
    """
    if claude_client is None:
        from src.llm.client import ClaudeClient
        from src.utils.config import get_settings

        settings = get_settings()
        if not settings.ANTHROPIC_API_KEY:
            logger.info("ANTHROPIC_API_KEY not set, candidate generation disabled")
            return NullCandidateGenerator()
        claude_client = ClaudeClient.from_settings()

    return ClaudeCandidateGenerator(claude_client=claude_client)
