# app/diagnosis_engine/search_client.py
"""
Web Search Adapter - Google Custom Search for treatment references

Search is an optional enrichment: every failure is logged and turned into an
empty result list so recommendations can fall back to the generic template.
"""
import logging
from typing import List, Optional

import httpx

from app.diagnosis_engine.schemas import SearchResult
from app.shared.upstream import call_upstream
from config.serviceconfig import ServiceSettings, service_settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "web search"


class SearchClient:
    """Fetches treatment information for a diagnostic phrase"""

    def __init__(
        self,
        settings: Optional[ServiceSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or service_settings
        self._transport = transport

    def build_query(self, query: str) -> str:
        return f"{query} {self.settings.SEARCH_QUERY_SUFFIX}"

    async def search_treatment_info(self, query: str) -> List[SearchResult]:
        """
        Search for treatment/prevention pages related to `query`.

        Returns at most SEARCH_RESULT_LIMIT results in upstream order;
        never raises.
        """
        if not self.settings.search_enabled:
            logger.warning("⚠️  Web search not configured (GOOGLE_API_KEY / GOOGLE_SEARCH_ENGINE_ID)")
            return []

        limit = self.settings.SEARCH_RESULT_LIMIT
        search_query = self.build_query(query)
        logger.info(f"🔍 Searching for treatment information: {search_query[:120]}")

        try:
            response = await call_upstream(
                SERVICE_NAME,
                "GET",
                self.settings.GOOGLE_SEARCH_URL,
                timeout=self.settings.SEARCH_TIMEOUT_SECONDS,
                transport=self._transport,
                params={
                    "key": self.settings.GOOGLE_API_KEY,
                    "cx": self.settings.GOOGLE_SEARCH_ENGINE_ID,
                    "q": search_query,
                    "num": limit,
                    "safe": "active",
                },
            )
            items = response.json().get("items") or []
            results = [
                SearchResult(
                    title=item.get("title") or "",
                    snippet=item.get("snippet") or "",
                    link=item.get("link") or "",
                )
                for item in items[:limit]
            ]
        except Exception as e:
            logger.error(f"❌ Web search failed, continuing without references: {e}")
            return []

        logger.info(f"✓ Web search returned {len(results)} results")
        return results


search_client = SearchClient()
