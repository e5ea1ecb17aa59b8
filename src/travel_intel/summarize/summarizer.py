"""Per-category summarization of verified sources."""

import logging

from pydantic import TypeAdapter

from travel_intel.data import Category, IntelItem, Usage, VerifiedSource
from travel_intel.errors import GenerationError
from travel_intel.summarize.base import GenerativeClient
from travel_intel.summarize.fallback import with_fallback
from travel_intel.trace import ExecutionTrace

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_FALLBACK_MODEL = "claude-sonnet-4-5-20250929"

INTEL_ITEMS_SCHEMA: TypeAdapter[list[IntelItem]] = TypeAdapter(list[IntelItem])

SUMMARY_PROMPT = """\
You are an expert travel intelligence analyst. Based ONLY on the articles \
below, write a concise, one-paragraph summary of each article's information \
about {description} in {country}.

Rules:
- Stay on topic: only report {description} in {country}. Skip an article \
that has nothing relevant rather than summarizing something else.
- Cite the source URL given with the article in the "source" field of every \
summary. Never cite a URL that is not listed below.
- Summarize the actual relevant content. Do not describe the website, its \
general purpose, or its navigation.

Topic searched: {topic} {country}

{articles}\
"""


def build_summary_prompt(
    category: Category, country_name: str, sources: list[VerifiedSource]
) -> str:
    """Build the summarization prompt embedding every source's URL and content."""
    articles = "\n\n".join(
        f"Source URL: {source.url}\nArticle Content:\n---\n{source.content}\n---"
        for source in sources
    )
    return SUMMARY_PROMPT.format(
        description=category.description or category.key,
        country=country_name,
        topic=category.topic,
        articles=articles,
    )


class Summarizer:
    """Summarize a category's verified sources with primary/fallback models.

    Args:
        client: Generative-text service.
        primary_model: Model tried first.
        fallback_model: Model tried once if the primary call fails.
    """

    def __init__(
        self,
        client: GenerativeClient,
        *,
        primary_model: str = DEFAULT_PRIMARY_MODEL,
        fallback_model: str = DEFAULT_FALLBACK_MODEL,
    ) -> None:
        self._client = client
        self._primary_model = primary_model
        self._fallback_model = fallback_model

    async def summarize(
        self,
        category: Category,
        country_name: str,
        sources: list[VerifiedSource],
        trace: ExecutionTrace,
    ) -> tuple[list[IntelItem], Usage]:
        """Summarize ``sources`` for one category.

        Args:
            category: Category being summarized.
            country_name: Country the report is about.
            sources: Verified sources; must not be empty.
            trace: Run trace.

        Returns:
            Tuple of (items citing only the given sources, usage).

        Raises:
            ValueError: If ``sources`` is empty.
            GenerationError: If both the primary and fallback model calls fail;
                its ``usage`` covers calls whose output was rejected.
        """
        if not sources:
            raise ValueError("Summarizer requires at least one verified source")

        prefix = f"[Intel] ({category.key})"
        prompt = build_summary_prompt(category, country_name, sources)
        trace.add(f"{prefix} Summarizing {len(sources)} sources.")

        # Usage of attempts whose output was rejected.
        spent = Usage()

        async def attempt(model: str) -> tuple[list[IntelItem], Usage]:
            nonlocal spent
            try:
                return await self._client.generate(prompt, INTEL_ITEMS_SCHEMA, model=model)
            except GenerationError as e:
                spent += e.usage
                raise

        try:
            items, usage = await with_fallback(
                attempt,
                primary_model=self._primary_model,
                fallback_model=self._fallback_model,
                trace=trace,
                label=prefix,
            )
        except Exception as e:
            raise GenerationError(
                f"Summarization failed for {category.key}: {e}", usage=spent
            ) from e
        usage = spent + usage

        allowed = {source.url for source in sources}
        cited: list[IntelItem] = []
        for item in items:
            if item.source not in allowed:
                logger.warning("Model cited unknown source %s for %s", item.source, category.key)
                trace.add(f"{prefix} Dropping summary citing unverified source {item.source}.")
                continue
            cited.append(item)

        trace.add(f"{prefix} Summarization complete. Kept {len(cited)} items.")
        return (cited, usage)
