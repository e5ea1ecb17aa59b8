"""Search query construction for intel categories."""

from travel_intel.data import Category, SearchQuery, SourceLists


def site_restriction(sites: list[str] | tuple[str, ...]) -> str:
    """Join sites into an OR-list of ``site:`` operators."""
    return " OR ".join(f"site:{site}" for site in sites)


def build_query(category: Category, country_name: str, source_lists: SourceLists) -> SearchQuery:
    """Build the search query for one category.

    The topic keywords and country are AND-ed with an OR-list of ``site:``
    restrictions drawn from the category's source scopes. If none of those
    scopes has any sites, the restriction is omitted and the query becomes an
    unrestricted web search.

    Args:
        category: Category to build the query for.
        country_name: Country the report is about.
        source_lists: Site allow-lists for this run.

    Returns:
        The assembled query.
    """
    sites: list[str] = []
    for scope in category.scopes:
        for site in source_lists.for_scope(scope):
            if site not in sites:
                sites.append(site)

    parts = [category.topic, country_name.strip()]
    if sites:
        parts.append(site_restriction(sites))
    return SearchQuery(category=category.key, text=" ".join(p for p in parts if p))
