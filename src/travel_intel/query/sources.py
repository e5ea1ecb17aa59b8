"""Site allow-lists used to restrict category searches."""

from travel_intel.data import SourceLists

REGIONAL_NEWS_SOURCES: tuple[str, ...] = (
    "channelnewsasia.com",
    "scmp.com",
    "asia.nikkei.com",
)

LOCAL_NEWS_SOURCES: dict[str, tuple[str, ...]] = {
    "Brunei": ("thebruneian.news", "borneobulletin.com.bn"),
    "Cambodia": ("phnompenhpost.com", "khmertimeskh.com", "cambodianess.com"),
    "Indonesia": ("thejakartapost.com", "en.tempo.co", "antaranews.com"),
    "Laos": ("laotiantimes.com", "vientianetimes.org.la"),
    "Malaysia": ("thestar.com.my", "malaysiakini.com", "freemalaysiatoday.com"),
    "Myanmar": ("irrawaddy.com", "frontiermyanmar.net", "mmtimes.com"),
    "Philippines": ("rappler.com", "inquirer.net", "philstar.com"),
    "Singapore": ("straitstimes.com", "todayonline.com", "channelnewsasia.com"),
    "Thailand": ("bangkokpost.com", "nationthailand.com", "thaipbsworld.com"),
    "Vietnam": ("vnexpress.net", "tuoitrenews.vn", "vir.com.vn"),
    "Timor-Leste": ("tatoli.tl",),
}

_LOCAL_BY_KEY = {name.casefold(): sites for name, sites in LOCAL_NEWS_SOURCES.items()}


def local_sources_for(country_name: str) -> tuple[str, ...]:
    """Return the local news sites for a country, or ``()`` if it is not catalogued."""
    return _LOCAL_BY_KEY.get(" ".join(country_name.split()).casefold(), ())


def parse_source_list(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated list of sites, dropping blanks and duplicates.

    Args:
        raw: Value such as ``"travel.state.gov, www.gov.uk/foreign-travel-advice"``.

    Returns:
        Site identifiers in their original order.
    """
    if not raw:
        return ()
    seen: set[str] = set()
    sites: list[str] = []
    for part in raw.split(","):
        site = part.strip()
        if site and site not in seen:
            seen.add(site)
            sites.append(site)
    return tuple(sites)


def resolve_source_lists(country_name: str, official_sources: str | None) -> SourceLists:
    """Assemble the three source lists for one run."""
    return SourceLists(
        official=parse_source_list(official_sources),
        regional=REGIONAL_NEWS_SOURCES,
        local=local_sources_for(country_name),
    )
