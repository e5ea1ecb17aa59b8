"""Pipeline protocol for country travel intel."""

from typing import Protocol

from travel_intel.data import IntelReport


class Pipeline(Protocol):
    """Interface for end-to-end travel intel pipelines."""

    async def run(self, country_name: str) -> tuple[IntelReport, list[str]]:
        """Gather and summarize recent travel intel for a country.

        Args:
            country_name: Country to report on.

        Returns:
            Tuple of (report, execution trace lines).
        """
        ...

    async def aclose(self) -> None:
        """Release collaborator resources held by the pipeline."""
        ...
