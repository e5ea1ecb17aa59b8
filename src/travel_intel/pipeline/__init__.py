from travel_intel.pipeline.base import Pipeline
from travel_intel.pipeline.intel import (
    NO_SIGNIFICANT_INFORMATION,
    CategoryOutcome,
    IntelPipeline,
    run_intel,
)

__all__ = [
    "NO_SIGNIFICANT_INFORMATION",
    "CategoryOutcome",
    "IntelPipeline",
    "Pipeline",
    "run_intel",
]
