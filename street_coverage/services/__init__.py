"""Service layer orchestrating a single coverage request."""

from .coverage_service import (
    CoverageOutcome,
    CoverageService,
    CoverageServiceConfig,
    Matcher,
)

__all__ = [
    "CoverageOutcome",
    "CoverageService",
    "CoverageServiceConfig",
    "Matcher",
]
