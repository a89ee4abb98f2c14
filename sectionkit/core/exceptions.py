from __future__ import annotations

"""Exception classes for sectionkit.

The reconciliation engine itself does not raise for unmatched or out-of-range
targets. These exceptions describe failures at its seams: the page-fetch
collaborator and configuration loading.
"""

from typing import Optional


class SectionKitError(Exception):
    """Base exception for all sectionkit errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.cause = cause


class FetchError(SectionKitError):
    """Raised (or carried in a failed FetchResult) when fetching a page fails."""

    def __init__(self, message: str, page: Optional[int] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.page = page

    def __str__(self) -> str:
        if self.page is not None:
            return f"[Page: {self.page}] {super().__str__()}"
        return super().__str__()


class ConfigurationError(SectionKitError):
    """Raised when a configuration value has the wrong type or range."""

    def __init__(self, message: str, key: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause)
        self.key = key

    def __str__(self) -> str:
        if self.key:
            return f"[Config: {self.key}] {super().__str__()}"
        return super().__str__()
