from __future__ import annotations

"""Success/failure union returned by the page-fetch collaborator.

The request pipeline never raises for collaborator failures; it forwards a
:class:`FetchResult` instead so callers can decide how to surface errors.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from sectionkit.core.models import Section  # noqa: F401

__all__ = ["FetchResult"]


@dataclass(frozen=True)
class FetchResult:
    """Result of fetching (and possibly merging) a page of sections.

    Attributes
    ----------
    success
        Whether the fetch completed successfully.
    sections
        The sections carried by a successful result; empty on failure.
    error
        The failure cause, ``None`` on success.
    message
        Human-readable summary suitable for logs.
    """

    success: bool
    sections: Tuple["Section", ...] = ()
    error: Optional[Exception] = None
    message: str = ""

    @classmethod
    def ok(cls, sections: Sequence["Section"], message: str = "") -> "FetchResult":
        return cls(True, tuple(sections), None, message)

    @classmethod
    def fail(cls, error: Exception, message: str = "") -> "FetchResult":
        return cls(False, (), error, message or str(error))

    def unwrap(self) -> list:
        """Return the sections as a list, raising the carried error on failure."""
        if not self.success:
            if self.error is not None:
                raise self.error
            raise RuntimeError(self.message or "fetch failed")
        return list(self.sections)
