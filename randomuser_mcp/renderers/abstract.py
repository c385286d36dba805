"""
Renderer interfaces for the Random User MCP server.

Concrete renderers (JSON, CSV, SQL, XML) implement the Renderer protocol: a pure
function from the combined record sequence of one invocation to a text payload.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Optional, Protocol, Sequence, runtime_checkable

from randomuser_mcp.domain.models import FormatSpec

UserRecord = Dict[str, Any]


@runtime_checkable
class Renderer(Protocol):
    """
    Common interface all output renderers must implement.

    Attributes
    ----------
    name : str
        The `format.type` value this renderer answers to.
    description : str
        A human-friendly summary of the encoding.
    """

    name: str
    description: str

    def render(self, records: Sequence[UserRecord], format_spec: Optional[FormatSpec] = None) -> str:
        """
        Render records into a single text payload.

        Parameters
        ----------
        records : Sequence[UserRecord]
            Upstream records, in the order they were gathered.
        format_spec : FormatSpec | None
            Output options; None means renderer defaults.

        Returns
        -------
        str
            The encoded payload. Empty input yields the renderer's empty form.
        """
        ...


class AbstractRenderer(abc.ABC):
    """
    ABC helper for class-based renderers.

    Subclasses set `name` and `description` and implement `render`.
    """

    name: str
    description: str

    @abc.abstractmethod
    def render(
        self, records: Sequence[UserRecord], format_spec: Optional[FormatSpec] = None
    ) -> str:  # pragma: no cover - interface only
        """Render records into a text payload."""
        raise NotImplementedError


__all__ = [
    "UserRecord",
    "Renderer",
    "AbstractRenderer",
]
