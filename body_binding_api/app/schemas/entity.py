"""
Header‑plus‑body wrapper for HTTP messages.

A ``BodyEntity`` pairs a message body with the headers that travelled
with it.  On the request side it is built by a dependency from the
incoming headers and the decoded body; on the response side a handler
may return one to have its body written together with extra headers.
It carries no status code and never resolves a view.
"""

from dataclasses import dataclass
from typing import Any, Generic, List, Mapping, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class BodyEntity(Generic[T]):
    """Read‑only pair of headers and body."""

    body: Optional[T] = None
    headers: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        # Mappings are flattened to pairs; a Starlette ``Headers`` keeps repeated names.
        headers: Any = self.headers
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        object.__setattr__(self, "headers", tuple((str(k), str(v)) for k, v in pairs))

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value of a header, case insensitive."""
        values = self.header_values(name)
        return values[0] if values else default

    def header_values(self, name: str) -> List[str]:
        """All values of a header in arrival order, case insensitive."""
        wanted = name.lower()
        return [value for key, value in self.headers if key.lower() == wanted]
