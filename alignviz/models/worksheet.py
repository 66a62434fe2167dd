"""Source-table headers and the worksheet that shows them."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol


@dataclass(frozen=True)
class HeaderNode:
    """A header column of the source table."""

    id: str
    column_name: str


class HeaderResolver(Protocol):
    """Resolves a header id to its header metadata."""

    def get_header(self, hnode_id: str) -> Optional[HeaderNode]:
        ...


@dataclass
class HeaderTable:
    """Header columns of a worksheet, keyed by header id."""

    headers: dict[str, HeaderNode] = field(default_factory=dict)

    @classmethod
    def from_headers(cls, headers: Iterable[HeaderNode]) -> "HeaderTable":
        return cls(headers={h.id: h for h in headers})

    def add(self, header: HeaderNode) -> None:
        self.headers[header.id] = header

    def get_header(self, hnode_id: str) -> Optional[HeaderNode]:
        return self.headers.get(hnode_id)

    def __contains__(self, hnode_id: object) -> bool:
        return hnode_id in self.headers

    def __len__(self) -> int:
        return len(self.headers)


@dataclass
class Worksheet:
    """A worksheet: its header table plus the visible leaf headers in order."""

    id: str
    headers: HeaderTable = field(default_factory=HeaderTable)
    visible_header_ids: list[str] = field(default_factory=list)

    def get_header_visible_leaf_nodes(self) -> list[str]:
        """Visible leaf header ids in column order."""
        return list(self.visible_header_ids)
