"""Per-chain request state carried through the redirect loop."""

from dataclasses import dataclass, field
from typing import Optional, Set
import uuid

from .models import HeaderPairs, Request


@dataclass
class PendingRequest:
    """
    State of one redirect chain.

    Attributes:
        original: The caller's request, never modified
        method: Method of the next hop
        url: Target of the next hop
        redirect_count: Redirects followed so far
        visited: URLs already sent in this chain; only grows
        request_id: Chain id, used as logging correlation id

    Example:
        >>> pending = PendingRequest.start(Request('POST', 'https://a.example.com/'))
        >>> pending.visit('https://a.example.com/')
        True
        >>> pending.visit('https://a.example.com/')
        False
    """

    original: Request
    method: str
    url: str
    redirect_count: int = 0
    visited: Set[str] = field(default_factory=set)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def start(cls, request: Request, request_id: Optional[str] = None) -> 'PendingRequest':
        pending = cls(original=request, method=request.method, url=request.url)
        if request_id:
            pending.request_id = request_id
        return pending

    @property
    def is_first_hop(self) -> bool:
        return self.redirect_count == 0

    @property
    def headers(self) -> HeaderPairs:
        """Headers of the next hop: the original set, minus Host after a redirect."""
        if self.is_first_hop:
            return list(self.original.headers)
        return [(k, v) for k, v in self.original.headers if k.lower() != 'host']

    @property
    def body(self) -> Optional[bytes]:
        """Body of the next hop: dropped once the method became GET."""
        if self.is_first_hop:
            return self.original.body
        return None if self.method == 'GET' else self.original.body

    def visit(self, url: str) -> bool:
        """Record ``url``; False if it was already visited."""
        if url in self.visited:
            return False
        self.visited.add(url)
        return True

    def build_request(self) -> Request:
        """
        Request for the next hop.

        The first hop is the caller's request verbatim.
        """
        if self.is_first_hop:
            return self.original
        return Request(self.method, self.url, self.headers, self.body)
