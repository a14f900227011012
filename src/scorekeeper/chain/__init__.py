"""Chain collaborator interfaces and value types."""

from scorekeeper.chain.protocols import ChainData, PrincipalGroup, find_group
from scorekeeper.chain.types import (
    STAKING_PROXY_TYPE,
    Announcement,
    ProxyCall,
    address_url,
)

__all__ = [
    "STAKING_PROXY_TYPE",
    "Announcement",
    "ChainData",
    "PrincipalGroup",
    "ProxyCall",
    "address_url",
    "find_group",
]
