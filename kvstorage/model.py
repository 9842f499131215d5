"""The node this service runs as."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Node:
    """A cluster node; a freshly created node considers itself the leader."""

    id: str
    nomad_id: str = ""
    address: str = ""
    is_leader: bool = True