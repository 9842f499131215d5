"""Leader election metadata and leadership changes for this node."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .model import Node
from .storage_service import StorageService


@dataclass(frozen=True)
class Meta:
    node_id: int
    data_version: int


class LeaderElectionService:
    def __init__(
        self,
        node: Node,
        storage_service: StorageService,
        logger: logging.Logger | None = None,
    ) -> None:
        self._node = node
        self._storage_service = storage_service
        self._logger = logger or logging.getLogger(__name__)

    def meta(self) -> Meta:
        """Report this node's id and the version of its data."""
        return Meta(int(self._node.id), self._storage_service.data_version())

    def set_leader(self, leader_id: int) -> None:
        """Become leader if the id names this node, otherwise become a replica."""
        if str(leader_id) == self._node.id:
            self._node.is_leader = True
            self._logger.info("Node %s has become the leader", self._node.id)
        else:
            self._node.is_leader = False
            self._logger.info("Node %s has become a replica", self._node.id)