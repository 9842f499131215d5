"""Applies set/delete operations and replicates them when leading."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .connections import ConnectionManager
from .messages import SetRequest
from .model import Node
from .storage import KeyValueStorage


class Operation(str, Enum):
    EMPTY = "empty"
    SET = "set"
    DELETE = "delete"


@dataclass(frozen=True)
class SetMessage:
    key: str
    value: str
    operation: Operation | str = Operation.EMPTY


class StorageService:
    def __init__(
        self,
        store: KeyValueStorage,
        node: Node,
        connections: ConnectionManager,
    ) -> None:
        self._store = store
        self._node = node
        self._connections = connections

    def set(self, message: SetMessage) -> None:
        """Apply the operation locally and, on the leader, broadcast it."""
        operation = message.operation
        if operation == Operation.SET:
            self._store.set(message.key, message.value)
        elif operation == Operation.DELETE:
            self._store.delete(message.key)

        if not self._node.is_leader:
            return

        name = operation.value if isinstance(operation, Operation) else str(operation)
        self._connections.broadcast(SetRequest(message.key, message.value, name))

    def get(self, key: str) -> str | None:
        item = self._store.get(key)
        return None if item is None else item.value

    def data_version(self) -> int:
        return self._store.data_version()