"""Request handlers of the key-value storage service."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .leader_election import LeaderElectionService
from .messages import (
    GetRequest,
    GetResponse,
    LeMetaRequest,
    LeMetaResponse,
    SetRequest,
    SetResponse,
    UpdateLeaderRequest,
    UpdateLeaderResponse,
)
from .storage_service import Operation, SetMessage, StorageService


def _to_message(request: SetRequest) -> SetMessage:
    operation: Operation | str = Operation.EMPTY
    if request.operation is not None:
        try:
            operation = Operation(request.operation)
        except ValueError:
            operation = request.operation
    return SetMessage(request.key, request.value, operation)


def _operation_name(operation: Operation | str) -> str:
    return operation.value if isinstance(operation, Operation) else operation


class KeyValueStorageServer:
    def __init__(
        self,
        storage_service: StorageService,
        le_service: LeaderElectionService,
        logger: logging.Logger | None = None,
    ) -> None:
        self._storage_service = storage_service
        self._le_service = le_service
        self._logger = logger or logging.getLogger(__name__)

    def get(self, request: GetRequest) -> GetResponse:
        value = self._storage_service.get(request.key)
        if value is None:
            return GetResponse("", False)
        return GetResponse(value, True)

    def set(self, request: SetRequest) -> SetResponse:
        message = _to_message(request)
        self._logger.debug(
            "Received request: key=%s, value=%s, operation=%s",
            message.key,
            message.value,
            _operation_name(message.operation),
        )
        self._storage_service.set(message)
        return SetResponse()

    def set_stream(self, requests: Iterable[SetRequest]) -> Iterator[SetResponse]:
        """Apply each streamed request in turn, answering every one."""
        for request in requests:
            message = _to_message(request)
            self._logger.debug(
                "Received stream request: key=%s, value=%s, operation=%s",
                message.key,
                message.value,
                _operation_name(message.operation),
            )
            self._storage_service.set(message)
            yield SetResponse()

    def le_meta(self, request: LeMetaRequest) -> LeMetaResponse:
        meta = self._le_service.meta()
        return LeMetaResponse(node=meta.node_id, data_version=meta.data_version)

    def update_leader(self, request: UpdateLeaderRequest) -> UpdateLeaderResponse:
        self._le_service.set_leader(request.nomad_id)
        return UpdateLeaderResponse()