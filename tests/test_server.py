import pytest

from kvstorage.connections import ConnectionManager
from kvstorage.leader_election import LeaderElectionService
from kvstorage.messages import (
    GetRequest,
    GetResponse,
    LeMetaRequest,
    LeMetaResponse,
    SetRequest,
    SetResponse,
    UpdateLeaderRequest,
    UpdateLeaderResponse,
)
from kvstorage.model import Node
from kvstorage.server import KeyValueStorageServer
from kvstorage.storage import KeyValueStorage
from kvstorage.storage_service import StorageService


class RecordingStream:
    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)


@pytest.fixture
def setup():
    node = Node("3")
    manager = ConnectionManager()
    stream = RecordingStream()
    manager.add("replica", stream)
    storage = StorageService(KeyValueStorage(), node, manager)
    le_service = LeaderElectionService(node, storage)
    return KeyValueStorageServer(storage, le_service), node, stream


def test_set_then_get(setup):
    server, _, _ = setup
    assert server.set(SetRequest("k", "v", "set")) == SetResponse()
    assert server.get(GetRequest("k")) == GetResponse("v", True)


def test_get_missing(setup):
    server, _, _ = setup
    assert server.get(GetRequest("absent")) == GetResponse("", False)


def test_set_without_operation_is_empty(setup):
    server, _, stream = setup
    server.set(SetRequest("k", "v"))
    assert server.get(GetRequest("k")).found is False
    assert stream.sent == [SetRequest("k", "v", "empty")]


def test_set_delete(setup):
    server, _, _ = setup
    server.set(SetRequest("k", "v", "set"))
    server.set(SetRequest("k", "", "delete"))
    assert server.get(GetRequest("k")).found is False


def test_set_stream_answers_each_request(setup):
    server, _, stream = setup
    requests = [SetRequest("a", "1", "set"), SetRequest("b", "2", "set"), SetRequest("a", "", "delete")]
    responses = list(server.set_stream(requests))
    assert responses == [SetResponse()] * len(requests)
    assert server.get(GetRequest("a")).found is False
    assert server.get(GetRequest("b")) == GetResponse("2", True)
    assert [m.key for m in stream.sent] == ["a", "b", "a"]


def test_le_meta(setup):
    server, _, _ = setup
    server.set(SetRequest("k", "v", "set"))
    assert server.le_meta(LeMetaRequest()) == LeMetaResponse(node=3, data_version=1)


def test_update_leader(setup):
    server, node, stream = setup
    assert server.update_leader(UpdateLeaderRequest(9)) == UpdateLeaderResponse()
    assert node.is_leader is False
    server.set(SetRequest("k", "v", "set"))
    assert stream.sent == []
    server.update_leader(UpdateLeaderRequest(3))
    assert node.is_leader is True