import dataclasses

import pytest

from kvstorage.messages import (
    GetRequest,
    GetResponse,
    LeMetaResponse,
    SetRequest,
    SetResponse,
    UpdateLeaderRequest,
)


def test_get_response_defaults_to_not_found():
    response = GetResponse()
    assert response.value == ""
    assert response.found is False


def test_set_request_operation_is_optional():
    request = SetRequest("k", "v")
    assert request.operation is None
    assert SetRequest("k", "v", "set").operation == "set"


def test_messages_compare_by_value():
    assert GetRequest("k") == GetRequest("k")
    assert LeMetaResponse(1, 2) == LeMetaResponse(node=1, data_version=2)
    assert SetResponse() == SetResponse()
    assert UpdateLeaderRequest(3) != UpdateLeaderRequest(4)


def test_messages_are_immutable():
    request = SetRequest("k", "v")
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.key = "other"
    assert request.key == "k"
    assert request == SetRequest("k", "v")