"""Request and response messages of the key-value storage API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GetRequest:
    key: str


@dataclass(frozen=True)
class GetResponse:
    value: str = ""
    found: bool = False


@dataclass(frozen=True)
class SetRequest:
    key: str
    value: str = ""
    operation: str | None = None


@dataclass(frozen=True)
class SetResponse:
    pass


@dataclass(frozen=True)
class LeMetaRequest:
    pass


@dataclass(frozen=True)
class LeMetaResponse:
    node: int
    data_version: int


@dataclass(frozen=True)
class UpdateLeaderRequest:
    nomad_id: int


@dataclass(frozen=True)
class UpdateLeaderResponse:
    pass