"""Service configuration loaded from the environment or a YAML file."""

from __future__ import annotations

import argparse
import logging
import os
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import yaml

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./config/local.yaml"
DEFAULT_GRPC_HOST = "0.0.0.0"
NOMAD_PORT_PREFIX = "${NOMAD_PORT_"
NOMAD_FALLBACK_PORT = 8080


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or is invalid."""


@dataclass
class NodeConfig:
    id: int = 0
    seed_nodes: list[str] = field(default_factory=list)


@dataclass
class GRPCConfig:
    host: str = DEFAULT_GRPC_HOST
    port: int = 0


@dataclass
class Config:
    node: NodeConfig = field(default_factory=NodeConfig)
    grpc: GRPCConfig = field(default_factory=GRPCConfig)

    def grpc_address(self) -> str:
        """Return the address the gRPC server listens on, as host:port."""
        return f"{self.grpc.host}:{self.grpc.port}"


def _to_int(name: str, value: object) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid {name}: {value!r}") from exc


def _apply_env(cfg: Config, environ: Mapping[str, str]) -> None:
    node_id = environ.get("NODE_ID", "")
    if node_id:
        cfg.node.id = _to_int("NODE_ID", node_id)

    seeds = environ.get("SEED_NODES", "")
    if seeds:
        cfg.node.seed_nodes = seeds.split(",")

    host = environ.get("GRPC_HOST", "")
    if host:
        cfg.grpc.host = host

    port = environ.get("GRPC_PORT", "")
    if port.startswith(NOMAD_PORT_PREFIX):
        cfg.grpc.port = NOMAD_FALLBACK_PORT
    elif port:
        cfg.grpc.port = _to_int("GRPC_PORT", port)


def _check_required(cfg: Config) -> None:
    if cfg.node.id == 0:
        raise ConfigError("field node.id (NODE_ID) is required")
    if cfg.grpc.port == 0:
        raise ConfigError("field grpc.port (GRPC_PORT) is required")


def load_from_env(environ: Mapping[str, str] | None = None) -> Config:
    """Build a configuration from environment variables alone."""
    env = os.environ if environ is None else environ
    log.info("grpc port from environment: %s", env.get("GRPC_PORT", ""))
    cfg = Config()
    _apply_env(cfg, env)
    _check_required(cfg)
    return cfg


def _config_from_document(document: object) -> Config:
    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise ConfigError("config document must be a mapping")

    cfg = Config()
    node = document.get("node") or {}
    grpc = document.get("grpc") or {}
    if not isinstance(node, Mapping) or not isinstance(grpc, Mapping):
        raise ConfigError("'node' and 'grpc' sections must be mappings")

    if "id" in node:
        cfg.node.id = _to_int("node.id", node["id"])
    seeds = node.get("seed_nodes")
    if seeds is not None:
        if not isinstance(seeds, list):
            raise ConfigError("node.seed_nodes must be a list")
        cfg.node.seed_nodes = [str(seed) for seed in seeds]

    if grpc.get("host") is not None:
        cfg.grpc.host = str(grpc["host"])
    if "port" in grpc:
        cfg.grpc.port = _to_int("grpc.port", grpc["port"])
    return cfg


def load_path(config_path: str) -> Config:
    """Load a YAML config file, let environment variables override it, and validate."""
    clean_path = os.path.normpath(config_path)
    if not os.path.exists(clean_path):
        raise ConfigError(f"config file does not exist: {clean_path}")

    try:
        with open(clean_path, encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"failed to read config: {exc}") from exc

    cfg = _config_from_document(document)
    _apply_env(cfg, os.environ)
    _check_required(cfg)

    try:
        validate_config(cfg)
    except ConfigError as exc:
        raise ConfigError(f"config validation failed: {exc}") from exc
    return cfg


def validate_config(cfg: Config) -> None:
    """Raise ConfigError if the configuration holds out-of-range values."""
    if cfg.node.id < 0:
        raise ConfigError("node ID must be positive")
    if not cfg.grpc.host:
        raise ConfigError("gRPC host cannot be empty")
    if cfg.grpc.port <= 0 or cfg.grpc.port > 65535:
        raise ConfigError("gRPC port must be between 1 and 65535")


def fetch_config_path(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the config path from -config, then CONFIG_PATH, then the default."""
    env = os.environ if environ is None else environ
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("-config", "--config", dest="config", default="")
    args = parser.parse_args(argv)

    path = args.config or env.get("CONFIG_PATH", "")
    return path or DEFAULT_CONFIG_PATH


_load_lock = threading.Lock()
_loaded: list[Config] = []


def must_load(argv: Sequence[str] | None = None) -> Config:
    """Load the process-wide configuration once and return it on every call."""
    with _load_lock:
        if _loaded:
            return _loaded[0]
        try:
            cfg = load_from_env()
            log.info("config loaded from environment variables")
        except ConfigError as exc:
            log.info("failed to load from env: %s, falling back to config file", exc)
            path = fetch_config_path(argv)
            cfg = load_path(path)
        _loaded.append(cfg)
        return cfg