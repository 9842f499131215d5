# kvstorage

The building blocks of an in-memory key-value storage node. A node keeps
its data in a thread-safe store with a data version counter, applies `set`
and `delete` operations, and, while it is the leader, forwards every
operation to the replica streams it has registered.

## Modules

- `kvstorage.config`: node configuration (`Config`, `NodeConfig`,
  `GRPCConfig`). The loaders are `load_from_env`, `load_path`,
  `fetch_config_path` and `must_load`, and `validate_config` checks the
  values. Any problem raises `ConfigError`. `Config.grpc_address()` returns
  `"host:port"`.
- `kvstorage.storage`: `KeyValueStorage`, a store of `Item` values. `get`
  returns the `Item` or `None`. Every `set`, `set_with_expiration` and
  `delete` adds one to the value returned by `data_version()`.
- `kvstorage.model`: `Node`, a dataclass holding `id`, `nomad_id`, `address`
  and `is_leader`. A new node starts as leader.
- `kvstorage.messages`: the request and response dataclasses:
  `GetRequest`/`GetResponse`, `SetRequest`/`SetResponse`,
  `LeMetaRequest`/`LeMetaResponse` and
  `UpdateLeaderRequest`/`UpdateLeaderResponse`.
- `kvstorage.connections`: `ConnectionManager`, a registry of streams,
  keyed by id. A stream is any object with a `send(SetRequest)` method.
  `broadcast` sends a message to every registered stream. A stream that
  raises is skipped, and the others still receive the message.
- `kvstorage.storage_service`: `StorageService` applies a `SetMessage` to
  the store. The message carries an `Operation`: `EMPTY`, `SET` or `DELETE`.
  While the node leads, the service also broadcasts the message as a
  `SetRequest`, and it does this for every operation, `empty` included.
  `get` returns the stored string or `None`.
- `kvstorage.leader_election`: `LeaderElectionService.meta()` returns a
  `Meta` holding the node id and the data version. `set_leader(leader_id)`
  makes the node leader when `leader_id` is its own id. Otherwise the node
  becomes a replica.
- `kvstorage.server`: `KeyValueStorageServer`, the request handlers
  `get`, `set`, `set_stream`, `le_meta` and `update_leader`. `set_stream`
  takes an iterable of `SetRequest` and yields one `SetResponse` for each
  request it applies.

## Putting a node together

```python
from kvstorage.connections import ConnectionManager
from kvstorage.leader_election import LeaderElectionService
from kvstorage.messages import GetRequest, SetRequest, UpdateLeaderRequest
from kvstorage.model import Node
from kvstorage.server import KeyValueStorageServer
from kvstorage.storage import KeyValueStorage
from kvstorage.storage_service import StorageService

node = Node("1", address="0.0.0.0:50051")
connections = ConnectionManager()
storage = StorageService(KeyValueStorage(), node, connections)
server = KeyValueStorageServer(storage, LeaderElectionService(node, storage))

server.set(SetRequest("colour", "blue", "set"))
print(server.get(GetRequest("colour")))        # GetResponse(value='blue', found=True)
server.update_leader(UpdateLeaderRequest(2))   # node 1 becomes a replica
```

## Configuration

A YAML configuration file looks like this:

```yaml
node:
  id: 1
  seed_nodes:
    - 127.0.0.1:50052
    - 127.0.0.1:50053
grpc:
  host: 0.0.0.0
  port: 50051
```

The same settings can come from the environment:

| Variable     | Meaning                                  | Default   |
|--------------|------------------------------------------|-----------|
| `NODE_ID`    | node identifier (required)               |           |
| `SEED_NODES` | comma-separated list of seed addresses   | empty     |
| `GRPC_HOST`  | address to listen on                     | `0.0.0.0` |
| `GRPC_PORT`  | port to listen on (required)             |           |

A `GRPC_PORT` that is still an unexpanded `${NOMAD_PORT_...}` placeholder
falls back to port 8080. A node id or port of 0 counts as missing.

`load_from_env()` builds the configuration from the environment alone.
`load_path(path)` reads a YAML file and lets the variables above override
it. It then validates the result: the node id must not be negative, the
host must not be empty, and the port must lie between 1 and 65535.

`must_load(argv)` loads the configuration once per process and returns
the same object on every later call. It tries the environment first. If
that is incomplete, it reads the file named by a `-config`/`--config`
argument. Failing that it uses `CONFIG_PATH`, and finally
`./config/local.yaml`.

```python
from kvstorage.config import load_path

cfg = load_path("config/config.yaml")
print(cfg.grpc_address())   # "0.0.0.0:50051"
```

## Storage

```python
from datetime import timedelta
from kvstorage.storage import KeyValueStorage

store = KeyValueStorage()
store.set("colour", "blue")
store.set_with_expiration("session", "abc", timedelta(minutes=5))
store.delete("colour")
print(store.data_version())  # 3
```

## What the package does not do

- It has no network server and no command to start one.
  `KeyValueStorageServer` holds the handlers as plain Python methods, and
  wiring them to a transport is left to you.
- It has no metrics or health-check endpoints.
- It opens no connections to other nodes. `ConnectionManager` sends only
  to the streams you add to it.
- It does not enforce expiry. `set_with_expiration` records the expiry
  time in `Item.expiration`, in nanoseconds, but `get` still returns the
  item after that time has passed.
- Data is kept in memory only and is lost when the process ends.

## Installing the test dependencies

The `test` extra pulls in pytest.