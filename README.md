# toyredis

A small in-memory key-value server. It uses a plain text protocol in which
every message ends with a newline. It understands two commands:

```
SET <key> <value>
GET <key>
```

The server sends exactly one line back for each request line:

- `SET` replies with the value it stored.
- `GET` replies with the stored value. If the key is unknown, the reply is an empty line.
- A malformed command gets an empty line. Examples are a `GET` with no key, a `SET` without a value, or any extra tokens.
- An unknown command also gets an empty line.

Tokens are separated by single spaces. This means keys and values cannot
contain spaces.

All data lives in memory, and every connection shares it. Each client is
served on its own thread, so many clients can use the server at once. Each
connection is closed two minutes after it was opened, whether or not it is
still sending requests.

## Installation

```
pip install .
```

## Running the server

```
toyredis-server [--host HOST] [--port PORT]
```

By default the server listens on `0.0.0.0:6379`. It logs only errors. Press
Ctrl-C to stop it.

You can try it by hand with any line-oriented TCP client:

```
$ nc localhost 6379
SET greeting hello
hello
GET greeting
hello
GET missing

```

## Using it from Python

```python
import threading
from toyredis.server import Server

server = Server("localhost", 6400)      # the port may also be a string
thread = threading.Thread(target=server.run)
thread.start()
server.ready.wait()                      # set once the socket is bound
print(server.address)                    # ('127.0.0.1', 6400)
...
server.shutdown()
thread.join()
```

`Server.run()` blocks and serves connections until `shutdown()` is called
from another thread. To bind to a free port, pass port `0` and read the port
that was chosen from `server.address`.

The store and the command handlers can also be used on their own:

```python
from toyredis.storage import KVStore
from toyredis.commands import dispatch, command_set, CommandError

store = KVStore()
dispatch(store, "SET count 5\n", 0)   # -> "5"
dispatch(store, "GET count\n", 0)     # -> "5"
store.get("other")                    # -> ""
```

The functions behave differently on malformed requests:

- `dispatch` returns `""`.
- `command_get` and `command_set` raise `CommandError`, which is a subclass of `ValueError`.

`toyredis.server.handle_connection(store, connection, connection_counter)`
serves a single connected socket until the client disconnects or the
two-minute limit runs out.

## Load testing

```
toyredis-loadtest [--host HOST] [--port PORT] [--duration SECONDS] [--connections N]
```

The defaults are as follows:

- 1300 concurrent connections
- a server on `localhost:6379`
- a duration of 60 seconds

Each connection sends a random mix of requests: about 80% are `GET count`
and about 20% are `SET count <n>`. There is a random pause of up to 100 ms
between requests. If a connection fails to connect, fails to read a reply,
or gets a non-numeric reply to `GET`, that counts as one error and the
connection stops.

At the end the command prints:

- the total number of operations
- the number of connections
- the number of errors
- the error rate
- the operations per second

From Python, call
`toyredis.loadtest.sustained_load_test(host, port, duration, max_connections)`.
It returns a `LoadTestResult` with these fields:

- `total_ops`, `connections`, `errors` and `duration`
- `error_rate` and `ops_per_second`, which are computed properties
- `report()`, which returns the printed summary

`ConnectionHandler` wraps one open socket. Its `perform_get` and
`perform_set` methods each send a single request.

## What it does not do

- It has no persistence. All data is lost when the server stops.
- It supports no commands other than `GET` and `SET`. There is no delete, expiry or listing of keys.
- It does not speak the standard Redis wire protocol, so ordinary Redis clients cannot talk to it.

## Running the tests

```
pip install ".[test]"
pytest
```