# scoreboard-api

A small WSGI application that keeps scoreboards in a SQLite database and
serves them as JSON over HTTP. Each scoreboard has an identifier (a UUID),
a name, and creation and update timestamps.

## Installing

```
pip install .
```

For running the tests as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
scoreboard-api --database scoreboards.db
```

Options, each of which falls back to an environment variable:

| Option       | Environment variable | Default     |
|--------------|----------------------|-------------|
| `--host`     | `HOST`               | `localhost` |
| `--port`     | `PORT`               | `8080`      |
| `--database` | `DATABASE_URL`       | none        |
| `--debug`    | `DEBUG`              | off         |

`--database` is the path of a SQLite database file; the `scoreboards`
table is created in it if it is not there yet. `DEBUG` counts as on when
it is `1`, `true`, `yes` or `on`. `APP_NAME` sets the name written to the
log at start-up.

Without a database the command stops at once, printing a short report of
what is wrong and how to fix it, and exits with status 1. It also exits
with status 1 if the database cannot be opened or the address cannot be
bound. Otherwise it serves requests until it receives SIGINT or SIGTERM,
then shuts down and exits with status 0.

## Endpoints

| Method   | Path                    | What it does                     | Success |
|----------|-------------------------|----------------------------------|---------|
| `GET`    | `/api/scoreboards`      | List every scoreboard            | 200     |
| `POST`   | `/api/scoreboards`      | Create a scoreboard              | 200     |
| `GET`    | `/api/scoreboards/{id}` | Fetch one scoreboard             | 200     |
| `PUT`    | `/api/scoreboards/{id}` | Rename a scoreboard              | 200     |
| `DELETE` | `/api/scoreboards/{id}` | Delete a scoreboard              | 204     |

Creating and updating take a JSON object with one field:

```json
{"name": "Spring League"}
```

The name must be a non-empty string of at most 255 characters. A
scoreboard comes back as:

```json
{
  "id": "5f2b6c1e-8a3d-4c7e-9b1a-2d4e6f8a0c12",
  "name": "Spring League",
  "createdAt": "2025-01-01T12:00:00Z",
  "updatedAt": "2025-01-01T12:00:00Z"
}
```

Timestamps are RFC 3339 with whole seconds, in UTC. Deleting an
identifier that does not exist still answers 204.

## Errors

Errors are answered with an `application/problem+json` document holding
`type`, `title`, `status` and `detail`:

- 400 for an identifier that is not a UUID, a body that is not a JSON
  object, a `name` that is not a string, or a name that is missing, empty
  or too long;
- 404 for a scoreboard that does not exist, and for unknown paths;
- 405 for a method a path does not accept, with an `Allow` header;
- 500 for anything unexpected. With `--debug` the detail names the
  exception; otherwise it only says an unexpected error occurred.

## Using it from Python

The pieces can be put together by hand, for instance to serve the
application from another WSGI server:

```python
import sqlite3

from scoreboard_api.app import create_app
from scoreboard_api.handler import Handler
from scoreboard_api.middleware import Middleware
from scoreboard_api.queries import create_schema
from scoreboard_api.service import Service

connection = sqlite3.connect("scoreboards.db", check_same_thread=False)
create_schema(connection)
app = create_app(Handler(Service(connection)), Middleware(debug=False))
```

- `scoreboard_api.queries`: `create_schema`, the `Scoreboard` and
  `UpdateParams` records, and `Queries`, which runs the statements and
  raises `LookupError` when a row is missing. `Queries.with_tx` returns
  queries that leave committing to the caller.
- `scoreboard_api.service`: `Service`, which turns storage failures into
  `DatabaseError`, or `NotFoundError` for a missing row, via
  `wrap_db_error`.
- `scoreboard_api.handler`: `Handler`, with `get_all`, `get`, `create`,
  `update` and `delete` taking a werkzeug `Request`; `CreateRequest`,
  `UpdateRequest`, `ScoreboardResponse` and `generate_response`.
- `scoreboard_api.middleware`: `Middleware.trace`, which stores a trace id
  in the WSGI environ under `TRACE_ID_KEY` and logs each request and its
  timing; `Middleware.recover`, which turns an unhandled exception into a
  500 problem; and `chain`, which applies middleware with the first one
  outermost.
- `scoreboard_api.app`: `create_app`, returning an `Application` that is a
  plain WSGI callable; `early_application_failed`; and `main`.
- `scoreboard_api.validation`: `FieldRule` and `validate_struct` check
  dataclass fields and raise `ValidationError`.
- `scoreboard_api.identifiers`: `parse_uuid`, raising `InvalidUUIDError`.
- `scoreboard_api.errors`: `Problem` and `error_handler`, which maps the
  `AppError` subclasses (`InvalidRefreshTokenError`,
  `ProviderNotFoundError`, `InvalidExchangeTokenError`,
  `InvalidCallbackInfoError`, `PermissionDeniedError`) to 404, 400 or 403
  problems.

## What it does not do

There is no sign-in or authorisation: the token, provider and permission
errors in `scoreboard_api.errors` are mapped to problems, but no endpoint
raises them. Storage is SQLite only, and tracing is limited to a trace id
and log lines; nothing is sent to a tracing collector.