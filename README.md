# packcalc

packcalc is a small HTTP service that answers one question: an order needs a
number of items, and items ship only in whole packs of fixed sizes. Which packs
should be sent?

The answer follows two rules. The first rule takes priority:

1. Send as few items as possible. The order may be overfilled, but by no more
   than one largest pack, and only by as little as can be helped.
2. Among the answers with that number of items, use the fewest packs.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## Running the server

The `packcalc` command starts Flask's built-in server on all interfaces
(`0.0.0.0`). It takes no options other than `--help`; its settings come from
environment variables:

| Variable           | Meaning                                  | Default      |
|--------------------|------------------------------------------|--------------|
| `PORT`             | Port to listen on (0 to 65535)           | must be set  |
| `CORS_ORIGIN`      | Origin allowed by CORS; `*` and `?` act as wildcards | `*` |
| `ORDER_SIZE_LIMIT` | Largest order the calculator will accept | `1000000`    |

```
PORT=8080 packcalc
```

Empty variables count as unset. If `PORT` is missing or not a valid port
number, or `ORDER_SIZE_LIMIT` is not an integer, the command logs the problem
and exits with status 1 instead of starting. Logs go to standard error at INFO
level, one line per request.

## HTTP API

`GET /` serves `public/index.html` from the current working directory. The
package does not ship that page; if the file is not there the response is a
404 with `{"message": "Not Found"}`.

`POST /calculate` takes a JSON body:

```json
{"orderedItems": 500000, "boxSizes": [23, 31, 53]}
```

`orderedItems` must be an integer between 1 and 1,000,000. `boxSizes` must be a
non-empty list of unique integers, each between 1 and 1,000,000. Field names
are also matched without regard to case. The response lists the packs from
largest to smallest:

```json
[
  {"boxSize": 53, "quantity": 9429},
  {"boxSize": 31, "quantity": 7},
  {"boxSize": 23, "quantity": 2}
]
```

A body that is not valid JSON or fails validation gets `400 Invalid request`
as plain text. If the calculator rejects the order (for example because it is
larger than `ORDER_SIZE_LIMIT`), the response is `500 Failed to calculate
packing`. Results are kept in memory, so a repeated request, with the pack
sizes in any order, is answered from the cache.

## Using the library

```python
from packcalc.calculator import Calculator, PackingError

calc = Calculator(1_000_000)
for packing in calc.calculate_packing(251, 250, 500, 1000):
    print(packing.box_size, packing.quantity)   # 500 1

try:
    calc.calculate_packing(10, 3, 3)
except PackingError as exc:
    print(exc)                                   # pack sizes must be unique
```

`Packing.to_dict()` gives the JSON form used by the API. `PackingError` is a
subclass of `ValueError`.

The cache used by the server is also available on its own:

```python
from packcalc.cache import PackCache

cache = PackCache(maxsize=1024)
result = calc.calculate_packing(251, 250, 500)
cache.set(251, [250, 500], result)
cache.get(251, 500, 250)   # the same entry; pack order does not matter
```

`get` returns `None` on a miss, or when the order size is not positive or no
pack sizes are given; `set` ignores such input.

To build the web application yourself, for example to serve it with another
WSGI server, call `packcalc.app.create_app(config, index_path=None)` with a
`packcalc.config.Config`, which `packcalc.config.load_config` reads from an
environment mapping (the process environment by default) and which raises
`packcalc.config.ConfigError` when the settings are unusable. Pass
`index_path` to serve a different file at `/`.

## Running the tests

```
pytest
```