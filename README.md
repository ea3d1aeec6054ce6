# clarify

Building blocks for the Clarify JSON-RPC API in Python: value types,
query and filter builders, resource views with JSON encoding and decoding,
and the JSON-RPC request body. The package has no third-party dependencies.

The package provides:

- `clarify.fields` – value types used in requests and responses: RFC 3339
  durations (`duration`), microsecond timestamps (`timestamp`), hexadecimal
  and base64 bytes (`binary`), numbers with NaN as `null` (`number`),
  field comparisons (`comparison`), resource filters and queries
  (`resource_filter`, `resource_query`), data filters and data queries
  (`data_filter`, `data_query`), evaluation items, groups and calculations
  (`evaluate`), and labels, annotations and enum values (`maps`).
- `clarify.views` – views of Clarify resources (`resource`, `signal`,
  `item`), data frames (`data_frame`) and selection results (`response`).
- `clarify.jsonrpc.request` – the JSON-RPC request type and named parameters.
- `clarify.prettylog` – coloured, readable rendering of JSON log lines and
  a `logging` handler that uses it.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building a resource query

```python
from clarify.fields.comparison import compare_field, in_
from clarify.fields.resource_query import query

q = (
    query()
    .where(compare_field("id", in_("c8keagasahsp3cpvma20", "c8l8bc2sahsgjg5cckcg")))
    .limit(1)
)
print(q.to_json())
```

Queries are immutable: every method returns a new query. `next_page()`
advances the skip value by the current limit, and `limit_value()` /
`skip_value()` report the values in effect (the default limit is 50).

Comparisons are built with `equal`, `not_equal`, `in_`, `not_in`,
`greater`, `greater_or_equal`, `less`, `less_or_equal`, `range_` and
`regex`, and combined with `merge_operators`, where the last of two
conflicting operators wins. Filters combine with `and_` and `or_` from
`clarify.fields.resource_filter`; `filter_all()` matches every resource.

## Building a data query

```python
from datetime import datetime, timezone

from clarify.fields.data_filter import series_in, time_range
from clarify.fields.data_query import data

dq = (
    data()
    .where(time_range(
        datetime(2022, 1, 1, tzinfo=timezone.utc),
        datetime(2022, 1, 1, 4, tzinfo=timezone.utc),
    ))
    .where(series_in("c8l95d2sahsh22imiabg_sum"))
    .rollup_window()
    .time_zone("Europe/Berlin")
)
print(dq.to_json())
```

Joining filters with `where` (or `data_and`) keeps the latest lower time
bound, the earliest upper bound and the intersection of series keys.
`rollup_duration(d, first_day_of_week)` takes the first day of the week
counted like `datetime.weekday()` (Monday is 0); `rollup_months(n)` uses
calendar months.

## Durations and timestamps

```python
from datetime import datetime, timezone

from clarify.fields.duration import parse_calendar_duration, parse_fixed_duration
from clarify.fields.timestamp import as_timestamp

parse_fixed_duration("PT2M").duration       # timedelta(minutes=2)
parse_calendar_duration("P1Y2M").months     # 14
as_timestamp(datetime(2000, 1, 3, tzinfo=timezone.utc))  # Timestamp(946857600000000)
```

Malformed durations raise `BadFixedDurationError` or
`BadCalendarDurationError` from `clarify.fields.errors`; both are
`ValueError` subclasses.

`Timestamp` values are microseconds since the epoch; `truncate` rounds
down to a multiple of a duration counted from Monday 2000-01-03 00:00 UTC.

## Request bodies

```python
from clarify.jsonrpc.request import ParamName, new_request

request = new_request("clarify.selectItems", ParamName("query").value(q))
print(request.to_json())
```

`to_json()` returns the JSON-RPC body, turning parameter values that have a
`to_json` method into plain JSON data. The request's `api_version` (default
`"1.0"`) is kept apart from the body.

## Data frames

`clarify.views.data_frame.DataFrame` maps series keys to `DataSeries`
(timestamp → float). Encoding produces ordered `times` and per-series
value lists, with missing values written as `null`; decoding drops `null`
values and any values beyond the listed times.

## Resource views

`Signal.from_json` and `Item.from_json` decode select views.
`Resource.to_json` sets `attributesHash` and `relationshipsHash` in the
encoded meta to SHA-1 sums of the encoded attributes and relationships,
leaving the object itself unchanged. `published_item(signal, *transforms)`
builds a hidden `ItemSave` from a signal and runs the transforms on it in
order.

## Readable logs

```python
import logging

from clarify.prettylog import PrettyHandler

logging.getLogger().addHandler(PrettyHandler())
```

`pretty_log(lines, out)` renders existing JSON log lines the same way;
lines that are not JSON objects are written unchanged.

## What this package does not do

The package builds and decodes the JSON that the Clarify API exchanges,
but it does not send anything: there is no HTTP transport, no
authentication, no client object with per-method calls, and no error
types for server or transport failures. Posting a request body and
handing the response to the `from_json` decoders is left to the caller.