# threadio

`threadio` holds the parts for benchmarking how event data moves through a
multi-lane, multi-threaded processing system.

## What is in the package

- `threadio.tasks`: `TaskGroup` runs callables on worker threads. `wait()` blocks
  until they are all done and raises the first error again. It is also a context
  manager. `TaskHolder` counts references to a `TaskBase`, and the task is
  scheduled on its group once the last holder calls `done_waiting()`.
  `OptionalTaskHolder` either runs its task at once (`run_now()`) or turns it into
  a `TaskHolder`. Also here: `FunctorTask` with `make_functor_task`,
  `AtomicCounter` and `AtomicRefCounter`.
- `threadio.config`: `config_key_value_pairs` parses `key=value:key:...` strings
  into a dict sorted by key. A bare first entry that holds `/` or `.` becomes
  `fileName`.
- `threadio.factory`: `ComponentFactory` maps names to maker callables.
  `get_factory(key)` returns one shared factory for each key.
- `threadio.identifiers`: `EventIdentifier(run, lumi, event)`.
- `threadio.art_ids` and `threadio.cms_ids`: processing levels, ID number limits,
  run/subrun/event IDs, timestamps and event auxiliary records.
- `threadio.products`: `DataProductRetriever` and the abstract
  `DelayedProductRetriever`.
- `threadio.pds_common`: the `Compression` (`NONE`, `LZ4`, `ZSTD`) and
  `Serialization` enums, plus `compression_name`, `to_compression` and
  `to_serialization`.
- `threadio.pds_writer`: `compress_words` and `compress_bytes`. Both compress a
  buffer and surround it with zero padding.
- `threadio.pds_reading`: `read_file_header` returns a `FileHeader`. The module
  also has `read_compressed_event_buffer`, `uncompress_event_buffer`,
  `uncompress_buffer`, `skip_to_next_event`, `deserialize_data_products` and
  `deserialize_data_products_with_table`. The deserializers you pass in need a
  `deserialize(data, address)` method that returns the number of bytes read.
  Malformed input raises `PDSFormatError`.
- `threadio.sources`: `SourceBase`, `SharedSourceBase` and
  `ReplicatedSharedSource`, which keeps one per-lane source for each lane.
- `threadio.outputer_base`: the abstract `OutputerBase`.
- `threadio.test_products`: `TestProductsSource` provides `ints` and `floats`
  products whose values follow the event index. `TestProductsOutputer` checks
  those values and raises `ProductCheckError` when one is wrong.
- `threadio.text_dump`: `TextDumpOutputer` prints each product and each finished
  event, and/or the average size of each product.
- `threadio.waiter`: `Waiter` sleeps for a time proportional to a product's size.
- `threadio.proxy_vector`: `ProxyVector`, a sequence whose elements all have one
  type.
- `threadio.summary`: `summarize_serializers` prints the time each serializer
  took, slowest first, and returns the `(name, time)` pairs.

## Installation

```
pip install .
```

## Examples

```python
from threadio.config import config_key_value_pairs
from threadio.pds_common import to_compression
from threadio.pds_writer import compress_bytes

options = config_key_value_pairs("foo=3:bar=cat")
# {'bar': 'cat', 'foo': '3'}

packed = compress_bytes(0, 0, to_compression("LZ4"), 1, b"some payload bytes")
```

```python
from threadio.tasks import TaskGroup, TaskHolder, make_functor_task

with TaskGroup() as group:
    holder = TaskHolder(group, make_functor_task(lambda: print("all done")))
    other = holder.copy()
    holder.done_waiting()
    other.done_waiting()  # last reference: the task is scheduled on the group
```

## What the package does not do

- There is no command-line program that drives a benchmark over lanes.
- There is no serializer for data products.
- There is no outputer that writes complete data files. The packed data stream
  modules only compress buffers, and read headers and event buffers.

## Running the tests

```
pip install .[test]
pytest
```