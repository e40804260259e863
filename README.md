# tlssni

`tlssni` reads the first bytes a client sends on a TLS connection and returns
the hostname from the Server Name Indication (SNI) extension of the
ClientHello. A proxy can use that name to pick where a connection goes
without decrypting it.

The package also holds a set of classic 32-bit string hash functions, a
stable merge sort driven by a three-way comparison function, and a chained
hash table built on them that keeps an explicit entry order.

It needs nothing beyond the standard library.

## Installation

```
pip install tlssni
```

To run the tests:

```
pip install "tlssni[test]"
pytest
```

## Reading the SNI hostname

`tlssni.tls.parse_tls_header(data)` takes `bytes`, `bytearray` or
`memoryview` holding the start of a TLS stream and returns the first
`host_name` entry of the `server_name` extension as a `str`. When it cannot
return a name it raises one of three exceptions, all subclasses of
`TlsParseError` (itself a `ValueError`):

```python
from tlssni.tls import (
    parse_tls_header,
    IncompleteRequest,
    NoHostname,
    InvalidClientHello,
)

try:
    hostname = parse_tls_header(first_bytes)
except IncompleteRequest:
    ...  # fewer bytes than the record header says; read more and retry
except NoHostname:
    ...  # a valid handshake that carries no server name
except InvalidClientHello:
    ...  # not a well-formed TLS ClientHello
```

`NoHostname` is raised for an SSL 2.0 compatible ClientHello, for a
handshake version below 3, for an SSL 3.0 hello without extensions, and
when the extensions carry no `server_name` or no `host_name` entry. Only the
first TLS record is examined; bytes after it are ignored.

The lower-level parts are available too:

- `parse_extensions(data)` parses a ClientHello extensions block.
- `parse_server_name_extension(data)` parses the body of a `server_name`
  extension.

`Protocol` bundles a default port with a parser, and
`Protocol.parse_packet(data)` calls that parser. `TLS_PROTOCOL` is the
ready-made instance, with port 443 and `parse_tls_header`.

Diagnostic messages about rejected packets go to the `tlssni.tls` logger at
`DEBUG` level.

## Hash functions

`tlssni.hashing` has `ber`, `sax`, `fnv`, `oat` and `jen`, and
`tlssni.mixhash` has `sfh` (SuperFastHash) and `mur` (MurmurHash3, x86
32-bit). Each takes a bytes-like key and returns an unsigned 32-bit integer;
passing a `str` raises `TypeError`.

```python
from tlssni.hashing import jen, HASH_FUNCTIONS
from tlssni.mixhash import mur

jen(b"example.com")
mur(b"example.com")
HASH_FUNCTIONS["fnv"](b"example.com")
```

`HASH_FUNCTIONS` maps the names in `tlssni.hashing` to their functions, and
`DEFAULT_HASH` is `jen`.

## Merge sort

`tlssni.mergesort.merge_sort(items, compare)` returns a new sorted list.
`compare(a, b)` returns a negative number, zero or a positive number; equal
elements keep their original order.

```python
from tlssni.mergesort import merge_sort

merge_sort([3, 1, 2], lambda a, b: a - b)   # [1, 2, 3]
```

## Hash table

`tlssni.hashtable.HashTable(hash_function=DEFAULT_HASH)` maps bytes keys to
values. It starts with 32 buckets and doubles them when a chain grows too
long; if two doublings in a row leave more than half the items in
over-long chains, further doubling is switched off.

```python
from tlssni.hashing import fnv
from tlssni.hashtable import HashTable

table = HashTable(fnv)
table.add(b"alpha", 1)
table.add(b"beta", 2)
table.find(b"alpha")          # 1
table.find(b"gamma")          # None
table[b"beta"]                # 2
b"beta" in table              # True
table.replace(b"alpha", 10)   # returns 1; b"alpha" now comes last
table.delete(b"beta")         # returns 2
list(table)                   # [b"alpha"]
list(table.items())           # [(b"alpha", 10)]
```

- `add` raises `KeyError` if the key is already present; `delete` and
  `table[key]` raise `KeyError` if it is absent.
- `add_inorder(key, value, compare)` and `replace_inorder(key, value,
  compare)` place the entry before the first one that sorts after it.
  Comparison functions receive two `(key, value)` pairs.
- `sort(compare)` reorders the entries with the stable merge sort.
- `select(predicate)` returns a new table with the entries for which
  `predicate(key, value)` is true, taken in bucket order.
- `clear()` removes every entry and returns the table to 32 buckets.
- `num_buckets()` and `expansion_inhibited()` report how the table has grown.

## What it does not do

`tlssni` only inspects bytes you hand it. It opens no sockets, runs no proxy
or server, forwards no traffic and has no command-line program. It does not
decrypt or validate TLS, and it reads only the SNI hostname, no other
ClientHello field.