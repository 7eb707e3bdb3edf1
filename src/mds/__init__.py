'''

# MDS

An in-memory metadata document store served over HTTP.

## Design

The store holds a single document made of exactly two kinds of values.
 - leaf: a string
 - node: an ordered mapping from string names to values
No numbers, booleans, arrays, or nulls are ever stored. This restriction
lets any value be walked like a directory tree: a path component either
names a node that can be descended into or a leaf that terminates the walk.

The store supports three operations.
 - `replace`: swap in a whole new document
 - `merge`: apply a JSON Merge Patch (RFC 7396) to the document
 - `resolve`: look up the value at a forward-slash (`/`) delimited path
Both writes are all-or-nothing. A document containing anything other than
leaves and nodes is rejected and the previous document is kept. This holds
for the result of a merge as well as for a replacement.

### Example

Suppose the document is replaced with the following.
```
{
    'c0': {
        'c1': '12345',
        'c2': '6789'
    }
}
```
The `resolve` operations below will have the following results.
 - `resolve('c0/c1') -> '12345'`
 - `resolve('c0') -> {'c1': '12345', 'c2': '6789'}`
 - `resolve('missing')` raises `NotFound`

After merging the patch `{'c0': {'c2': None, 'c3': {'x': 'y'}}}`:
```
{
    'c0': {
        'c1': '12345',
        'c3': {
            'x': 'y'
        }
    }
}
```

Reads are rendered as lines of text. A leaf renders as itself and a node
renders as the names of its children, one per line, in insertion order.

## Usage

The following code snippet starts a server on all interfaces at the
default port.
```
from mds.server import MetadataServer

server = MetadataServer()
server.run()
```
The same is available from the command line as `python -m mds`.

The following code snippet creates a client that connects to `localhost`
on the default port.
```
from mds.client import MetadataClient

client = MetadataClient()
client.put({'a': {'b': 'c'}})
client.patch({'a': {'d': 'e'}})
client.get('a') # -> ['b', 'd']
client.get('a/b') # -> ['c']
```
'''

DEFAULT_PORT = 7878
DEFAULT_PREFIX = '/mds'
DEFAULT_MAX_BODY_SIZE = 51200
