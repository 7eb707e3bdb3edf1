'''
Core document store components of MDS.
'''

import threading

from contextlib import contextmanager
from .errors import NotFound, StorePoisoned
from .merge import copy_value, merge_patch
from .validator import validate

import logging
logger = logging.getLogger(__name__)  # pylint: disable=invalid-name

SEPARATOR = '/'

def is_leaf(value):
    return isinstance(value, str)

def is_node(value):
    return isinstance(value, dict)

def split_path(path):
    '''
    Split `path` into its key segments.

    Empty segments are dropped so leading, trailing, and repeated
    separators are ignored. A `path` that is already a sequence of
    segments is filtered the same way.
    '''

    if path is None:
        return []
    if isinstance(path, str):
        path = path.split(SEPARATOR)

    return [segment for segment in path if segment]

def resolve(root, path=None):
    '''
    Walk `root` along `path` and return the value found there.

    Raises `NotFound` if any segment does not name a child of a node.
    '''

    value = root
    for segment in split_path(path):
        # only nodes can be descended into
        if not is_node(value) or segment not in value:
            raise NotFound(path)

        value = value[segment]

    return value

def render(value):
    '''
    Render a resolved value as a list of lines.

    A leaf is its own single line. A node is the names of its children
    in insertion order.
    '''

    if is_node(value):
        return list(value.keys())
    else:
        return [value]

class MetadataStore(object):
    '''
    Thread-safe owner of a single metadata document.

    The document starts as an empty node and is only ever changed by
    `replace` or `merge`. Every operation holds the same lock for its
    entire duration, so readers never observe a partially applied write
    and writers are strictly serialized.

    New documents are always built on the side and then committed with
    a single assignment. Committed documents are never mutated in place,
    which lets a merge share unchanged subtrees with its predecessor.
    '''

    render = staticmethod(render)

    def __init__(self, data=None):
        self._lock = threading.Lock()
        self._poisoned = False
        self._document = {}

        if data is not None:
            self.replace(data)

    @contextmanager
    def _locked(self):
        with self._lock:
            if self._poisoned:
                raise StorePoisoned('store was interrupted during a previous operation')

            try:
                yield
            except Exception:
                # ordinary errors happen before anything is committed
                raise
            except BaseException:
                self._poisoned = True
                raise

    def replace(self, candidate):
        '''
        Replace the whole document with `candidate`.

        Raises `UnsupportedValueType` and keeps the current document if
        `candidate` contains anything other than leaves and nodes.
        '''

        logger.debug('replace')

        with self._locked():
            validate(candidate)
            self._document = copy_value(candidate)

    def merge(self, patch):
        '''
        Apply the JSON Merge Patch `patch` to the document.

        The merged document is validated before it is committed. If it
        contains anything other than leaves and nodes, `UnsupportedValueType`
        is raised and the current document is kept.
        '''

        logger.debug('merge')

        with self._locked():
            document = merge_patch(self._document, patch)
            validate(document)
            self._document = document

    def resolve(self, path=None):
        '''
        Get a copy of the value at `path`.

        Raises `NotFound` if there is no such value.
        '''

        logger.debug('resolve: "{}"'.format(path))

        with self._locked():
            return copy_value(resolve(self._document, path))

    def listing(self, path=None):
        '''
        Get the rendered lines for the value at `path`.

        Raises `NotFound` if there is no such value.
        '''

        logger.debug('listing: "{}"'.format(path))

        with self._locked():
            return self.render(resolve(self._document, path))

    @property
    def poisoned(self):
        return self._poisoned
