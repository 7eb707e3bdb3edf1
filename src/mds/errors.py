'''
Errors raised by the MDS document store.

`NotFound` and `UnsupportedValueType` are the only recoverable errors and
both derive from `StoreError`. `StorePoisoned` is deliberately outside that
hierarchy since there is no sensible way to continue after it.
'''

class StoreError(Exception):
    '''
    Base class for the recoverable errors raised by a `MetadataStore`.
    '''

class NotFound(StoreError):
    '''
    No value exists at the requested path.
    '''

    def __init__(self, path):
        super(NotFound, self).__init__(path)
        self.path = path

class UnsupportedValueType(StoreError):
    '''
    A document contains a value that is neither a leaf nor a node.

    `path` is the list of keys leading from the document root to the
    offending `value`.
    '''

    def __init__(self, value, path=None):
        super(UnsupportedValueType, self).__init__(value, path)
        self.value = value
        self.path = list(path or [])

class StorePoisoned(RuntimeError):
    '''
    The store was interrupted while holding its lock and can no longer
    be trusted.
    '''
