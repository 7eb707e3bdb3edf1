'''
Helper for running server-dependent tests.
'''

from tornado.testing import AsyncHTTPTestCase

from mds.server import MetadataServer
from mds.client import MetadataClient

class FakeHTTPClient(object):  # pylint: disable=too-few-public-methods
    '''
    Tornado HTTP client wrapper to strip the protocol, host, and port
    from URLs so test cases work properly.
    '''

    def __init__(self, target):
        self._target = target
        self._trim_length = len(self._target.get_url(''))

    def fetch(self, path, **kwargs):
        return self._target.fetch(path[self._trim_length:], **kwargs)

class DatabaseDependentTestCase(AsyncHTTPTestCase):
    '''
    Unit test base class that sets up a server and client just
    for the tests in this case.
    '''

    def setUp(self):
        '''
        Initialize the client.
        '''
        super(DatabaseDependentTestCase, self).setUp()
        self.client = MetadataClient(self.get_url(''), client=FakeHTTPClient(self))

    def get_app(self):
        '''
        Initialize the server.
        '''
        self.server = MetadataServer()
        return self.server
