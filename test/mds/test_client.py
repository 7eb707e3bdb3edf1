# pylint: disable=line-too-long,missing-docstring,invalid-name,protected-access

from unittest import TestCase, mock

from .helper import DatabaseDependentTestCase

from mds.client import MetadataClient
from mds.errors import NotFound, UnsupportedValueType

class ClientTest(DatabaseDependentTestCase):

    def setUp(self):
        super(ClientTest, self).setUp()
        self.server.store.replace({'c0': {'c1': '12345', 'c2': '6789'}})

    def test_client_get(self):
        self.assertEqual(self.client.get(), ['c0'])
        self.assertEqual(self.client.get('c0'), ['c1', 'c2'])
        self.assertEqual(self.client.get('c0/c1'), ['12345'])
        self.assertEqual(self.client.get(['c0', 'c2']), ['6789'])

    def test_client_get_missing(self):
        with self.assertRaises(NotFound) as ctx:
            self.client.get('missing')
        self.assertEqual(ctx.exception.path, 'missing')

    def test_client_get_empty_node(self):
        self.client.put({})
        self.assertEqual(self.client.get(), [])

    def test_client_get_escaped(self):
        self.client.put({'a b': {'c+d': 'e'}})
        self.assertEqual(self.client.get(['a b', 'c+d']), ['e'])

    def test_client_put(self):
        self.client.put({'a': {'b': 'c'}})
        self.assertDictEqual(self.server.store.resolve(), {'a': {'b': 'c'}})

    def test_client_put_unsupported(self):
        with self.assertRaises(UnsupportedValueType) as ctx:
            self.client.put({'a': 1})
        self.assertEqual(ctx.exception.value, {'a': 1})
        self.assertDictEqual(self.server.store.resolve(), {'c0': {'c1': '12345', 'c2': '6789'}})

    def test_client_patch(self):
        self.client.patch({'c0': {'c1': None, 'c3': 'x'}})
        self.assertEqual(self.client.get('c0'), ['c2', 'c3'])

    def test_client_patch_unsupported(self):
        with self.assertRaises(UnsupportedValueType):
            self.client.patch({'c0': True})

    def test_client_unexpected_status(self):
        with mock.patch.object(self.server.store, 'listing', side_effect=ValueError('boom')):
            with self.assertRaises(RuntimeError):
                self.client.get('c0')

class ClientTest_Host(TestCase):

    def test_client_default_host(self):
        with mock.patch.dict('os.environ', {}, clear=True):
            client = MetadataClient(client=mock.Mock())
        self.assertEqual(client._base_url, 'http://localhost:7878/mds')

    def test_client_environment_host(self):
        with mock.patch.dict('os.environ', {'MDS_SERVER': 'example.com:1234'}):
            client = MetadataClient(client=mock.Mock())
        self.assertEqual(client._base_url, 'http://example.com:1234/mds')

    def test_client_prefix(self):
        client = MetadataClient('http://example.com/', prefix='/latest/meta-data/', client=mock.Mock())
        self.assertEqual(client._base_url, 'http://example.com/latest/meta-data')
