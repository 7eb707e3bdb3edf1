'''
Web client interface to `MetadataServer`.
'''

import logging

from http import HTTPStatus
from os import environ
from urllib.parse import quote

from tornado.escape import json_encode, to_unicode
from tornado.httpclient import HTTPClient

from .core import split_path
from .errors import NotFound, UnsupportedValueType
from . import DEFAULT_PORT, DEFAULT_PREFIX

logger = logging.getLogger(__name__)  # pylint: disable=invalid-name

class MetadataClient(object):
    '''
    Client for reading and updating the document on a `MetadataServer`.
    '''

    def __init__(self, host=None, prefix=DEFAULT_PREFIX, client=None):
        if not host:
            # fall back to environment variable
            host = environ.get('MDS_SERVER', None)
        if not host:
            # fall back to default
            host = 'http://localhost:{}/'.format(DEFAULT_PORT)

        if not host.startswith(('http://', 'https://')):
            host = 'http://' + host

        self._base_url = host.rstrip('/')
        if prefix.strip('/'):
            self._base_url += '/' + prefix.strip('/')
        self._client = client or HTTPClient()

    def _fetch(self, path, method, value=None):
        '''
        Helper for HTTP requests.

        For methods that carry a body, `value` is JSON-encoded and sent.
        Returns the decoded response body.
        '''

        # build the complete URL with each segment escaped
        url = self._base_url
        segments = split_path(path)
        if segments:
            url += '/' + '/'.join(quote(s, safe='') for s in segments)

        body = None
        if method in ('PUT', 'PATCH'):
            body = json_encode(value)

        # perform the request
        response = self._client.fetch(url,
                                      method=method,
                                      body=body,
                                      headers={'Content-Type': 'application/json'},
                                      raise_error=False)

        logger.debug('{} {} -> {}'.format(method, url, response.code))

        # map store errors back to exceptions
        if response.code == HTTPStatus.NOT_FOUND:
            raise NotFound(path)
        elif response.code == HTTPStatus.INTERNAL_SERVER_ERROR and response.reason == 'unsupported value type':
            raise UnsupportedValueType(value)
        elif response.code not in [HTTPStatus.OK, HTTPStatus.NO_CONTENT]:
            logger.error('unexpected HTTP response: {} {}\
                \n\nResponse:\n{}'.format(response.code,
                                          response.reason,
                                          response.body))
            raise RuntimeError('{} {}'.format(response.code, response.reason))

        return to_unicode(response.body or b'')

    def get(self, path=None):
        '''
        Get the rendered lines of the value at `path`.

        A leaf gives a single line holding its string. A node gives the
        names of its children.
        '''

        body = self._fetch(path, 'GET')
        # an empty node renders as an empty body
        if not body:
            return []
        return body.split('\n')

    def put(self, document):
        '''
        Replace the whole remote document.
        '''

        self._fetch(None, 'PUT', document)

    def patch(self, patch):
        '''
        Apply a JSON Merge Patch to the remote document.
        '''

        self._fetch(None, 'PATCH', patch)
