'''
Web server interface for MDS.

The server exposes a single document under a URL prefix (`/mds` by default).
 * `GET <prefix>/<path>`: render the value at `path`
 * `PUT <prefix>`: replace the document with the JSON request body
 * `PATCH <prefix>`: apply the JSON Merge Patch in the request body
Successful reads answer with the rendered lines as `text/plain`. Successful
writes answer `204 No Content`. Failures answer with a short reason phrase
and a plain text description of the error in the body.
'''

import asyncio
import logging
import re

from tornado.web import RequestHandler, Application
from tornado.escape import json_decode

from .core import MetadataStore, SEPARATOR, split_path
from .errors import NotFound, UnsupportedValueType, StorePoisoned
from . import DEFAULT_PORT, DEFAULT_PREFIX, DEFAULT_MAX_BODY_SIZE

logger = logging.getLogger(__name__)

def describe_error(exc):
    '''
    Build the human-readable description of a store error.
    '''

    if isinstance(exc, NotFound):
        return 'no value at "{}"'.format(SEPARATOR.join(split_path(exc.path)))
    elif isinstance(exc, UnsupportedValueType):
        return 'unsupported value type "{}" at "{}"'.format(
            type(exc.value).__name__, SEPARATOR.join(str(k) for k in exc.path))
    else:
        return str(exc)

class DocumentHandler(RequestHandler):
    '''
    Handler for GET, PUT, and PATCH for accessing the `MetadataStore`.
    '''

    def initialize(self, store, max_body_size):  # pylint: disable=arguments-differ
        self.store = store
        self.max_body_size = max_body_size

    def get(self, path=None):
        '''
        Handle GET requests.

        The response body is the value at `path` rendered one line per
        child name for a node, or as the string itself for a leaf.
        '''

        try:
            lines = self.store.listing(path)
        except NotFound as exc:
            self.send_error(404, reason='not found', message=describe_error(exc))
        except UnsupportedValueType as exc:
            logger.error('inconsistent document: {}'.format(describe_error(exc)))
            self.send_error(500, reason='unsupported value type', message=describe_error(exc))
        except StorePoisoned:
            self._halt()
        else:
            self.set_header('Content-Type', 'text/plain; charset=UTF-8')
            self.write('\n'.join(lines))

    def put(self, path=None):
        '''
        Handle PUT requests by replacing the whole document with the
        decoded request body.
        '''

        self._write(path, self.store.replace)

    def patch(self, path=None):
        '''
        Handle PATCH requests by merging the decoded request body into
        the document as a JSON Merge Patch.
        '''

        self._write(path, self.store.merge)

    def _write(self, path, operation):
        if split_path(path):
            # writes address the whole document only
            self.send_error(405, reason='method not allowed',
                            message='{} is only allowed on the document root'.format(self.request.method))
            return

        if len(self.request.body) > self.max_body_size:
            logger.warning('payload of {} bytes exceeds limit of {} bytes'.format(
                len(self.request.body), self.max_body_size))
            self.send_error(413, reason='payload too large')
            return

        try:
            # decode the request JSON
            obj = json_decode(self.request.body)
        except ValueError as exc:
            logger.warning('malformed payload: {}\n\nPayload:\n{}'.format(exc, self.request.body))
            self.send_error(400, reason='malformed payload', message=str(exc))
            return
        except RecursionError:
            # the JSON decoder itself recurses
            logger.warning('payload nested too deeply to decode')
            self.send_error(400, reason='payload too deep')
            return

        try:
            operation(obj)
        except UnsupportedValueType as exc:
            self.send_error(500, reason='unsupported value type', message=describe_error(exc))
        except StorePoisoned:
            self._halt()
        else:
            self.set_status(204)

    def _halt(self):
        logger.critical('store is poisoned; halting')
        self.send_error(500, reason='store poisoned')
        self.application.halt()

    def write_error(self, status_code, **kwargs):
        '''
        Render errors as plain text.
        '''

        self.set_header('Content-Type', 'text/plain; charset=UTF-8')
        self.finish(kwargs.get('message') or self._reason)

class MetadataServer(Application):
    '''
    Tornado web application for document access over HTTP.

    If `store is None`, a new empty `MetadataStore` is served.
    '''

    def __init__(self, store=None, port=DEFAULT_PORT, address='', prefix=DEFAULT_PREFIX,
                 max_body_size=DEFAULT_MAX_BODY_SIZE):
        super(MetadataServer, self).__init__()
        self._port = port
        self._address = address
        self._shutdown = None

        self.store = store if store is not None else MetadataStore()
        self.prefix = prefix.rstrip('/')

        # the path group is absent for the bare prefix
        self.add_handlers(r'.*', [
            (r'{}(?:/(?P<path>.*))?'.format(re.escape(self.prefix)), DocumentHandler,
             {'store': self.store, 'max_body_size': max_body_size}),
        ])

    def log_request(self, handler):
        '''
        Log the request and response information to module logger.
        '''
        # choose the severity level based on HTTP status codes
        if handler.get_status() < 400:
            log = logger.info
        elif handler.get_status() < 500:
            log = logger.warning
        else:
            log = logger.error

        log('{} {} {} {} {} {:.2f}ms'.format(
            handler.request.remote_ip,
            handler.get_current_user() or '-',
            handler.request.method,
            handler.request.uri,
            handler.get_status(),
            1000 * handler.request.request_time())
        )

    async def serve(self):
        '''
        Bind the socket and serve until `halt()` is called.
        '''

        self._shutdown = asyncio.Event()

        server = self.listen(self._port, self._address)
        logger.info('MDS started on {}:{}{}'.format(
            self._address or '*', self._port, self.prefix))

        try:
            await self._shutdown.wait()
        finally:
            server.stop()

    def run(self):
        '''
        Run the server until a `KeyboardInterrupt` is raised or the
        server halts.
        '''

        try:
            asyncio.run(self.serve())
        except KeyboardInterrupt:
            pass

        logger.info('MDS stopped')

    def halt(self):
        '''
        Stop serving requests.
        '''

        if self._shutdown is not None:
            self._shutdown.set()
