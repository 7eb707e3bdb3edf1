'''
Command line entry point for running a `MetadataServer`.
'''

import json
import logging

from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter
from os import environ

from .core import MetadataStore
from .log import setup_logging
from .server import MetadataServer
from . import DEFAULT_PORT, DEFAULT_PREFIX, DEFAULT_MAX_BODY_SIZE

logger = logging.getLogger(__name__)

def build_parser():
    parser = ArgumentParser(description='in-memory metadata document server', formatter_class=ArgumentDefaultsHelpFormatter)

    parser.add_argument('-a', '--address', metavar='HOST', default=environ.get('MDS_ADDRESS', ''), help='address to bind (all interfaces if empty)')
    parser.add_argument('-p', '--port', metavar='PORT', type=int, default=int(environ.get('MDS_PORT', DEFAULT_PORT)), help='port to bind')
    parser.add_argument('--prefix', metavar='PREFIX', default=DEFAULT_PREFIX, help='URL prefix of the document')
    parser.add_argument('--max-body-size', metavar='BYTES', type=int, default=DEFAULT_MAX_BODY_SIZE, help='largest accepted PUT or PATCH body')
    parser.add_argument('-l', '--load', metavar='FILE', help='JSON file with the initial document')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='increase log verbosity')

    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    store = MetadataStore()
    if args.load:
        with open(args.load) as data_file:
            store.replace(json.load(data_file))
        logger.info('loaded initial document from {}'.format(args.load))

    MetadataServer(store, port=args.port, address=args.address, prefix=args.prefix,
                   max_body_size=args.max_body_size).run()

if __name__ == '__main__':
    main()
