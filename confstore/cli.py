"""Command line access to a settings file.

Usage: python -m confstore FILE [--name NS] [--lodash-path] [--sorted] COMMAND ...

Values given on the command line are parsed as JSON; anything that is not
valid JSON is stored as a plain string.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from confstore.errors import StorageError
from confstore.logging_config import configure_logging
from confstore.storage import FileStorageBackend, Storage

logger = logging.getLogger(__name__)

_NO_OUTPUT = object()


def parse_value(text: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='confstore', description='Read and write namespaced JSON settings')
    p.add_argument('file', help='settings file')
    p.add_argument('--name', default=None, help='namespace inside the file')
    p.add_argument('--lodash-path', action='store_true', help='treat --name as a nested path')
    p.add_argument('--sorted', action='store_true', help='write keys in sorted order')
    p.add_argument('--log-config', type=Path, default=None, help='YAML file with a log_level key')

    sub = p.add_subparsers(dest='command', required=True)
    sub.add_parser('list', help='print the whole namespace')
    sub.add_parser('save', help='rewrite the namespace unchanged')
    for cmd in ('get', 'delete'):
        sp = sub.add_parser(cmd)
        sp.add_argument('key')
    for cmd in ('get-path', 'delete-path'):
        sp = sub.add_parser(cmd)
        sp.add_argument('path')
    sp = sub.add_parser('set')
    sp.add_argument('key')
    sp.add_argument('value')
    sp = sub.add_parser('set-path')
    sp.add_argument('path')
    sp.add_argument('value')
    for cmd in ('defaults', 'merge'):
        sp = sub.add_parser(cmd)
        sp.add_argument('value', help='JSON object')
    return p


def run(args, storage: Storage):
    cmd = args.command
    if cmd == 'list':
        return storage.get_all()
    if cmd == 'save':
        storage.save()
        return _NO_OUTPUT
    if cmd == 'get':
        return storage.get(args.key)
    if cmd == 'get-path':
        return storage.get_path(args.path)
    if cmd == 'delete':
        storage.delete(args.key)
        return _NO_OUTPUT
    if cmd == 'delete-path':
        storage.delete_path(args.path)
        return _NO_OUTPUT
    if cmd == 'set':
        return storage.set(args.key, parse_value(args.value))
    if cmd == 'set-path':
        return storage.set_path(args.path, parse_value(args.value))
    if cmd == 'defaults':
        return storage.defaults(parse_value(args.value))
    if cmd == 'merge':
        return storage.merge(parse_value(args.value))
    raise ValueError(f'Unknown command: {cmd}')


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_config)

    logger.debug('Running %s on %s (name=%s)', args.command, args.file, args.name)
    options = {'lodash_path': args.lodash_path, 'sorted': args.sorted}
    try:
        with Storage(FileStorageBackend(), args.file, args.name, options) as storage:
            result = run(args, storage)
    except (StorageError, ValueError) as e:
        # json.JSONDecodeError is a ValueError too: a corrupt settings file
        # is reported the same way as a bad argument.
        print(f'confstore: {e}', file=sys.stderr)
        return 2

    if result is not _NO_OUTPUT:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0
