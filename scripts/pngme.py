#!/usr/bin/env python3
'''
Hide messages into PNG files using custom chunks.

 $ pngme.py encode image.png ruSt 'this is a secret'
 $ pngme.py decode image.png ruSt
 $ pngme.py remove image.png ruSt
 $ pngme.py print -v image.png
'''
import logging
import os
import sys
from argparse import ArgumentParser
from pathlib import Path

from pngstruct.exceptions import PNGStructException
from pngstruct.images.png import PNGFile
from pngstruct.images.png.utils import (
    encode_message,
    decode_message,
    remove_message,
    list_chunks,
    describe_chunk,
    repair,
)


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.setLevel(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)


def main_encode(args):
    output = args.output or args.file
    output.write_bytes(encode_message(args.file.read_bytes(), args.chunk_type, args.message))
    print('Secret successfully encoded!')


def main_decode(args):
    text = decode_message(args.file.read_bytes(), args.chunk_type)
    if text is not None:
        print(text)


def main_remove(args):
    args.file.write_bytes(remove_message(args.file.read_bytes(), args.chunk_type))
    print(f'Removed chunk: {args.chunk_type}')


def main_print(args):
    data = args.file.read_bytes()

    if not args.verbose:
        for line in list_chunks(data):
            print(line)
        return

    png = PNGFile(data)
    for idx, chunk in enumerate(png.get_chunks()):
        print(f'[{idx:02d}] 0x{chunk.offset:08x} {describe_chunk(chunk)}')


def main_repair(args):
    output = args.output or args.file
    output.write_bytes(repair(args.file.read_bytes()))


def build_parser():
    parser = ArgumentParser(description='A CLI application to embed messages into a PNG file')
    subparsers = parser.add_subparsers(dest='command', required=True)

    encode = subparsers.add_parser('encode', help='embed a message into a PNG file')
    encode.add_argument('file', type=Path)
    encode.add_argument('chunk_type')
    encode.add_argument('message')
    encode.add_argument('output', type=Path, nargs='?', help='if not provided the original file is overwritten')
    encode.set_defaults(func=main_encode)

    decode = subparsers.add_parser('decode', help='extract a message from a PNG file')
    decode.add_argument('file', type=Path)
    decode.add_argument('chunk_type')
    decode.set_defaults(func=main_decode)

    remove = subparsers.add_parser('remove', help='remove a message from a PNG file')
    remove.add_argument('file', type=Path)
    remove.add_argument('chunk_type')
    remove.set_defaults(func=main_remove)

    show = subparsers.add_parser('print', help='print the chunks of a PNG file')
    show.add_argument('-v', '--verbose', action='store_true', help='show offsets and flags of each chunk')
    show.add_argument('file', type=Path)
    show.set_defaults(func=main_print)

    fix = subparsers.add_parser('repair', help='fix the signature and the CRCs of a PNG file')
    fix.add_argument('file', type=Path)
    fix.add_argument('output', type=Path, nargs='?', help='if not provided the original file is overwritten')
    fix.set_defaults(func=main_repair)

    return parser


if __name__ == '__main__':
    args = build_parser().parse_args()

    try:
        args.func(args)
    except PNGStructException as e:
        logger.error(e)
        sys.exit(1)
