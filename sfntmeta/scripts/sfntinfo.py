"""
Show naming metadata of TrueType and OpenType fonts
(c) 2024 Rob Hagemans, licence: https://opensource.org/licenses/MIT
"""

import asyncio
import argparse

import sfntmeta
from sfntmeta.scripting import wrap_main


def format_font(font, show_all=False):
    """Font fields as `key: value` lines."""
    return '\n'.join(
        f'{_key}: {_value}'
        for _key, _value in font.as_dict().items()
        if _value or show_all
    )


async def _load_all(files):
    """Load fonts concurrently, in argument order; failures come back as exceptions."""
    return await asyncio.gather(
        *(sfntmeta.load(_file) for _file in files),
        return_exceptions=True
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='sfntinfo',
        description='Show naming metadata of TrueType and OpenType fonts.'
    )
    parser.add_argument(
        'files', nargs='+', type=str, metavar='FILE',
        help='font files to read (.ttf, .otf)'
    )
    parser.add_argument(
        '--all', '-a', action='store_true', dest='show_all',
        help='also show fields that are empty'
    )
    parser.add_argument(
        '--debug', action='store_true',
        help='show debugging output'
    )
    parser.add_argument(
        '--version', action='version',
        version=f'%(prog)s {sfntmeta.__version__}'
    )
    args = parser.parse_args(argv)

    with wrap_main(args.debug) as status:
        results = asyncio.run(_load_all(args.files))
        shown = 0
        for file, result in zip(args.files, results):
            if isinstance(result, Exception):
                # report and carry on with the other files
                status.fail(file, result)
                continue
            if len(args.files) > 1:
                if shown:
                    print()
                print(f'{file}:')
            print(format_font(result, args.show_all))
            shown += 1


if __name__ == '__main__':
    main()
