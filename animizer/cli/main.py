"""CLI main entry point."""

import argparse
import logging
import os
import sys
from animizer.io.codec import decode, encode, image_table
from animizer.io.errors import AnimSetError
from animizer.model.timing import total_duration
from animizer.utils.config import CodecConfig, PathProfile, load_config


def get_config(path: str = None) -> CodecConfig:
    """Load config from file, or defaults when no file is given."""
    if path is None:
        return CodecConfig()
    return load_config(path)


def show_info(args):
    """Print animations and images of an .animset file."""
    config = get_config(args.config)
    directory, filename = os.path.split(os.path.abspath(args.file))
    animations = decode(directory, filename, config)

    print(f"{args.file}: {len(animations)} animations")
    print(f"{'Animation':<24} {'Frames':<8} {'Duration':<10}")
    print("-" * 44)
    for name, anim in animations.items():
        try:
            duration = f"{total_duration(anim):<10.3f}"
        except ValueError:
            duration = "invalid"
        print(f"{name:<24} {len(anim.frames):<8} {duration}")

    images = image_table(animations)
    print()
    print(f"Images ({len(images)}):")
    for index, image in enumerate(images):
        missing = ""
        if config.profile is PathProfile.OUTPUT_DIR and not os.path.exists(image):
            missing = "  [missing]"
        print(f"  {index:<4} {image}{missing}")


def rebase(args):
    """Re-encode an .animset file into another directory."""
    config = get_config(args.config)
    directory, filename = os.path.split(os.path.abspath(args.file))
    animations = decode(directory, filename, config)

    name = args.name if args.name is not None else filename
    path = encode(animations, args.output_dir, name, config)
    print(f"Wrote {len(animations)} animations to {path}")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Animizer - inspect and relocate .animset files")
    parser.add_argument('--config', type=str, default=None,
                       help='Codec config file (.json or .yaml)')
    parser.add_argument('-v', '--verbose', action='store_true',
                       help='Log codec activity')

    subparsers = parser.add_subparsers(dest='command', required=True)

    info_parser = subparsers.add_parser('info', help='List animations and images')
    info_parser.add_argument('file', type=str, help='.animset file')
    info_parser.set_defaults(func=show_info)

    rebase_parser = subparsers.add_parser(
        'rebase', help='Write a copy whose image paths are relative to another directory')
    rebase_parser.add_argument('file', type=str, help='.animset file')
    rebase_parser.add_argument('output_dir', type=str, help='Directory for the new file')
    rebase_parser.add_argument('--name', type=str, default=None,
                              help='Output file name (default: same as input)')
    rebase_parser.set_defaults(func=rebase)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        args.func(args)
    except (AnimSetError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
