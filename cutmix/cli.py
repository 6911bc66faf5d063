"""
Command line front end for CutMix.

    cutmix split talk.mp3 -o parts/ --threshold-db -35 --min-silence 0.8
    cutmix assemble a.wav b.wav c.wav -o out/ --move 1=4.5
"""
import argparse
import logging
import os
import sys

from cutmix.core.config import AUDIO_CONFIG, SPLIT_CONFIG
from cutmix.core.errors import CutMixError
from cutmix.core.loader import AudioLoader
from cutmix.core.pipeline import split_many
from cutmix.core.project import Project
from cutmix.core.types import NamedBlob, SplitOptions
from cutmix.utils.logger import logger

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOTHING_TO_DO = 2


def _write(out_dir, blob: NamedBlob):
    name, data = blob
    path = os.path.join(out_dir, name)
    with open(path, 'wb') as fh:
        fh.write(data)
    logger.info(f"Wrote {path} ({len(data)} bytes)")
    return path


def _parse_move(text):
    index, sep, seconds = text.partition('=')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected INDEX=SECONDS, got {text!r}")
    try:
        return int(index), float(seconds)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected INDEX=SECONDS, got {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(prog="cutmix", description="Split audio at silences or assemble clips into one mix.")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    sub = parser.add_subparsers(dest='command', required=True)

    split = sub.add_parser('split', help="Split recordings into parts at silences")
    split.add_argument('inputs', nargs='+', help="Audio files to split")
    split.add_argument('-o', '--output-dir', default='.')
    split.add_argument('--threshold-db', type=float, default=SPLIT_CONFIG.default_threshold_db,
                       help="Silence threshold in dBFS (-60..0)")
    split.add_argument('--min-silence', type=float, default=SPLIT_CONFIG.default_min_silence_seconds,
                       help="Shortest silence that splits, in seconds (0.1..5.0)")

    assemble = sub.add_parser('assemble', help="Place clips back to back and mix them down")
    assemble.add_argument('inputs', nargs='+', help="Audio files, placed in file-name order")
    assemble.add_argument('-o', '--output-dir', default='.')
    assemble.add_argument('--move', type=_parse_move, action='append', default=[], metavar='INDEX=SECONDS',
                          help="Move the INDEX-th clip (0-based, after ordering) to SECONDS; repeatable")
    assemble.add_argument('--sample-rate', type=int, default=AUDIO_CONFIG.default_samplerate)
    return parser


def run_split(args):
    options = SplitOptions(args.threshold_db, args.min_silence).validate()
    results = split_many(args.inputs, options, AudioLoader())

    written = 0
    for result in results:
        if result.is_empty:
            logger.warning(f"{result.source_name}: no parts found")
            continue
        for part in result.parts:
            _write(args.output_dir, part)
            written += 1
    return EXIT_OK if written else EXIT_NOTHING_TO_DO


def run_assemble(args):
    project = Project(samplerate=args.sample_rate)
    project.load_files(args.inputs)

    for index, seconds in args.move:
        clips = project.clips
        if not 0 <= index < len(clips):
            raise CutMixError(f"--move index {index} out of range (0..{len(clips) - 1})")
        project.move_clip(clips[index].id, seconds)

    _write(args.output_dir, project.export())
    return EXIT_OK


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    try:
        os.makedirs(args.output_dir, exist_ok=True)
        if args.command == 'split':
            return run_split(args)
        return run_assemble(args)
    except (CutMixError, OSError) as e:
        logger.error(str(e))
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
