import argparse
import collections
import logging
import pathlib
import sys

import trio

from .db import make_db
from .results.storage import open_result_storage
from .results.types import PrivateRequest, Result
from .settings import Settings
from .textinput.histogram import Histogram
from .textinput.keystreams import make_typing_stream
from .textinput.recording import load_trace, replay
from .textinput.textinput import TextInput

logger = logging.getLogger(__name__)


def _no_remote(request):
    raise NotImplementedError("Remote result sync is not available from the command line.")


def open_local_storage(settings: Settings):
    return open_result_storage(PrivateRequest(), local=make_db(settings.db_path), remote_for=_no_remote)


def print_histogram(histogram: Histogram):
    print(f"{'char':>6} {'hits':>6} {'misses':>6} {'time':>6}")
    for sample in histogram:
        print(f"{sample.character!r:>6} {sample.hit_count:>6} {sample.miss_count:>6} {sample.time_to_type:>6}")
    print(f"{histogram.complexity} distinct characters")


async def replay_trace(settings: Settings, text: str, trace_path: pathlib.Path, save: bool):
    text_input = TextInput(text, settings.text_input)
    feedback_counts = collections.Counter()
    async with make_typing_stream(replay(load_trace(trace_path)), text_input) as outcomes:
        async for outcome in outcomes:
            feedback_counts[outcome.feedback] += 1

    for feedback, count in sorted(feedback_counts.items(), key=lambda item: item[0].value):
        print(f"{feedback.name.lower()}: {count}")
    print(f"typed {text_input.position} of {len(text_input.code_points)} characters")
    print_histogram(Histogram.from_steps(text_input.steps))

    if not save:
        return
    if not text_input.completed:
        logger.warning("Not saving an incomplete result.")
        return
    storage = open_local_storage(settings)
    await storage.append([Result.from_text_input(text_input)])
    logger.info("Saved result to %s", settings.db_path)


async def show_stats(settings: Settings):
    storage = open_local_storage(settings)
    results = await storage.load()
    print(f"{len(results)} results")
    print_histogram(Histogram.merge(result.histogram() for result in results))


def _configure_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


replay_parser = argparse.ArgumentParser(prog="typist-replay")
replay_parser.add_argument("settings", type=pathlib.Path)
replay_parser.add_argument("text", type=pathlib.Path, help="file holding the text which was being typed")
replay_parser.add_argument("trace", type=pathlib.Path, help="recorded keystrokes, as JSON")
replay_parser.add_argument("--save", action="store_true", help="save the result if the text was completed")
replay_parser.add_argument("--verbose", "-v", action="store_true")


def replay_cli(argv=sys.argv):
    args = replay_parser.parse_args(argv[1:])
    _configure_logging(args.verbose)
    settings = Settings.load(args.settings)
    text = args.text.read_text(encoding="utf-8").rstrip("\n")
    trio.run(replay_trace, settings, text, args.trace, args.save)
    return 0


stats_parser = argparse.ArgumentParser(prog="typist-stats")
stats_parser.add_argument("settings", type=pathlib.Path)
stats_parser.add_argument("--verbose", "-v", action="store_true")


def stats_cli(argv=sys.argv):
    args = stats_parser.parse_args(argv[1:])
    _configure_logging(args.verbose)
    trio.run(show_stats, Settings.load(args.settings))
    return 0
