"""
Fork-mode worker process.

Example:
  PROPTEST_REPLAY_FILE=/tmp/replay python -m proptest_engine.runner.worker pkg.props:my_property
"""

import argparse
import os
import sys

from ..logging_config import setup_logging
from ..replay import file as replay_file
from .config import Config
from .entry import load_entry
from .fork import REPLAY_FILE_ENV
from .runner import Runner


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run a property test as a fork-mode worker.")
    parser.add_argument("entry", help="module:attribute naming a PropertyTest")
    args = parser.parse_args(argv)

    path = os.environ.get(REPLAY_FILE_ENV)
    if not path:
        parser.error(f"{REPLAY_FILE_ENV} is not set")

    setup_logging()
    prop = load_entry(args.entry)
    config = Config.from_env()

    with replay_file.open_file(path) as f:
        status = replay_file.parse(f)
        if not status.is_in_progress:
            print(f"replay file is not in progress: {status.state.value}", file=sys.stderr)
            return 2

        runner = Runner.from_replay(status.replay, config, persist=f)
        runner.run(prop.strategy, prop.test)
        replay_file.terminate(f)

    return 0


if __name__ == "__main__":
    sys.exit(main())
