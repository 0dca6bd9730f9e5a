import logging
import sys

from reversi.config import CONFIG
from reversi.match import Match


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    games = int(argv[0]) if argv else 1

    logging.basicConfig(level=CONFIG.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    match = Match()
    stats = match.play(games)

    print(f"Light wins: {stats.light_wins}")
    print(f"Dark wins: {stats.dark_wins}")
    print(f"Ties: {stats.ties}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
