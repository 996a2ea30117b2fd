"""Entry point for Countdown — run with `python -m countdown` or `countdown`."""
import sys
import traceback

from countdown import __version__
from countdown.config import load_config, parse_args, setup_logging


def main(argv=None):
    args = parse_args(argv, version=__version__)
    try:
        config = load_config(args)
        setup_logging(config)

        from countdown.app import CountdownApp
        app = CountdownApp(config)
        app.run()
    except KeyboardInterrupt:
        return 0
    except Exception:
        # store errors and anything else unrecoverable end the process
        traceback.print_exc()
        return 1
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
