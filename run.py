import sys

from scrobbler.config import Settings, configure_logging
from scrobbler.main import run as _run


def run():
    """Entry point for the scrobble-submit command."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    sys.exit(_run(settings))


if __name__ == "__main__":
    run()
