from console_logging.core.logger_factory import LoggerFactory
from console_logging.formatters.console_formatter import ConsoleFormatter
from console_logging.handlers.console_handler import ConsoleHandler
from console_logging.config import load_formatter_options
from console_logging.schemas import Level, LogRecord
import dotenv
import argparse
import datetime
import sys

dotenv.load_dotenv()


def parse_arguments(argv=None):
    """
    Parse command-line arguments for the console formatter demo.

    Returns:
        argparse.Namespace: Parsed command-line arguments
    """
    parser = argparse.ArgumentParser(
        description="Console Logging - print sample records through the console formatter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --multiline
  python main.py --no-colors --channel worker
        """
    )

    parser.add_argument(
        "--multiline",
        action="store_true",
        help="Dump context and extra over several lines"
    )

    parser.add_argument(
        "--no-colors",
        action="store_true",
        help="Disable colors in dumped values and tags"
    )

    parser.add_argument(
        "--channel",
        default="app",
        help="Channel name of the sample records (default: app)"
    )

    parser.add_argument(
        "--via-logging",
        action="store_true",
        help="Send the samples through the standard logging module instead"
    )

    return parser.parse_args(argv)


def sample_records(channel):
    """Build one sample record per severity level."""
    now = datetime.datetime.now()
    context = {
        "user": {"id": 42, "name": "Ada", "roles": ["admin", "ops"]},
        "elapsed": datetime.timedelta(milliseconds=1520),
    }
    return [
        LogRecord(timestamp=now, level=level, channel=channel,
                  message="User {user} did something at level " + level.get_name().lower(),
                  context=context, extra={"request_id": "f3a9"} if level >= Level.WARNING else {})
        for level in Level
    ]


def main(argv=None):
    # Parse command-line arguments
    args = parse_arguments(argv)

    if args.via_logging:
        logger = LoggerFactory().get_logger(args.channel)
        logger.info("Logging through {target}", extra={"context": {"target": "LoggerFactory"}})
        logger.warning("Disk usage at {percent}%", extra={"context": {"percent": 91}, "mount": "/var"})
        try:
            {}["missing"]
        except KeyError:
            logger.exception("Lookup failed")
        LoggerFactory.reset()
        return 0

    handler = ConsoleHandler(sys.stdout, decorated=False if args.no_colors else None)
    options = load_formatter_options()
    options.update(multiline=args.multiline, colors=not args.no_colors and handler.decorated)
    formatter = ConsoleFormatter(options)

    for line in formatter.format_batch(sample_records(args.channel)):
        handler.stream.write(handler.output.format(line))
    handler.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
