import argparse
import logging
import signal
import sys

from config.settings import UINT64_MAX, get_settings
from db.repos.users_repo import UsersRepo
from db.schema import ensure_schema
from pipelines.download_users import UserDownloader
from services.errors import CeilingBelowStart, SchemaError, StorageError
from services.graph_client import GraphClient
from utils.logging_setup import init_logging


logger = logging.getLogger("fbgdl")


def uint64(value: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise argparse.ArgumentTypeError(f"not an unsigned 64-bit integer: {value!r}")
    n = int(value, 10)
    if n > UINT64_MAX:
        raise argparse.ArgumentTypeError(f"out of range for uint64: {value!r}")
    return n


def _install_stop_handlers(downloader):
    """Route SIGINT/SIGTERM to downloader.stop(); returns the previous handlers."""
    def _handler(signum, frame):
        logger.warning("received signal %d, stopping", signum)
        downloader.stop()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            previous[sig] = signal.signal(sig, _handler)
        except ValueError:
            # Not on the main thread (e.g. embedded use)
            pass
    return previous


def cmd_download(args):
    settings = get_settings()
    try:
        ensure_schema(args.db)
    except SchemaError as e:
        logger.critical("[!] fbgdl: %s", e)
        sys.exit(1)

    repo = UsersRepo(args.db)
    client = GraphClient(settings)
    downloader = UserDownloader(client, repo, settings=settings, resume=not args.no_resume)
    try:
        state = downloader.prepare(args.max_uid)
    except (CeilingBelowStart, StorageError) as e:
        logger.critical("[!] fbgdl: %s", e)
        client.close()
        sys.exit(1)

    previous = _install_stop_handlers(downloader)
    try:
        state = downloader.run(state=state)
    finally:
        client.close()
        for sig, handler in previous.items():
            if handler is not None:
                signal.signal(sig, handler)
    print(f"Stored {state.total} users (failed {state.failed})")


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Graph user downloader")
    parser.add_argument("-u", dest="max_uid", type=uint64, default=UINT64_MAX, help="max uid to grab (exclusive)")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    parser.add_argument("--no-resume", action="store_true", default=not settings.resume, help="Start from uid 0 instead of after the highest stored uid")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.set_defaults(func=cmd_download)

    args = parser.parse_args()
    init_logging(args.log_level or settings.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
