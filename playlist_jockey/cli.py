"""CLI entrypoint and high-level application orchestration."""

import argparse
import logging

import spotipy

from .auth import AuthenticationError, authenticate, create_auth_manager
from .config import LAST_TRACK_PATH, SETTLE_SECONDS, TOKEN_PATH
from .env import load_env_file
from .playback import get_current_track, resume_last_track, settle
from .session import run_session
from .spotify_client import API_ERRORS, close_session, close_sessions, create_spotify_client
from .storage import FileTextStore, StateFileError, TextStore, read_last_uri
from .ui import Prompter, QuestionaryPrompter

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI options for state file locations and pacing."""
    parser = argparse.ArgumentParser(description="Sort the song that is playing on Spotify into your playlists")
    parser.add_argument(
        "--token-file",
        default=str(TOKEN_PATH),
        help=f"Where the OAuth token is stored (default: {TOKEN_PATH}).",
    )
    parser.add_argument(
        "--last-file",
        default=str(LAST_TRACK_PATH),
        help=f"Where the last played track is stored (default: {LAST_TRACK_PATH}).",
    )
    parser.add_argument(
        "--settle-seconds",
        type=float,
        default=SETTLE_SECONDS,
        help="Pause after skipping so Spotify can catch up (default: 1).",
    )
    parser.add_argument(
        "--keep-shuffle",
        action="store_true",
        help="Leave shuffle as it is when resuming the last track.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log diagnostic details.",
    )
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr; only warnings unless verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def start_playback(
    sp: spotipy.Spotify,
    last_store: TextStore,
    prompter: Prompter,
    settle_seconds: float,
    disable_shuffle: bool,
) -> bool:
    """Resume from the last played item, or wait for the user to start something.

    Returns False when the program should stop before entering the session.
    """
    last_uri = read_last_uri(last_store)
    if last_uri is None:
        confirmed = prompter.confirm("No last track found! Play a track yourself to start the program")
        return bool(confirmed)

    try:
        user = sp.current_user()
    except API_ERRORS as exc:
        logger.debug("Profile lookup failed: %s", exc)
        print("Failed to get user profile!")
        return False

    try:
        resume_last_track(sp, last_uri, user["id"], disable_shuffle=disable_shuffle)
    except API_ERRORS as exc:
        print(f"Failed to resume because {exc}")
        return False

    settle(settle_seconds)
    return True


def save_last_track(sp: spotipy.Spotify, last_store: TextStore) -> None:
    """Remember whatever is playing now so the next run can pick it up."""
    try:
        track = get_current_track(sp)
    except API_ERRORS as exc:
        logger.debug("Currently playing lookup failed at exit: %s", exc)
        return
    if track is None:
        return

    try:
        last_store.write(track.uri)
    except StateFileError as exc:
        print(exc)


def run(args: argparse.Namespace, prompter: Prompter) -> None:
    """Authenticate, resume, run the session, and persist the last track."""
    token_store = FileTextStore(args.token_file)
    last_store = FileTextStore(args.last_file)
    settle_seconds = max(0.0, args.settle_seconds)

    auth_manager = create_auth_manager(token_store)
    try:
        authenticate(auth_manager, prompter)
    except (AuthenticationError, StateFileError) as exc:
        print(f"Failed to authenticate, {exc}")
        # No client owns the auth manager yet, so close its session here.
        close_session(auth_manager)
        return

    sp = create_spotify_client(auth_manager)
    try:
        if not start_playback(
            sp,
            last_store,
            prompter,
            settle_seconds=settle_seconds,
            disable_shuffle=not args.keep_shuffle,
        ):
            return

        run_session(sp, last_store, prompter, settle_seconds=settle_seconds)
        save_last_track(sp, last_store)
    finally:
        # Ensure HTTP sessions are closed on normal exit or error.
        close_sessions(sp)


def main() -> None:
    """Run the full app lifecycle: setup, session loop, and shutdown."""
    load_env_file()
    args = parse_args()
    configure_logging(args.verbose)

    try:
        run(args, QuestionaryPrompter())
    except StateFileError as exc:
        print(exc)
    except KeyboardInterrupt:
        print()
