"""Signed session ids and the in-memory table registry."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config
from twentyone.game import TwentyOneGame

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds, or None to skip the age check

        Returns:
            The session ID if valid, None otherwise
        """
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class GameRegistry:
    """
    Games keyed by session ID, held in process memory.

    Entries expire ``ttl`` seconds after their last access.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._games: dict[str, tuple[TwentyOneGame, datetime]] = {}

    def add(self, session_id: str, game: TwentyOneGame) -> None:
        """Store a game, dropping any games that have expired."""
        self.cleanup_expired()
        self._games[session_id] = (game, self._expiry())

    def get(self, session_id: str) -> TwentyOneGame | None:
        """Get a game and refresh its expiry."""
        entry = self._games.get(session_id)
        if entry is None:
            return None

        game, expiry = entry
        if expiry < datetime.now():
            self.remove(session_id)
            return None

        self._games[session_id] = (game, self._expiry())
        return game

    def remove(self, session_id: str) -> None:
        self._games.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Remove expired games."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._games.items() if expiry < now]
        for sid in expired:
            del self._games[sid]
        if expired:
            logger.info("Dropped %d expired games", len(expired))
        return len(expired)

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)

    def __len__(self) -> int:
        return len(self._games)


# Global registry instance
_game_registry: GameRegistry | None = None


def get_game_registry() -> GameRegistry:
    """Get or create the game registry."""
    global _game_registry
    if _game_registry is None:
        _game_registry = GameRegistry()
    return _game_registry


def create_session_id() -> str:
    """Create a new signed session token."""
    return get_session_signer().sign(str(uuid4()))


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Only the signature is checked; how long a game lives is up to the
    GameRegistry TTL, which is refreshed on every access.

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)
