"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field

from twentyone.rules import RuleSet


def _env_bool(name: str, default: bool) -> bool:
    """Read a true/false environment variable."""
    return os.getenv(name, str(default)).lower() == "true"


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_bool("RATE_LIMIT_ENABLED", True))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class TableConfig:
    """Default house rules for new games."""

    number_of_players: int = field(
        default_factory=lambda: int(os.getenv("TWENTYONE_PLAYERS", "3"))
    )
    number_of_decks: int = field(
        default_factory=lambda: int(os.getenv("TWENTYONE_DECKS", "3"))
    )
    split_limit: int = field(
        default_factory=lambda: int(os.getenv("TWENTYONE_SPLIT_LIMIT", "4"))
    )
    h17: bool = field(default_factory=lambda: _env_bool("TWENTYONE_H17", True))
    dealer_wins_tie: bool = field(
        default_factory=lambda: _env_bool("TWENTYONE_DEALER_WINS_TIE", True)
    )
    can_hit_split_aces: bool = field(
        default_factory=lambda: _env_bool("TWENTYONE_HIT_SPLIT_ACES", False)
    )
    post_split_blackjack: bool = field(
        default_factory=lambda: _env_bool("TWENTYONE_POST_SPLIT_BLACKJACK", False)
    )
    deal_hole_card_after: bool = field(
        default_factory=lambda: _env_bool("TWENTYONE_HOLE_CARD_AFTER", False)
    )
    rank_based_split: bool = field(
        default_factory=lambda: _env_bool("TWENTYONE_RANK_BASED_SPLIT", False)
    )
    max_rounds: int = field(
        default_factory=lambda: int(os.getenv("TWENTYONE_MAX_ROUNDS", "5"))
    )

    def to_rules(self) -> RuleSet:
        """Build the RuleSet these defaults describe."""
        return RuleSet(
            number_of_players=self.number_of_players,
            number_of_decks=self.number_of_decks,
            split_limit=self.split_limit,
            h17=self.h17,
            dealer_wins_tie=self.dealer_wins_tie,
            can_hit_split_aces=self.can_hit_split_aces,
            post_split_blackjack=self.post_split_blackjack,
            deal_hole_card_after=self.deal_hole_card_after,
            rank_based_split=self.rank_based_split,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", False))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    session_ttl: int = 3600  # Session timeout in seconds

    table: TableConfig = field(default_factory=TableConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()
