"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FRESHMARK_ prefix (e.g., FRESHMARK_OPEN_MARKER='<!--#').

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.delimiters import DelimiterPair


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FRESHMARK_ prefix.

    Examples:
        FRESHMARK_OPEN_MARKER='<!--#'
        FRESHMARK_CLOSE_MARKER='#-->'
        FRESHMARK_MAX_WORKERS=4
    """

    model_config = SettingsConfigDict(
        env_prefix="FRESHMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Grammar configuration
    open_marker: str = Field(
        default="<!---freshmark",
        description="Literal marker that opens a section comment (the intron)",
    )

    close_marker: str = Field(
        default="-->",
        description="Literal marker that closes a section comment (the exon)",
    )

    # Compilation configuration
    unknown_suffix: str = Field(
        default="=UNKNOWN",
        description="Appended to a placeholder key that has no property value",
    )

    canonical_tags: bool = Field(
        default=False,
        description="Rewrite section tags to their canonical form instead of re-emitting them verbatim",
    )

    max_workers: int = Field(
        default=1,
        ge=1,
        description="Number of sections evaluated concurrently",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: treat unknown-key warnings as errors",
    )

    @field_validator("open_marker", "close_marker")
    @classmethod
    def marker_validate(cls, value: str) -> str:
        if not value:
            raise ValueError("markers must be non-empty")
        return value

    def delimiters_make(self) -> DelimiterPair:
        """
        Build the configured delimiter pair.

        Example:
            >>> AppSettings().delimiters_make()
            DelimiterPair(open_marker='<!---freshmark', close_marker='-->')
        """
        return DelimiterPair(self.open_marker, self.close_marker)

    def sentinel_make(self, key: str) -> str:
        """
        Generate the deterministic stand-in for an unknown placeholder key.

        Example:
            >>> AppSettings().sentinel_make('version')
            'version=UNKNOWN'
        """
        return f"{key}{self.unknown_suffix}"


# Singleton instance - import this in your code
appsettings = AppSettings()
