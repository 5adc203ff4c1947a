"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use BUILDJS_ prefix (e.g., BUILDJS_OPEN_MARKER="/*macro").

Settings can also be loaded from a .env file in the project root.
"""

import re

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use BUILDJS_ prefix.

    Examples:
        BUILDJS_OPEN_MARKER="<!--buildjs"
        BUILDJS_CLOSE_MARKER="-->"
        BUILDJS_ENCODING=latin-1
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDJS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Block delimiters
    open_marker: str = Field(
        default="/*buildjs",
        description="Literal text that opens a directive block",
    )

    close_marker: str = Field(
        default="*/",
        description="Literal text that closes a directive block",
    )

    # File handling
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to read source files and write the output file",
    )

    detect_include_cycles: bool = Field(
        default=True,
        description="Fail with an include-cycle error when a file includes itself (directly or not)",
    )

    def blockPattern_make(self) -> "re.Pattern[str]":
        """
        Compile the regular expression that locates one directive block.

        The match is non-greedy so consecutive blocks never merge, and
        spans newlines.

        Returns:
            Compiled pattern; group "body" holds the text between markers

        Example:
            >>> settings = AppSettings()
            >>> settings.blockPattern_make().search("x /*buildjs @inc a */").group("body")
            ' @inc a '
        """
        return re.compile(
            re.escape(self.open_marker) + r"(?P<body>[\s\S]*?)" + re.escape(self.close_marker)
        )


# Singleton instance - import this in your code
appsettings = AppSettings()
