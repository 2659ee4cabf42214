"""Error expectation configuration."""
import re
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Error expectation settings."""

    # Format artifacts
    # Positional tag left behind by printf-style templates that were never interpolated.
    LEGACY_FORMAT_TAG: str = "%s"
    # Named variable tag, e.g. "%path%". Must stay in sync with the template renderer.
    VARIABLE_TAG_PATTERN: str = r"%[a-zA-Z][a-zA-Z0-9]*%"

    class Config:
        env_file = ".env"
        env_prefix = "ERROR_EXPECTATIONS_"
        case_sensitive = True

    @property
    def variable_tag_regex(self) -> re.Pattern[str]:
        """Get variable tag pattern compiled."""
        return re.compile(self.VARIABLE_TAG_PATTERN)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

