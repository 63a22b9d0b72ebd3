"""Configuration for the marketplace core."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class MarketplaceConfig:
    """Tunable limits for marketplace operations.

    Attributes:
        max_title_length: Longest accepted job title.
        max_skills: Most skills a job or profile may list.
        default_page_size: Rows returned by list operations when no limit is given.
        max_page_size: Upper bound applied to caller-supplied limits.
    """

    max_title_length: int = 200
    max_skills: int = 50
    default_page_size: int = 50
    max_page_size: int = 200

    def __post_init__(self):
        if self.max_title_length < 1:
            raise ValueError("max_title_length must be at least 1")
        if self.default_page_size < 1 or self.max_page_size < 1:
            raise ValueError("Page sizes must be at least 1")
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")

    def clamp_limit(self, limit: Optional[int]) -> int:
        """Apply the default and maximum page size to a requested limit."""
        if limit is None or limit < 1:
            return self.default_page_size
        return min(limit, self.max_page_size)

    @classmethod
    def from_env(cls) -> "MarketplaceConfig":
        """Build a config from GIGBOARD_* environment variables."""
        defaults = cls()
        return cls(
            max_title_length=int(
                os.environ.get("GIGBOARD_MAX_TITLE_LENGTH", defaults.max_title_length)
            ),
            max_skills=int(os.environ.get("GIGBOARD_MAX_SKILLS", defaults.max_skills)),
            default_page_size=int(
                os.environ.get("GIGBOARD_DEFAULT_PAGE_SIZE", defaults.default_page_size)
            ),
            max_page_size=int(os.environ.get("GIGBOARD_MAX_PAGE_SIZE", defaults.max_page_size)),
        )


DEFAULT_CONFIG = MarketplaceConfig()
