"""
Configuration data models for findpath.

This module defines the configuration consumed by the Finder facade: default
options for each search direction and the size of the path resolution cache.
"""

from typing import Dict, List, Any
from pydantic import BaseModel, ConfigDict, Field

from .options import FindUpOptions, FindDownOptions, Strategy


class FinderConfig(BaseModel):
    """
    Main configuration class for findpath.

    Attributes:
        up: Default options for upward searches
        down: Default options for downward searches
        cache_size: Maximum number of cached path resolutions (0 disables caching)
    """

    model_config = ConfigDict(extra='forbid')

    up: FindUpOptions = Field(default_factory=FindUpOptions, description="Upward search defaults")
    down: FindDownOptions = Field(default_factory=FindDownOptions, description="Downward search defaults")
    cache_size: int = Field(1000, ge=0, description="Maximum number of cached path resolutions")

    def up_options(self, **overrides: Any) -> FindUpOptions:
        """Merge per-call overrides into the upward defaults and validate them."""
        return FindUpOptions.model_validate({**self.up.model_dump(), **overrides})

    def down_options(self, **overrides: Any) -> FindDownOptions:
        """Merge per-call overrides into the downward defaults and validate them."""
        return FindDownOptions.model_validate({**self.down.model_dump(), **overrides})

    def validate_configuration(self) -> List[str]:
        """
        Check the configuration for settings that are valid but questionable.

        Returns:
            List of warning messages
        """
        warnings = []

        if self.down.strategy == Strategy.DEPTH and self.down.depth > 10:
            warnings.append(
                f"Depth-first downward searches with depth {self.down.depth} may visit very large trees"
            )

        if self.cache_size == 0:
            warnings.append("Path resolution cache is disabled")

        if self.up.limit == 0:
            warnings.append("Upward search limit of 0 makes every upward search return no matches")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'up': self.up.to_dict(),
            'down': self.down.to_dict(),
            'cache_size': self.cache_size,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create a FinderConfig instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        return (
            f"FinderConfig(up={self.up.to_dict()}, down={self.down.to_dict()}, "
            f"cache_size={self.cache_size})"
        )
