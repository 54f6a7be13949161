"""
Search option models for findpath.

This module defines the validated option sets accepted by the upward and
downward walkers, together with the enumerations for entry types and
downward traversal strategies.
"""

import os
import math
from typing import Dict, Optional, Any, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntryType(Enum):
    """Kinds of filesystem entries a candidate may be matched as."""
    FILE = "file"
    DIRECTORY = "directory"
    BOTH = "both"


class Strategy(Enum):
    """Traversal orders for downward searches."""
    BREADTH = "breadth"
    DEPTH = "depth"


def _coerce_path(v) -> Optional[str]:
    """Accept str or os.PathLike values and return a plain string."""
    if v is None:
        return None
    try:
        return os.fspath(v)
    except TypeError:
        raise ValueError(f"Expected a path, got {type(v).__name__}")


def _coerce_entry_type(v) -> EntryType:
    if isinstance(v, str):
        try:
            return EntryType(v)
        except ValueError:
            raise ValueError(f"Invalid type specified: {v}")
    return v


class FindUpOptions(BaseModel):
    """
    Options for an upward search.

    Attributes:
        cwd: Directory the search starts from (process cwd when None)
        stop_at: Directory at which the search halts after checking it
            (filesystem root when None). Relative values are resolved
            against the start directory.
        limit: Maximum number of matches to collect (unbounded when None)
        type: Kind of entry a candidate must be
        allow_symlinks: Whether symlinked candidates are followed
    """

    model_config = ConfigDict(extra='forbid')

    cwd: Optional[str] = Field(None, description="Starting directory")
    stop_at: Optional[str] = Field(None, description="Directory at which the upward search halts")
    limit: Optional[int] = Field(None, ge=0, description="Maximum number of matches")
    type: EntryType = Field(EntryType.FILE, description="Kind of entry to match")
    allow_symlinks: bool = Field(True, description="Whether symlinked candidates are followed")

    @field_validator('cwd', 'stop_at', mode='before')
    @classmethod
    def validate_paths(cls, v) -> Optional[str]:
        """Normalize path-like values to strings."""
        return _coerce_path(v)

    @field_validator('type', mode='before')
    @classmethod
    def validate_type(cls, v) -> EntryType:
        """Validate and convert type to enum."""
        return _coerce_entry_type(v)

    def is_unbounded(self) -> bool:
        """Check if the search collects every match up to the stop boundary."""
        return self.limit is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['type'] = self.type.value
        return data


class FindDownOptions(BaseModel):
    """
    Options for a downward search.

    Attributes:
        cwd: Directory the search starts from (process cwd when None)
        depth: Maximum number of subdirectory levels to descend; negative
            values are clamped to 0, which checks only the start directory,
            and math.inf searches the whole subtree
        type: Kind of entry a candidate must be
        allow_symlinks: Whether symlinked candidates are followed
        strategy: Breadth-first or depth-first traversal order
    """

    model_config = ConfigDict(extra='forbid')

    cwd: Optional[str] = Field(None, description="Starting directory")
    depth: Union[int, float] = Field(1, description="Maximum subdirectory descent levels")
    type: EntryType = Field(EntryType.FILE, description="Kind of entry to match")
    allow_symlinks: bool = Field(True, description="Whether symlinked candidates are followed")
    strategy: Strategy = Field(Strategy.BREADTH, description="Traversal order")

    @field_validator('cwd', mode='before')
    @classmethod
    def validate_cwd(cls, v) -> Optional[str]:
        """Normalize path-like values to strings."""
        return _coerce_path(v)

    @field_validator('depth', mode='before')
    @classmethod
    def validate_depth(cls, v) -> int:
        """Fall back to the default depth when None is given."""
        if v is None:
            return 1
        return v

    @field_validator('depth')
    @classmethod
    def clamp_depth(cls, v: Union[int, float]) -> Union[int, float]:
        """Clamp negative depths to zero; only whole numbers or infinity are valid."""
        if isinstance(v, float):
            if math.isnan(v):
                raise ValueError("Depth cannot be NaN")
            if not math.isinf(v):
                if not v.is_integer():
                    raise ValueError(f"Depth must be a whole number or infinity, got {v}")
                v = int(v)
        return max(0, v)

    @field_validator('type', mode='before')
    @classmethod
    def validate_type(cls, v) -> EntryType:
        """Validate and convert type to enum."""
        return _coerce_entry_type(v)

    @field_validator('strategy', mode='before')
    @classmethod
    def validate_strategy(cls, v) -> Strategy:
        """Validate and convert strategy to enum."""
        if isinstance(v, str):
            try:
                return Strategy(v)
            except ValueError:
                raise ValueError(f"Invalid strategy: {v}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['type'] = self.type.value
        data['strategy'] = self.strategy.value
        return data
