"""
The explicit context object every role operation receives.
"""

from dataclasses import dataclass, field

from ..core.config import LMSConfig
from .directory import UserDirectory
from .registry import CourseRegistry


@dataclass
class LMSContext:
    """Process-wide state: the course registry, the user directory and policy flags."""
    registry: CourseRegistry = field(default_factory=CourseRegistry)
    directory: UserDirectory = field(default_factory=UserDirectory)
    config: LMSConfig = field(default_factory=LMSConfig)
