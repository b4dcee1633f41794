"""
Data types for the records produced by the dependency update checker
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

RELEASE_CHANNELS = ("current", "release-candidate", "nightly")


@dataclass(frozen=True)
class DependencyOutdated:
    group: str
    name: str
    current_version: str
    available_version: str
    projects: Tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return f"{self.group}:{self.name}"


@dataclass(frozen=True)
class DependencyVersion:
    """A dependency the checker resolved without finding an update"""

    group: str
    name: str
    version: Optional[str]
    reason: Optional[str] = None

    @property
    def id(self) -> str:
        return f"{self.group}:{self.name}"


@dataclass(frozen=True)
class GradleRelease:
    version: str
    is_update_available: bool = False
    is_failure: bool = False
    reason: str = ""


@dataclass
class GradleReleases:
    running: Optional[GradleRelease] = None
    current: Optional[GradleRelease] = None
    release_candidate: Optional[GradleRelease] = None
    nightly: Optional[GradleRelease] = None

    def for_channel(self, channel: str) -> Optional[GradleRelease]:
        """Return the release tracked on the given channel"""
        if channel not in RELEASE_CHANNELS:
            raise ValueError(f"Unknown release channel: {channel}")
        return {
            "current": self.current,
            "release-candidate": self.release_candidate,
            "nightly": self.nightly,
        }[channel]

    def update_for_channel(self, channel: str) -> Optional[GradleRelease]:
        """Return the newer release on the channel, if there is one"""
        release = self.for_channel(channel)
        if release is None or release.is_failure or not release.is_update_available:
            return None
        return release


@dataclass
class Result:
    outdated: List[DependencyOutdated] = field(default_factory=list)
    current: List[DependencyVersion] = field(default_factory=list)
    exceeded: List[DependencyVersion] = field(default_factory=list)
    unresolved: List[DependencyVersion] = field(default_factory=list)
    gradle: Optional[GradleReleases] = None

    @property
    def count(self) -> int:
        return (
            len(self.outdated) + len(self.current) + len(self.exceeded) + len(self.unresolved)
        )
