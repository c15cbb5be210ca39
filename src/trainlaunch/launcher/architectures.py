"""Depth policy for each network architecture understood by the trainer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

__all__ = [
    "ARCHITECTURE_PROFILES",
    "ArchitectureProfile",
    "describe_depth_choice",
    "resolve_depth",
]


@dataclass(frozen=True)
class ArchitectureProfile:
    """``fixed_depth`` of ``None`` means the user chooses the depth."""

    name: str
    fixed_depth: Optional[int] = None
    supported_depths: Tuple[int, ...] = ()

    def effective_depth(self, depth: int) -> int:
        if self.fixed_depth is not None:
            return self.fixed_depth
        return depth


ARCHITECTURE_PROFILES: Mapping[str, ArchitectureProfile] = {
    "alexnet": ArchitectureProfile("alexnet", fixed_depth=8, supported_depths=(8,)),
    "nin": ArchitectureProfile("nin", fixed_depth=16, supported_depths=(16,)),
    "vgg": ArchitectureProfile("vgg", fixed_depth=22, supported_depths=(22,)),
    "googlenet": ArchitectureProfile("googlenet", fixed_depth=32, supported_depths=(32,)),
    "resnet": ArchitectureProfile("resnet", supported_depths=(18, 34, 50, 101, 152)),
    "densenet": ArchitectureProfile("densenet", supported_depths=(121, 161, 169, 201)),
}


def resolve_depth(architecture: str, depth: int) -> int:
    """Return the depth the trainer should build for ``architecture``.

    Single-depth architectures ignore ``depth``; everything else, including
    names missing from :data:`ARCHITECTURE_PROFILES`, passes it through.
    """

    profile = ARCHITECTURE_PROFILES.get(architecture)
    if profile is None:
        return depth
    return profile.effective_depth(depth)


def describe_depth_choice(architecture: str, depth: int) -> Optional[str]:
    """Return a hint when ``depth`` is not one the architecture is known to support."""

    profile = ARCHITECTURE_PROFILES.get(architecture)
    if profile is None or profile.fixed_depth is not None:
        return None
    if depth in profile.supported_depths:
        return None
    options = ", ".join(str(value) for value in profile.supported_depths)
    return (
        f"Depth {depth} is not a standard depth for {architecture} (expected one of "
        f"{options}); the trainer may reject it."
    )
