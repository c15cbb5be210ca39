"""Top-level package for trainlaunch."""

__all__ = [
    "configs",
    "errors",
    "launcher",
    "platforms",
]
