"""Launch parameters and the checks applied before anything is touched on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping

from trainlaunch.errors import ConfigurationError
from trainlaunch.platforms import Platform

__all__ = [
    "TrainingConfig",
    "config_from_mapping",
    "extract_train_section",
    "validate_config",
]


def _cwd_path(name: str) -> str:
    return os.path.join(os.getcwd(), name)


@dataclass(frozen=True)
class TrainingConfig:
    """Every parameter needed to launch one training run.

    Path defaults are resolved against the working directory at the time the
    config is created, so a launcher started from a folder holding ``images/``
    and ``image_labels.csv`` needs no path arguments at all.
    """

    path_prefix: str = field(default_factory=lambda: _cwd_path("images"))
    data_info: str = field(default_factory=lambda: _cwd_path("image_labels.csv"))
    model_dir: str = field(default_factory=lambda: _cwd_path("trainlaunch_helper_files"))
    python_loc: str = "/anaconda2/bin/"
    os: str = "Mac"
    num_gpus: int = 2
    num_classes: int = 59
    delimiter: str = ","
    architecture: str = "resnet"
    depth: int = 18
    batch_size: int = 128
    log_dir_train: str = "train_output"
    retrain: bool = True
    retrain_from: str = "species_model"
    num_epochs: int = 55
    top_n: int = 5
    num_cores: int = 1
    randomize: bool = True
    max_to_keep: int = 5
    print_cmd: bool = False

    @property
    def platform(self) -> Platform:
        return Platform.from_identifier(self.os)


_INT_FIELDS = frozenset(
    {
        "num_gpus",
        "num_classes",
        "depth",
        "batch_size",
        "num_epochs",
        "top_n",
        "num_cores",
        "max_to_keep",
    }
)
_BOOL_FIELDS = frozenset({"retrain", "randomize", "print_cmd"})
_TRUE_STRINGS = {"true", "t", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "f", "no", "n", "0"}


def validate_config(config: TrainingConfig) -> None:
    """Raise :class:`ConfigurationError` when ``config`` cannot be launched.

    Has no side effects and must run before the label file is staged.
    """

    if config.top_n > config.num_classes:
        raise ConfigurationError(
            f"You specified a top_n ({config.top_n}) that is greater than "
            f"num_classes ({config.num_classes}). Make sure that top_n <= num_classes."
        )
    # An empty name would point the output check at model_dir itself.
    if not config.log_dir_train.strip():
        raise ConfigurationError("log_dir_train must name a directory inside model_dir.")
    if config.retrain and not config.retrain_from.strip():
        raise ConfigurationError("retrain_from must name a directory when retrain is set.")


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer; received {value!r}")
    try:
        return int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer; received {value!r}") from exc


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"{name} must be a boolean; received {value!r}")


def config_from_mapping(values: Mapping[str, Any]) -> TrainingConfig:
    """Build a :class:`TrainingConfig` from loosely typed YAML or CLI values.

    ``None`` entries are treated as "use the default".
    """

    known = {f.name for f in fields(TrainingConfig)}
    unknown = sorted(str(key) for key in values if key not in known)
    if unknown:
        raise ConfigurationError(f"Unknown launch parameter(s): {', '.join(unknown)}")

    kwargs: Dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if key in _INT_FIELDS:
            kwargs[key] = _coerce_int(key, value)
        elif key in _BOOL_FIELDS:
            kwargs[key] = _coerce_bool(key, value)
        else:
            kwargs[key] = str(value)
    return TrainingConfig(**kwargs)


def extract_train_section(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the ``train`` block of a layered launch configuration."""

    section = config.get("train", {})
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigurationError("Launch configuration 'train' section must be a mapping.")
    return dict(section)
