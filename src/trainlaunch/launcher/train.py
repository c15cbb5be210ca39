#!/usr/bin/env python3
"""Launch the external image-classification trainer.

The launcher validates the parameters, stages the label file inside the model
directory as ``data_info_train.csv``, resolves the network depth, assembles the
``run.py train`` command and either prints it (``--print-cmd``) or runs it from
the model directory and reports whether the trained model was produced.

Parameters can come from a layered YAML preset (``--exp-config``), dotted
``--override KEY=VALUE`` entries and explicit flags, in increasing priority.
"""

from __future__ import annotations

import argparse
import sys
import warnings
from typing import Any, Dict, Optional, Sequence

from trainlaunch.configs.layered import (
    apply_overrides,
    flatten_override_args,
    load_layered_config,
)
from trainlaunch.errors import ConfigurationError, LaunchError, StagingError

from .architectures import describe_depth_choice, resolve_depth
from .command import build_launch_command
from .config import TrainingConfig, config_from_mapping, extract_train_section, validate_config
from .paths import resolve_paths
from .report import RunOutcome, RunStatus, summarise_run
from .runner import JobRunner
from .staging import stage_label_file

__all__ = ["build_parser", "collect_parameters", "main", "train"]


def train(
    config: Optional[TrainingConfig] = None,
    *,
    runner: Optional[JobRunner] = None,
    **params: Any,
) -> RunOutcome:
    """Validate, stage, build and run one training job.

    Either pass a :class:`TrainingConfig` or keyword parameters matching its
    fields. Post-launch failures are reported in the returned outcome rather
    than raised.
    """

    if config is None:
        config = config_from_mapping(params)
    elif params:
        raise TypeError("Pass either a TrainingConfig or keyword parameters, not both")

    validate_config(config)
    paths = resolve_paths(config)
    platform = config.platform

    stage_label_file(
        config.data_info,
        paths.staged_label_file,
        platform=platform,
        delimiter=config.delimiter,
    )

    depth = resolve_depth(config.architecture, config.depth)
    hint = describe_depth_choice(config.architecture, depth)
    if hint:
        warnings.warn(hint, UserWarning, stacklevel=2)

    command = build_launch_command(config, paths, depth)
    runner = runner or JobRunner()
    runner.load(command)
    if not config.print_cmd:
        print("Running:", command.text)

    def _summarise(returncode: int, elapsed: float) -> RunOutcome:
        return summarise_run(
            platform=platform,
            output_dir=paths.output_dir,
            returncode=returncode,
            elapsed=elapsed,
        )

    outcome = runner.run(dry_run=config.print_cmd, summarise=_summarise)
    if outcome.status is not RunStatus.DRY_RUN:
        print(outcome.message)
    for note in outcome.notes:
        warnings.warn(note, UserWarning, stacklevel=2)
    return outcome


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train an image classifier with the external run.py trainer"
    )
    parser.add_argument(
        "--exp-config",
        type=str,
        dest="exp_config",
        help=(
            "Launch preset reference, absolute or relative to the repository's config/ "
            "directory. Shipped presets resolve only from a source checkout or editable "
            "install; pass an absolute path otherwise."
        ),
    )
    parser.add_argument(
        "--override",
        action="append",
        nargs="+",
        dest="overrides",
        default=None,
        metavar="KEY=VALUE",
        help="Override preset entries (e.g. top_n=3). May be specified multiple times.",
    )
    parser.add_argument("--path-prefix", dest="path_prefix", help="Absolute path to the images")
    parser.add_argument(
        "--data-info",
        dest="data_info",
        help="Headerless label file: image file name, zero-based class index",
    )
    parser.add_argument(
        "--model-dir", dest="model_dir", help="Directory holding run.py and the trained models"
    )
    parser.add_argument(
        "--python-loc", dest="python_loc", help="Directory containing the python executable"
    )
    parser.add_argument("--os", dest="os", help='Set to "Windows" on Windows hosts')
    parser.add_argument("--num-gpus", dest="num_gpus", type=int)
    parser.add_argument("--num-classes", dest="num_classes", type=int)
    parser.add_argument("--delimiter", dest="delimiter")
    parser.add_argument(
        "--architecture",
        dest="architecture",
        help="alexnet, densenet, googlenet, nin, resnet or vgg",
    )
    parser.add_argument(
        "--depth",
        dest="depth",
        type=int,
        help="Layer count for resnet (18/34/50/101/152) or densenet (121/161/169/201)",
    )
    parser.add_argument("--batch-size", dest="batch_size", type=int)
    parser.add_argument(
        "--log-dir-train",
        dest="log_dir_train",
        help="Name of the directory the trained model is written to",
    )
    parser.add_argument(
        "--retrain",
        dest="retrain",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Continue from --retrain-from instead of training from scratch",
    )
    parser.add_argument("--retrain-from", dest="retrain_from")
    parser.add_argument("--num-epochs", dest="num_epochs", type=int)
    parser.add_argument("--top-n", dest="top_n", type=int)
    parser.add_argument("--num-cores", dest="num_cores", type=int)
    parser.add_argument(
        "--randomize",
        dest="randomize",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Shuffle the order images are passed to training",
    )
    parser.add_argument("--max-to-keep", dest="max_to_keep", type=int)
    parser.add_argument(
        "--print-cmd",
        dest="print_cmd",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the trainer command instead of running it",
    )
    return parser


_NON_PARAMETER_ARGS = ("exp_config", "overrides")


def collect_parameters(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge preset, overrides and explicit flags into one parameter mapping."""

    layered: Dict[str, Any] = {}
    if args.exp_config:
        layered = load_layered_config(args.exp_config)

    overrides = []
    for entry in flatten_override_args(args.overrides):
        key = entry.split("=", 1)[0].strip()
        overrides.append(entry if key.startswith("train.") else f"train.{entry}")
    if overrides:
        layered = apply_overrides(layered, overrides)

    params = extract_train_section(layered)
    for key, value in vars(args).items():
        if key in _NON_PARAMETER_ARGS or value is None:
            continue
        params[key] = value
    return params


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        params = collect_parameters(args)
        outcome = train(config_from_mapping(params))
    except (ConfigurationError, StagingError, LaunchError) as exc:
        parser.exit(2, f"error: {exc}\n")
    except (FileNotFoundError, TypeError, ValueError) as exc:
        parser.exit(2, f"error: invalid launch configuration: {exc}\n")
    return 0 if outcome.succeeded or outcome.status is RunStatus.DRY_RUN else 1


if __name__ == "__main__":
    sys.exit(main())
