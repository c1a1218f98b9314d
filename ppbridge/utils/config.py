# The MIT License (MIT)
# Copyright © 2025 ppbridge Team

# Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
# documentation files (the "Software"), to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so, subject to the following conditions:

# The above copyright notice and this permission notice shall be included in all copies or substantial portions of
# the Software.

# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO
# THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL
# THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION
# OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
# DEALINGS IN THE SOFTWARE.

import os
import argparse
from typing import List, Optional

from ppbridge.offload.credentials import DEFAULT_PROFILE, HASH_PROFILES
from ppbridge.offload.pool import POOL_KINDS

# Environment overrides
ENV_BEATMAP_DIR = "PPBRIDGE_BEATMAP_DIR"
ENV_POOL_KIND = "PPBRIDGE_POOL_KIND"
ENV_MAX_WORKERS = "PPBRIDGE_MAX_WORKERS"
ENV_DEBUG = "PPBRIDGE_DEBUG"


def check_config(config: argparse.Namespace) -> argparse.Namespace:
    r"""Fills unset options from the environment and validates the namespace."""
    if getattr(config, "beatmaps.dir", None) is None:
        setattr(config, "beatmaps.dir", os.getenv(ENV_BEATMAP_DIR))
    if getattr(config, "pool.kind", None) is None:
        setattr(config, "pool.kind", os.getenv(ENV_POOL_KIND, "process"))
    if getattr(config, "pool.max_workers", None) is None:
        env_workers = os.getenv(ENV_MAX_WORKERS)
        setattr(config, "pool.max_workers", int(env_workers) if env_workers else None)
    if os.getenv(ENV_DEBUG, "false").lower() == "true":
        setattr(config, "logging.level", "DEBUG")

    if getattr(config, "pool.kind") not in POOL_KINDS:
        raise ValueError(f"pool.kind must be one of {POOL_KINDS}")
    max_workers = getattr(config, "pool.max_workers")
    if max_workers is not None and max_workers < 1:
        raise ValueError("pool.max_workers must be >= 1")

    beatmap_dir = getattr(config, "beatmaps.dir")
    if beatmap_dir:
        setattr(config, "beatmaps.dir", os.path.expanduser(beatmap_dir))

    return config


def add_pool_args(parser: argparse.ArgumentParser):
    pool_group = parser.add_argument_group('pool')
    pool_group.add_argument(
        "--pool.kind",
        type=str,
        choices=POOL_KINDS,
        help="Worker pool implementation for CPU-bound work.",
        default=None,
    )
    pool_group.add_argument(
        "--pool.max_workers",
        type=int,
        help="Worker count (defaults to the number of CPU cores).",
        default=None,
    )


def add_beatmap_args(parser: argparse.ArgumentParser):
    beatmap_group = parser.add_argument_group('beatmaps')
    beatmap_group.add_argument(
        "--beatmaps.dir",
        type=str,
        help="Directory holding <map_md5>.osu files.",
        default=None,
    )


def add_credentials_args(parser: argparse.ArgumentParser):
    credentials_group = parser.add_argument_group('credentials')
    credentials_group.add_argument(
        "--credentials.profile",
        type=str,
        choices=sorted(HASH_PROFILES),
        help="argon2id cost profile for password hashing.",
        default=DEFAULT_PROFILE,
    )


def add_logging_args(parser: argparse.ArgumentParser):
    logging_group = parser.add_argument_group('logging')
    logging_group.add_argument(
        "--logging.level",
        type=str,
        help="Minimum log level.",
        default="INFO",
    )
    logging_group.add_argument(
        "--logging.logging_dir",
        type=str,
        help="Also write logs to this directory.",
        default=None,
    )
    logging_group.add_argument(
        "--logging.rotation",
        type=str,
        help="Rotate the log file at this size.",
        default="2 GB",
    )


def add_args(parser: argparse.ArgumentParser):
    """
    Adds all shared arguments to the parser.
    """
    add_pool_args(parser)
    add_beatmap_args(parser)
    add_credentials_args(parser)
    add_logging_args(parser)


def config(argv: Optional[List[str]] = None, parser: Optional[argparse.ArgumentParser] = None):
    """
    Returns the validated configuration namespace.

    Options keep their dotted names, e.g. ``getattr(cfg, "pool.kind")``.
    """
    if parser is None:
        parser = argparse.ArgumentParser()
        add_args(parser)
    return check_config(parser.parse_args(argv))
