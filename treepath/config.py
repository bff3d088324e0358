# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Search defaults with .env / environment overrides.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_SEPARATOR = "."
DEFAULT_START_LEVEL = 0
DEFAULT_DESCENDANT_POLICY = "depth_scoped"
DEFAULT_MAX_DEPTH = 256

ENV_SEPARATOR = "TREEPATH_SEPARATOR"
ENV_START_LEVEL = "TREEPATH_START_LEVEL"
ENV_DESCENDANT_POLICY = "TREEPATH_DESCENDANT_POLICY"
ENV_MAX_DEPTH = "TREEPATH_MAX_DEPTH"


class ConfigurationError(ValueError):
    """Raised when search options are invalid."""


def _env_int(environ, name: str) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return None


def settings_from_env(environ=None) -> dict:
    """Return the search settings overridden by environment variables.

    Only variables that are present (and valid) appear in the result, so the
    dict can be splatted over the built-in defaults.
    """
    if environ is None:
        environ = os.environ
    settings = {}
    separator = environ.get(ENV_SEPARATOR)
    if separator:
        settings["separator"] = separator
    start_level = _env_int(environ, ENV_START_LEVEL)
    if start_level is not None:
        settings["start_level"] = start_level
    policy = environ.get(ENV_DESCENDANT_POLICY)
    if policy:
        settings["descendant_policy"] = policy.strip().lower()
    max_depth = _env_int(environ, ENV_MAX_DEPTH)
    if max_depth is not None:
        settings["max_depth"] = max_depth
    return settings
