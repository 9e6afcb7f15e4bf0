"""Command-line parsing and parameter resolution.

Rules:
  - Only ``--key=value`` tokens carry values; the value is everything after
    the first ``=``.
  - ``--help`` / ``-h`` anywhere prints usage and exits 0.
  - Bad tokens, unknown keys and invalid values are warnings, never errors.
"""

import argparse
import logging
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field, ValidationError

from src.core.config import DEFAULT_PARAMETERS, PARAMETER_CHOICES, SearchParameters

logger = logging.getLogger(__name__)

HELP_TOKENS = frozenset({"--help", "-h"})
VERBOSE_TOKENS = frozenset({"--verbose", "-v"})
NO_BROWSER_TOKEN = "--no-browser"
CONFIG_KEY = "config"


class CommandLine(BaseModel):
    """Everything extracted from the raw command-line tokens."""

    overrides: dict[str, str] = Field(default_factory=dict)
    config_path: str | None = None
    verbose: bool = False
    open_browser: bool = True
    warnings: list[str] = Field(default_factory=list)


def build_usage_parser() -> argparse.ArgumentParser:
    """Parser used only to render ``--help`` output."""
    parser = argparse.ArgumentParser(
        prog="python main.py",
        description=(
            "Run one LinkedIn job search at startup and serve the results "
            "as an HTML table. Values must be passed as --key=value."
        ),
        epilog=(
            "Unknown flags and invalid values are ignored with a warning. "
            "Set PORT to change the listen port (default: 3000)."
        ),
    )
    for key, choices in PARAMETER_CHOICES.items():
        default = DEFAULT_PARAMETERS.as_flags()[key]
        if choices is None:
            help_text = f"(default: {default!r})"
        else:
            allowed = ", ".join(repr(c) for c in choices)
            help_text = f"one of {allowed} (default: {default!r})"
        parser.add_argument(f"--{key}", metavar="VALUE", help=help_text)
    parser.add_argument(
        f"--{CONFIG_KEY}",
        metavar="PATH",
        help="YAML settings file (server, linkedin and search sections)",
    )
    parser.add_argument(
        NO_BROWSER_TOKEN,
        action="store_true",
        help="Do not open the default browser once results are ready",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser


def parse_command_line(tokens: Sequence[str]) -> CommandLine:
    """Split raw tokens into search overrides, options and warnings.

    Exits with status 0 after printing usage if a help token is present.
    """
    if any(token in HELP_TOKENS for token in tokens):
        parser = build_usage_parser()
        parser.print_help()
        parser.exit(0)

    result = CommandLine()
    for token in tokens:
        if token in VERBOSE_TOKENS:
            result.verbose = True
            continue
        if token == NO_BROWSER_TOKEN:
            result.open_browser = False
            continue
        if not token.startswith("--") or "=" not in token:
            result.warnings.append(f"Ignoring argument '{token}': expected --key=value")
            continue

        key, _, value = token[2:].partition("=")
        if key == CONFIG_KEY:
            if value:
                result.config_path = value
            else:
                result.warnings.append("Ignoring --config: no path given")
        elif key in PARAMETER_CHOICES:
            result.overrides[key] = value
        else:
            result.warnings.append(f"Unknown command-line argument: --{key}")
    return result


def merge_parameters(
    base: SearchParameters,
    overrides: Mapping[str, str],
    *,
    source: str = "command line",
) -> SearchParameters:
    """Apply overrides field by field; an invalid override keeps the base value."""
    current = base
    for key, value in overrides.items():
        if key not in PARAMETER_CHOICES:
            logger.warning("Unknown search parameter '%s' from %s, ignoring", key, source)
            continue
        try:
            current = SearchParameters.model_validate({**current.as_flags(), key: value})
        except ValidationError:
            logger.warning(
                "Invalid value %r for '%s' from %s, keeping %r",
                value, key, source, current.as_flags()[key],
            )
    return current


def resolve_parameters(
    overrides: Mapping[str, str],
    file_overrides: Mapping[str, str] | None = None,
) -> SearchParameters:
    """Defaults, then settings-file overrides, then command-line overrides."""
    params = DEFAULT_PARAMETERS
    if file_overrides:
        params = merge_parameters(params, file_overrides, source="settings file")
    return merge_parameters(params, overrides)
