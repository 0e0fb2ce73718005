"""Runtime settings: API location, timeouts and logging.

Values come from ``FERRYDECK_*`` environment variables and can be overridden
on the command line (see ``build_arg_parser``).
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .engine.api import DEFAULT_API_BASE_URL, ApiConfig

ENV_PREFIX = "FERRYDECK_"
_FALSEY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 30.0
    verify_ssl: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = Settings()

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        timeout = get("TIMEOUT")
        verify = get("VERIFY_SSL")
        return Settings(
            api_base_url=get("API_URL") or defaults.api_base_url,
            timeout=float(timeout) if timeout else defaults.timeout,
            verify_ssl=(
                verify.lower() not in _FALSEY
                if verify
                else defaults.verify_ssl
            ),
            log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
            log_file=get("LOG_FILE"),
        )

    def with_args(self, args: argparse.Namespace) -> Settings:
        """Overlay command-line values that were actually given."""
        overrides = {}
        if getattr(args, "api_url", None):
            overrides["api_base_url"] = args.api_url
        if getattr(args, "timeout", None) is not None:
            overrides["timeout"] = args.timeout
        if getattr(args, "log_level", None):
            overrides["log_level"] = args.log_level.upper()
        if getattr(args, "log_file", None):
            overrides["log_file"] = args.log_file
        return replace(self, **overrides)

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        return level

    def api_config(self) -> ApiConfig:
        return ApiConfig(
            base_url=self.api_base_url,
            timeout=self.timeout,
            verify_ssl=self.verify_ssl,
        )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ferrydeck",
        description="Visualize and edit a ferry deck loading plan.",
    )
    parser.add_argument(
        "--api-url", help="Base URL of the optimizer API"
    )
    parser.add_argument(
        "--timeout", type=float, help="HTTP timeout in seconds"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def load_settings(argv=None, environ=None) -> Settings:
    args = build_arg_parser().parse_args(argv)
    return Settings.from_env(environ).with_args(args)
