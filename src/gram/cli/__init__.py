"""Command-line interface for gram."""

from __future__ import annotations

import asyncio
import logging as logging

from gram import Gram as Gram
from gram import build_config as build_config
from gram import load_config as load_config
from gram.cli.app import main as main
from gram.cli.commands import settings_diff as settings_diff_command
from gram.cli.parser import build_parser as build_parser

_run_settings_diff = settings_diff_command.run_settings_diff
_resolve_config = settings_diff_command.resolve_config
