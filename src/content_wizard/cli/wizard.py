"""`ai-wizard`: Groq-powered content generation from the command line.

Subcommands:
- generate <prompt>   send one prompt and print the reply
- models              list the supported models
- config [--set K=V]  show or update the local .env file
"""
from __future__ import annotations
import argparse
import asyncio
import logging
import shutil
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from content_wizard.cli.env_file import (
    env_path,
    parse_assignment,
    read_settings,
    render_settings,
    write_setting,
)
from content_wizard.common.errors import WizardError
from content_wizard.common.logging_setup import setup_logging
from content_wizard.common.schema import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    SUPPORTED_MODELS,
)
from content_wizard.common.settings import Settings
from content_wizard.groq.provider import GroqProvider

LOGGER = logging.getLogger("content_wizard.cli")

BANNER = """
+-----------------------------------------------------------+
|                                                           |
|              *  AI CONTENT WIZARD  *                      |
|                                                           |
|         Groq-Powered Content Generation Tool              |
|                                                           |
+-----------------------------------------------------------+
"""

EXAMPLES = """
Examples:
  $ ai-wizard generate "Tell me a fun fact about space"
  $ ai-wizard generate "Write a short story about a robot" --model llama3-70b-8192
  $ ai-wizard models
  $ ai-wizard config --set TEMPERATURE=0.5
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ai-wizard",
        description="AI Content Wizard - Groq-Powered Content Generation",
    )
    sub = ap.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate content using AI")
    gen.add_argument("prompt", help="Prompt text")
    gen.add_argument("-m", "--model", default=None, help=f"AI model to use (default {DEFAULT_MODEL})")
    gen.add_argument("-t", "--temp", type=float, default=None,
                     help=f"Temperature 0.0 to 1.0 (default {DEFAULT_TEMPERATURE})")
    gen.add_argument("--max-tokens", type=int, default=None,
                     help=f"Maximum tokens to generate (default {DEFAULT_MAX_TOKENS})")
    gen.add_argument("--timeout-ms", type=int, default=None, help="Request timeout in milliseconds")
    gen.add_argument("--debug", action="store_true", help="Enable debug mode")

    sub.add_parser("models", help="List available AI models")

    cfg = sub.add_parser("config", help="View or update configuration")
    cfg.add_argument("--set", dest="assignment", metavar="KEY=VALUE", help="Set a configuration value")
    return ap


def _rule() -> str:
    return "=" * shutil.get_terminal_size((80, 20)).columns


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def cmd_generate(args: argparse.Namespace) -> int:
    print(BANNER)
    load_dotenv(env_path())
    try:
        settings = Settings.from_env()
    except WizardError as e:
        return _fail(str(e))

    debug = args.debug or settings.debug
    setup_logging(logging.DEBUG if debug else logging.WARNING)
    LOGGER.debug(
        "Starting generation: model=%s temperature=%s max_tokens=%s timeout_ms=%s",
        args.model, args.temp, args.max_tokens, args.timeout_ms,
    )

    if not args.prompt.strip():
        return _fail("Please provide a prompt for content generation")

    provider = GroqProvider(settings)
    try:
        text = asyncio.run(provider.generate_text(
            args.prompt,
            model=args.model,
            temperature=args.temp,
            max_tokens=args.max_tokens,
            timeout_ms=args.timeout_ms,
        ))
    except WizardError as e:
        if debug:
            LOGGER.exception("Generation failed")
        return _fail(str(e))

    rule = _rule()
    print(f"{rule}\nPROMPT: {args.prompt}\n{rule}\n{text}\n{rule}")
    return 0


def cmd_models(args: argparse.Namespace) -> int:
    print(BANNER)
    print("\nAvailable Models:\n")
    for model in SUPPORTED_MODELS:
        print(f"* {model.name}")
        print(f"  {model.description}\n")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    path = env_path()
    if args.assignment:
        try:
            key, value = parse_assignment(args.assignment)
        except ValueError as e:
            return _fail(str(e))
        write_setting(path, key, value)
        print(f"Updated {key} in config")
        return 0

    if not path.exists():
        print("No configuration file found. Run with --help to see available options.")
        return 0
    print("\nCurrent Configuration:\n")
    print(render_settings(read_settings(path)))
    return 0


COMMANDS = {
    "generate": cmd_generate,
    "models": cmd_models,
    "config": cmd_config,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.command is None:
        print(BANNER)
        print("Welcome to AI Content Wizard!\n")
        ap.print_help()
        print(EXAMPLES)
        return 0
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
