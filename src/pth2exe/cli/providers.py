"""Provider factory functions for CLI.

Centralizes creation of the chat provider from environment variables.
Hides configuration details from command implementations.
"""

import os
from functools import partial

from rich.console import Console

from ..chat import ProviderFactory
from ..llm import create_llm_provider

DEFAULT_MODEL = "gemini-2.5-flash"

# Default console for output
_console = Console()


def get_api_key() -> str | None:
    """Read the chat credential from the environment.

    Environment variables:
        API_KEY: Gemini API key
        GEMINI_API_KEY: Accepted when API_KEY is unset
    """
    return os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY")


def get_llm_factory(console: Console | None = None) -> ProviderFactory | None:
    """Build a deferred provider constructor from environment variables.

    The provider itself is created by the chat session, so that a failing
    client setup disables chat instead of aborting the command.

    Args:
        console: Optional Rich console for output

    Returns:
        Zero-argument callable creating the provider, or None if no credential is set

    Environment variables:
        API_KEY / GEMINI_API_KEY: Gemini API key (required for chat)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
    """
    con = console or _console
    api_key = get_api_key()
    if not api_key:
        con.print("[yellow]Warning: API_KEY not set, chat assistant disabled[/yellow]")
        return None

    model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
    return partial(create_llm_provider, "gemini", api_key=api_key, model=model)
