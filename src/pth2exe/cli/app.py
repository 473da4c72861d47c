"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown

from ..chat import ChatSession
from ..guide import GUIDE, GUIDE_CONTEXT
from .providers import get_llm_factory
from .render import render_guide

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="pth2exe",
    help="MONAI deployment guide with a built-in assistant",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
    open_chat: bool = typer.Option(
        False,
        "--open-chat",
        "-c",
        help="Open the assistant panel on start"
    ),
):
    """Launch the interactive guide with the chat assistant."""
    from ..ui import run_textual_tui

    provider_factory = get_llm_factory(console)

    try:
        asyncio.run(run_textual_tui(
            provider_factory=provider_factory,
            log_level=log_level,
            open_chat=open_chat,
        ))
    except KeyboardInterrupt:
        pass


@app.command()
def show(
    section: int | None = typer.Option(
        None,
        "--section",
        "-s",
        help="Only print this section (1-6)"
    ),
):
    """Print the guide to the terminal."""
    try:
        renderables = render_guide(GUIDE, section)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    for renderable in renderables:
        console.print(renderable)


@app.command()
def context():
    """Print the context the assistant is pinned to."""
    console.print(GUIDE_CONTEXT.strip(), markup=False, highlight=False)


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about the guide"),
):
    """Ask the assistant a single question about the guide."""
    async def _ask() -> str | None:
        session = ChatSession(get_llm_factory(console))
        try:
            session.initialize()
            if session.is_disabled:
                console.print(f"[red]Error: {session.notice}[/red]")
                return None

            with console.status("[dim]Thinking...[/dim]"):
                accepted = await session.send(question)
            if not accepted:
                console.print("[yellow]Nothing to ask: the question is empty[/yellow]")
                return None
            return session.transcript[-1].text
        finally:
            await session.close()

    answer = asyncio.run(_ask())
    if answer is None:
        raise typer.Exit(code=1)
    console.print(Markdown(answer))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
