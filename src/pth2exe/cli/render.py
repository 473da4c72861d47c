"""Rich rendering of the guide for non-interactive output.

Mirrors the TUI layout: a header, then six titled sections.
"""

from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from ..guide import SECTION_TITLES, GuideContent


def _code(code: str | None, language: str) -> Panel:
    """Code block with the language as the panel title."""
    return Panel(
        Syntax((code or "").strip(), language, theme="monokai", background_color="default"),
        title=language.upper(),
        title_align="left",
        border_style="dim",
    )


def render_header(guide: GuideContent) -> Text:
    text = Text(guide.title, style="bold")
    text.highlight_regex(r"\.\w+", "bold cyan")
    if guide.subtitle:
        text.append("\n")
        text.append(guide.subtitle, style="dim")
    return text


def render_sections(guide: GuideContent) -> list[RenderableType]:
    """Render each section body, in guide order."""
    flags = Table(show_header=True, header_style="bold cyan", box=None, expand=True)
    flags.add_column("Flag", style="bold", no_wrap=True)
    flags.add_column("What it does")
    for item in guide.pyinstaller_flags:
        flags.add_row(item.flag, item.description)

    steps: list[RenderableType] = []
    for number, step in enumerate(guide.build_steps, 1):
        steps.append(Text(f"{number}. {step.title}", style="bold cyan"))
        steps.append(Markdown(step.description))
        if step.code:
            steps.append(_code(step.code, "bash"))

    return [
        Panel((guide.project_structure or "").strip(), border_style="dim"),
        _code(guide.requirements_txt, "text"),
        _code(guide.python_script, "python"),
        Group(_code(guide.pyinstaller_command, "bash"), flags),
        Group(*steps),
        Group(
            _code(guide.usage_instructions, "bash"),
            Text((guide.usage_explanation or "").strip(), style="dim"),
        ),
    ]


def render_guide(guide: GuideContent, section: int | None = None) -> list[RenderableType]:
    """Render the whole guide, or one section of it.

    Args:
        guide: Content bundle to render
        section: 1-based section number, None for everything

    Returns:
        Renderables to print in order

    Raises:
        ValueError: If section is out of range
    """
    bodies = render_sections(guide)
    if section is not None and not 1 <= section <= len(bodies):
        raise ValueError(f"Section must be between 1 and {len(bodies)}, got {section}")

    output: list[RenderableType] = []
    if section is None:
        output.append(render_header(guide))

    for number, (title, body) in enumerate(zip(SECTION_TITLES, bodies, strict=True), 1):
        if section is not None and number != section:
            continue
        output.append(Panel(body, title=f"[bold cyan]{title}[/]", title_align="left", border_style="cyan"))
    return output
