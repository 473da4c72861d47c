"""Data models for the guide content.

Hides how the guide text is grouped into sections and steps.
"""

from pydantic import BaseModel, ConfigDict, Field


class FlagExplanation(BaseModel):
    """A single PyInstaller flag and what it does."""

    model_config = ConfigDict(frozen=True)

    flag: str = Field(description="Flag as typed on the command line")
    description: str = Field(description="Plain-language explanation")


class BuildStep(BaseModel):
    """One numbered build instruction, optionally with a shell snippet."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    code: str | None = Field(default=None, description="Commands to run for this step")


class GuideContent(BaseModel):
    """Immutable bundle of everything the guide displays.

    Every text field defaults to an empty string so a partially filled bundle
    still renders (as empty panels) instead of failing.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    subtitle: str = ""
    project_structure: str = ""
    requirements_txt: str = ""
    python_script: str = ""
    pyinstaller_command: str = ""
    pyinstaller_flags: tuple[FlagExplanation, ...] = ()
    build_steps: tuple[BuildStep, ...] = ()
    usage_instructions: str = ""
    usage_explanation: str = ""
