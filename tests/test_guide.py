"""Unit tests for the guide content module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from pth2exe.guide import (
    GUIDE,
    GUIDE_CONTEXT,
    SECTION_TITLES,
    BuildStep,
    FlagExplanation,
    GuideContent,
    build_guide_context,
)


class TestGuideContent:
    """Tests for the bundled guide."""

    def test_guide_is_frozen(self):
        with pytest.raises(ValueError):
            GUIDE.title = "changed"  # type: ignore[misc]

    def test_six_sections(self):
        assert len(SECTION_TITLES) == 6
        assert [title.split(".")[0] for title in SECTION_TITLES] == ["1", "2", "3", "4", "5", "6"]

    def test_build_command_matches_step(self):
        build_step = GUIDE.build_steps[4]

        assert build_step.title == "Run the PyInstaller Build Command"
        assert build_step.code == GUIDE.pyinstaller_command.strip()

    def test_install_step_code(self):
        codes = [step.code for step in GUIDE.build_steps if step.code]

        assert "pip install -r requirements.txt" in codes

    def test_every_flag_is_in_the_command(self):
        for item in GUIDE.pyinstaller_flags:
            option = item.flag.split()[0]
            assert option in GUIDE.pyinstaller_command

    def test_script_keeps_demo_model_fallback(self):
        script = GUIDE.python_script

        assert "Creating a dummy model file for demonstration..." in script
        assert "torch.save(dummy_state_dict, model_path)" in script
        assert "THIS IS FOR DEMO ONLY. REMOVE IN PRODUCTION." in GUIDE_CONTEXT

    def test_requirements(self):
        assert GUIDE.requirements_txt.split() == ["torch", "monai[all]", "pyinstaller"]

    def test_usage_uses_backslashes_on_windows(self):
        assert r"C:\path\to\patient\scan.nii.gz" in GUIDE.usage_instructions

    def test_empty_bundle_is_valid(self):
        guide = GuideContent()

        assert guide.python_script == ""
        assert guide.build_steps == ()


class TestGuideContext:
    """Tests for the assistant's context blob."""

    def test_contains_every_flag_explanation(self):
        for item in GUIDE.pyinstaller_flags:
            assert f"**{item.flag}**: {item.description}" in GUIDE_CONTEXT

    def test_contains_script_and_structure(self):
        assert GUIDE.python_script in GUIDE_CONTEXT
        assert GUIDE.project_structure in GUIDE_CONTEXT
        assert "sliding_window_inference" in GUIDE_CONTEXT

    def test_contains_numbered_steps(self):
        for number, step in enumerate(GUIDE.build_steps, 1):
            assert f"{number}.  **{step.title}**" in GUIDE_CONTEXT

    def test_restricts_scope(self):
        assert "based *only* on the information provided in this guide" in GUIDE_CONTEXT

    def test_section_titles_in_order(self):
        positions = [GUIDE_CONTEXT.index(f"### {title}") for title in SECTION_TITLES]

        assert positions == sorted(positions)

    @given(st.text(min_size=1, max_size=40), st.text(min_size=1, max_size=80))
    def test_custom_flags_are_embedded(self, flag: str, description: str):
        """Property test: any flag explanation ends up in the context."""
        guide = GuideContent(pyinstaller_flags=(FlagExplanation(flag=flag, description=description),))

        assert f"- **{flag}**: {description}" in build_guide_context(guide)

    def test_step_without_code(self):
        guide = GuideContent(build_steps=(BuildStep(title="Only", description="No commands"),))

        assert "1.  **Only**: No commands" in build_guide_context(guide)
