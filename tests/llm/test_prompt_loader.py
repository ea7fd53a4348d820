import pytest

from llm.prompts.loader import PromptError, PromptManager


@pytest.fixture
def prompts_dir(tmp_path):
    (tmp_path / "greeting.yaml").write_text(
        'version: "2"\n'
        "parameters:\n"
        "  temperature: 0.1\n"
        "system_prompt_template: |\n"
        "  Hello {name}, you have ${amount} left.\n"
    )
    (tmp_path / "fixed.yaml").write_text("system_prompt: Be brief.\n")
    (tmp_path / "empty.yaml").write_text("description: nothing useful\n")
    return tmp_path


class TestPromptManager:
    """Tests for PromptManager."""

    def test_render_template(self, prompts_dir):
        rendered = PromptManager(prompts_dir).render_prompt(
            "greeting", {"name": "Nico", "amount": 42}
        )

        assert rendered["system_prompt"] == "Hello Nico, you have $42 left."
        assert rendered["parameters"] == {"temperature": 0.1}
        assert rendered["version"] == "2"

    def test_fixed_prompt_ignores_variables(self, prompts_dir):
        rendered = PromptManager(prompts_dir).render_prompt("fixed", {"name": "Nico"})

        assert rendered["system_prompt"] == "Be brief."
        assert rendered["version"] == "unknown"

    def test_missing_variable(self, prompts_dir):
        with pytest.raises(PromptError, match="amount"):
            PromptManager(prompts_dir).render_prompt("greeting", {"name": "Nico"})

    def test_missing_file(self, prompts_dir):
        with pytest.raises(PromptError):
            PromptManager(prompts_dir).load_prompt("nope")

    def test_file_without_system_prompt(self, prompts_dir):
        with pytest.raises(PromptError):
            PromptManager(prompts_dir).load_prompt("empty")

    def test_prompt_is_cached(self, prompts_dir):
        manager = PromptManager(prompts_dir)
        first = manager.load_prompt("fixed")
        (prompts_dir / "fixed.yaml").write_text("system_prompt: Changed.\n")

        assert manager.load_prompt("fixed") is first
