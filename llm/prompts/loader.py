"""Versioned prompt files for the advisor.

Each prompt lives in llm/prompts/<name>.yaml with a ``version``, model
``parameters`` and either a fixed ``system_prompt`` or a
``system_prompt_template`` filled with str.format placeholders.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from logger import get_logger

logger = get_logger("llm")


class PromptError(Exception):
    """Raised when a prompt file is missing, malformed or cannot be filled."""


class PromptManager:
    """Loads prompt files once and renders them with briefing values.

    The API serves requests from a thread pool, so the cache is guarded.

    Args:
        prompts_dir: Directory holding the YAML files; this package if None.
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = prompts_dir or Path(__file__).parent
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def load_prompt(self, prompt_name: str) -> Dict[str, Any]:
        """Parsed contents of <prompt_name>.yaml.

        Raises:
            PromptError: If the file is missing or is not a YAML mapping.
        """
        with self._lock:
            cached = self._cache.get(prompt_name)
        if cached is not None:
            return cached

        prompt_file = self.prompts_dir / f"{prompt_name}.yaml"
        if not prompt_file.exists():
            raise PromptError(f"Prompt file not found: {prompt_file}")

        try:
            with open(prompt_file, "r") as f:
                prompt_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PromptError(f"Invalid YAML in {prompt_file}: {e}") from e

        if not isinstance(prompt_config, dict):
            raise PromptError(f"Prompt file {prompt_file} is not a mapping")
        if "system_prompt" not in prompt_config and "system_prompt_template" not in prompt_config:
            raise PromptError(f"Prompt file {prompt_file} has no system prompt")

        logger.debug(
            f"Loaded prompt {prompt_name} (version {prompt_config.get('version', 'unknown')})"
        )
        with self._lock:
            self._cache[prompt_name] = prompt_config
        return prompt_config

    def render_prompt(self, prompt_name: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Fill a prompt's templates.

        Returns:
            Dict with system_prompt, user_prompt, parameters and version.

        Raises:
            PromptError: If the file cannot be loaded or a placeholder has no value.
        """
        prompt_config = self.load_prompt(prompt_name)
        template = prompt_config.get("system_prompt_template")

        try:
            if template is not None:
                system_prompt = template.format(**variables)
            else:
                system_prompt = prompt_config["system_prompt"]
            user_prompt = prompt_config.get("user_prompt_template", "").format(**variables)
        except KeyError as e:
            raise PromptError(f"Prompt {prompt_name} needs a value for {e}") from e

        return {
            "system_prompt": system_prompt.strip(),
            "user_prompt": user_prompt,
            "parameters": dict(prompt_config.get("parameters") or {}),
            "version": str(prompt_config.get("version", "unknown")),
        }
