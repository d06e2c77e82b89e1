"""Prompt loading and rendering."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from logger import get_logger

logger = get_logger()


class PromptManager:
    """Loads prompt definitions from YAML files and renders them.

    A prompt file holds a system_prompt, a user_prompt_template with
    str.format placeholders, default request parameters and a version.
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        """Initialize the prompt manager.

        Args:
            prompts_dir: Directory containing prompt YAML files.
                        Defaults to the directory of this module.
        """
        self.prompts_dir = prompts_dir or Path(__file__).parent
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_prompt(self, prompt_name: str) -> Dict[str, Any]:
        """Load a prompt definition, caching it for later calls.

        Args:
            prompt_name: Name of the prompt file (without .yaml extension).

        Returns:
            Dictionary containing the prompt definition.

        Raises:
            FileNotFoundError: If the prompt file doesn't exist.
            ValueError: If the file has no user_prompt_template.
        """
        if prompt_name in self._cache:
            return self._cache[prompt_name]

        prompt_file = self.prompts_dir / f"{prompt_name}.yaml"
        if not prompt_file.exists():
            raise FileNotFoundError(f"Prompt file not found: {prompt_file}")

        logger.debug(f"Loading prompt from {prompt_file}")
        with open(prompt_file, "r") as f:
            prompt_config = yaml.safe_load(f) or {}

        if "user_prompt_template" not in prompt_config:
            raise ValueError(f"Prompt {prompt_name} has no user_prompt_template")

        self._cache[prompt_name] = prompt_config
        return prompt_config

    def render_prompt(
        self, prompt_name: str, variables: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Load a prompt and fill its user template with variables.

        Args:
            prompt_name: Name of the prompt to load.
            variables: Values for the template placeholders.

        Returns:
            Dictionary with keys system_prompt, user_prompt, parameters, version.

        Raises:
            ValueError: If the template references a variable not supplied.
        """
        prompt_config = self.load_prompt(prompt_name)

        try:
            user_prompt = prompt_config["user_prompt_template"].format(**variables)
        except KeyError as e:
            raise ValueError(
                f"Missing variable {e} for prompt {prompt_name}"
            ) from e

        return {
            "system_prompt": prompt_config.get("system_prompt", "").strip(),
            "user_prompt": user_prompt,
            "parameters": prompt_config.get("parameters", {}),
            "version": prompt_config.get("version", "unknown"),
        }
