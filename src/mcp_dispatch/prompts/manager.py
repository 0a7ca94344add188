"""Prompt registry."""

from mcp_dispatch.prompts.base import Prompt
from mcp_dispatch.utilities.logging import get_logger

logger = get_logger(__name__)


class PromptManager:
    """Registry of prompts keyed by name.

    Args:
        warn_on_duplicate_prompts: Whether to log a warning when a prompt
            replaces one registered under the same name. Defaults to True.
    """

    def __init__(self, warn_on_duplicate_prompts: bool = True, *, prompts: list[Prompt] | None = None):
        self._prompts: dict[str, Prompt] = {}
        self.warn_on_duplicate_prompts = warn_on_duplicate_prompts
        for prompt in prompts or []:
            self.add_prompt(prompt)

    def get_prompt(self, name: str) -> Prompt | None:
        """Retrieve a registered prompt by its name, or None."""
        return self._prompts.get(name)

    def list_prompts(self) -> list[Prompt]:
        """All registered prompts in registration order."""
        return list(self._prompts.values())

    def add_prompt(self, prompt: Prompt) -> Prompt:
        """Register a prompt.

        A prompt registered under an existing name replaces the earlier one.
        """
        if prompt.name in self._prompts and self.warn_on_duplicate_prompts:
            logger.warning(f"Prompt already exists, replacing it: {prompt.name}")
        self._prompts[prompt.name] = prompt
        return prompt

    def __contains__(self, name: object) -> bool:
        return name in self._prompts

    def __len__(self) -> int:
        return len(self._prompts)
