from .base import Prompt, PromptArgument
from .manager import PromptManager

__all__ = ["Prompt", "PromptArgument", "PromptManager"]
