"""EchoLab utilities."""

from .prompt_loader import PromptTemplate, load_prompt, PROMPTS_DIR

__all__ = [
    "PromptTemplate",
    "load_prompt",
    "PROMPTS_DIR",
]
