"""
Prompt templates for the content classifier.

Each template is a YAML file in the package's prompts/ directory:

    meta:
      temperature: 0.2
      response_mime_type: application/json   # optional
    system: ...
    user_template: ... {placeholders} ...
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class PromptTemplate(BaseModel):
    """A parsed prompt with its generation settings."""
    name: str
    system: str
    user_template: str
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    response_mime_type: Optional[str] = None

    def render(self, **values) -> str:
        """Fill the user template's {placeholders}."""
        return self.user_template.format(**values)


@lru_cache(maxsize=None)
def _read_template(file_path: Path) -> PromptTemplate:
    with open(file_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    meta = raw.get("meta") or {}
    return PromptTemplate(
        name=file_path.stem,
        system=raw.get("system", ""),
        user_template=raw.get("user_template", ""),
        temperature=meta.get("temperature"),
        response_mime_type=meta.get("response_mime_type"),
    )


def load_prompt(name: str, prompts_dir: Path | None = None) -> PromptTemplate:
    """
    Load a prompt template by name (file name without .yaml).

    Raises:
        FileNotFoundError: If the template doesn't exist
        yaml.YAMLError: If the YAML is malformed
        pydantic.ValidationError: If required sections are not strings
    """
    file_path = (prompts_dir or PROMPTS_DIR) / f"{name}.yaml"
    if not file_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {file_path}")
    return _read_template(file_path)
