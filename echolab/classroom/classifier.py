"""
ContentClassifier - AI-backed analysis of collected words and materials.

Wraps the Gemini API to provide:
- Word definition and translation in context
- Sentence translation
- Topic classification of materials
- Difficulty estimation of materials

The service is optional. Without an API key, or when a call fails, each
method logs the problem and returns a fallback value so study can go on.
"""

import logging
import os
import re
import time
from pathlib import Path
from typing import Optional, Protocol

from google import genai
from google.genai import types as genai_types

from echolab.schemas import Difficulty, WordAnalysis
from echolab.utils.prompt_loader import PromptTemplate, load_prompt


logger = logging.getLogger(__name__)

DEFAULT_MODEL = os.environ.get("ECHOLAB_MODEL", "gemini-2.5-flash")
MAX_INPUT_CHARS = 500
DEFAULT_TOPIC = "General"

UNAVAILABLE_ANALYSIS = WordAnalysis(
    definition="AI service unavailable (check GEMINI_API_KEY)",
    translation="无法连接AI",
)
FAILED_ANALYSIS = WordAnalysis(definition="Error analyzing word", translation="分析出错")
UNAVAILABLE_TRANSLATION = "AI service not configured; translation unavailable."
FAILED_TRANSLATION = "翻译服务不可用"


class TextGenerator(Protocol):
    def generate(self, prompt: PromptTemplate, user_prompt: str) -> str: ...


# -----------------------------------------------------------------------------
# Gemini API Client
# -----------------------------------------------------------------------------

class GeminiClient:
    """
    Run prompt templates against a Gemini model.

    The template's system text goes in as the system instruction, and its
    temperature and response MIME type become the generation config.
    Transient failures are retried with exponential backoff.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        attempts: int = 3,
        backoff_seconds: float = 1.0,
        sdk_client=None,
    ):
        if sdk_client is None:
            api_key = api_key or os.environ.get("GEMINI_API_KEY")
            if not api_key:
                raise ValueError("GEMINI_API_KEY not set.")
            sdk_client = genai.Client(api_key=api_key)
        if attempts < 1:
            raise ValueError("attempts must be at least 1")

        self.sdk = sdk_client
        self.model = model
        self.attempts = attempts
        self.backoff_seconds = backoff_seconds

    def _config(self, prompt: PromptTemplate) -> genai_types.GenerateContentConfig:
        return genai_types.GenerateContentConfig(
            system_instruction=prompt.system or None,
            temperature=prompt.temperature,
            response_mime_type=prompt.response_mime_type,
        )

    def generate(self, prompt: PromptTemplate, user_prompt: str) -> str:
        """
        Generate a reply for a rendered prompt.

        Raises:
            Exception: The last error once every attempt has failed
        """
        config = self._config(prompt)
        for attempt in range(1, self.attempts + 1):
            try:
                response = self.sdk.models.generate_content(
                    model=self.model,
                    contents=user_prompt,
                    config=config,
                )
                if not response.text:
                    raise ValueError(f"Empty reply for prompt {prompt.name!r}")
                return response.text
            except Exception as e:
                if attempt == self.attempts:
                    raise
                delay = self.backoff_seconds * 2 ** (attempt - 1)
                logger.warning(
                    "Gemini call for %r failed (attempt %d/%d), retrying in %.1fs: %s",
                    prompt.name, attempt, self.attempts, delay, e,
                )
                time.sleep(delay)


def _strip_code_fence(text: str) -> str:
    match = re.search(r"```(?:json)?\s*(.*?)```", text, re.DOTALL)
    return match.group(1) if match else text


# -----------------------------------------------------------------------------
# Classifier
# -----------------------------------------------------------------------------

class ContentClassifier:
    """
    Text analysis for the study workflow.

    Args:
        client: Anything with a `generate(prompt, user_prompt)` method.
            Defaults to a GeminiClient when GEMINI_API_KEY is set.
        prompts_dir: Optional custom prompts directory
    """

    def __init__(self, client: Optional[TextGenerator] = None, prompts_dir: Optional[Path] = None):
        if client is None:
            try:
                client = GeminiClient()
            except ValueError:
                logger.warning("GEMINI_API_KEY not set; AI features will use fallbacks.")
        self.client = client
        self.prompts_dir = prompts_dir

    @property
    def available(self) -> bool:
        return self.client is not None

    def _ask(self, prompt_name: str, **values) -> str:
        prompt = load_prompt(prompt_name, self.prompts_dir)
        return self.client.generate(prompt, prompt.render(**values))

    def analyze_word(self, word: str, context: str) -> WordAnalysis:
        """Definition and Chinese translation of `word` as used in `context`."""
        if not self.available:
            return UNAVAILABLE_ANALYSIS
        try:
            text = self._ask("analyze_word", word=word, context=context)
            return WordAnalysis.model_validate_json(_strip_code_fence(text).strip() or "{}")
        except Exception as e:
            logger.error(f"Word analysis failed for {word!r}: {e}")
            return FAILED_ANALYSIS

    def translate(self, text: str) -> str:
        """Translate an English sentence into Simplified Chinese."""
        if not self.available:
            return UNAVAILABLE_TRANSLATION
        try:
            result = self._ask("translate", text=text).strip()
        except Exception as e:
            logger.error(f"Translation failed: {e}")
            return FAILED_TRANSLATION
        return result or FAILED_TRANSLATION

    def classify_topic(self, text: str) -> str:
        """Single short topic category for a material title or text."""
        if not self.available:
            return DEFAULT_TOPIC
        try:
            result = self._ask("classify_topic", text=text[:MAX_INPUT_CHARS])
        except Exception as e:
            logger.error(f"Topic classification failed: {e}")
            return DEFAULT_TOPIC
        return result.strip().replace(".", "") or DEFAULT_TOPIC

    def estimate_difficulty(self, text: str) -> Difficulty:
        """Learner difficulty level of a material title or text."""
        if not self.available:
            return Difficulty.INTERMEDIATE
        try:
            result = self._ask("estimate_difficulty", text=text[:MAX_INPUT_CHARS])
        except Exception as e:
            logger.error(f"Difficulty estimation failed: {e}")
            return Difficulty.INTERMEDIATE

        result = result.strip().lower()
        if Difficulty.BEGINNER.value in result:
            return Difficulty.BEGINNER
        if Difficulty.ADVANCED.value in result:
            return Difficulty.ADVANCED
        return Difficulty.INTERMEDIATE
