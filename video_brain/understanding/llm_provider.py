"""LLM Provider abstraction and implementations."""

import copy
import json
import os
from abc import ABC, abstractmethod
from typing import Any

import httpx

from ..config import Config, LLMConfig


class VideoBrainError(Exception):
    """Base error for every fatal video brain failure."""

    pass


class LLMProviderError(VideoBrainError):
    """Error from the text-generation transport."""

    pass


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, config: LLMConfig):
        self.config = config

    @abstractmethod
    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        """Generate a response from the LLM.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt

        Returns:
            The raw generated text, expected to hold one JSON object
        """
        pass


# A small but complete video the mock returns when nothing is scripted
MOCK_VIDEO: dict[str, Any] = {
    "concept": "From scattered busywork to one calm workspace",
    "emotionalArc": ["curiosity", "frustration", "relief", "confidence", "action"],
    "scenes": [
        {
            "sceneId": "scene_1",
            "sceneType": "HOOK",
            "intention": "capture_attention",
            "rhythm": {
                "needsMultipleBeats": True,
                "reason": "Open with momentum",
                "suggestedBeatCount": 2,
                "beatStrategy": "progressive_reveal",
            },
            "durationFrames": 75,
            "beats": [
                {
                    "beatId": "beat_1",
                    "type": "text_appear",
                    "startFrame": 0,
                    "durationFrames": 40,
                    "content": {"text": "Your team works hard.", "textStyle": "primary"},
                },
                {
                    "beatId": "beat_2",
                    "type": "text_emphasize",
                    "startFrame": 30,
                    "durationFrames": 40,
                    "content": {"text": "Your tools don't.", "textStyle": "secondary"},
                },
            ],
        },
        {
            "sceneId": "scene_2",
            "sceneType": "PROBLEM",
            "intention": "amplify_pain",
            "rhythm": {"needsMultipleBeats": True, "suggestedBeatCount": 2},
            "durationFrames": 90,
            "beats": [
                {
                    "beatId": "beat_1",
                    "type": "text_appear",
                    "startFrame": 0,
                    "durationFrames": 45,
                    "content": {"text": "Twelve tabs. Four inboxes.", "textStyle": "primary"},
                },
                {
                    "beatId": "beat_2",
                    "type": "text_replace",
                    "startFrame": 45,
                    "durationFrames": 40,
                    "content": {"text": "Zero focus.", "textStyle": "secondary"},
                },
            ],
        },
        {
            "sceneId": "scene_3",
            "sceneType": "SOLUTION",
            "intention": "reveal_solution",
            "rhythm": {"needsMultipleBeats": True, "suggestedBeatCount": 2},
            "durationFrames": 90,
            "beats": [
                {
                    "beatId": "beat_1",
                    "type": "text_appear",
                    "startFrame": 0,
                    "durationFrames": 45,
                    "content": {"text": "One workspace for everything.", "textStyle": "primary"},
                },
                {
                    "beatId": "beat_2",
                    "type": "text_appear",
                    "startFrame": 40,
                    "durationFrames": 40,
                    "content": {"text": "Built for calm.", "textStyle": "secondary"},
                },
            ],
        },
        {
            "sceneId": "scene_4",
            "sceneType": "PROOF",
            "intention": "build_credibility",
            "rhythm": {"needsMultipleBeats": True, "suggestedBeatCount": 2},
            "durationFrames": 90,
            "beats": [
                {
                    "beatId": "beat_1",
                    "type": "text_appear",
                    "startFrame": 0,
                    "durationFrames": 45,
                    "content": {"text": "Trusted by 4,000 teams", "textStyle": "primary"},
                },
                {
                    "beatId": "beat_2",
                    "type": "text_appear",
                    "startFrame": 35,
                    "durationFrames": 45,
                    "content": {"text": "3 hours saved every week", "textStyle": "secondary"},
                },
            ],
        },
        {
            "sceneId": "scene_5",
            "sceneType": "CTA",
            "intention": "drive_action",
            "rhythm": {"needsMultipleBeats": False, "beatStrategy": "single_moment"},
            "durationFrames": 75,
            "beats": [
                {
                    "beatId": "beat_1",
                    "type": "text_appear",
                    "startFrame": 0,
                    "durationFrames": 60,
                    "content": {"text": "Start free today", "textStyle": "primary"},
                },
            ],
        },
    ],
}


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for tests and offline runs.

    Returns scripted responses in order, then falls back to a canned
    five-scene video. Every call is recorded in ``calls``.
    """

    def __init__(self, config: LLMConfig | None = None, responses: list[str] | None = None):
        super().__init__(config or LLMConfig(provider="mock"))
        self.responses = list(responses or [])
        self.calls: list[tuple[str, str | None]] = []

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        self.calls.append((prompt, system_prompt))
        if self.responses:
            return self.responses.pop(0)
        return json.dumps(copy.deepcopy(MOCK_VIDEO))


class AnthropicLLMProvider(LLMProvider):
    """LLM provider backed by the Anthropic Messages API."""

    def __init__(self, config: LLMConfig):
        super().__init__(config)
        self.api_key = config.api_key or os.environ.get("ANTHROPIC_API_KEY")
        self._client = None

    @property
    def client(self):
        """Lazy-load the Anthropic client."""
        if self._client is None:
            if not self.api_key:
                raise LLMProviderError("ANTHROPIC_API_KEY environment variable not set")
            import anthropic

            self._client = anthropic.AsyncAnthropic(
                api_key=self.api_key,
                http_client=httpx.AsyncClient(timeout=self.config.timeout),
            )
        return self._client

    async def generate(self, prompt: str, system_prompt: str | None = None) -> str:
        import anthropic

        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            message = await self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            raise LLMProviderError(f"Anthropic request failed: {e}") from e

        text = "".join(block.text for block in message.content if block.type == "text")
        if not text:
            raise LLMProviderError("Anthropic response contained no text")
        return text


def get_llm_provider(config: Config | None = None) -> LLMProvider:
    """Get the appropriate LLM provider based on configuration.

    Args:
        config: Configuration object. If None, loads default config.

    Returns:
        An LLM provider instance.

    Raises:
        ValueError: If provider name is not recognized.
    """
    if config is None:
        from ..config import load_config

        config = load_config()

    provider_name = config.llm.provider.lower()

    if provider_name == "mock":
        return MockLLMProvider(config.llm)
    elif provider_name == "anthropic":
        return AnthropicLLMProvider(config.llm)
    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
