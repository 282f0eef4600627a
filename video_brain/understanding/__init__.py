"""LLM providers and response parsing."""

from .llm_provider import (
    AnthropicLLMProvider,
    LLMProvider,
    LLMProviderError,
    MockLLMProvider,
    VideoBrainError,
    get_llm_provider,
)
from .response_parser import ParseError, StructuralError, extract_json, parse_llm_response

__all__ = [
    "AnthropicLLMProvider",
    "LLMProvider",
    "LLMProviderError",
    "MockLLMProvider",
    "VideoBrainError",
    "get_llm_provider",
    "ParseError",
    "StructuralError",
    "extract_json",
    "parse_llm_response",
]
