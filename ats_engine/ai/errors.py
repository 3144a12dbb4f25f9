from __future__ import annotations

from typing import Literal

import openai

LLMErrorCode = Literal[
    "invalid_api_key",
    "rate_limited",
    "quota_exceeded",
    "model_overloaded",
    "network_error",
    "malformed_response",
    "safety_blocked",
    "consent_required",
    "missing_api_key",
    "provider_error",
]

_SUGGESTIONS: dict[str, str] = {
    "invalid_api_key": "Check the configured API key.",
    "rate_limited": "Wait a moment and try again.",
    "quota_exceeded": "Check the billing settings of the AI provider account.",
    "model_overloaded": "The AI service is temporarily overloaded. Try again in a few moments.",
    "network_error": "Check the network connection and try again.",
    "malformed_response": "The AI response could not be read. Try again.",
    "safety_blocked": "The request was blocked by the provider's safety filter. Review the input text.",
    "consent_required": "Enable AI features to run semantic analysis.",
    "missing_api_key": "Configure an API key to run semantic analysis.",
    "provider_error": "The AI provider returned an error. Try again later.",
}

_RETRYABLE = frozenset({"rate_limited", "model_overloaded", "network_error"})
_NOT_RECOVERABLE = frozenset({"quota_exceeded", "provider_error"})


class LLMError(RuntimeError):
    def __init__(self, message: str, *, code: LLMErrorCode = "provider_error"):
        super().__init__(message)
        self.code = code
        self.retryable = code in _RETRYABLE
        self.recoverable = code not in _NOT_RECOVERABLE
        self.suggestion = _SUGGESTIONS[code]


def is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, LLMError) and exc.retryable


def classify_openai_error(exc: Exception) -> LLMError:
    """Translate an exception raised by the openai SDK into an LLMError."""
    if isinstance(exc, LLMError):
        return exc
    if isinstance(exc, (openai.APITimeoutError, openai.APIConnectionError)):
        return LLMError("Could not reach the AI provider", code="network_error")
    if isinstance(exc, openai.RateLimitError):
        if getattr(exc, "code", None) == "insufficient_quota":
            return LLMError("API quota exceeded", code="quota_exceeded")
        return LLMError("Rate limit exceeded", code="rate_limited")
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return LLMError("Invalid or expired API key", code="invalid_api_key")
    if isinstance(exc, openai.APIStatusError):
        if exc.status_code == 503:
            return LLMError("The AI model is currently overloaded", code="model_overloaded")
        if exc.status_code == 429:
            return LLMError("Rate limit exceeded", code="rate_limited")
        if exc.status_code in {401, 403}:
            return LLMError("Invalid or expired API key", code="invalid_api_key")
        if exc.status_code == 400 and "quota" in str(exc).lower():
            return LLMError("API quota exceeded", code="quota_exceeded")
        return LLMError(f"API error ({exc.status_code})", code="provider_error")
    return LLMError(str(exc) or exc.__class__.__name__, code="provider_error")
