"""Model registry for promptfiles."""

import copy
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import yaml
from langchain_anthropic.chat_models import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_google_genai.chat_models import ChatGoogleGenerativeAI
from langchain_openai.chat_models.base import ChatOpenAI
from pydantic import BaseModel, ConfigDict, SecretStr

from promptfiles.components.types import GenerationRequest

DEFAULT_MODELS: dict[str, dict[str, Any]] = {
    "gemini-2.0-flash": {"provider": "google", "model_id": "gemini-2.0-flash", "max_tokens": 8192},
    "gemini-1.5-pro": {"provider": "google", "model_id": "gemini-1.5-pro", "max_tokens": 8192},
    "gpt-4o": {"provider": "openai", "model_id": "gpt-4o", "max_tokens": 16384},
    "claude-3-5-sonnet": {"provider": "anthropic", "model_id": "claude-3-5-sonnet-latest", "max_tokens": 8192},
}


class CommonModelParams(BaseModel):
    """Common parameters for all models."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    max_tokens: int
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stop: Optional[list[str]] = None


class ModelConfig(BaseModel):
    """Model configuration."""

    provider: str
    common: CommonModelParams
    supports_system_prompt: bool = True


class ProviderStrategy(ABC):
    """Abstract base class for provider-specific strategies."""

    supports_response_schema = False

    @abstractmethod
    def create_model(
        self,
        model_config: ModelConfig,
        api_key: SecretStr,
        request: GenerationRequest,
        timeout: Optional[float] = None,
    ) -> BaseChatModel:
        """Create a model instance for this provider."""
        pass

    def _get_common_params(self, common: CommonModelParams, timeout: Optional[float]) -> dict[str, Any]:
        """Get common parameters supported by all LangChain chat models."""
        params: dict[str, Any] = {
            "model": common.model_id,
            "max_tokens": common.max_tokens,
        }
        if common.temperature is not None:
            params["temperature"] = common.temperature
        if common.top_p is not None:
            params["top_p"] = common.top_p
        if common.stop is not None:
            params["stop"] = common.stop
        if timeout is not None:
            params["timeout"] = timeout
        return params


class GoogleStrategy(ProviderStrategy):
    supports_response_schema = True

    def create_model(
        self,
        model_config: ModelConfig,
        api_key: SecretStr,
        request: GenerationRequest,
        timeout: Optional[float] = None,
    ) -> ChatGoogleGenerativeAI:
        params = self._get_common_params(model_config.common, timeout)
        params["response_mime_type"] = request.response_mime_type
        params["response_schema"] = request.response_schema
        return ChatGoogleGenerativeAI(api_key=api_key, **params)


class OpenAIStrategy(ProviderStrategy):
    def create_model(
        self,
        model_config: ModelConfig,
        api_key: SecretStr,
        request: GenerationRequest,
        timeout: Optional[float] = None,
    ) -> ChatOpenAI:
        params = self._get_common_params(model_config.common, timeout)
        return ChatOpenAI(api_key=api_key, **params)


class AnthropicStrategy(ProviderStrategy):
    def create_model(
        self,
        model_config: ModelConfig,
        api_key: SecretStr,
        request: GenerationRequest,
        timeout: Optional[float] = None,
    ) -> ChatAnthropic:
        params = self._get_common_params(model_config.common, timeout)
        return ChatAnthropic(api_key=api_key, **params)


class ModelRegistry:
    """Registry for managing LLM models."""

    _PROVIDER_STRATEGIES: dict[str, ProviderStrategy] = {
        "google": GoogleStrategy(),
        "openai": OpenAIStrategy(),
        "anthropic": AnthropicStrategy(),
    }

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path
        self.models: dict[str, ModelConfig] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load built-in model definitions, then overrides from the config file."""
        definitions = copy.deepcopy(DEFAULT_MODELS)

        if self.config_path is not None:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Model config file not found: {self.config_path}")

            with self.config_path.open("r") as f:
                config = yaml.safe_load(f) or {}

            if not isinstance(config, dict):
                raise ValueError(f"Model config file must contain a mapping: {self.config_path}")

            models = config.get("models") or {}
            if not isinstance(models, dict):
                raise ValueError(f"'models' must be a mapping of model names to definitions: {self.config_path}")
            definitions.update(models)

        # Convert flat config structure to nested
        for name, model_data in definitions.items():
            if not isinstance(model_data, dict):
                raise ValueError(f"Model '{name}' definition must be a mapping")

            common_params = {
                "model_id": model_data["model_id"],
                "max_tokens": model_data["max_tokens"],
            }

            # Only add optional parameters if they exist
            if "temperature" in model_data:
                common_params["temperature"] = model_data["temperature"]
            if "top_p" in model_data:
                common_params["top_p"] = model_data["top_p"]
            if "stop" in model_data:
                common_params["stop"] = model_data["stop"]

            self.models[name] = ModelConfig(
                provider=model_data["provider"],
                common=CommonModelParams(**common_params),
                supports_system_prompt=model_data.get("supports_system_prompt", True),
            )

    def _get_strategy(self, name: str) -> tuple[ModelConfig, ProviderStrategy]:
        if name not in self.models:
            raise ValueError(f"Model '{name}' not found in configuration")

        model_config = self.models[name]
        strategy = self._PROVIDER_STRATEGIES.get(model_config.provider)
        if not strategy:
            raise ValueError(f"Unsupported provider: {model_config.provider}")

        return model_config, strategy

    def get_model(self, name: str, api_key: SecretStr, request: GenerationRequest, timeout: Optional[float] = None) -> BaseChatModel:
        """Get a model instance configured for the given request."""
        model_config, strategy = self._get_strategy(name)
        return strategy.create_model(model_config, api_key, request, timeout)

    def supports_response_schema(self, name: str) -> bool:
        """Check whether a model enforces the response schema natively."""
        _, strategy = self._get_strategy(name)
        return strategy.supports_response_schema

    def supports_system_prompt(self, name: str) -> bool:
        model_config, _ = self._get_strategy(name)
        return model_config.supports_system_prompt

    def list_models(self) -> dict[str, dict[str, Any]]:
        """list all available models with their configurations."""
        return {
            name: {
                "provider": model.provider,
                "model_id": model.common.model_id,
                "max_tokens": model.common.max_tokens,
                "temperature": model.common.temperature,
            }
            for name, model in self.models.items()
        }
