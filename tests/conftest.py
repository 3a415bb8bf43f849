import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage
from pydantic import SecretStr

# Add src directory to Python path
src_path = str(Path(__file__).parent.parent / "src")
if src_path not in sys.path:
    sys.path.append(src_path)

from promptfiles.code_generator import FileGeneratorAgent
from promptfiles.components.models import ModelRegistry
from promptfiles.materializer import FileMaterializer

VALID_RESPONSE = """[
  {"file_name": "main.py", "source_code": "print('hello')\\n"},
  {"file_name": "src/pkg/util.py", "source_code": "def add(a, b):\\n    return a + b\\n"}
]"""


@pytest.fixture
def valid_response():
    """A response text holding two well-formed file records."""
    return VALID_RESPONSE


@pytest.fixture
def mock_model(valid_response):
    """Create a mock chat model answering with the valid response."""
    mock = MagicMock()
    mock.invoke.return_value = AIMessage(content=valid_response)
    return mock


@pytest.fixture
def model_registry(mock_model):
    """Create a registry double that hands out the mock model."""
    registry = MagicMock(spec=ModelRegistry)
    registry.get_model.return_value = mock_model
    registry.supports_response_schema.return_value = True
    registry.supports_system_prompt.return_value = True
    return registry


@pytest.fixture
def file_generator(model_registry):
    return FileGeneratorAgent(model_registry, "test-model", SecretStr("test-key"), timeout=5)


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture
def materializer(output_dir):
    return FileMaterializer(output_dir)
