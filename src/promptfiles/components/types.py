from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileRecord(BaseModel):
    """One generated file as returned by the model."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., alias="file_name", description="Name of the file: relative_path/file_name.file_extension")
    code: str = Field(..., alias="source_code", description="Source code located in the file.")


class GenerationRequest(BaseModel):
    """Instruction and declared response shape for a single generation call."""

    prompt: str = Field(..., description="Prompt as entered by the user")
    instruction: str = Field(..., description="Prompt wrapped in the code generation framing")
    response_schema: dict[str, Any] = Field(..., description="Schema the response text must follow")
    response_mime_type: str = Field(..., description="Requested response format")


@dataclass
class FileWriteOutcome:
    """Result of writing a single record."""

    index: int
    name: str
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class MaterializeResult:
    """Result of projecting a response onto the output directory."""

    output_dir: Path
    outcomes: list[FileWriteOutcome] = field(default_factory=list)
    parse_error: Optional[Exception] = None

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def written(self) -> list[FileWriteOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failures(self) -> list[FileWriteOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return self.parse_error is None and not self.failures
