"""
Evaluation Record Schema

Validates uploaded evaluation documents ({"responses": [...]}) and loads them
into typed, immutable records. A single malformed record rejects the whole batch.
"""

from __future__ import annotations

import json
import math
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, PlainValidator, StrictStr, ValidationError

from eval_radar_core.domain.constants import METRIC_KEYS, RecordStatus

# Scalar fields are strict (no string <-> number coercion, no bools as numbers)
_RECORD_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    allow_inf_nan=False,
)


def _finite_number(value: Any) -> int | float:
    """Accept a JSON number as-is, so integers keep serializing as integers"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Input should be a valid number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # int beyond float range
        finite = False
    if not finite:
        raise ValueError("Input should be a finite number")
    return value


Number = Annotated[Union[int, float], PlainValidator(_finite_number)]


class BatchLoadError(Exception):
    """Error raised when an uploaded document cannot become a batch"""
    pass


class BatchParseError(BatchLoadError):
    """The document text is not well-formed JSON"""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(f"Could not parse JSON: {message}")


@dataclass(frozen=True)
class ValidationIssue:
    """One structural mismatch (missing field, wrong type, invalid enum value)"""
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class BatchValidationError(BatchLoadError):
    """The document parsed but does not match the evaluation record schema"""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        lines = [f"Invalid evaluation batch ({len(issues)} issue{'s' if len(issues) != 1 else ''}):"]
        lines.extend(f"- {issue}" for issue in issues)
        super().__init__("\n".join(lines))

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "BatchValidationError":
        issues = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err["loc"]) or "<root>"
            issues.append(ValidationIssue(location=location, message=err["msg"]))
        return cls(issues)


class EvaluationMetrics(BaseModel):
    """Quality scores of a scored record (no fixed scale is assumed)"""
    model_config = _RECORD_CONFIG

    relevance_score: Number
    factual_accuracy: Number
    coherence_score: Number
    response_quality: Number

    def values(self) -> list[int | float]:
        """Metric values in METRIC_KEYS order"""
        return [getattr(self, key) for key in METRIC_KEYS]


class RecordError(BaseModel):
    """Error attached to a failed invocation"""
    model_config = _RECORD_CONFIG

    type: StrictStr
    message: StrictStr


class EvaluationRecord(BaseModel):
    """One logged model invocation"""
    model_config = _RECORD_CONFIG

    id: StrictStr
    timestamp: StrictStr
    model: StrictStr
    prompt_tokens: Number
    response_time_ms: Number
    status: RecordStatus
    cost_usd: Number
    temperature: Number
    max_tokens: Number
    prompt_template: StrictStr
    # Optional fields: absent and null both become None
    completion_tokens: Optional[Number] = None
    total_tokens: Optional[Number] = None
    output: Optional[StrictStr] = None
    evaluation_metrics: Optional[EvaluationMetrics] = None
    error: Optional[RecordError] = None


class EvaluationBatch(BaseModel):
    """Top-level shape of one uploaded document"""
    model_config = _RECORD_CONFIG

    responses: list[EvaluationRecord]

    def __len__(self) -> int:
        return len(self.responses)


def validate_batch(raw: Any) -> EvaluationBatch:
    """
    Validate an untyped value (the result of JSON decoding) as an evaluation batch

    Args:
        raw: Decoded JSON value

    Returns:
        EvaluationBatch: Typed batch

    Raises:
        BatchValidationError: Listing every structural mismatch in the document
    """
    try:
        return EvaluationBatch.model_validate(raw)
    except ValidationError as e:
        raise BatchValidationError.from_pydantic(e) from e


def parse_batch_text(text: str) -> EvaluationBatch:
    """
    Decode JSON text and validate it as an evaluation batch

    Raises:
        BatchParseError: If the text is not well-formed JSON
        BatchValidationError: If the decoded value does not match the schema
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise BatchParseError(e.msg, line=e.lineno, column=e.colno) from e
    except RecursionError as e:
        raise BatchParseError("document is nested too deeply") from e
    except ValueError as e:
        # e.g. integer literals past the int conversion digit limit
        raise BatchParseError(str(e)) from e
    return validate_batch(raw)


def load_batch(file_path: str | Path) -> EvaluationBatch:
    """
    Load an evaluation batch JSON file

    Args:
        file_path: Path to the JSON file

    Returns:
        EvaluationBatch

    Raises:
        FileNotFoundError: If the file does not exist
        BatchLoadError: If the file is not a valid evaluation batch
    """
    with open(file_path, "r", encoding="utf-8") as f:
        text = f.read()
    return parse_batch_text(text)


def serialize_batch(batch: EvaluationBatch) -> dict:
    """Convert a batch back to its wire format (absent optional fields as null)"""
    return batch.model_dump(mode="json")


def dump_batch_json(batch: EvaluationBatch, indent: int | None = 2) -> str:
    return json.dumps(serialize_batch(batch), indent=indent, ensure_ascii=False)


def find_duplicate_ids(batch: EvaluationBatch) -> list[str]:
    """Record ids that occur more than once, in first-seen order"""
    counts = Counter(record.id for record in batch.responses)
    return [record_id for record_id, count in counts.items() if count > 1]
