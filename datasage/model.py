"""Request/response records for every DataSage flow.

JSON field names are camelCase on the wire; Python attributes stay snake_case
and either form is accepted on input.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

QUERY_MIN_LENGTH = 1
EXPLAIN_MIN_LENGTH = 10
REFACTOR_MIN_LENGTH = 20
ERROR_LOG_MIN_LENGTH = 10


def _require_length(value: str, minimum: int, message: str) -> str:
    if len(value) < minimum:
        raise ValueError(message)
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Map each invalid field (by its JSON name) to its first error message."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "__root__"
        message = str(err.get("ctx", {}).get("error") or err["msg"])
        errors.setdefault(field, message)
    return errors


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Mock database
# ---------------------------------------------------------------------------


class Query(Record):
    query_string: str


class QueryResult(Record):
    columns: List[str]
    rows: List[List[str]]


# ---------------------------------------------------------------------------
# Natural-language query
# ---------------------------------------------------------------------------


class NaturalLanguageQueryInput(Record):
    query: str = Field(description="The natural language query from the user.")

    @field_validator("query")
    @classmethod
    def _check_query(cls, value: str) -> str:
        return _require_length(value, QUERY_MIN_LENGTH, "Please enter a query.")


class TranslatedQuery(Record):
    """What the translation prompt is expected to generate."""

    insight: str = Field(description="Actionable insight derived from the query.")
    database_query: str = Field(
        description="The SQL query translated from the natural language query."
    )


class NaturalLanguageQueryOutput(TranslatedQuery):
    query_result: Optional[QueryResult] = None


class QueryRecordsResponse(Record):
    database_query: str
    insight: str
    answer: str
    count: int
    records: List[Dict[str, str]]


# ---------------------------------------------------------------------------
# Intelligent data analysis
# ---------------------------------------------------------------------------


class IntelligentDataAnalysisInput(Record):
    query_string: str = Field(
        description="The query string used to fetch the data for analysis."
    )

    @field_validator("query_string")
    @classmethod
    def _check_query_string(cls, value: str) -> str:
        return _require_length(value, QUERY_MIN_LENGTH, "Please enter a query.")


class IntelligentDataAnalysisOutput(Record):
    summary: str = Field(description="A summary of the analysis results.")
    anomalies: str = Field(description="Identified anomalies and potential bottlenecks.")
    patterns: str = Field(description="Identified patterns in the test results.")


# ---------------------------------------------------------------------------
# Code assistance
# ---------------------------------------------------------------------------


class CodeExplanationInput(Record):
    code: str = Field(description="The code snippet to be explained.")
    language: OptionalText = Field(
        default=None,
        description="The programming language of the code snippet (e.g., python, javascript).",
    )

    @field_validator("code")
    @classmethod
    def _check_code(cls, value: str) -> str:
        return _require_length(
            value,
            EXPLAIN_MIN_LENGTH,
            f"Please enter a code snippet (at least {EXPLAIN_MIN_LENGTH} characters).",
        )


class CodeExplanationOutput(Record):
    explanation: str = Field(
        description="A clear and concise explanation of the provided code snippet."
    )


class RefactoringInput(Record):
    code: str = Field(description="The code snippet to be analyzed for refactoring.")
    language: OptionalText = Field(
        default=None,
        description="The programming language of the code snippet (e.g., python, javascript).",
    )

    @field_validator("code")
    @classmethod
    def _check_code(cls, value: str) -> str:
        return _require_length(
            value,
            REFACTOR_MIN_LENGTH,
            f"Please enter a code snippet (at least {REFACTOR_MIN_LENGTH} characters) "
            "for refactoring analysis.",
        )


class RefactoringOutput(Record):
    suggestions: str = Field(
        description=(
            "Suggestions for refactoring the code to improve readability, efficiency, "
            "or maintainability, along with explanations."
        )
    )


class DebuggingInput(Record):
    error_log: str = Field(description="The error log or message to be analyzed.")
    context: OptionalText = Field(
        default=None,
        description="What the code was doing or what was attempted when the error occurred.",
    )
    language: OptionalText = Field(
        default=None,
        description="The programming language associated with the error.",
    )

    @field_validator("error_log")
    @classmethod
    def _check_error_log(cls, value: str) -> str:
        return _require_length(
            value,
            ERROR_LOG_MIN_LENGTH,
            "Please enter the error log or message "
            f"(at least {ERROR_LOG_MIN_LENGTH} characters).",
        )


class DebuggingOutput(Record):
    potential_causes: str = Field(
        description="A list of potential root causes for the error."
    )
    suggestions: str = Field(
        description="Actionable suggestions and steps for debugging the error."
    )
    suggested_fixes: Optional[str] = Field(
        default=None,
        description="Potential code fixes or approaches to resolve the error.",
    )
    relevant_resources: Optional[str] = Field(
        default=None,
        description="Links to relevant documentation or resources, if applicable.",
    )
