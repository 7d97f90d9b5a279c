"""Code explanation, refactoring and debugging flows."""

from __future__ import annotations

from datasage.llm import run_structured
from datasage.model import (
    CodeExplanationInput,
    CodeExplanationOutput,
    DebuggingInput,
    DebuggingOutput,
    RefactoringInput,
    RefactoringOutput,
)


async def explain_code(request: CodeExplanationInput) -> CodeExplanationOutput:
    return await run_structured(
        "code_explanation",
        CodeExplanationOutput,
        "Failed to get explanation from the AI model.",
        code=request.code,
        language=request.language,
    )


async def suggest_refactoring(request: RefactoringInput) -> RefactoringOutput:
    return await run_structured(
        "refactoring",
        RefactoringOutput,
        "Failed to get refactoring suggestions from the AI model.",
        code=request.code,
        language=request.language,
    )


async def debug_error(request: DebuggingInput) -> DebuggingOutput:
    """Potential causes, debugging steps and (optionally) fixes for an error log."""
    return await run_structured(
        "debugging",
        DebuggingOutput,
        "Failed to get debugging assistance from the AI model.",
        error_log=request.error_log,
        context=request.context,
        language=request.language,
    )
