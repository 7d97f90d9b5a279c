"""FastAPI app for the DataSage assistant."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from datasage import config
from datasage.code_assist import debug_error, explain_code, suggest_refactoring
from datasage.database import execute_query
from datasage.llm import FlowError
from datasage.model import (
    CodeExplanationInput,
    CodeExplanationOutput,
    DebuggingInput,
    DebuggingOutput,
    IntelligentDataAnalysisInput,
    IntelligentDataAnalysisOutput,
    NaturalLanguageQueryInput,
    NaturalLanguageQueryOutput,
    Query,
    QueryRecordsResponse,
    QueryResult,
    RefactoringInput,
    RefactoringOutput,
)
from datasage.query_engine import (
    intelligent_data_analysis,
    natural_language_query,
    result_records,
    summarize_rows,
)

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="TAP DataSage",
    description="Ask about test data, code metrics and logs. Get SQL, insights, explanations and fixes.",
    version="1.0.0",
)


@app.exception_handler(FlowError)
async def flow_error_handler(request: Request, exc: FlowError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/health")
async def health_check() -> dict:
    return {"status": "ok"}


@app.post("/query", response_model=NaturalLanguageQueryOutput)
async def query(req: NaturalLanguageQueryInput) -> NaturalLanguageQueryOutput:
    return await natural_language_query(req)


@app.post("/query/records", response_model=QueryRecordsResponse)
async def query_records(req: NaturalLanguageQueryInput) -> QueryRecordsResponse:
    resp = await natural_language_query(req)
    records = result_records(resp.query_result)
    rows = resp.query_result.rows if resp.query_result else []
    return QueryRecordsResponse(
        database_query=resp.database_query,
        insight=resp.insight,
        answer=summarize_rows(rows),
        count=len(records),
        records=records,
    )


@app.post("/analyze", response_model=IntelligentDataAnalysisOutput)
async def analyze(req: IntelligentDataAnalysisInput) -> IntelligentDataAnalysisOutput:
    return await intelligent_data_analysis(req)


@app.post("/explain", response_model=CodeExplanationOutput)
async def explain(req: CodeExplanationInput) -> CodeExplanationOutput:
    return await explain_code(req)


@app.post("/refactor", response_model=RefactoringOutput)
async def refactor(req: RefactoringInput) -> RefactoringOutput:
    return await suggest_refactoring(req)


@app.post("/debug", response_model=DebuggingOutput)
async def debug(req: DebuggingInput) -> DebuggingOutput:
    return await debug_error(req)


@app.post("/execute", response_model=QueryResult)
async def execute(req: Query) -> QueryResult:
    return execute_query(req)


if __name__ == "__main__":
    uvicorn.run("datasage.main:app", host="0.0.0.0", port=8000, reload=True)
