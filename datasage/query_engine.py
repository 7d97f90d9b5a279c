"""LLM-driven NL -> SQL translation and test-data analysis over the mock database."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

from datasage import config
from datasage.database import execute_query
from datasage.llm import run_structured
from datasage.model import (
    IntelligentDataAnalysisInput,
    IntelligentDataAnalysisOutput,
    NaturalLanguageQueryInput,
    NaturalLanguageQueryOutput,
    Query,
    QueryResult,
    TranslatedQuery,
)

logger = logging.getLogger(__name__)


def _strip_fences(text: str) -> str:
    """
    Unwrap SQL the model returned inside a Markdown code fence; anything else is kept as-is.
    """
    m = re.match(r"^\s*```[a-zA-Z0-9]*\s*\n(.*?)\n?\s*```\s*$", text, flags=re.DOTALL)
    return m.group(1) if m else text


def summarize_rows(rows: Iterable[list]) -> str:
    """
    Provide a succinct natural-language line alongside the table data.
    """
    rows = list(rows)
    if not rows:
        return "No rows matched your query."

    if len(rows) == 1 and len(rows[0]) == 1:
        return f"The result is {rows[0][0]}."

    preview = min(len(rows), 5)
    return f"Found {len(rows)} row(s). Showing top {preview}."


def _table_markdown(result: QueryResult, max_rows: int = config.MAX_PROMPT_ROWS) -> str:
    """Flatten a result into a Markdown table, capped at max_rows rows."""
    if not result.columns:
        return "(no columns)"

    header = " | ".join(result.columns)
    sep = " | ".join(["---"] * len(result.columns))
    body = "\n".join(" | ".join(map(str, row)) for row in result.rows[:max_rows])
    return f"{header}\n{sep}\n{body}" if body else f"{header}\n{sep}"


def _run_generated_sql(sql: str) -> Optional[QueryResult]:
    """Execute translated SQL; any failure is logged and reported as no result."""
    if not sql.strip():
        logger.warning("Generated database query is empty, skipping execution.")
        return None
    try:
        return execute_query(Query(query_string=sql))
    except Exception:
        logger.exception("Error executing query: %s", sql)
        return None


async def natural_language_query(
    request: NaturalLanguageQueryInput,
) -> NaturalLanguageQueryOutput:
    translated = await run_structured(
        "translate_query",
        TranslatedQuery,
        "Failed to get response from the query translation model.",
        query=request.query,
    )
    sql = _strip_fences(translated.database_query)

    return NaturalLanguageQueryOutput(
        insight=translated.insight,
        database_query=sql,
        query_result=_run_generated_sql(sql),
    )


async def intelligent_data_analysis(
    request: IntelligentDataAnalysisInput,
) -> IntelligentDataAnalysisOutput:
    result = execute_query(Query(query_string=request.query_string))
    return await run_structured(
        "data_analysis",
        IntelligentDataAnalysisOutput,
        "Failed to get analysis from the AI model.",
        query_string=request.query_string,
        table=_table_markdown(result),
    )


def result_records(result: Optional[QueryResult]) -> List[Dict[str, str]]:
    """Turn a columns/rows result into a list of {column: cell} records."""
    records: List[Dict[str, str]] = []
    if result and result.columns and result.rows:
        cols = result.columns
        for r in result.rows:
            records.append({cols[i]: r[i] for i in range(len(cols))})
    return records
