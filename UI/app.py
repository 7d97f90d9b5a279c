from typing import Any, Dict, Optional

import plotly.express as px
import requests
import streamlit as st
from pydantic import ValidationError

from datasage import config
from datasage.chart import chart_frame, pick_chart_columns, to_frame
from datasage.model import (
    CodeExplanationInput,
    DebuggingInput,
    NaturalLanguageQueryInput,
    QueryResult,
    RefactoringInput,
    field_errors,
)


def _validate(model, fields: Dict[str, Any], slots: Dict[str, Any]):
    """Return the validated request, or None after showing each error under its field."""
    for slot in slots.values():
        slot.empty()
    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        for field, message in field_errors(exc).items():
            slots.get(field, st).error(message)
        return None


def _post(path: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    try:
        r = requests.post(f"{config.API_URL}{path}", json=payload, timeout=config.REQUEST_TIMEOUT)
        r.raise_for_status()
    except requests.HTTPError as exc:
        try:
            detail = exc.response.json().get("detail")
        except ValueError:
            detail = exc.response.text
        st.error(f"Request failed: {detail}")
        return None
    except requests.RequestException as exc:
        st.error(f"Could not reach the DataSage API: {exc}")
        return None
    return r.json()


def _section(title: str, text: Optional[str]) -> None:
    if text:
        st.write(f"**{title}**")
        st.markdown(text)


def _render_result(data: Optional[Dict[str, Any]]) -> None:
    if data is None:
        st.error("Could not execute the generated SQL query.")
        return
    result = QueryResult.model_validate(data)
    if not result.rows:
        st.info("No data returned for this query.")
        return

    st.dataframe(to_frame(result), use_container_width=True)

    columns = pick_chart_columns(result)
    if columns:
        df = chart_frame(result, columns)
        fig = px.bar(df, x=df.columns[0], y=columns.value, title=f"{columns.value} by {df.columns[0]}")
        st.plotly_chart(fig, use_container_width=True)


def query_tab() -> None:
    question = st.text_area(
        "Your Query",
        placeholder="e.g., Show me the test cases that failed most frequently in the last week",
    )
    query_slot = st.empty()
    if not st.button("Query Data"):
        return
    req = _validate(NaturalLanguageQueryInput, {"query": question}, {"query": query_slot})
    if req is None:
        return

    with st.spinner("Fetching query results..."):
        data = _post("/query", req.model_dump(by_alias=True))
    if data is None:
        return

    st.write("**Actionable Insight**")
    st.success(data.get("insight") or "")
    with st.expander("View Generated SQL Query"):
        st.code(data.get("databaseQuery") or "", language="sql")
    _render_result(data.get("queryResult"))

    if not data.get("databaseQuery"):
        return
    with st.spinner("Analyzing data..."):
        analysis = _post("/analyze", {"queryString": data["databaseQuery"]})
    if analysis:
        st.subheader("Intelligent Data Analysis")
        _section("Summary", analysis.get("summary"))
        _section("Anomalies & Bottlenecks", analysis.get("anomalies"))
        _section("Patterns", analysis.get("patterns"))


def explain_tab() -> None:
    code = st.text_area("Code Snippet", key="explain_code")
    code_slot = st.empty()
    language = st.text_input("Language (optional)", key="explain_language")
    if not st.button("Explain Code"):
        return
    req = _validate(CodeExplanationInput, {"code": code, "language": language}, {"code": code_slot})
    if req is None:
        return
    with st.spinner("Explaining..."):
        data = _post("/explain", req.model_dump(by_alias=True))
    if data:
        _section("Explanation", data.get("explanation"))


def refactor_tab() -> None:
    code = st.text_area(
        "Code Snippet",
        key="refactor_code",
        placeholder="function checkAdmin(user) {\n  if (user.role === 'admin') {\n    return true;\n  } else {\n    return false;\n  }\n}",
    )
    code_slot = st.empty()
    language = st.text_input("Language (optional)", key="refactor_language")
    if not st.button("Suggest Refactoring"):
        return
    req = _validate(RefactoringInput, {"code": code, "language": language}, {"code": code_slot})
    if req is None:
        return
    with st.spinner("Analyzing code..."):
        data = _post("/refactor", req.model_dump(by_alias=True))
    if data:
        _section("Refactoring Suggestions", data.get("suggestions"))


def debug_tab() -> None:
    error_log = st.text_area(
        "Error Log / Message",
        placeholder='Traceback (most recent call last):\n  File "main.py", line 10, in <module>\n    result = 10 / 0\nZeroDivisionError: division by zero',
    )
    error_log_slot = st.empty()
    context = st.text_area("Context (optional)", key="debug_context")
    language = st.text_input("Language (optional)", key="debug_language")
    if not st.button("Debug Error"):
        return
    req = _validate(
        DebuggingInput,
        {"errorLog": error_log, "context": context, "language": language},
        {"errorLog": error_log_slot},
    )
    if req is None:
        return
    with st.spinner("Analyzing error..."):
        data = _post("/debug", req.model_dump(by_alias=True))
    if data:
        _section("Potential Causes", data.get("potentialCauses"))
        _section("Debugging Suggestions", data.get("suggestions"))
        _section("Suggested Fixes", data.get("suggestedFixes"))
        _section("Relevant Resources", data.get("relevantResources"))


st.title("TAP DataSage")
st.caption("Your LLM-Based Data Assistant for AI & Coding")

tabs = st.tabs(["Query", "Explain", "Refactor", "Debug"])
with tabs[0]:
    query_tab()
with tabs[1]:
    explain_tab()
with tabs[2]:
    refactor_tab()
with tabs[3]:
    debug_tab()
