"""Prompt rendering and structured model calls shared by every flow."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Type, TypeVar

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import PromptTemplate
from langchain_openai import AzureChatOpenAI
from pydantic import BaseModel

from datasage import config

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

OutputT = TypeVar("OutputT", bound=BaseModel)


class FlowError(RuntimeError):
    """The model gave no usable answer for a flow."""


@lru_cache(maxsize=None)
def _read_template(name: str) -> str:
    return (PROMPTS_DIR / f"{name}.txt").read_text(encoding="utf-8")


def load_prompt(name: str, parser: PydanticOutputParser) -> PromptTemplate:
    """
    Build a jinja2 prompt from prompts/<name>.txt.

    Templates use {% if %} blocks for optional fields and receive the
    parser's JSON format instructions as ``format_instructions``.
    """
    return PromptTemplate.from_template(
        _read_template(name),
        template_format="jinja2",
        partial_variables={"format_instructions": parser.get_format_instructions()},
    )


def _make_llm() -> BaseChatModel:
    return AzureChatOpenAI(
        api_key=config.AZURE_OPENAI_API_KEY,
        api_version=config.AZURE_API_VERSION,
        azure_deployment=config.AZURE_DEPLOYMENT_MODEL,
        azure_endpoint=config.AZURE_OPENAI_ENDPOINT,
        temperature=config.TEMPERATURE,
    )


@lru_cache(maxsize=1)
def get_llm() -> BaseChatModel:
    return _make_llm()


async def run_structured(
    template_name: str,
    output_model: Type[OutputT],
    failure_message: str,
    **variables: Any,
) -> OutputT:
    """
    Render a template, call the chat model and parse its reply into output_model.

    Raises FlowError(failure_message) when the reply is empty, is not JSON,
    or does not fit the schema, and when the model call itself fails.
    """
    parser = PydanticOutputParser(pydantic_object=output_model)
    chain = load_prompt(template_name, parser) | get_llm() | parser
    try:
        return await chain.ainvoke(variables)
    except OutputParserException as exc:
        logger.warning(
            "Output of %s did not match %s: %s",
            template_name,
            output_model.__name__,
            exc,
        )
        raise FlowError(failure_message) from exc
    except Exception as exc:
        logger.exception("Model call failed for %s", template_name)
        raise FlowError(failure_message) from exc
