"""Environment-driven settings, loaded once from .env when present."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Azure OpenAI chat model
AZURE_OPENAI_API_KEY = os.getenv("AZURE_OPENAI_API_KEY")
AZURE_OPENAI_ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT")
AZURE_API_VERSION = os.getenv("AZURE_API_VERSION")
AZURE_DEPLOYMENT_MODEL = os.getenv("AZURE_DEPLOYMENT_MODEL")
TEMPERATURE = float(os.getenv("DATASAGE_TEMPERATURE", "0"))

# Front-end -> API
API_URL = os.getenv("DATASAGE_API_URL", "http://localhost:8000").rstrip("/")
REQUEST_TIMEOUT = int(os.getenv("DATASAGE_REQUEST_TIMEOUT", "120"))

LOG_LEVEL = os.getenv("DATASAGE_LOG_LEVEL", "INFO").upper()

# Rows passed to the model when summarizing a table
MAX_PROMPT_ROWS = 30
