"""
AI Agents for Nexus Manager

Both agents talk to Google Gemini through google-generativeai.

CRITICAL BOUNDARIES:

1. FINANCIAL INSIGHT AGENT:
   - CAN: Comment on the aggregates it is given
   - CANNOT: See the full ledger (only the condensed summary goes out)
   - CANNOT: Change any record

2. JOB DESCRIPTION AGENT:
   - CAN: Draft a description and requirements for a job title
   - CANNOT: Create the proforma itself (the HR service does that)

The model is an ADVISOR, never a bookkeeper.
Every failure degrades to a fixed message; nothing raises to the UI.
"""

import json
from enum import Enum
from typing import Optional

import google.generativeai as genai
import structlog
from pydantic import BaseModel, Field, ValidationError
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from nexus_manager.accounting import reports
from nexus_manager.config import AppSettings, GeminiSettings, get_settings
from nexus_manager.models import BusinessData


logger = structlog.get_logger(__name__)


INSIGHT_MISSING_KEY = "API Key not configured."
INSIGHT_EMPTY = "No insights generated."
INSIGHT_FAILED = "Failed to generate financial insights."

JOB_DESCRIPTION_MISSING_KEY = "API Key missing"
JOB_DESCRIPTION_FAILED = "Error generating description."


class InsightOutcome(str, Enum):
    """How an insight request ended."""
    GENERATED = "generated"
    MISSING_KEY = "missing_key"
    EMPTY = "empty"
    FAILED = "failed"


class FinancialInsight(BaseModel):
    """Text to show on the dashboard and the outcome that produced it."""

    text: str
    outcome: InsightOutcome
    error: Optional[str] = None


class JobDescriptionDraft(BaseModel):
    """Description and key requirements proposed for a job title."""

    description: str = ""
    requirements: list[str] = Field(default_factory=list)


def _extract_json(text: str) -> dict:
    """Parse the first JSON object found in a model reply."""
    start = text.find("{")
    end = text.rfind("}") + 1
    if start < 0 or end <= start:
        raise ValueError("No JSON object in model reply")
    return json.loads(text[start:end])


class _GeminiAgent:
    """Shared model setup and retrying call."""

    system_instruction: Optional[str] = None
    response_mime_type: Optional[str] = None
    retry_wait = wait_exponential(multiplier=1, min=2, max=10)

    def __init__(self, settings: Optional[GeminiSettings] = None):
        self._settings = settings or get_settings().gemini
        self._model = None
        if self._settings.is_configured:
            self._configure_genai()

    @property
    def is_configured(self) -> bool:
        return self._settings.is_configured

    def _configure_genai(self):
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        generation_config = {
            "temperature": self._settings.temperature,
            "max_output_tokens": self._settings.max_tokens,
        }
        if self.response_mime_type:
            generation_config["response_mime_type"] = self.response_mime_type
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            system_instruction=self.system_instruction,
            generation_config=generation_config,
        )

    async def _generate(self, prompt: str) -> str:
        """Send one prompt, retrying transient failures; returns the reply text."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._settings.max_retries),
            wait=self.retry_wait,
            reraise=True,
        ):
            with attempt:
                response = await self._model.generate_content_async(prompt)
        return (response.text or "").strip()


class FinancialInsightAgent(_GeminiAgent):
    """
    Short CFO-style commentary on the state of the books.

    RESPONSIBILITIES:
    - Profitability (net income margin)
    - Liquidity (cash plus receivables)
    - One recommendation on receivables or payables
    """

    system_instruction = "You are a senior financial analyst providing insights for a CFO."

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        super().__init__(settings)
        self._app_settings = app_settings or get_settings().app

    def build_prompt(self, data: BusinessData) -> str:
        summary = reports.financial_summary(
            data,
            recent_count=self._app_settings.recent_transaction_count,
            currency_symbol=self._app_settings.currency_symbol,
        )
        payload = json.dumps(summary.to_prompt_dict(), indent=2)

        return f"""Analyze the following financial data for "{self._app_settings.company_name}".
Provide a concise executive summary in 3 bullet points covering:
1. Profitability (Net Income margin).
2. Liquidity (Current Cash + Receivables).
3. One specific recommendation regarding AR (Receivables) or AP (Payables).

Keep it professional, brief, and actionable. Use Markdown for formatting.

Data:
{payload}"""

    async def analyze(self, data: BusinessData) -> FinancialInsight:
        """
        Ask the model for an executive summary of `data`.

        Returns:
            FinancialInsight with the model's Markdown text, or with one of
            the fixed fallback messages and the matching outcome.
        """
        if not self.is_configured:
            return FinancialInsight(text=INSIGHT_MISSING_KEY, outcome=InsightOutcome.MISSING_KEY)

        try:
            text = await self._generate(self.build_prompt(data))
        except Exception as e:
            logger.error("financial_insight_failed", error=str(e))
            return FinancialInsight(
                text=INSIGHT_FAILED,
                outcome=InsightOutcome.FAILED,
                error=str(e),
            )

        if not text:
            return FinancialInsight(text=INSIGHT_EMPTY, outcome=InsightOutcome.EMPTY)
        return FinancialInsight(text=text, outcome=InsightOutcome.GENERATED)

    async def generate_insight(self, data: BusinessData) -> str:
        """The insight text only; see analyze() for the outcome."""
        return (await self.analyze(data)).text


class JobDescriptionAgent(_GeminiAgent):
    """Drafts the body of a job proforma from its title and department."""

    response_mime_type = "application/json"

    @staticmethod
    def build_prompt(title: str, department: str) -> str:
        return f"""Create a job description and list of 5 key requirements for a {title} in the {department} department.

Respond with ONLY a JSON object in this exact format:
{{"description": "two or three sentences", "requirements": ["requirement 1", "requirement 2"]}}"""

    async def generate(self, title: str, department: str) -> JobDescriptionDraft:
        """
        Draft a description and requirements.

        Never raises: a missing key or a failed/unparsable reply yields
        a draft carrying a fixed message and no requirements.
        """
        if not self.is_configured:
            return JobDescriptionDraft(description=JOB_DESCRIPTION_MISSING_KEY)

        try:
            text = await self._generate(self.build_prompt(title, department))
            draft = JobDescriptionDraft.model_validate(_extract_json(text))
        except (ValueError, ValidationError) as e:
            logger.warning("job_description_unparsable", title=title, error=str(e))
            return JobDescriptionDraft(description=JOB_DESCRIPTION_FAILED)
        except Exception as e:
            logger.error("job_description_failed", title=title, error=str(e))
            return JobDescriptionDraft(description=JOB_DESCRIPTION_FAILED)

        return JobDescriptionDraft(
            description=draft.description.strip(),
            requirements=[r.strip() for r in draft.requirements if r.strip()],
        )
