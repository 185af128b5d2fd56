"""AI agents package."""

from nexus_manager.agents.ai_agents import (
    FinancialInsight,
    FinancialInsightAgent,
    InsightOutcome,
    JobDescriptionAgent,
    JobDescriptionDraft,
)

__all__ = [
    "FinancialInsight",
    "FinancialInsightAgent",
    "InsightOutcome",
    "JobDescriptionAgent",
    "JobDescriptionDraft",
]
