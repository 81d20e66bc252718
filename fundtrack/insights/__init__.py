"""Mini README: Optional AI assistance for the fund tracker.

``advisor`` produces dashboard insights and drafts transactions from free
text; ``client`` talks to the model provider through litellm; ``prompts``
holds the prompt templates.
"""

from .advisor import UNAVAILABLE_INSIGHT, AIInsight, FinancialAdvisor, InsightSeverity
from .client import CompletionClient, LiteLLMCompletionClient

__all__ = [
    "AIInsight",
    "CompletionClient",
    "FinancialAdvisor",
    "InsightSeverity",
    "LiteLLMCompletionClient",
    "UNAVAILABLE_INSIGHT",
]
