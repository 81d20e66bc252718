"""Mini README: Advisory AI features layered over the ledger.

Structure:
    * InsightSeverity - tip, warning or positive.
    * AIInsight - one advisory message for the dashboard.
    * FinancialAdvisor - insights from history and free-text transaction parsing.

Both features are optional. Any failure (no client configured, network error,
malformed reply) degrades to a placeholder insight or ``None``; only task
cancellation propagates to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..logging_utils import get_logger
from ..records.models import Account, Transaction, TransactionType, parse_amount, parse_date
from ..records.store import TransactionDraft
from .client import CompletionClient
from .prompts import (
    INSIGHTS_SYSTEM,
    INSIGHTS_USER,
    PARSE_TRANSACTION_SYSTEM,
    PARSE_TRANSACTION_USER,
)

LOGGER = get_logger(__name__)

REQUIRED_DRAFT_FIELDS = ("description", "amount", "type", "mode", "category")


class InsightSeverity(str, Enum):
    TIP = "tip"
    WARNING = "warning"
    POSITIVE = "positive"


@dataclass(slots=True, frozen=True)
class AIInsight:
    """Advisory message shown alongside the ledger."""

    title: str
    message: str
    severity: InsightSeverity

    def as_dict(self) -> dict:
        return {"title": self.title, "message": self.message, "severity": self.severity.value}


UNAVAILABLE_INSIGHT = AIInsight(
    title="Insight Unavailable",
    message="Could not generate insights at this time. Please check your connection.",
    severity=InsightSeverity.WARNING,
)


def _coerce_insight(item: Any) -> Optional[AIInsight]:
    if not isinstance(item, Mapping):
        return None
    title = item.get("title")
    message = item.get("content", item.get("message"))
    severity = item.get("type", item.get("severity"))
    if not isinstance(title, str) or not isinstance(message, str):
        return None
    try:
        level = InsightSeverity(str(severity).strip().lower())
    except ValueError:
        return None
    return AIInsight(title=title.strip(), message=message.strip(), severity=level)


def _summarise(transactions: Iterable[Transaction], currency: str) -> str:
    return "\n".join(
        f"{txn.occurred_on.isoformat()}: {txn.description} ({txn.amount} {currency} via {txn.account.value})"
        for txn in transactions
    )


class FinancialAdvisor:
    """Wrap a completion client behind failure-tolerant ledger features."""

    def __init__(
        self,
        client: Optional[CompletionClient] = None,
        *,
        categories: Sequence[str] = (),
        currency: str = "PHP",
        insight_count: int = 3,
    ) -> None:
        self.client = client
        self.categories = list(categories)
        self.currency = currency
        self.insight_count = insight_count

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def get_insights(self, transactions: Iterable[Transaction]) -> List[AIInsight]:
        """Return advisory insights, or the placeholder warning on any failure."""

        if self.client is None:
            LOGGER.debug("Insights requested without an AI client")
            return [UNAVAILABLE_INSIGHT]
        system_prompt = INSIGHTS_SYSTEM.format(insight_count=self.insight_count, currency=self.currency)
        user_prompt = INSIGHTS_USER.format(transactions=_summarise(transactions, self.currency))
        try:
            payload = await self.client.complete_json(system_prompt, user_prompt, max_tokens=800)
        except Exception as error:
            LOGGER.warning("Error getting AI insights: %s", error)
            return [UNAVAILABLE_INSIGHT]

        items = payload.get("insights") if isinstance(payload, Mapping) else payload
        if not isinstance(items, list):
            LOGGER.warning("AI insights reply was not a list: %r", payload)
            return [UNAVAILABLE_INSIGHT]
        insights = [insight for insight in (_coerce_insight(item) for item in items) if insight]
        if items and not insights:
            LOGGER.warning("AI insights reply held no usable entries")
            return [UNAVAILABLE_INSIGHT]
        return insights

    async def parse_free_text(
        self,
        text: str,
        *,
        today: Optional[date] = None,
        categories: Optional[Sequence[str]] = None,
    ) -> Optional[TransactionDraft]:
        """Best-effort draft from a note such as "paid 500 meralco via gcash"."""

        if not text or not text.strip():
            return None
        if self.client is None:
            LOGGER.debug("Free-text parsing requested without an AI client")
            return None
        today = today or date.today()
        known = list(categories) if categories is not None else self.categories
        system_prompt = PARSE_TRANSACTION_SYSTEM.format(categories="\n".join(known) or "(none)")
        user_prompt = PARSE_TRANSACTION_USER.format(today=today.isoformat(), text=text.strip())
        try:
            payload = await self.client.complete_json(system_prompt, user_prompt, max_tokens=300)
        except Exception as error:
            LOGGER.warning("Error parsing transaction: %s", error)
            return None
        return self._draft_from_payload(payload, today)

    @staticmethod
    def _draft_from_payload(payload: Any, today: date) -> Optional[TransactionDraft]:
        if not isinstance(payload, Mapping):
            LOGGER.warning("Parsed transaction was not an object: %r", payload)
            return None
        missing = [name for name in REQUIRED_DRAFT_FIELDS if payload.get(name) in (None, "")]
        if missing:
            LOGGER.warning("Parsed transaction missing fields: %s", ", ".join(missing))
            return None
        try:
            amount = abs(parse_amount(payload["amount"]))
            transaction_type = TransactionType.from_str(payload["type"])
            account = Account.from_str(payload["mode"])
            occurred_on = parse_date(payload["date"]) if payload.get("date") else today
        except ValueError as error:
            LOGGER.warning("Parsed transaction rejected: %s", error)
            return None
        description = str(payload["description"]).strip()
        category = str(payload["category"]).strip()
        if amount == 0 or not description or not category:
            return None
        return TransactionDraft(
            description=description,
            amount=amount,
            transaction_type=transaction_type,
            account=account,
            category=category,
            occurred_on=occurred_on,
        )
