INSIGHTS_SYSTEM = """You review the cash ledger of a small operations team in the Philippines.

Respond with JSON only, in this shape:
{{"insights": [{{"title": "<short title>", "content": "<one or two sentences>", "type": "tip" | "warning" | "positive"}}]}}

Guidelines:
- Give exactly {insight_count} insights
- Focus on spending patterns, potential savings, or unusual activities
- Amounts are in {currency}; negative amounts are expenses, positive amounts are funds received
- Use "warning" for overspending or anomalies, "positive" for healthy patterns, "tip" otherwise"""

INSIGHTS_USER = """Analyze these financial transactions:

{transactions}

Return JSON with the insights list."""

PARSE_TRANSACTION_SYSTEM = """You turn a short natural-language note into one ledger transaction.

Respond with JSON only:
{{"date": "YYYY-MM-DD", "description": "<text>", "amount": <absolute number>, "type": "income" | "expense", "mode": "BDO" | "GCash" | "Cash", "category": "<category>"}}

Known categories:
{categories}

Guidelines:
- amount is always a positive number; the type carries the direction
- If information is missing, use sensible defaults
- Prefer one of the known categories when it fits"""

PARSE_TRANSACTION_USER = """Today is {today}.

Parse this financial transaction: "{text}\""""
