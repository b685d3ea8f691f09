import os

from openai import OpenAI

from hisab.core import settings
from hisab.domain.aggregation import resolve_category
from hisab.domain.currency import currency_symbol
from hisab.logger import get_logger
from hisab.models import Category, Transaction

logger = get_logger(__name__)

NO_CLIENT_MESSAGE = "Unable to access AI service. Please check API Key configuration."
EMPTY_RESPONSE_MESSAGE = "No insights available at the moment."
FAILURE_MESSAGE = "Sorry, I couldn't generate insights right now. Please try again later."


def _plain_amount(amount: float) -> str:
    text = repr(amount)
    return text[:-2] if text.endswith(".0") else text


def build_digest(
    transactions: list[Transaction],
    categories: list[Category],
    currency: str,
    limit: int,
) -> str:
    symbol = currency_symbol(currency)
    lines = []
    for tx in transactions[:limit]:
        category_name, _ = resolve_category(categories, tx.category_id)
        lines.append(
            f"{tx.date.isoformat()}: {tx.description} ({category_name}) - "
            f"{symbol}{_plain_amount(tx.amount)} [{tx.type.value}]"
        )
    return "\n".join(lines)


class InsightGenerator:
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        limit: int | None = None,
    ):
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.client = None
        if api_key:
            self.client = OpenAI(
                api_key=api_key,
                base_url=base_url or os.getenv("OPENAI_BASE_URL") or None,
            )
        self.model = model or settings.OPENAI_MODEL
        self.limit = limit or settings.INSIGHT_TRANSACTION_LIMIT

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def generate(
        self,
        transactions: list[Transaction],
        categories: list[Category],
        currency: str = "INR",
    ) -> str:
        if self.client is None:
            logger.warning("[INSIGHTS] OPENAI_API_KEY not set, insights unavailable.")
            return NO_CLIENT_MESSAGE

        digest = build_digest(transactions, categories, currency, self.limit)
        prompt = f"""
        Analyze the following list of recent transactions.

        Data:
        {digest}

        Please provide a brief, friendly, and actionable summary in 3 bullet points.
        Focus on:
        1. Spending trends.
        2. Unusual expenses (if any).
        3. One tip for saving money based on this data.

        Keep it under 150 words total. Do not use markdown bolding too heavily.
        """

        try:
            response = self.client.responses.create(
                model=self.model,
                instructions="You are a helpful financial assistant.",
                input=prompt,
            )
            text = self._extract_output_text(response)
        except Exception as e:
            logger.error(f"[INSIGHTS] LLM Error: {e}")
            return FAILURE_MESSAGE

        if not text or not text.strip():
            return EMPTY_RESPONSE_MESSAGE
        return text.strip()

    @staticmethod
    def _extract_output_text(response: object) -> str | None:
        output_text = getattr(response, "output_text", None)
        if isinstance(output_text, str) and output_text:
            return output_text

        output = getattr(response, "output", None)
        if not output:
            return None

        parts: list[str] = []
        for item in output:
            for block in getattr(item, "content", None) or []:
                if getattr(block, "type", None) in {"output_text", "text"}:
                    text = getattr(block, "text", None)
                    if text:
                        parts.append(text)

        return "".join(parts) or None
