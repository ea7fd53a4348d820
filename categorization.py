"""Rule-based categorization for imported transactions.

Rows whose export carries no category are labelled by a TransactionCategorizer:
exact merchant mappings first, then recurring-amount hints, then description
patterns. Corrections fed back through learn() become new merchant mappings.

One categorizer is built per Services container and shared by every import in
the process.
"""

import re
import threading
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Pattern

from logger import get_logger
from tools.spending import DEFAULT_CATEGORY

logger = get_logger("categorization")

LEARN_THRESHOLD = 0.8
MAX_ALTERNATIVES = 3


@dataclass(frozen=True)
class PatternRule:
    pattern: Pattern
    category: str
    confidence: float
    source: str  # merchant, description or amount_pattern


@dataclass
class Prediction:
    category: str
    confidence: float
    reasoning: str
    alternatives: List[Dict[str, object]] = field(default_factory=list)


def _rule(pattern: str, category: str, confidence: float, source: str) -> PatternRule:
    return PatternRule(re.compile(pattern, re.IGNORECASE), category, confidence, source)


def default_rules() -> List[PatternRule]:
    return [
        _rule(
            r"walmart|target|kroger|safeway|whole foods|trader joe|costco",
            "Groceries",
            0.95,
            "merchant",
        ),
        _rule(
            r"mcdonald|burger|pizza|starbucks|dunkin|chipotle",
            "Restaurants",
            0.90,
            "merchant",
        ),
        _rule(r"doordash|uber eats|grubhub|postmates", "Delivery", 0.95, "merchant"),
        _rule(r"uber|lyft|shell|chevron|exxon|bp gas", "Transportation", 0.90, "merchant"),
        _rule(r"netflix|spotify|amazon prime|disney|hulu", "Subscriptions", 0.95, "merchant"),
        _rule(r"electric|water|gas company|internet|cable", "Utilities", 0.90, "description"),
        _rule(r"rent|mortgage|property management", "Rent", 0.95, "description"),
    ]


def default_merchants() -> Dict[str, str]:
    return {
        "AMAZON.COM": "Shops",
        "PAYPAL": "Other",
        "VENMO": "Other",
        "ZELLE": "Internal Transfers",
    }


def default_amount_hints() -> Dict[str, Dict[str, object]]:
    return {
        "3495.00": {"category": "Rent", "confidence": 0.95},
        "568.00": {"category": "Loans", "confidence": 0.95},
        "426.00": {"category": "Loans", "confidence": 0.95},
    }


@dataclass
class CategorizerState:
    """Everything the categorizer knows; mutated only by learn()."""

    rules: List[PatternRule] = field(default_factory=default_rules)
    merchants: Dict[str, str] = field(default_factory=default_merchants)
    amount_hints: Dict[str, Dict[str, object]] = field(default_factory=default_amount_hints)


class TransactionCategorizer:
    """Suggests a category for a transaction description and amount.

    Args:
        state: Initial rules and mappings; the built-in defaults if None.
    """

    def __init__(self, state: Optional[CategorizerState] = None):
        self.state = state or CategorizerState()
        self._lock = threading.Lock()

    def categorize(
        self,
        description: str,
        amount: Decimal,
        existing_category: Optional[str] = None,
    ) -> Prediction:
        """Pick the most confident category for a transaction.

        Args:
            description: Merchant or description text.
            amount: Transaction amount; only its magnitude is used.
            existing_category: Category already present on the row, used as a
                               low-confidence fallback when nothing matches.

        Returns:
            Prediction with the best category and up to three alternatives.
        """
        candidates = []

        with self._lock:
            merchant = self.state.merchants.get(description.strip().upper())
            hint = self.state.amount_hints.get(f"{abs(Decimal(amount)):.2f}")
            rules = list(self.state.rules)

        if merchant:
            candidates.append((merchant, 0.95, "Exact merchant match"))

        if hint:
            candidates.append(
                (
                    hint["category"],
                    hint["confidence"],
                    f"Recurring amount pattern: ${abs(Decimal(amount)):.2f}",
                )
            )

        for rule in rules:
            if rule.pattern.search(description):
                candidates.append(
                    (rule.category, rule.confidence, f"{rule.source} pattern match")
                )

        if not candidates and existing_category:
            candidates.append((existing_category, 0.3, "Existing category (low confidence)"))

        if not candidates:
            candidates.append(
                (DEFAULT_CATEGORY, 0.1, "No patterns matched - manual review needed")
            )

        # Stable sort keeps earlier sources ahead on equal confidence
        candidates.sort(key=lambda c: c[1], reverse=True)
        best = candidates[0]
        return Prediction(
            category=best[0],
            confidence=best[1],
            reasoning=best[2],
            alternatives=[
                {"category": c[0], "confidence": c[1]}
                for c in candidates[1 : 1 + MAX_ALTERNATIVES]
            ],
        )

    def learn(self, description: str, correct_category: str, confidence: float) -> bool:
        """Record a user correction.

        Corrections above LEARN_THRESHOLD confidence become exact merchant
        mappings for the description.

        Returns:
            True if the mapping was stored.
        """
        logger.info(f'Learning: "{description}" -> {correct_category} ({confidence})')
        if confidence <= LEARN_THRESHOLD:
            return False

        with self._lock:
            self.state.merchants[description.strip().upper()] = correct_category
        return True
