# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: LearnedPatterns
# -----------------------------------------------------------------------------
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from learning.CorrectionRecord import CorrectionRecord

MIN_USAGE = 2
TOP_CATEGORIES = 20
TOP_MERCHANTS = 15


@dataclass
class CategoryPattern:
    category: str
    keywords: List[str] = field(default_factory=list)
    confidence: float = 0.5
    usage_count: int = 0


@dataclass
class MerchantPattern:
    normalized_name: str
    aliases: List[str] = field(default_factory=list)
    category: Optional[str] = None
    usage_count: int = 0


@dataclass
class LearnedPatterns:
    categories: List[CategoryPattern] = field(default_factory=list)
    merchants: List[MerchantPattern] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.categories and not self.merchants


def _keywords(text: str) -> List[str]:
    return [w for w in re.split(r"\s+", (text or "").lower()) if len(w) > 2]


def build_patterns(records: Iterable[CorrectionRecord]) -> LearnedPatterns:
    """
    Fold corrections into keyword -> category and alias -> merchant patterns.

    A category pattern grows when the user changed the category: the text's
    words (>2 chars) become keywords and confidence rises by 0.1 per use,
    capped at 1.0. A merchant pattern grows when the user renamed a merchant
    the parser had found; the old name becomes an alias.
    """
    categories: Dict[str, CategoryPattern] = {}
    merchants: Dict[str, MerchantPattern] = {}

    for rec in records:
        fixed = rec.corrected_fields
        guess = rec.original_guess

        if fixed.category and fixed.category != guess.category:
            pattern = categories.get(fixed.category)
            if pattern is None:
                pattern = categories[fixed.category] = CategoryPattern(category=fixed.category)
            for word in _keywords(rec.original_text):
                if word not in pattern.keywords:
                    pattern.keywords.append(word)
            pattern.usage_count += 1
            pattern.confidence = min(1.0, round(pattern.confidence + 0.1, 10))

        if fixed.merchant and guess.merchant and guess.merchant != fixed.merchant:
            m = merchants.get(fixed.merchant)
            if m is None:
                m = merchants[fixed.merchant] = MerchantPattern(
                    normalized_name=fixed.merchant,
                    aliases=[fixed.merchant.lower()],
                    category=fixed.category,
                )
            alias = guess.merchant.lower()
            if alias not in m.aliases:
                m.aliases.append(alias)
            m.usage_count += 1
            if fixed.category:
                m.category = fixed.category

    return LearnedPatterns(categories=list(categories.values()), merchants=list(merchants.values()))


def enhance_prompt(base_prompt: str, patterns: LearnedPatterns) -> str:
    """Append patterns seen at least twice to an LLM categorisation prompt."""
    top_categories = sorted(
        (p for p in patterns.categories if p.usage_count >= MIN_USAGE),
        key=lambda p: p.confidence,
        reverse=True,
    )[:TOP_CATEGORIES]
    top_merchants = sorted(
        (p for p in patterns.merchants if p.usage_count >= MIN_USAGE),
        key=lambda p: p.usage_count,
        reverse=True,
    )[:TOP_MERCHANTS]

    if not top_categories and not top_merchants:
        return base_prompt

    lines = ["", "", "ИЗУЧЕННЫЕ ПАТТЕРНЫ (используй для точной категоризации):"]
    if top_categories:
        lines.append("")
        lines.append("КАТЕГОРИИ:")
        for p in top_categories:
            keywords = '", "'.join(p.keywords)
            lines.append(f'• "{keywords}" → {p.category}')
    if top_merchants:
        lines.append("")
        lines.append("МЕРЧАНТЫ:")
        for p in top_merchants:
            aliases = '", "'.join(p.aliases)
            line = f'• "{aliases}" → {p.normalized_name}'
            if p.category:
                line += f" ({p.category})"
            lines.append(line)

    return base_prompt + "\n".join(lines) + "\n"
