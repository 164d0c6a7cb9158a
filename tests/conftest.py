from __future__ import annotations

from pathlib import Path
from typing import Dict

import pandas as pd
import pytest

from emotion_scoring import EMOTION_CATEGORIES

HAM_TEXTS = [
    "Hey, are we still meeting for lunch tomorrow at noon?",
    "Can you send me the slides from the meeting today",
    "I will call you when I get home tonight",
    "Thanks for dinner last night, it was lovely",
    "Please pick up milk and bread on your way home",
    "The meeting moved to 3pm, see you there",
    "Happy birthday! Hope you have a great day",
    "Did you finish the report for the project?",
    "Running late, will be there in 10 minutes",
    "Let me know when you are free to talk",
    "Mum says dinner is ready, come home soon",
    "See you at the gym later tonight",
]

SPAM_TEXTS = [
    "WINNER! You have won a free prize. Call 09061701461 now to claim",
    "URGENT! Claim your free cash prize now, text WIN to 80086",
    "Free entry to win a brand new phone, reply WIN now",
    "Congratulations you won a free holiday, call now to claim your prize",
    "You have been selected for a cash award, claim now www.prize.com",
    "Win free tickets! Text CLAIM to 87121 now",
]


def make_messages(repeat: int = 3) -> pd.DataFrame:
    rows = []
    for _ in range(repeat):
        rows += [("ham", t) for t in HAM_TEXTS]
        rows += [("spam", t) for t in SPAM_TEXTS]
    return pd.DataFrame(rows, columns=["category", "message"])


class KeywordEmotionScorer:
    """Offline stand-in for the NRC lexicon: fixed word -> category hits."""

    LEXICON = {
        "win": ["anticipation", "joy", "positive"],
        "won": ["anticipation", "joy", "positive"],
        "free": ["joy", "positive", "trust"],
        "urgent": ["fear", "negative"],
        "late": ["negative", "sadness"],
        "happy": ["joy", "positive", "trust"],
    }

    def score(self, text: str) -> Dict[str, float]:
        counts = {c: 0.0 for c in EMOTION_CATEGORIES}
        for word in (text or "").lower().split():
            for category in self.LEXICON.get(word.strip("!,.?"), []):
                counts[category] += 1
        return counts


class ConstantPolarityScorer:
    def score(self, text: str) -> float:
        return 0.5 if "free" in (text or "").lower() else 0.0


@pytest.fixture
def messages() -> pd.DataFrame:
    return make_messages()


@pytest.fixture
def emotion_scorer() -> KeywordEmotionScorer:
    return KeywordEmotionScorer()


@pytest.fixture
def polarity_scorer() -> ConstantPolarityScorer:
    return ConstantPolarityScorer()


@pytest.fixture
def spam_csv(tmp_path: Path) -> Path:
    df = make_messages().rename(columns={"category": "Category", "message": "Message"})
    path = tmp_path / "spam.csv"
    df.to_csv(path, index=False, encoding="latin-1")
    return path
