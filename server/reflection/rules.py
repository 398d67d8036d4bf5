"""Read-only lookup tables shared by the reflection pipeline.

Everything here is built once at import time and never mutated, so the
tables are safe to read from any thread. Rule order matters: the first
matching rule claims the first slot in the detected tag list.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .models import EmotionRule

EMOTION_RULES: Tuple[EmotionRule, ...] = (
    EmotionRule("안정", ("평온", "차분", "편안", "안정", "여유")),
    EmotionRule("기쁨", ("행복", "기쁨", "웃", "설렘", "뿌듯", "즐거")),
    EmotionRule("감사", ("감사", "고마", "든든", "따뜻")),
    EmotionRule("피로", ("피곤", "지침", "지쳤", "무기력", "졸림")),
    EmotionRule(
        "불안",
        ("불안", "걱정", "초조", "긴장", "압박", "부담", "비용", "비싼", "언제", "출시"),
    ),
    EmotionRule("분노", ("화", "짜증", "분노", "답답", "억울", "멍청", "구려", "빡침")),
    EmotionRule("슬픔", ("슬픔", "우울", "눈물", "외롭", "허무")),
    EmotionRule("집중", ("몰입", "집중", "성취", "해냈", "완료")),
)

# Mood marker -> tag appended after keyword tags.
MOOD_TAGS: Mapping[str, str] = MappingProxyType(
    {
        "🥰": "긍정",
        "😊": "긍정",
        "🥳": "긍정",
        "joyful": "긍정",
        "happy": "긍정",
        "excited": "긍정",
        "😔": "침잠",
        "sad": "침잠",
        "😡": "격양",
        "angry": "격양",
        "😴": "저에너지",
        "tired": "저에너지",
        "🤯": "과부하",
        "overwhelmed": "과부하",
    }
)

# Mood marker -> badge in the canonical emotion vocabulary.
MOOD_BADGES: Mapping[str, str] = MappingProxyType(
    {
        "🥰": "기쁨",
        "😊": "기쁨",
        "🥳": "기쁨",
        "joyful": "기쁨",
        "happy": "기쁨",
        "excited": "기쁨",
        "😔": "슬픔",
        "sad": "슬픔",
        "😡": "분노",
        "angry": "분노",
        "😴": "피로",
        "tired": "피로",
        "🤯": "과부하",
        "overwhelmed": "과부하",
    }
)

_SYNONYM_GROUPS = (
    ("기쁨", ("joy", "happy", "happiness", "delight", "행복", "즐거움", "설렘")),
    ("슬픔", ("sad", "sadness", "depressed", "sorrow", "우울", "눈물")),
    ("분노", ("anger", "angry", "frustration", "frustrated", "rage", "짜증", "화남")),
    ("불안", ("anxiety", "anxious", "worry", "worried", "fear", "nervous", "걱정", "긴장")),
    ("안정", ("calm", "peace", "peaceful", "stable", "평온", "편안")),
    ("집중", ("focus", "focused", "concentration", "몰입")),
    ("감사", ("gratitude", "grateful", "thanks", "thankful", "고마움")),
    ("피로", ("fatigue", "tired", "exhausted", "burnout", "피곤", "무기력")),
)

TAG_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {alias: canonical for canonical, aliases in _SYNONYM_GROUPS for alias in aliases}
)

NEUTRAL_TAGS = frozenset({"neutral", "중립"})

# Written by older clients when no emotion could be named.
PLACEHOLDER_TAG = "감정기록"

STOPWORDS = frozenset(
    {
        # Korean connectives, pronouns and filler adverbs
        "그리고", "그래서", "그러나", "하지만", "그런데", "그러면", "그냥", "정말",
        "진짜", "너무", "아주", "조금", "약간", "이런", "저런", "그런", "이것",
        "그것", "저것", "여기", "거기", "우리", "나는", "내가", "저는", "제가",
        "있다", "있었다", "했다", "하는", "하고", "해서", "같다", "같은", "때문에",
        "오늘", "오늘은", "오늘도",
        # English function words
        "the", "and", "but", "or", "is", "are", "was", "were", "to", "of", "in",
        "on", "at", "for", "with", "it", "this", "that", "my", "me", "we", "you",
        "he", "she", "they", "be", "been", "have", "has", "had", "do", "did",
        "so", "not", "as", "an", "by", "from", "just", "very", "really", "about",
        "too", "today",
    }
)

FRUSTRATION_HINTS = ("왜", "답답", "멍청", "구려", "화", "짜증", "억울")
ANXIETY_HINTS = ("걱정", "불안", "초조", "긴장", "비용", "비싼", "압박", "출시", "언제")

REFLECTION_PROMPTS: Tuple[str, ...] = (
    "오늘 가장 에너지가 높았던 순간은 언제였나요?",
    "오늘 나를 가장 지치게 한 순간은 무엇이었나요?",
    "오늘의 나를 한 문장으로 칭찬한다면?",
    "오늘 가장 오래 남을 장면은 무엇인가요?",
    "지금 감정을 만든 사건 하나를 적어보세요.",
)
DEFAULT_PROMPT = "오늘 가장 오래 남을 장면은 무엇인가요?"


def lookup_mood(table: Mapping[str, str], mood: Optional[str]) -> Optional[str]:
    if not mood:
        return None
    key = mood.strip()
    return table.get(key) or table.get(key.lower())
