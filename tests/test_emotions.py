from __future__ import annotations

import unittest

from reflection.classifier import classify, detect_tags, mood_badges, mood_tag
from reflection.emotion_stats import (
    emotion_pattern,
    most_frequent_emotion,
    summarize_emotions,
    tone_copy,
    top_emotion_tags,
)
from reflection.models import EmotionRule
from reflection.normalizer import normalize_all, normalize_list, normalize_tag


class ClassifierTests(unittest.TestCase):
    def test_joy_keyword_detected(self) -> None:
        self.assertEqual(detect_tags("오늘은 정말 행복했다"), ["기쁨"])

    def test_tags_follow_rule_order(self) -> None:
        self.assertEqual(detect_tags("집중해서 완료했고 마음이 편안했다"), ["안정", "집중"])

    def test_keyword_match_is_case_insensitive(self) -> None:
        rules = [EmotionRule("focus", ("Deep Work",))]
        self.assertEqual(detect_tags("deep work all day", rules=rules), ["focus"])

    def test_mood_tag_lookup(self) -> None:
        self.assertEqual(mood_tag("😊"), "긍정")
        self.assertEqual(mood_tag("Tired"), "저에너지")
        self.assertIsNone(mood_tag("neutral"))
        self.assertIsNone(mood_tag("🐙"))
        self.assertIsNone(mood_tag(None))

    def test_mood_badges(self) -> None:
        self.assertEqual(mood_badges("😡"), ["분노"])
        self.assertEqual(mood_badges(None), [])

    def test_classify_appends_mood_after_keywords(self) -> None:
        self.assertEqual(classify("행복했다", "😴"), ["기쁨", "저에너지"])


class NormalizerTests(unittest.TestCase):
    def test_normalize_tag(self) -> None:
        self.assertEqual(normalize_tag("  Happy "), "기쁨")
        self.assertEqual(normalize_tag("기쁨"), "기쁨")
        self.assertEqual(normalize_tag("희망"), "희망")
        self.assertIsNone(normalize_tag("neutral"))
        self.assertIsNone(normalize_tag("   "))

    def test_normalize_list_dedups_and_caps(self) -> None:
        tags = ["joy", "행복", "sad", "anger", "calm"]
        self.assertEqual(normalize_list(tags), ["기쁨", "슬픔", "분노"])
        self.assertEqual(normalize_list(["Hope", "hope"]), ["Hope"])
        self.assertEqual(normalize_list(["neutral", "", "tired"], limit=1), ["피로"])

    def test_normalize_list_never_exceeds_limit(self) -> None:
        tags = ["joy", "sad", "anger", "calm", "focus", "thanks", "tired", "fear"]
        for limit in range(1, 6):
            result = normalize_list(tags, limit=limit)
            self.assertLessEqual(len(result), limit)
            self.assertEqual(len(result), len(set(result)))

    def test_normalize_all_keeps_duplicates(self) -> None:
        tags = ["joy", "happy", "neutral", "sad", " "]
        result = normalize_all(tags)
        self.assertEqual(result, ["기쁨", "기쁨", "슬픔"])
        self.assertEqual(len(result), sum(1 for t in tags if normalize_tag(t) is not None))


class EmotionStatsTests(unittest.TestCase):
    ENTRIES = [["기쁨", "감정기록"], ["joy", "불안"], ["happy"], ["neutral"], None]

    def test_top_tags_and_dominant_emotion(self) -> None:
        self.assertEqual(top_emotion_tags(self.ENTRIES), [("기쁨", 3), ("불안", 1)])
        self.assertEqual(most_frequent_emotion(self.ENTRIES), "기쁨")
        self.assertEqual(emotion_pattern(self.ENTRIES), "기쁨, 불안")

    def test_empty_history(self) -> None:
        self.assertEqual(most_frequent_emotion([]), "-")
        self.assertEqual(emotion_pattern([["감정기록"]]), "-")
        self.assertEqual(tone_copy("-"), "감정 태그가 더 쌓이면 흐름을 보여줄게요")

    def test_summary_payload(self) -> None:
        summary = summarize_emotions(self.ENTRIES)
        self.assertEqual(summary["most_frequent"], "기쁨")
        self.assertEqual(summary["tone"], "밝은 에너지가 자주 등장한 달이에요")
        self.assertEqual(summary["entries"], 5)
        self.assertEqual(summary["top"][0], {"tag": "기쁨", "count": 3})


if __name__ == "__main__":
    unittest.main()
