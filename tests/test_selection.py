from __future__ import annotations

import unittest

from reflection.salience import keyword_weights, rank_sentences, score_sentence
from reflection.selector import choose_context, choose_primary, jaccard


class SalienceTests(unittest.TestCase):
    def test_keyword_weights_count_frequency(self) -> None:
        self.assertEqual(keyword_weights("산책 산책\n커피"), {"산책": 2.0, "커피": 1.0})

    def test_sentence_without_tokens_scores_zero(self) -> None:
        self.assertEqual(score_sentence("그리고 정말", 0, 1, {}), 0.0)

    def test_edge_sentences_get_bonus(self) -> None:
        weights = {"커피": 1.0}
        first = score_sentence("커피", 0, 3, weights)
        middle = score_sentence("커피", 1, 3, weights)
        self.assertAlmostEqual(first - middle, 0.5)

    def test_short_sentence_penalized(self) -> None:
        # no weights, full uniqueness, middle position, below length band
        self.assertAlmostEqual(score_sentence("커피 산책", 1, 3, {}), 0.8)

    def test_ranking_is_stable_and_puts_empty_last(self) -> None:
        self.assertEqual(rank_sentences(["커피 마심", "커피 마심"], {}), [0, 1])
        self.assertEqual(rank_sentences(["그리고", "산책"], {}), [1, 0])

    def test_ranking_prefers_frequent_keywords(self) -> None:
        sentences = ["점심은 간단히 먹었다", "발표 준비가 길었다", "발표 끝나고 발표 자료를 정리했다"]
        weights = keyword_weights(" ".join(sentences))
        self.assertEqual(rank_sentences(sentences, weights)[0], 2)


class SelectorTests(unittest.TestCase):
    def test_jaccard(self) -> None:
        self.assertEqual(jaccard(set(), set()), 1.0)
        self.assertEqual(jaccard({"a"}, {"a"}), 1.0)
        self.assertAlmostEqual(jaccard({"a", "b"}, {"b", "c"}), 1 / 3)

    def test_primary_falls_back_to_source(self) -> None:
        self.assertEqual(choose_primary([], [], "  원문  텍스트 "), (None, "원문 텍스트"))
        self.assertEqual(choose_primary(["a", "b"], [1, 0], "a. b"), (1, "b"))

    def test_single_sentence_has_no_context(self) -> None:
        self.assertIsNone(choose_context(["커피 산책"], [0], 0))

    def test_context_skips_similar_sentences(self) -> None:
        sentences = ["커피 산책 독서", "커피 산책 독서 음악", "회의 발표 준비"]
        self.assertEqual(choose_context(sentences, [0, 1, 2], 0), "회의 발표 준비")

    def test_context_falls_back_to_original_order(self) -> None:
        sentences = ["커피 산책 독서 음악 음악", "음악 커피 산책 독서", "커피 산책 독서 음악"]
        # every token set equals the primary's, so take the first non-primary sentence
        self.assertEqual(choose_context(sentences, [2, 1, 0], 2), sentences[0])


if __name__ == "__main__":
    unittest.main()
