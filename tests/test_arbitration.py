from __future__ import annotations

import unittest

from reflection.analyzer import analyze_local
from reflection.arbitration import ReflectionAnalysisService, analyze, choose_best, quality_score
from reflection.models import CandidateSummary
from reflection.summary import INSUFFICIENT_LINE
from reflection.tuning import AnalyzerTuning

SOURCE = "아침에 회의 준비로 긴장했다. 발표는 무사히 완료했고 팀원들이 고마웠다."
GROUNDED = CandidateSummary("발표는 무사히 완료했고 팀원들이 고마웠다", ("grateful", "joy"))
LOOPING = CandidateSummary("회의 회의 회의 회의", ("focus",))
OFF_TOPIC = CandidateSummary("완전히 다른 이야기 우주 여행", ("joy",))


class FakeProducer:
    def __init__(self, candidates=None, error: Exception | None = None) -> None:
        self.candidates = candidates or []
        self.error = error
        self.calls = 0

    def produce(self, content, mood):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.candidates


class QualityScoreTests(unittest.TestCase):
    def test_empty_candidate_gets_sentinel(self) -> None:
        self.assertEqual(quality_score("", SOURCE), -999.0)
        self.assertEqual(quality_score("!!! ...", SOURCE), -999.0)

    def test_grounded_beats_repetitive(self) -> None:
        grounded = quality_score(GROUNDED.summary, SOURCE)
        looping = quality_score(LOOPING.summary, SOURCE)
        self.assertAlmostEqual(grounded, 1.6)
        self.assertAlmostEqual(looping, 1.0)
        self.assertGreater(grounded, looping)

    def test_overlong_summary_penalized(self) -> None:
        padded = GROUNDED.summary + " " * 120
        self.assertAlmostEqual(
            quality_score(GROUNDED.summary, SOURCE) - quality_score(padded, SOURCE), 0.25
        )

    def test_choose_best_keeps_first_on_tie(self) -> None:
        first = CandidateSummary(GROUNDED.summary, source="first")
        second = CandidateSummary(GROUNDED.summary, source="second")
        best, _ = choose_best([first, second], SOURCE)
        self.assertEqual(best.source, "first")
        self.assertIsNone(choose_best([], SOURCE))


class ServiceTests(unittest.TestCase):
    def test_without_candidates_returns_local(self) -> None:
        self.assertEqual(ReflectionAnalysisService().analyze(SOURCE), analyze_local(SOURCE))

    def test_selects_grounded_candidate(self) -> None:
        result = analyze(SOURCE, None, [LOOPING, GROUNDED])
        self.assertEqual(result.summary, "발표는 무사히 완료했고 팀원들이 고마웠다.")
        self.assertEqual(result.emotion_tags, ("감사", "기쁨"))

    def test_low_scoring_candidate_is_discarded(self) -> None:
        self.assertLess(quality_score(OFF_TOPIC.summary, SOURCE), 0.6)
        self.assertEqual(analyze(SOURCE, None, [OFF_TOPIC]), analyze_local(SOURCE))

    def test_adoption_margin(self) -> None:
        tuning = AnalyzerTuning(adoption_margin=5.0)
        self.assertEqual(analyze(SOURCE, None, [GROUNDED], tuning=tuning), analyze_local(SOURCE))

    def test_adopted_tags_are_normalized_and_capped(self) -> None:
        candidate = CandidateSummary(GROUNDED.summary, ("joy", "happy", "sad", "anger", "calm"))
        self.assertEqual(analyze(SOURCE, None, [candidate]).emotion_tags, ("기쁨", "슬픔", "분노"))

    def test_accepts_plain_and_dict_candidates(self) -> None:
        result = analyze(SOURCE, None, [{"summary": GROUNDED.summary, "emotionTags": ["happy"]}])
        self.assertEqual(result.emotion_tags, ("기쁨",))
        self.assertEqual(analyze(SOURCE, None, [GROUNDED.summary]).emotion_tags, ())

    def test_malformed_candidates_are_skipped(self) -> None:
        with self.assertLogs("reflection.arbitration", level="WARNING"):
            result = analyze(SOURCE, None, [42, {"summary": ""}])
        self.assertEqual(result, analyze_local(SOURCE))

    def test_empty_content_ignores_candidates(self) -> None:
        result = analyze("", None, [GROUNDED])
        self.assertEqual(result.summary, INSUFFICIENT_LINE)
        self.assertEqual(result.emotion_tags, ())

    def test_producer_used_when_no_candidates_given(self) -> None:
        producer = FakeProducer([GROUNDED])
        result = ReflectionAnalysisService(producer=producer).analyze(SOURCE, "😊")
        self.assertEqual(producer.calls, 1)
        self.assertEqual(result.summary, "발표는 무사히 완료했고 팀원들이 고마웠다.")

    def test_explicit_candidates_skip_producer(self) -> None:
        producer = FakeProducer([OFF_TOPIC])
        ReflectionAnalysisService(producer=producer).analyze(SOURCE, None, [GROUNDED])
        self.assertEqual(producer.calls, 0)

    def test_explicit_empty_candidates_skip_producer(self) -> None:
        producer = FakeProducer([GROUNDED])
        result = ReflectionAnalysisService(producer=producer).analyze(SOURCE, None, [])
        self.assertEqual(producer.calls, 0)
        self.assertEqual(result, analyze_local(SOURCE))

    def test_producer_failure_falls_back(self) -> None:
        service = ReflectionAnalysisService(producer=FakeProducer(error=RuntimeError("timeout")))
        with self.assertLogs("reflection.arbitration", level="WARNING"):
            result = service.analyze(SOURCE)
        self.assertEqual(result, analyze_local(SOURCE))


if __name__ == "__main__":
    unittest.main()
