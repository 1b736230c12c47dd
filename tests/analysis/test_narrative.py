"""Tests for the keyword narrative analyzer."""

import pytest

from voicevault.analysis.narrative import (
    NarrativeAnalyzer,
    analyze,
    classify_emotion,
    extract_needs,
    extract_pain_points,
    extract_values,
)
from voicevault.config import SessionConfig
from voicevault.lexicon.tables import Lexicon
from voicevault.primitives.models import Participant

ALEX_STORY = "I am so frustrated and I need more respect."
JORDAN_STORY = "I feel hurt and sad. I want respect and honesty from you."


class TestAnalyze:
    def test_single_sentence_narrative(self):
        fragment = analyze(ALEX_STORY)
        assert fragment.pain_points == ["I am so frustrated and I need more respect"]
        assert fragment.values == ["respect"]
        assert fragment.needs == ["I am so frustrated and I need more respect"]

    def test_empty_text_yields_empty_signals(self):
        fragment = analyze("")
        assert fragment.pain_points == []
        assert fragment.values == []
        assert fragment.needs == []

    def test_none_text_treated_as_empty(self):
        fragment = analyze(None)
        assert fragment.values == []

    def test_deterministic(self):
        assert analyze(JORDAN_STORY) == analyze(JORDAN_STORY)


class TestPainPoints:
    def test_keeps_narrative_order_and_caps_at_three(self):
        text = (
            "I was hurt. Fine day. I am upset. He was annoyed. "
            "They were bothered."
        )
        assert extract_pain_points(text) == [
            "I was hurt",
            "I am upset",
            "He was annoyed",
        ]

    def test_case_insensitive(self):
        assert extract_pain_points("I AM ANGRY!") == ["I AM ANGRY"]

    def test_custom_limit(self):
        assert extract_pain_points("I was hurt. I was upset.", limit=1) == ["I was hurt"]


class TestValues:
    def test_declaration_order_not_text_order(self):
        # trust 出现在 respect 之前，但输出仍按词表声明顺序
        values = extract_values("Honesty matters. So does dignity.")
        assert values == ["respect", "trust"]

    def test_substring_matching(self):
        # "careful" 包含 "care"
        assert extract_values("She was careful with me") == ["support"]

    def test_caps_at_three(self):
        text = "respect trust listening fairness support freedom"
        assert extract_values(text) == ["respect", "trust", "communication"]


class TestNeeds:
    def test_sentence_matching_two_intents_repeats_by_default(self):
        text = "I need and I want a break."
        assert extract_needs(text) == [
            "I need and I want a break",
            "I need and I want a break",
        ]

    def test_dedupe_option(self):
        text = "I need and I want a break."
        assert extract_needs(text, dedupe=True) == ["I need and I want a break"]

    def test_stops_at_limit(self):
        text = "I need a. I need b. I need c. I need d."
        assert extract_needs(text) == ["I need a", "I need b", "I need c"]

    def test_pattern_major_order(self):
        # 先按意图短语扫描，再按句子顺序
        text = "I want peace. I need quiet."
        assert extract_needs(text) == ["I need quiet", "I want peace"]

    def test_zero_limit(self):
        assert extract_needs("I need help.", limit=0) == []


class TestClassifyEmotion:
    def test_single_keyword(self):
        reading = classify_emotion(ALEX_STORY)
        assert reading.dominant == "anger"
        assert reading.scores["anger"] == 1
        assert reading.intensity == pytest.approx(0.1)

    def test_counts_distinct_keywords(self):
        reading = classify_emotion(JORDAN_STORY)
        assert reading.dominant == "sadness"
        assert reading.scores["sadness"] == 2
        assert reading.intensity == pytest.approx(0.2)

    def test_repeated_keyword_counts_once(self):
        reading = classify_emotion("sad sad sad")
        assert reading.scores["sadness"] == 1

    def test_empty_text_is_neutral(self):
        reading = classify_emotion("")
        assert reading.dominant == "neutral"
        assert reading.intensity == 0.0
        assert all(score == 0 for score in reading.scores.values())

    def test_tie_goes_to_later_category(self):
        reading = classify_emotion("I am angry and sad.")
        assert reading.scores["anger"] == reading.scores["sadness"] == 1
        assert reading.dominant == "sadness"

    def test_scores_keep_declaration_order(self):
        reading = classify_emotion("anything")
        assert list(reading.scores) == ["anger", "sadness", "fear", "joy", "neutral"]

    def test_intensity_unclamped_by_default(self):
        words = [f"w{i}" for i in range(12)]
        lexicon = Lexicon.build(emotions={"anger": words, "neutral": []})
        reading = classify_emotion(" ".join(words), lexicon)
        assert reading.intensity == pytest.approx(1.2)

    def test_intensity_clamped_on_request(self):
        words = [f"w{i}" for i in range(12)]
        lexicon = Lexicon.build(emotions={"anger": words, "neutral": []})
        reading = classify_emotion(" ".join(words), lexicon, clamp=True)
        assert reading.intensity == 1.0


class TestNarrativeAnalyzer:
    def test_signals_for_participant(self):
        analyzer = NarrativeAnalyzer()
        alex = Participant(id=1, display_name="Alex", alias="Alex")
        signals = analyzer.signals_for(alex, ALEX_STORY)
        assert signals.participant_id == 1
        assert signals.participant_name == "Alex"
        assert signals.values == ["respect"]
        assert signals.dominant_emotion == "anger"
        assert signals.emotion_intensity == pytest.approx(0.1)
        assert signals.emotion_scores["anger"] == 1

    def test_config_caps_and_options(self):
        config = SessionConfig(max_values=1, dedupe_needs=True)
        analyzer = NarrativeAnalyzer(config=config)
        fragment = analyzer.analyze("Honesty and respect. I need and I want rest.")
        assert fragment.values == ["respect"]
        assert fragment.needs == ["I need and I want rest"]

    def test_custom_intensity_scale(self):
        analyzer = NarrativeAnalyzer(config=SessionConfig(intensity_scale=4.0))
        assert analyzer.classify_emotion("sad and hurt").intensity == pytest.approx(0.5)
