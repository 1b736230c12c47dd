"""Tests for session data models."""

import dataclasses

import pytest

from voicevault.primitives.models import (
    ConsentFlags,
    EscalationWarning,
    Narrative,
    Participant,
    ParticipantSignals,
    RoundState,
    SessionState,
)


class TestParticipant:
    def test_frozen(self):
        p = Participant(id=1, display_name="Alex", alias="Alex")
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.display_name = "Al"


class TestConsentFlags:
    def test_default_not_given(self):
        assert ConsentFlags().all_given is False

    def test_all_four_required(self):
        partial = ConsentFlags(
            emotional_safety=True, voice_transcription=True, ai_arbitration=True,
        )
        assert partial.all_given is False
        full = ConsentFlags(
            emotional_safety=True, voice_transcription=True,
            ai_arbitration=True, privacy_policy=True,
        )
        assert full.all_given is True


class TestRoundState:
    def test_responses_by_phase(self):
        rnd = RoundState()
        rnd.responses[("acknowledgment", 1)] = "I hear you."
        rnd.responses[("clarification", 1)] = "Thank you."
        rnd.responses[("acknowledgment", 2)] = "Me too."
        assert rnd.has_response("acknowledgment", 2)
        assert not rnd.has_response("clarification", 2)
        assert rnd.responses_for("acknowledgment") == {1: "I hear you.", 2: "Me too."}


class TestEscalationWarning:
    def test_window(self):
        warning = EscalationWarning(
            participant_id=1, phase="acknowledgment", trigger="never",
            raised_at=10.0, expires_at=15.0,
        )
        assert warning.is_active(14.9)
        assert not warning.is_active(15.0)


class TestSessionState:
    def test_defaults(self):
        state = SessionState(session_id="abc")
        assert state.phase == "CONSENT_PENDING"
        assert state.participants == []
        assert state.paused is False
        assert state.round.phase == "acknowledgment"

    def test_participant_lookup(self):
        state = SessionState(
            session_id="abc",
            participants=[Participant(id=1, display_name="Alex")],
        )
        assert state.participant(1).display_name == "Alex"
        assert state.participant(2) is None

    def test_to_dict_flattens_keys(self):
        state = SessionState(session_id="abc")
        state.narratives[1] = Narrative(
            participant_id=1, text="hello", captured_at="2026-01-01T00:00:00",
        )
        state.signals[1] = ParticipantSignals(participant_id=1, participant_name="Alex")
        state.round.responses[("acknowledgment", 1)] = "I hear you."
        data = state.to_dict()
        assert data["session_id"] == "abc"
        assert data["narratives"]["1"]["text"] == "hello"
        assert data["signals"]["1"]["participant_name"] == "Alex"
        assert data["round"]["responses"] == {"acknowledgment:1": "I hear you."}
        assert data["consent"]["privacy_policy"] is False
