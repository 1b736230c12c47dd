"""Tests for Peace Pact drafting."""

from datetime import date

from voicevault.analysis.proposals import generate
from voicevault.analysis.snapshot import synthesize
from voicevault.engine.draft import (
    COMMITMENTS,
    PACT_TITLE,
    draft_peace_pact,
    format_date,
)
from voicevault.primitives.models import Participant

PARTICIPANTS = [
    Participant(id=1, display_name="Alex", alias="Alex"),
    Participant(id=2, display_name="Jordan", preferred_name="Jordan"),
]


def _proposal():
    return generate(synthesize([]))[0]


class TestFormatDate:
    def test_no_zero_padding(self):
        assert format_date(date(2026, 3, 7)) == "3/7/2026"
        assert format_date(date(2026, 12, 25)) == "12/25/2026"


class TestDraftPeacePact:
    def test_header_fields(self):
        pact = draft_peace_pact(
            PARTICIPANTS, _proposal(), "ab12cd34", today=date(2026, 10, 17),
        )
        assert pact.title == PACT_TITLE
        assert pact.date == "10/17/2026"
        assert pact.participants == "Alex and Jordan"

    def test_content_includes_proposal_and_session(self):
        proposal = _proposal()
        pact = draft_peace_pact(
            PARTICIPANTS, proposal, "ab12cd34", today=date(2026, 10, 17),
        )
        assert f"**Our Agreed Resolution: {proposal.title}**" in pact.content
        for item in proposal.action_items:
            assert f"• {item}" in pact.content
        for item in COMMITMENTS:
            assert f"• {item}" in pact.content
        assert "1. Take a 24-hour cooling-off period" in pact.content
        assert "**Session ID:** ab12cd34" in pact.content
        assert "We, Alex and Jordan, have engaged in mediation with Grace" in pact.content

    def test_signature_line_per_participant(self):
        three = PARTICIPANTS + [Participant(id=3, display_name="Sam")]
        pact = draft_peace_pact(three, _proposal(), "x", today=date(2026, 1, 2))
        assert pact.participants == "Alex and Jordan and Sam"
        for name in ("Alex", "Jordan", "Sam"):
            assert f"{name}: ________________    Date: ________" in pact.content

    def test_custom_facilitator(self):
        pact = draft_peace_pact(
            PARTICIPANTS, _proposal(), "x",
            facilitator_name="Robin", today=date(2026, 1, 2),
        )
        assert "**Mediation Facilitator:** Robin AI Mediator" in pact.content
