"""协议草稿生成。 / Peace Pact agreement drafting.

根据被选中的解决方案生成最终书面协议文本。模板固定，只插入参与者、
方案内容、调解员名称与会话标识。
"""

from datetime import date
from typing import Optional, Sequence

from voicevault.primitives.models import Participant, PeacePact, ResolutionProposal

PACT_TITLE = "Peace Pact Agreement"

COMMITMENTS = (
    "We will treat each other with respect and dignity",
    "We will communicate openly and honestly",
    "We will assume positive intent in our interactions",
    "We will address concerns directly rather than letting them fester",
    "We will revisit this agreement in 30 days to assess our progress",
)

DISAGREEMENT_PROCESS = (
    "Take a 24-hour cooling-off period if emotions are high",
    'Use "I" statements to express our feelings',
    "Focus on solutions rather than blame",
    "Seek mediation again if needed",
)


def format_date(day: date) -> str:
    """M/D/YYYY，与 en-US 本地日期格式一致。"""
    return f"{day.month}/{day.day}/{day.year}"


def draft_peace_pact(
    participants: Sequence[Participant],
    proposal: ResolutionProposal,
    session_id: str,
    facilitator_name: str = "Grace",
    today: Optional[date] = None,
) -> PeacePact:
    today_str = format_date(today or date.today())
    names = " and ".join(p.display_name for p in participants)

    actions = "\n".join(f"• {item}" for item in proposal.action_items)
    commitments = "\n".join(f"• {item}" for item in COMMITMENTS)
    process = "\n".join(
        f"{i}. {step}" for i, step in enumerate(DISAGREEMENT_PROCESS, start=1)
    )
    signatures = "\n\n".join(
        f"{p.display_name}: ________________    Date: ________"
        for p in participants
    )

    content = f"""**{PACT_TITLE}**

Date: {today_str}
Participants: {names}

**Our Commitment to Resolution**

We, {names}, have engaged in mediation with {facilitator_name}, an AI mediator, to address our conflict and find a path forward. Through this process, we have:

✓ Shared our perspectives openly and honestly
✓ Listened to each other with empathy
✓ Identified our common values and shared goals
✓ Acknowledged the pain and misunderstandings between us

**Our Agreed Resolution: {proposal.title}**

{proposal.description}

**Specific Actions We Will Take:**

{actions}

**Our Commitments Moving Forward:**

{commitments}

**Conflict Resolution Process:**

If disagreements arise, we agree to:
{process}

**Signatures:**

{signatures}

**Mediation Facilitator:** {facilitator_name} AI Mediator
**Session ID:** {session_id}
**Date:** {today_str}

---

*This agreement was created through AI-mediated conflict resolution. While not legally binding, it represents our mutual commitment to positive change and respectful interaction.*"""

    return PeacePact(
        title=PACT_TITLE,
        date=today_str,
        participants=names,
        content=content,
    )
