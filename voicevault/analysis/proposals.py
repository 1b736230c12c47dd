"""解决方案生成器。 / Resolution proposal generator.

给定冲突快照，确定性地产出固定的三份候选方案。方案内容是模板，
只有第二份方案的第一条行动项插入快照中的共同价值。
"""

from typing import List

from voicevault.primitives.models import ConflictSnapshot, ResolutionProposal


def generate(snapshot: ConflictSnapshot) -> List[ResolutionProposal]:
    """生成三份候选方案（id 依次为 1, 2, 3）。"""
    shared = ", ".join(snapshot.common_values)
    return [
        ResolutionProposal(
            id=1,
            title="Structured Communication Plan",
            description=(
                "Establish regular check-ins with agreed-upon "
                "communication guidelines"
            ),
            action_items=(
                "Weekly 30-minute conversations",
                "Use 'I' statements to express feelings",
                "Listen without interrupting",
                "Focus on solutions, not blame",
            ),
        ),
        ResolutionProposal(
            id=2,
            title="Mutual Respect Agreement",
            description=(
                "Create clear boundaries and expectations based on "
                "shared values"
            ),
            action_items=(
                f"Honor shared values: {shared}",
                "Respect each other's perspectives",
                "Acknowledge past hurts without dwelling",
                "Commit to moving forward constructively",
            ),
        ),
        ResolutionProposal(
            id=3,
            title="Graduated Resolution Steps",
            description="Start with small changes and build trust gradually",
            action_items=(
                "Begin with one specific area of improvement",
                "Check progress weekly",
                "Celebrate small wins together",
                "Address larger issues as trust rebuilds",
            ),
        ),
    ]
