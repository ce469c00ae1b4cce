# Backend/evaluator/services/rubric_catalog.py
"""
Scenario prompts and their scoring rubrics.

The catalog is built once at import time and is read-only afterwards:
rubrics are frozen dataclasses and every mapping is exposed through a
``MappingProxyType``, so the catalog can be shared across threads without
locking.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from evaluator.config import settings


@dataclass(frozen=True)
class RubricCategory:
    key: str
    name: str
    max_score: int
    criteria: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.max_score <= 0:
            raise ValueError(f"Category '{self.key}' must have a positive max_score")


@dataclass(frozen=True)
class Rubric:
    prompt_id: str
    name: str
    description: str
    prompt_text: str
    # Insertion order is display order
    categories: Mapping[str, RubricCategory] = field(default_factory=dict)

    @property
    def total_max(self) -> int:
        return sum(category.max_score for category in self.categories.values())

    @property
    def category_keys(self) -> Tuple[str, ...]:
        return tuple(self.categories)


def _rubric(prompt_id: str, name: str, description: str, prompt_text: str,
            categories: List[RubricCategory]) -> Rubric:
    by_key: Dict[str, RubricCategory] = {}
    for category in categories:
        if category.key in by_key:
            raise ValueError(f"Duplicate category '{category.key}' in rubric '{prompt_id}'")
        by_key[category.key] = category
    return Rubric(
        prompt_id=prompt_id,
        name=name,
        description=description,
        prompt_text=prompt_text,
        categories=MappingProxyType(by_key),
    )


CRISIS_PROMPT = """You are the head of operations at a fintech startup. A critical system outage has occurred affecting 50,000 users.

Scenario Details:
- Payment processing is down for 45 minutes
- Customers are unable to access their accounts
- Media is starting to pick up the story
- Your engineering team is investigating but the root cause is unclear
- You have 5 minutes to make initial decisions

Please respond with:
1. Your immediate actions (next 15 minutes)
2. Communication strategy (internal and external)
3. Timeline for resolution attempts
4. Risk mitigation steps
5. Post-incident analysis plan

Provide a detailed, structured response as if you were actually facing this crisis."""

SUSTAINABILITY_PROMPT = """You are joining a company as VP of Sustainability. The company is a fast-fashion retailer facing criticism for:
- High water consumption in manufacturing (15,000 liters per garment)
- Limited supply chain transparency
- Minimal recycling initiatives
- Labor concerns in overseas factories
- Carbon footprint of ~5kg CO2 per shipped item

You have a budget of $10M over 3 years to address these issues.

Please provide:
1. Root cause analysis of sustainability issues
2. Your top 5 priorities for the 3-year plan
3. Specific, measurable goals for each priority
4. Implementation timeline and dependencies
5. Expected business impact (costs/benefits)
6. How you would measure success
7. Stakeholder engagement strategy

Think strategically about what matters most and why."""

TEAM_PROMPT = """You've been hired as a new Engineering Manager for a 12-person team at a SaaS company.

Current Situation:
- Team is distributed across 3 time zones
- Recent product launch was delayed by 2 months
- Morale is low due to crunch period
- There's tension between frontend and backend developers
- Some team members are underperforming
- Two strong performers just gave notice
- The team has no documented processes or knowledge base
- Communication is fragmented across Slack, email, and Jira

Your first 90 days:

Please outline:
1. Diagnostic approach (how you'd assess the team)
2. Quick wins (first 30 days) to build trust
3. Process improvements to implement
4. How you'd address the departing talent
5. Strategy to rebuild morale
6. Team structure and role clarifications
7. Metrics for success
8. Long-term vision for the team

Show me how you'd thoughtfully approach this complex people problem."""


_RUBRICS = (
    _rubric(
        "crisis",
        "Crisis Management",
        "Evaluate crisis decision-making and problem-solving under pressure",
        CRISIS_PROMPT,
        [
            RubricCategory("decisionMaking", "Decision Making Under Pressure", 20, (
                "Prioritizes critical actions immediately",
                "Makes decisions with incomplete information",
                "Shows logical reasoning",
                "Avoids panic or emotional responses",
            )),
            RubricCategory("communication", "Communication Strategy", 20, (
                "Clear internal communication plan",
                "Appropriate external messaging",
                "Considers stakeholder needs",
                "Transparent about limitations",
            )),
            RubricCategory("technicalAcumen", "Technical Understanding", 20, (
                "Demonstrates system knowledge",
                "Asks right diagnostic questions",
                "Understands escalation procedures",
                "Considers technical constraints",
            )),
            RubricCategory("leadership", "Leadership & Team Management", 20, (
                "Delegates effectively",
                "Empowers team members",
                "Maintains composure",
                "Sets clear expectations",
            )),
            RubricCategory("completeness", "Response Completeness", 20, (
                "Addresses all scenario aspects",
                "Provides specific examples",
                "Includes timelines",
                "Considers long-term impact",
            )),
        ],
    ),
    _rubric(
        "sustainability",
        "Sustainability & Social Impact",
        "Evaluate understanding of sustainable business practices and social responsibility",
        SUSTAINABILITY_PROMPT,
        [
            RubricCategory("analysis", "Problem Analysis", 15, (
                "Identifies root causes",
                "Understands interconnected issues",
                "Considers systemic challenges",
                "Shows systems thinking",
            )),
            RubricCategory("prioritization", "Strategic Prioritization", 20, (
                "Prioritizes high-impact initiatives",
                "Considers resource constraints",
                "Balances short and long-term goals",
                "Shows strategic thinking",
            )),
            RubricCategory("innovation", "Innovation & Creativity", 20, (
                "Proposes novel solutions",
                "Creative problem-solving",
                "Business model innovation",
                "Technology leveraging",
            )),
            RubricCategory("measurement", "Measurement & Accountability", 20, (
                "Clear, measurable KPIs",
                "Realistic targets",
                "Monitoring mechanisms",
                "Accountability structures",
            )),
            RubricCategory("businessAcumen", "Business Understanding", 25, (
                "Understands cost-benefit",
                "Considers competitive advantage",
                "Shows financial awareness",
                "Balances profit with purpose",
                "Considers market dynamics",
            )),
        ],
    ),
    _rubric(
        "team",
        "Team Building & Collaboration",
        "Evaluate ability to build high-performing teams and foster collaboration",
        TEAM_PROMPT,
        [
            RubricCategory("empathy", "Empathy & Listening", 15, (
                "Recognizes team struggles",
                "Shows empathy for challenges",
                "Commits to listening",
                "Validates concerns",
            )),
            RubricCategory("diagnostics", "Diagnostic Approach", 20, (
                "Systematic assessment plan",
                "One-on-one engagement",
                "Data-driven decision making",
                "Identifies root causes",
            )),
            RubricCategory("execution", "Execution & Quick Wins", 20, (
                "Identifies achievable short-term goals",
                "Builds momentum quickly",
                "Shows operational excellence",
                "Delivers results",
            )),
            RubricCategory("culture", "Culture & Trust Building", 20, (
                "Creates psychological safety",
                "Promotes collaboration",
                "Addresses conflict constructively",
                "Models desired behaviors",
            )),
            RubricCategory("development", "Team Development Strategy", 25, (
                "Plans for growth and learning",
                "Addresses performance issues",
                "Retains top talent",
                "Creates clear career paths",
                "Invests in team capabilities",
            )),
        ],
    ),
)

RUBRICS: Mapping[str, Rubric] = MappingProxyType({r.prompt_id: r for r in _RUBRICS})

# Total points available per prompt
PROMPT_TOTALS: Mapping[str, int] = MappingProxyType({r.prompt_id: r.total_max for r in _RUBRICS})


def get_rubric(prompt_id: str) -> Optional[Rubric]:
    """Return the rubric for ``prompt_id`` or None when it is unknown."""
    return RUBRICS.get(prompt_id)


def list_rubrics() -> List[Rubric]:
    """All rubrics in declaration order (crisis, sustainability, team)."""
    return list(RUBRICS.values())


def total_possible(prompt_id: str) -> int:
    """
    Maximum attainable total for ``prompt_id``.

    Unknown prompts fall back to ``settings.DEFAULT_TOTAL_POSSIBLE`` so that
    "out of N" displays never fail on an unrecognised scenario.
    """
    total = PROMPT_TOTALS.get(prompt_id)
    if total is None:
        return settings.DEFAULT_TOTAL_POSSIBLE
    return total
