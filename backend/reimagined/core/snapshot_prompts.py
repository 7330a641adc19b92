"""Prompt construction for the career snapshot."""

import json

from reimagined.models.assessment import AssessmentForm, SnapshotInsights

INSIGHTS_SYSTEM_PROMPT = (
    "You are a concise career strategist. Return JSON only with keys workEvolution, "
    "futureDirections, nextSteps. Each value must be no more than 60 words."
)


def _safe(value: str | None, fallback: str) -> str:
    return (value or "").strip() or fallback


def _join_or_none(values: list[str] | None) -> str | None:
    cleaned = [v.strip() for v in values or [] if v and v.strip()]
    return ", ".join(cleaned) if cleaned else None


def build_snapshot_prompts(
    form: AssessmentForm,
    goal_text: str,
    industry_label: str = "",
) -> dict[str, str]:
    """Build the three relay prompts for a completed assessment.

    Every prompt starts from the same profile summary so the sections stay
    consistent with each other.
    """
    base_summary = "\n".join([
        "Professional snapshot:",
        f"- Job title: {_safe(form.job_title, 'Not specified')}",
        f"- Industry: {_safe(industry_label or form.industry, 'Not specified')}",
        f"- Years of experience: {_safe(form.years_experience, 'Not specified')}",
        f"- Strengths: {_safe(form.strengths, 'Not specified')}",
        f"- Typical week: {_safe(form.typical_week, 'Not provided')}",
        f"- Primary goal: {_safe(goal_text, 'Not specified')}",
        f"- Work preferences: {_safe(form.work_preferences, 'Not provided')}",
    ])

    return {
        "howYourWorkMayEvolve": (
            f"{base_summary}\n\n"
            "In 2 short sentences (max 55 words), describe how their work might evolve "
            "over the next few years as AI adoption accelerates. Reference their goal "
            "only if it adds clarity."
        ),
        "potentialFutureDirections": (
            f"{base_summary}\n\n"
            "List 2 potential future directions or roles that would stay relevant for "
            "them. Each direction should be a single sentence under 30 words that "
            "highlights why it fits."
        ),
        "structuredNextSteps": (
            f"{base_summary}\n\n"
            "Provide a numbered list of 3 practical next steps they can take in the "
            "next 90 days to progress toward their goal. Each step should be fewer "
            "than 16 words."
        ),
    }


def build_structured_signals(form: AssessmentForm, industry_labels: list[str]) -> dict:
    """Assessment answers as a flat dict, blanks normalised to None."""
    return {
        "jobTitle": form.job_title.strip() or None,
        "industries": industry_labels,
        "yearsExperience": form.years_experience.strip() or None,
        "lookingFor": form.looking_for.strip() or None,
        "strengths": form.strengths.strip() or None,
        "workPreferences": form.work_preferences.strip() or None,
        "typicalWeek": form.typical_week.strip() or None,
    }


def build_insights_messages(
    form: AssessmentForm,
    goal_text: str,
    industry_labels: list[str],
) -> list[dict[str, str]]:
    signals = build_structured_signals(form, industry_labels)
    narrative = (
        f"Create a short snapshot for someone currently working as "
        f"{_safe(form.job_title, 'a professional')} in "
        f"{_join_or_none(industry_labels) or 'their industry'}. "
        f"They are looking to {goal_text}. "
        f"Their key strengths are {_safe(form.strengths, 'not specified')} and their "
        f"work preferences include {_safe(form.work_preferences, 'not specified')}. "
        f"Include nods to how their typical work may evolve "
        f"({_safe(form.typical_week, 'no rhythm provided')})."
    )
    return [
        {"role": "system", "content": INSIGHTS_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": f"Structured signals for analytics and recommendations: {json.dumps(signals)}",
        },
        {"role": "user", "content": narrative},
    ]


def build_fallback_insights(
    form: AssessmentForm,
    goal_text: str,
    industry_labels: list[str],
) -> SnapshotInsights:
    """Template insights used whenever the provider cannot be used."""
    industry_text = _join_or_none(industry_labels) or "your space"
    strengths_text = _safe(form.strengths, "core capabilities")
    role = _safe(form.job_title, "role")

    return SnapshotInsights(
        work_evolution=(
            f"Expect the {role} in {industry_text} to lean more on judgement, partner "
            "communication, and orchestration as automation absorbs the repetitive "
            "pieces of your workflow."
        ),
        future_directions=(
            f"Blend your strengths in {strengths_text} with {goal_text} to explore "
            "adjacent roles that translate your domain knowledge into higher-leverage work."
        ),
        next_steps=(
            "Focus your next 90 days on clarifying outcomes, upskilling in AI-enabled "
            "tooling, and piloting a project that showcases how you solve emerging problems."
        ),
    )
