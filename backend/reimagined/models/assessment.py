"""Assessment answers and the insights derived from them."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Accepts and emits the camelCase keys used by the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssessmentForm(_CamelModel):
    """Answers captured by the career assessment flow."""

    job_title: str = ""
    industry: str = ""
    years_experience: str = ""
    strengths: str = ""
    typical_week: str = ""
    looking_for: str = ""
    work_preferences: str = ""


class SnapshotPromptsRequest(_CamelModel):
    """Request body for building relay prompts from assessment answers."""

    form: AssessmentForm
    goal_text: str = ""
    industry_label: str = ""


class SnapshotInsightsRequest(_CamelModel):
    """Request body for structured snapshot insights."""

    form: AssessmentForm
    goal_text: str = Field(..., min_length=1, max_length=500)
    industry_labels: list[str] = Field(default_factory=list)


class SnapshotInsights(_CamelModel):
    """Three short insight paragraphs shown on the snapshot card."""

    work_evolution: str
    future_directions: str
    next_steps: str


class SnapshotInsightsResponse(SnapshotInsights):
    """Insights plus where they came from."""

    source: Literal["ai", "fallback"] = "ai"
