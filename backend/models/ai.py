from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EmissionAnalysis(BaseModel):
    """Pattern analysis returned by the text-generation provider.

    The provider answers in camelCase JSON; both spellings are accepted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_emission_summary: str
    peak_usage_insights: str = ""
    idle_time_insights: str = ""
    inefficiency_insights: str = ""
    abnormal_energy_spikes: str = ""
    potential_savings_overview: str = ""


class ReductionRecommendations(BaseModel):
    recommendations: List[str] = Field(default_factory=list)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class AssistantRequest(BaseModel):
    history: List[ChatMessage] = Field(default_factory=list)


class AssistantResponse(BaseModel):
    status: str = "success"
    reply: str


class AnalysisResponse(BaseModel):
    status: str = "success"
    record_count: int
    analysis: EmissionAnalysis


class RecommendationsRequest(BaseModel):
    # Falls back to the last stored analysis when omitted
    analysis: Optional[EmissionAnalysis] = None


class RecommendationsResponse(BaseModel):
    status: str = "success"
    recommendations: List[str]
