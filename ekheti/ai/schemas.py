"""
Pydantic schemas for flow outputs. Field names are snake_case in Python and
camelCase on the wire, matching what the prompts ask the model to return.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class FlowModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self):
        return self.model_dump(by_alias=True, exclude_none=True)


class DiseaseAnalysis(FlowModel):
    disease_detected: bool
    disease_name: str
    confidence_level: float = Field(ge=0, le=1)
    suggested_solutions: str

    @field_validator('confidence_level', mode='before')
    @classmethod
    def percent_to_fraction(cls, value):
        # models sometimes answer 85 instead of 0.85
        if isinstance(value, (int, float)) and 1 < value <= 100:
            return value / 100
        return value


class WeatherSnapshot(FlowModel):
    temperature: float
    condition: str
    humidity: float
    wind_speed: float


class AdvisoryText(FlowModel):
    integrated_advisory: str


class AdvisoryResult(FlowModel):
    integrated_advisory: str
    weather: Optional[WeatherSnapshot] = None


class ProfitabilityEstimate(FlowModel):
    expected_yield_per_acre: float = Field(ge=0)
    estimated_selling_price_per_kg: float = Field(ge=0)
    recommendation: str
    alternative_crop_suggestion: Optional[str] = None


class ProfitabilityResult(FlowModel):
    expected_yield_per_acre: float
    estimated_selling_price_per_kg: float
    total_revenue: float
    net_profit: float
    profitability_indicator: Literal['High', 'Medium', 'Low']
    recommendation: str
    best_crop_choice: str
    alternative_crop_suggestion: Optional[str] = None


class ChatbotAdvice(FlowModel):
    advice: str
