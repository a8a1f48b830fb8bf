from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Tuple, Union


# ============================================================
# WEIGHT MODELS
# ============================================================
class WeightIn(BaseModel):
    id: str
    value: float = 0
    label: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class WeightOut(BaseModel):
    id: str
    value: int
    label: str = ""
    icon: str = ""
    color: str = ""


class WeightSetResponse(BaseModel):
    weights: List[WeightOut]
    total: int


class WeightDefaultsResponse(BaseModel):
    weights: List[WeightOut]
    catalog: List[Dict[str, str]]


class RedistributeRequest(BaseModel):
    weights: List[WeightIn]
    changedId: str
    newValue: float


class RemoveWeightRequest(BaseModel):
    weights: List[WeightIn]
    id: str


class AddWeightRequest(BaseModel):
    weights: List[WeightIn]
    layerId: str


class NormalizeWeightsRequest(BaseModel):
    weights: List[WeightIn]


# ============================================================
# ETHNICITY MODELS
# ============================================================
class EthnicityResolveRequest(BaseModel):
    labels: List[str] = Field(default_factory=list)


class EthnicityResolveResponse(BaseModel):
    codes: List[str]
    count: int


class EthnicityValidationResponse(BaseModel):
    isValid: bool
    warnings: List[str]
    suggestions: List[str]


class EthnicityNode(BaseModel):
    code: str
    label: str
    children: List["EthnicityNode"] = Field(default_factory=list)


EthnicityNode.model_rebuild()


# ============================================================
# FILTER STATE MODELS
# ============================================================
class DemographicScoringModel(BaseModel):
    weights: Dict[str, float] = Field(default_factory=dict)
    thresholdBonuses: List[Dict[str, Any]] = Field(default_factory=list)
    penalties: List[Dict[str, Any]] = Field(default_factory=list)
    reasoning: Optional[str] = None


class FilterStateModel(BaseModel):
    """
    Wire shape of the UI filter state (camelCase, as the frontend sends it).

    Every field is optional on input; missing fields keep their current or
    default value.
    """

    weights: Optional[List[WeightIn]] = None
    rentRange: Optional[Tuple[float, float]] = None
    ageRange: Optional[Tuple[float, float]] = None
    incomeRange: Optional[Tuple[float, float]] = None
    selectedEthnicities: Optional[List[str]] = None
    selectedGenders: Optional[List[str]] = None
    selectedTimePeriods: Optional[List[str]] = None
    demographicScoring: Optional[DemographicScoringModel] = None


class FilterStateResponse(BaseModel):
    weights: List[WeightOut]
    rentRange: Tuple[float, float]
    ageRange: Tuple[float, float]
    incomeRange: Tuple[float, float]
    selectedEthnicities: List[str]
    selectedGenders: List[str]
    selectedTimePeriods: List[str]
    demographicScoring: DemographicScoringModel
    inactiveLayers: List[Dict[str, str]] = Field(default_factory=list)


# ============================================================
# RESILIENCE EDGE FUNCTION CONTRACT
# ============================================================
class WeightPayload(BaseModel):
    id: str
    value: int


class ResilienceRequest(BaseModel):
    """
    Body of POST /functions/v1/calculate-resilience.
    """

    weights: List[WeightPayload]
    ethnicities: List[str] = Field(default_factory=list)
    genders: List[str] = Field(default_factory=list)
    ageRange: Tuple[float, float]
    incomeRange: Tuple[float, float]
    rentRange: Tuple[float, float]
    selectedTimePeriods: List[str] = Field(default_factory=list)
    demographicScoring: Optional[DemographicScoringModel] = None
    crimeYears: List[str] = Field(default_factory=list)
    topN: int = 10


class ZoneScore(BaseModel):
    model_config = ConfigDict(extra="allow")

    geoid: Union[str, int]
    composite_score: Optional[float] = None
    custom_score: Optional[float] = None
    demographic_score: Optional[float] = None
    foot_traffic_score: Optional[float] = None
    crime_score: Optional[float] = None
    flood_risk_score: Optional[float] = None
    rent_score: Optional[float] = None
    poi_score: Optional[float] = None
    avg_rent: Optional[float] = None
    tract_name: Optional[str] = None
    display_name: Optional[str] = None
    nta_name: Optional[str] = None
    crime_timeline: Optional[Dict[str, Optional[float]]] = None


class ResilienceResponse(BaseModel):
    zones: List[ZoneScore] = Field(default_factory=list)
    total_zones_found: int = 0
    top_zones_returned: int = 0
    debug: Optional[Dict[str, Any]] = None


class ResilienceSearchRequest(BaseModel):
    filters: FilterStateModel = Field(default_factory=FilterStateModel)
    topN: int = Field(default=10, ge=1, le=2500)


# ============================================================
# ASSISTANT MODELS
# ============================================================
class AssistantChatRequest(BaseModel):
    message: str
    currentState: Optional[FilterStateModel] = None


class AssistantChatResponse(BaseModel):
    intent: Optional[str] = None
    message: Optional[str] = None
    businessType: str
    filters: FilterStateResponse
