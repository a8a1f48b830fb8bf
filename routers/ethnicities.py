# routers/ethnicities.py

from typing import List

from fastapi import APIRouter

from schemas import (
    EthnicityNode,
    EthnicityResolveRequest,
    EthnicityResolveResponse,
    EthnicityValidationResponse,
)
from services.ethnicity_resolver import (
    children_of,
    find_by_code,
    race_categories,
    resolve,
    validate_selection,
)


router = APIRouter(
    prefix="/api/ethnicities",
    tags=["Ethnicity"],
)


def _node(code: str) -> EthnicityNode:
    opt = find_by_code(code)
    return EthnicityNode(
        code=code,
        label=opt.label if opt else code,
        children=[_node(child) for child in children_of(code)],
    )


@router.post("/resolve", response_model=EthnicityResolveResponse)
def resolve_ethnicities(body: EthnicityResolveRequest):
    codes = sorted(resolve(body.labels))
    return {"codes": codes, "count": len(codes)}


@router.post("/validate", response_model=EthnicityValidationResponse)
def validate_ethnicities(body: EthnicityResolveRequest):
    report = validate_selection(body.labels)
    return {
        "isValid": report.is_valid,
        "warnings": report.warnings,
        "suggestions": report.suggestions,
    }


@router.get("/tree", response_model=List[EthnicityNode])
def get_ethnicity_tree():
    return [_node(race.code) for race in race_categories()]
