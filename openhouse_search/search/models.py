from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL = "all"


class Facets(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    region: str | None = Field(default=None, description='Region name or "all"')
    city: str | None = Field(default=None, description='City name or "all"')
    institution: str | None = Field(default=None, description='Institution name or "all"')
    diploma_type: str | None = Field(
        default=None, alias="diplomaType", description='Diploma name or "all"'
    )

    def is_set(self, name: str) -> bool:
        value = getattr(self, name)
        return bool(value) and value != ALL


class SearchRequest(BaseModel):
    query: str = Field(default="", max_length=1000)
    facets: Facets = Field(default_factory=Facets)


class SuggestedFilters(BaseModel):
    region: list[str] | None = None
    city: list[str] | None = None
    diploma: list[str] | None = None

    @field_validator("region", "city", "diploma", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class Intent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    enhanced_query: str = Field(default="", alias="enhancedQuery")
    keywords: list[str] = Field(default_factory=list)
    suggested_filters: SuggestedFilters = Field(
        default_factory=SuggestedFilters, alias="suggestedFilters"
    )
    explanation: str = ""
    recommended_ids: list[int] = Field(default_factory=list, alias="recommendedIds")

    @field_validator("keywords", mode="before")
    @classmethod
    def _clean_keywords(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [kw for kw in value if isinstance(kw, str) and kw.strip()]

    @field_validator("recommended_ids", mode="before")
    @classmethod
    def _clean_ids(cls, value: Any) -> list[int]:
        if not isinstance(value, list):
            return []
        ids: list[int] = []
        for item in value:
            if isinstance(item, bool):
                continue
            try:
                ids.append(int(item))
            except (TypeError, ValueError):
                continue
        return ids


class Record(BaseModel):
    """One open day joined with its component, city, institution and programme."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id_jpo: int | None = None
    date: str | None = None
    heure: str | None = None
    nom_composante: str | None = None
    adresse: str | None = None
    nom_ville: str | None = None
    nom_region: str | None = None
    nom_etablissement: str | None = None
    nom_diplome: str | None = None
    intitule: str | None = None
    stages: str | None = None
    stages_etranger: str | None = None
    debouches: str | None = None
    relevance_score: int = Field(default=0, ge=0, alias="relevanceScore")

    @field_validator(
        "date", "heure", "nom_composante", "adresse", "nom_ville", "nom_region",
        "nom_etablissement", "nom_diplome", "intitule", "stages",
        "stages_etranger", "debouches",
        mode="before",
    )
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    results: list[Record]
    intent: Intent | None = None
    total_results: int = Field(alias="totalResults")
    message: str | None = None


class FilterOptions(BaseModel):
    regions: list[str]
    cities: list[str]
    institutions: list[str]
    diplomas: list[str]


class EmbedRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=8000)


class EmbedResponse(BaseModel):
    embedding: list[float]
