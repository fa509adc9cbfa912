import json
from unittest.mock import patch

import numpy as np
from fastapi.testclient import TestClient

from openhouse_search.app import app
from openhouse_search.search.cache import clear_cache

client = TestClient(app)

RECORDS = [
    {"id_jpo": 1, "intitule": "Licence Informatique", "nom_ville": "Lyon",
     "nom_region": "Auvergne-Rhône-Alpes", "nom_etablissement": "Université Lyon 1",
     "nom_diplome": "Licence", "date": "2025-02-01", "heure": "09:00", "stages": "Oui"},
    {"id_jpo": 2, "intitule": "Licence Droit", "nom_ville": "Paris",
     "nom_region": "Île-de-France", "nom_etablissement": None,
     "nom_diplome": "Licence", "date": "2025-02-08", "heure": "10:00", "stages": None},
]

LLM_ANSWER = "```json\n" + json.dumps({
    "enhancedQuery": "licence informatique Lyon",
    "keywords": ["informatique", "Lyon"],
    "filters": {"region": None, "city": ["Lyon"], "diploma": None},
    "explanation": "Computer science in Lyon.",
    "recommendations": [1],
}) + "\n```"


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@patch("openhouse_search.search.engine.request_intent", return_value=LLM_ANSWER)
@patch("openhouse_search.search.engine.get_records", return_value=RECORDS)
def test_search_returns_camel_case_bundle(mock_records, mock_llm):
    clear_cache()
    resp = client.post("/search", json={"query": "informatique Lyon", "facets": {"region": "all"}})

    assert resp.status_code == 200
    body = resp.json()
    assert body["totalResults"] == 2
    assert [r["id_jpo"] for r in body["results"]] == [1, 2]
    assert body["results"][0]["relevanceScore"] == 2
    assert body["results"][1]["relevanceScore"] == 0
    assert body["results"][1]["nom_etablissement"] is None
    assert body["intent"]["enhancedQuery"] == "licence informatique Lyon"
    assert body["intent"]["recommendedIds"] == [1]
    assert body["intent"]["suggestedFilters"]["city"] == ["Lyon"]


@patch("openhouse_search.search.engine.request_intent", return_value=LLM_ANSWER)
@patch("openhouse_search.search.engine.get_records", return_value=RECORDS)
def test_search_diploma_type_facet(mock_records, mock_llm):
    clear_cache()
    resp = client.post(
        "/search",
        json={"query": "informatique", "facets": {"diplomaType": "Master"}},
    )

    assert resp.status_code == 200
    assert resp.json()["totalResults"] == 0
    assert resp.json()["results"] == []


@patch("openhouse_search.search.engine.request_intent", return_value=LLM_ANSWER)
@patch("openhouse_search.search.engine.get_records", return_value=RECORDS)
def test_search_identical_requests_are_served_from_cache(mock_records, mock_llm):
    clear_cache()
    payload = {"query": "informatique Lyon", "facets": {"city": "Lyon"}}

    first = client.post("/search", json=payload)
    second = client.post("/search", json=payload)

    assert first.content == second.content
    assert mock_llm.call_count == 1
    stats = client.get("/cache/stats").json()
    assert stats["hits"] == 1
    assert stats["misses"] == 1


@patch("openhouse_search.search.engine.get_records", side_effect=OSError("database offline"))
def test_search_record_source_failure_returns_error(mock_records):
    clear_cache()
    resp = client.post("/search", json={"query": "informatique"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Search failed: database offline"}


@patch("openhouse_search.search.engine.request_intent", side_effect=RuntimeError("401 invalid key"))
@patch("openhouse_search.search.engine.get_records", return_value=RECORDS)
def test_search_llm_failure_returns_error(mock_records, mock_llm):
    clear_cache()
    resp = client.post("/search", json={"query": "informatique"})

    assert resp.status_code == 500
    assert "401 invalid key" in resp.json()["error"]


@patch("openhouse_search.search.engine.request_intent")
@patch("openhouse_search.search.engine.get_records", return_value=[])
def test_search_no_records_message(mock_records, mock_llm):
    clear_cache()
    resp = client.post("/search", json={"query": "informatique"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["results"] == []
    assert body["totalResults"] == 0
    assert body["message"]
    mock_llm.assert_not_called()


def test_search_validation_rejects_non_string_query():
    resp = client.post("/search", json={"query": ["informatique"]})
    assert resp.status_code == 422


@patch("openhouse_search.app.get_records", return_value=RECORDS)
def test_data_returns_all_records(mock_records):
    resp = client.get("/data")
    assert resp.status_code == 200
    assert [r["id_jpo"] for r in resp.json()] == [1, 2]


@patch("openhouse_search.app.get_records", side_effect=FileNotFoundError("missing"))
def test_data_failure(mock_records):
    resp = client.get("/data")
    assert resp.status_code == 500
    assert "error" in resp.json()


@patch("openhouse_search.app.get_records", return_value=RECORDS)
def test_filters_lists_distinct_values(mock_records):
    resp = client.get("/filters")
    assert resp.status_code == 200
    assert resp.json() == {
        "regions": ["Auvergne-Rhône-Alpes", "Île-de-France"],
        "cities": ["Lyon", "Paris"],
        "institutions": ["Université Lyon 1"],
        "diplomas": ["Licence"],
    }


@patch("openhouse_search.app.encode_text", return_value=np.array([0.25, -0.5, 1.0]))
def test_embed_returns_vector(mock_encode):
    resp = client.post("/embed", json={"text": "licence informatique"})
    assert resp.status_code == 200
    assert resp.json() == {"embedding": [0.25, -0.5, 1.0]}
    mock_encode.assert_called_once_with("licence informatique")


def test_embed_requires_text():
    resp = client.post("/embed", json={"text": ""})
    assert resp.status_code == 422


@patch("openhouse_search.app.encode_text", side_effect=RuntimeError("model download failed"))
def test_embed_failure(mock_encode):
    resp = client.post("/embed", json={"text": "droit"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate embedding"}
