from fastapi.testclient import TestClient

from tab_rhythm.api.server import create_app
from tab_rhythm.rhythm.settings import RhythmSettings
from tab_rhythm.service import RhythmService


def _client() -> TestClient:
    return TestClient(create_app(RhythmService(settings=RhythmSettings())))


def test_root_and_favicon_endpoints() -> None:
    client = _client()

    root_response = client.get("/")
    assert root_response.status_code == 200
    assert root_response.json()["status"] == "ok"

    favicon_response = client.get("/favicon.ico")
    assert favicon_response.status_code == 204


def test_quantize_endpoint_returns_rhythm_values() -> None:
    client = _client()

    response = client.post(
        "/v1/rhythm/quantize",
        json={"durations": [1, 1, 1, 1], "measure_duration": 192, "beat_duration": 48},
    )
    body = response.json()

    assert response.status_code == 200
    assert body["values"] == [{"duration": 48, "note_index": index} for index in range(4)]
    assert body["diagnostics"] == []


def test_quantize_endpoint_rejects_zero_sum() -> None:
    client = _client()

    response = client.post("/v1/rhythm/quantize", json={"durations": [0, 0]})

    assert response.status_code == 400
    assert "sum" in response.json()["detail"]


def test_quantize_endpoint_rejects_invalid_beat() -> None:
    client = _client()

    response = client.post("/v1/rhythm/quantize", json={"durations": [1, 1], "beat_duration": 0})

    assert response.status_code == 422


def test_arrangement_endpoint_returns_bars_and_diagnostics() -> None:
    client = _client()
    beats = [{"time": 0.0, "measure": 0}] + [{"time": 0.5 * step} for step in range(1, 4)]

    response = client.post(
        "/v1/rhythm/arrangement",
        json={
            "name": "Bass",
            "song_length": 2.0,
            "average_tempo": 120.0,
            "beats": beats,
            "notes": [{"time": 0.0, "string": 0, "fret": 5}],
            "chords": [{"time": 1.0, "chord_id": 42}],
        },
    )
    body = response.json()

    assert response.status_code == 200
    assert body["name"] == "Bass"
    bar = body["bars"][0]
    assert bar["time_nominator"] == 4
    assert [chord["duration"] for chord in bar["chords"]] == [96, 96]
    assert bar["chords"][0]["frets"] == [5, None, None, None, None, None]
    assert [item["code"] for item in body["diagnostics"]] == ["missing_chord_template"]


def test_arrangement_endpoint_rejects_bad_string() -> None:
    client = _client()

    response = client.post(
        "/v1/rhythm/arrangement",
        json={
            "song_length": 2.0,
            "beats": [{"time": 0.0, "measure": 0}],
            "notes": [{"time": 0.0, "string": 9, "fret": 5}],
        },
    )

    assert response.status_code == 422
