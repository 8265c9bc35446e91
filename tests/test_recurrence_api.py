# tests/test_recurrence_api.py
from http import HTTPStatus

from fastapi.testclient import TestClient


def test_generate_monthly_nth(client: TestClient) -> None:
    response = client.post(
        "/recurrence/generate",
        json={"selection": "monthly_nth", "anchor_date": "2026-01-13"},
    )

    assert response.status_code == HTTPStatus.OK
    data = response.json()
    assert data["rule"]["kind"] == 3
    assert data["rule"]["monthly_week"] == 2
    assert data["rule"]["monthly_weekday"] == 3
    assert data["description"] == {
        "selection": "monthly_nth",
        "label": "Monthly on the 2nd Tuesday",
    }


def test_generate_none(client: TestClient) -> None:
    response = client.post(
        "/recurrence/generate",
        json={"selection": "none", "anchor_date": "2026-01-13"},
    )

    data = response.json()
    assert data["rule"] is None
    assert data["description"]["selection"] == "none"


def test_generate_rejects_unknown_selection(client: TestClient) -> None:
    response = client.post(
        "/recurrence/generate",
        json={"selection": "fortnightly", "anchor_date": "2026-01-13"},
    )

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_describe_weekdays(client: TestClient) -> None:
    response = client.post(
        "/recurrence/describe",
        json={
            "rule": {"kind": 2, "weekly_days": [2, 3, 4, 5, 6]},
            "anchor_date": "2026-01-13",
        },
    )

    assert response.status_code == HTTPStatus.OK
    assert response.json()["selection"] == "weekdays"


def test_describe_rejects_inconsistent_rule(client: TestClient) -> None:
    response = client.post(
        "/recurrence/describe",
        json={"rule": {"kind": 1, "monthly_week": 2}, "anchor_date": "2026-01-13"},
    )

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_summary(client: TestClient) -> None:
    response = client.post(
        "/recurrence/summary",
        json={"kind": 1, "interval": 2, "end_times": 4},
    )

    assert response.status_code == HTTPStatus.OK
    assert response.json()["full_summary"] == "Every 2 days, for 4 occurrences"


def test_options_for_last_tuesday(client: TestClient) -> None:
    """
    Jan 27 2026 is both the 4th and the last Tuesday, so both monthly
    choices are offered.
    """
    response = client.get("/recurrence/options", params={"anchor_date": "2026-01-27"})

    assert response.status_code == HTTPStatus.OK
    values = [option["value"] for option in response.json()]
    assert values == ["none", "daily", "weekly", "weekdays", "monthly_nth", "monthly_last"]


def test_options_at_end_of_supported_range(client: TestClient) -> None:
    response = client.get("/recurrence/options", params={"anchor_date": "9999-12-31"})

    assert response.status_code == HTTPStatus.OK
    values = [option["value"] for option in response.json()]
    assert "monthly_last" in values
    assert "monthly_nth" not in values
