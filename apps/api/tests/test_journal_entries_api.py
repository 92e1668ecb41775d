"""
Tests for the journal entry endpoints.

Covers create-or-replace by date, validation messages surfaced to the
client, row replacement, deletion and owner scoping.
"""
from uuid import uuid4

from models import EntrySport, JournalEntry


def entry_payload(**overrides):
    payload = {
        "entry_date": "2024-06-05",
        "sports": [{"sport": "Soccer", "minutes": 60}],
        "effort": 4,
        "confidence": 4,
        "energy": 3,
        "body_feel_before": "Great",
        "body_feel_after": "Sore",
        "win_today": "Won every 1v1",
        "lesson_today": "",
        "tomorrow_focus": "First touch",
    }
    payload.update(overrides)
    return payload


class TestSubmitEntry:

    def test_create_entry(self, client, auth_headers):
        response = client.post("/v1/entries", json=entry_payload(), headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["entry_date"] == "2024-06-05"
        assert data["effort"] == 4
        assert data["sports"] == [{"sport": "Soccer", "minutes": 60}]
        assert data["total_minutes"] == 60
        assert data["lesson_today"] == ""

    def test_resubmitting_same_day_updates_in_place(self, client, auth_headers, db_session, test_athlete):
        first = client.post("/v1/entries", json=entry_payload(), headers=auth_headers).json()
        second = client.post(
            "/v1/entries",
            json=entry_payload(
                sports=[{"sport": "Tennis", "minutes": 30}, {"sport": "Swimming", "minutes": 20}],
                effort=2,
            ),
            headers=auth_headers,
        ).json()

        assert second["id"] == first["id"]
        assert second["effort"] == 2
        assert second["sports"] == [
            {"sport": "Tennis", "minutes": 30},
            {"sport": "Swimming", "minutes": 20},
        ]
        assert second["total_minutes"] == 50
        assert db_session.query(JournalEntry).filter(JournalEntry.athlete_id == test_athlete.id).count() == 1
        assert db_session.query(EntrySport).filter(EntrySport.athlete_id == test_athlete.id).count() == 2

    def test_blank_rows_are_ignored(self, client, auth_headers):
        payload = entry_payload(sports=[
            {"sport": "Soccer", "minutes": 60},
            {"sport": "", "minutes": 0},
            {"sport": "Golf", "minutes": 0},
        ])
        response = client.post("/v1/entries", json=payload, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["sports"] == [{"sport": "Soccer", "minutes": 60}]

    def test_effort_out_of_range(self, client, auth_headers):
        response = client.post("/v1/entries", json=entry_payload(effort=6), headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["detail"] == "Effort must be 1–5"

    def test_fractional_rating_gets_a_single_message(self, client, auth_headers):
        response = client.post("/v1/entries", json=entry_payload(effort=4.5), headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["detail"] == "Effort must be 1–5"

    def test_fractional_minutes_get_a_single_message(self, client, auth_headers):
        response = client.post(
            "/v1/entries",
            json=entry_payload(sports=[{"sport": "Soccer", "minutes": 12.5}]),
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "Minutes must be between 1 and 600"

    def test_no_sports(self, client, auth_headers):
        response = client.post(
            "/v1/entries",
            json=entry_payload(sports=[{"sport": "Soccer", "minutes": 0}]),
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert response.json()["detail"] == "At least one sport is required"

    def test_text_too_long(self, client, auth_headers):
        response = client.post("/v1/entries", json=entry_payload(win_today="x" * 141), headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["detail"] == "Win Today must be 140 characters or less"

    def test_invalid_date_rejected_by_schema(self, client, auth_headers):
        response = client.post("/v1/entries", json=entry_payload(entry_date="2024-02-30"), headers=auth_headers)
        assert response.status_code == 422

    def test_failed_submission_keeps_existing_entry(self, client, auth_headers):
        client.post("/v1/entries", json=entry_payload(), headers=auth_headers)
        client.post("/v1/entries", json=entry_payload(effort=0), headers=auth_headers)

        data = client.get("/v1/entries/2024-06-05", headers=auth_headers).json()
        assert data["entry"]["effort"] == 4
        assert data["entry"]["sports"] == [{"sport": "Soccer", "minutes": 60}]


class TestReadEntries:

    def test_entry_for_unlogged_day(self, client, auth_headers):
        response = client.get("/v1/entries/2024-06-05", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["entry"] is None
        assert data["default_sport"] == "Soccer"

    def test_entry_for_logged_day(self, client, auth_headers):
        client.post("/v1/entries", json=entry_payload(), headers=auth_headers)

        data = client.get("/v1/entries/2024-06-05", headers=auth_headers).json()
        assert data["entry"]["win_today"] == "Won every 1v1"
        assert data["entry"]["body_feel_after"] == "Sore"

    def test_list_is_newest_first_and_limited(self, client, auth_headers):
        for day in ("2024-06-01", "2024-06-03", "2024-06-02"):
            client.post("/v1/entries", json=entry_payload(entry_date=day), headers=auth_headers)

        data = client.get("/v1/entries", params={"limit": 2}, headers=auth_headers).json()
        assert data["count"] == 2
        assert [e["entry_date"] for e in data["entries"]] == ["2024-06-03", "2024-06-02"]

    def test_list_only_shows_own_entries(self, client, auth_headers, other_auth_headers):
        client.post("/v1/entries", json=entry_payload(), headers=other_auth_headers)

        data = client.get("/v1/entries", headers=auth_headers).json()
        assert data == {"entries": [], "count": 0}


class TestUpdateEntry:

    def test_update_by_id(self, client, auth_headers):
        created = client.post("/v1/entries", json=entry_payload(), headers=auth_headers).json()

        response = client.put(
            f"/v1/entries/{created['id']}",
            json=entry_payload(entry_date="2024-06-06", confidence=5),
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["entry_date"] == "2024-06-06"
        assert response.json()["confidence"] == 5
        assert client.get("/v1/entries/2024-06-05", headers=auth_headers).json()["entry"] is None

    def test_update_onto_logged_day_conflicts(self, client, auth_headers):
        client.post("/v1/entries", json=entry_payload(entry_date="2024-06-04"), headers=auth_headers)
        later = client.post("/v1/entries", json=entry_payload(entry_date="2024-06-05"), headers=auth_headers).json()

        response = client.put(
            f"/v1/entries/{later['id']}",
            json=entry_payload(entry_date="2024-06-04"),
            headers=auth_headers,
        )
        assert response.status_code == 409

    def test_cannot_update_another_athletes_entry(self, client, auth_headers, other_auth_headers):
        created = client.post("/v1/entries", json=entry_payload(), headers=auth_headers).json()

        response = client.put(
            f"/v1/entries/{created['id']}",
            json=entry_payload(effort=1),
            headers=other_auth_headers,
        )
        assert response.status_code == 404


class TestDeleteEntry:

    def test_delete_removes_entry_and_rows(self, client, auth_headers, db_session):
        created = client.post(
            "/v1/entries",
            json=entry_payload(sports=[{"sport": "Soccer", "minutes": 60}, {"sport": "Golf", "minutes": 30}]),
            headers=auth_headers,
        ).json()

        response = client.delete(f"/v1/entries/{created['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get("/v1/entries/2024-06-05", headers=auth_headers).json()["entry"] is None
        assert db_session.query(EntrySport).count() == 0

    def test_delete_unknown_entry(self, client, auth_headers):
        response = client.delete(f"/v1/entries/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404

    def test_cannot_delete_another_athletes_entry(self, client, auth_headers, other_auth_headers):
        created = client.post("/v1/entries", json=entry_payload(), headers=auth_headers).json()

        response = client.delete(f"/v1/entries/{created['id']}", headers=other_auth_headers)

        assert response.status_code == 404
        assert client.get("/v1/entries/2024-06-05", headers=auth_headers).json()["entry"] is not None
