from datetime import date

from sqlalchemy.exc import OperationalError

from app.models import Reminder


def create_reminder(client, headers, plant_id, **overrides):
    body = {"plant_id": plant_id, "type": "water", "frequency_days": 7, "last_completed": "2024-01-01"}
    body.update(overrides)
    return client.post("/api/reminders", json=body, headers=headers)


def test_create_reminder(client, headers, plant):
    response = create_reminder(client, headers, plant.id)

    assert response.status_code == 201
    data = response.json()
    assert data["reminder_id"] > 0
    assert data["next_due"] == "2024-01-08"


def test_create_reminder_defaults_last_completed_to_today(client, headers, plant, clock):
    clock.set(date(2024, 1, 30))
    body = {"plant_id": plant.id, "type": "feed", "frequency_days": 3}

    response = client.post("/api/reminders", json=body, headers=headers)

    assert response.status_code == 201
    assert response.json()["next_due"] == "2024-02-02"


def test_create_reminder_rejects_non_positive_frequency(client, headers, plant):
    for frequency in (0, -3):
        response = create_reminder(client, headers, plant.id, frequency_days=frequency)
        assert response.status_code == 400

    listing = client.get(f"/api/plants/{plant.id}/reminders", headers=headers)
    assert listing.json() == []


def test_create_reminder_missing_fields(client, headers, plant):
    response = client.post("/api/reminders", json={"plant_id": plant.id}, headers=headers)
    assert response.status_code == 400

    response = create_reminder(client, headers, plant.id, type="")
    assert response.status_code == 400


def test_create_reminder_rejects_malformed_date(client, headers, plant):
    response = create_reminder(client, headers, plant.id, last_completed="01/08/2024")
    assert response.status_code == 400


def test_create_reminder_on_someone_elses_plant(client, other_headers, plant):
    response = create_reminder(client, other_headers, plant.id)
    assert response.status_code == 404


def test_requires_credentials(client, plant):
    assert client.get("/api/reminders/due").status_code == 401
    assert create_reminder(client, {}, plant.id).status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/api/reminders/due", headers=bad).status_code == 401


def test_list_plant_reminders_with_status(client, headers, plant, clock):
    create_reminder(client, headers, plant.id, type="water", frequency_days=7)
    create_reminder(client, headers, plant.id, type="feed", frequency_days=7)
    create_reminder(client, headers, plant.id, type="mist", frequency_days=2)

    clock.set(date(2024, 1, 8))
    response = client.get(f"/api/plants/{plant.id}/reminders", headers=headers)

    assert response.status_code == 200
    assert [(r["type"], r["next_due"], r["status"]) for r in response.json()] == [
        ("mist", "2024-01-03", "overdue"),
        ("feed", "2024-01-08", "due_today"),
        ("water", "2024-01-08", "due_today"),
    ]


def test_list_plant_reminders_not_owned(client, other_headers, plant):
    response = client.get(f"/api/plants/{plant.id}/reminders", headers=other_headers)
    assert response.status_code == 404


def test_get_single_reminder(client, headers, other_headers, plant):
    reminder_id = create_reminder(client, headers, plant.id).json()["reminder_id"]

    response = client.get(f"/api/reminders/{reminder_id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "scheduled"

    assert client.get(f"/api/reminders/{reminder_id}", headers=other_headers).status_code == 404


def test_due_then_complete_scenario(client, headers, plant, clock):
    reminder_id = create_reminder(client, headers, plant.id).json()["reminder_id"]
    assert client.get("/api/reminders/due", headers=headers).json() == []

    clock.set(date(2024, 1, 8))
    due = client.get("/api/reminders/due", headers=headers).json()
    assert due == [
        {
            "reminder_id": reminder_id,
            "plant_id": plant.id,
            "type": "water",
            "next_due": "2024-01-08",
            "frequency_days": 7,
            "plant_name": plant.name,
            "status": "due_today",
        }
    ]

    response = client.post(
        f"/api/reminders/{reminder_id}/complete",
        json={"completion_date": "2024-01-08"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["last_completed"] == "2024-01-08"
    assert response.json()["next_due"] == "2024-01-15"

    assert client.get("/api/reminders/due", headers=headers).json() == []
    clock.set(date(2024, 1, 14))
    assert client.get("/api/reminders/due", headers=headers).json() == []
    clock.set(date(2024, 1, 15))
    assert len(client.get("/api/reminders/due", headers=headers).json()) == 1


def test_overdue_ordered_before_later_due(client, headers, plant, clock):
    create_reminder(client, headers, plant.id, type="feed", frequency_days=4, last_completed="2024-01-01")
    create_reminder(client, headers, plant.id, type="water", frequency_days=1, last_completed="2023-12-31")

    clock.set(date(2024, 1, 10))
    due = client.get("/api/reminders/due", headers=headers).json()

    assert [(d["type"], d["next_due"], d["status"]) for d in due] == [
        ("water", "2024-01-01", "overdue"),
        ("feed", "2024-01-05", "overdue"),
    ]


def test_complete_without_body_uses_today(client, headers, plant, clock):
    reminder_id = create_reminder(client, headers, plant.id).json()["reminder_id"]
    clock.set(date(2024, 1, 10))

    response = client.post(f"/api/reminders/{reminder_id}/complete", headers=headers)

    assert response.status_code == 200
    assert response.json()["last_completed"] == "2024-01-10"
    assert response.json()["next_due"] == "2024-01-17"


def test_complete_twice_is_stable(client, headers, plant):
    reminder_id = create_reminder(client, headers, plant.id).json()["reminder_id"]
    body = {"completion_date": "2024-01-09"}

    first = client.post(f"/api/reminders/{reminder_id}/complete", json=body, headers=headers)
    second = client.post(f"/api/reminders/{reminder_id}/complete", json=body, headers=headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["next_due"] == second.json()["next_due"] == "2024-01-16"


def test_complete_not_owned(client, headers, other_headers, plant):
    reminder_id = create_reminder(client, headers, plant.id).json()["reminder_id"]

    response = client.post(f"/api/reminders/{reminder_id}/complete", headers=other_headers)

    assert response.status_code == 404
    assert client.post("/api/reminders/9999/complete", headers=headers).status_code == 404


def test_delete_reminder(client, headers, other_headers, plant):
    reminder_id = create_reminder(client, headers, plant.id).json()["reminder_id"]

    assert client.delete(f"/api/reminders/{reminder_id}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/reminders/{reminder_id}", headers=headers).status_code == 200
    assert client.delete(f"/api/reminders/{reminder_id}", headers=headers).status_code == 404
    assert client.get(f"/api/plants/{plant.id}/reminders", headers=headers).json() == []


def test_deleting_plant_removes_its_reminders(client, headers, plant, clock):
    create_reminder(client, headers, plant.id, frequency_days=1)
    clock.set(date(2024, 1, 5))
    assert len(client.get("/api/reminders/due", headers=headers).json()) == 1

    assert client.delete(f"/api/plants/{plant.id}", headers=headers).status_code == 200

    assert client.get(f"/api/plants/{plant.id}/reminders", headers=headers).status_code == 404
    assert client.get("/api/reminders/due", headers=headers).json() == []


def test_create_reminder_rejects_frequency_past_calendar(client, headers, plant):
    response = create_reminder(client, headers, plant.id, frequency_days=3_000_000)

    assert response.status_code == 400
    assert client.get(f"/api/plants/{plant.id}/reminders", headers=headers).json() == []


def test_complete_near_end_of_calendar_leaves_reminder_unchanged(client, headers, plant):
    reminder_id = create_reminder(client, headers, plant.id).json()["reminder_id"]

    response = client.post(
        f"/api/reminders/{reminder_id}/complete", json={"completion_date": "9999-12-30"}, headers=headers
    )

    assert response.status_code == 400
    reminder = client.get(f"/api/reminders/{reminder_id}", headers=headers).json()
    assert reminder["last_completed"] == "2024-01-01"
    assert reminder["next_due"] == "2024-01-08"


def test_create_reminder_does_not_coerce_frequency(client, headers, plant):
    for frequency in (True, "7", 7.5):
        response = create_reminder(client, headers, plant.id, frequency_days=frequency)
        assert response.status_code == 400

    assert client.get(f"/api/plants/{plant.id}/reminders", headers=headers).json() == []


def test_out_of_range_ids_are_bad_requests(client, headers, plant):
    huge = 2**70

    assert client.get(f"/api/reminders/{huge}", headers=headers).status_code == 400
    assert client.delete(f"/api/reminders/{huge}", headers=headers).status_code == 400
    assert client.post(f"/api/reminders/{huge}/complete", headers=headers).status_code == 400
    assert create_reminder(client, headers, huge).status_code == 400


def test_commit_failure_is_reported_and_rolled_back(client, headers, plant, db_session, monkeypatch):
    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", broken_commit)
    response = create_reminder(client, headers, plant.id)
    monkeypatch.undo()

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to insert reminder."}
    assert db_session.query(Reminder).count() == 0


def test_query_failure_is_a_generic_server_error(client, headers, plant, db_session, monkeypatch):
    def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "execute", broken_execute)
    response = client.get("/api/reminders/due", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "An internal server error occurred."}
