import uuid

from models.schedule_slot import ScheduleSlot
from services import storage


def _teacher(client, name):
    return client.post("/api/teachers/", json={"name": name, "subject": "Math"}).json()["id"]


def _slot(client, teacher_id, grade, section, day, period):
    resp = client.post(
        "/api/schedule-slots/",
        json={"teacherId": teacher_id, "grade": grade, "section": section, "day": day, "period": period},
    )
    assert resp.status_code == 201, resp.text


def _all_slots(client):
    return sorted(
        (s["teacher_id"], s["grade"], s["section"], s["day"], s["period"])
        for s in client.get("/api/schedule-slots/").json()
    )


def test_conflicting_save_is_blocked(client):
    a = _teacher(client, "A")
    _slot(client, a, 10, 1, "Monday", 1)
    before = _all_slots(client)

    resp = client.patch(
        "/api/class-schedules/10/2",
        json={"slots": [{"day": "Monday", "period": 1, "teacherId": a}], "isPartial": True},
    )

    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert detail["code"] == "SCHEDULE_CONFLICT"
    assert len(detail["conflicts"]) == 1
    conflict = detail["conflicts"][0]
    assert (conflict["day"], conflict["period"]) == ("Monday", 1)
    assert "A" in conflict["descriptions"][0]
    assert "10/1" in conflict["descriptions"][0]
    assert _all_slots(client) == before


def test_partial_save_returns_class_schedule(client):
    a, b = _teacher(client, "A"), _teacher(client, "B")
    _slot(client, a, 10, 2, "Monday", 1)
    _slot(client, b, 10, 2, "Monday", 2)
    _slot(client, a, 11, 1, "Monday", 2)

    resp = client.patch(
        "/api/class-schedules/10/2",
        json={
            "slots": [
                {"day": "Monday", "period": 1, "teacherId": ""},
                {"day": "Sunday", "period": 3, "teacherId": a},
            ],
            "isPartial": True,
        },
    )

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "SAVED"
    assert (body["grade"], body["section"]) == (10, 2)
    assert [(s["day"], s["period"], s["teacher_id"]) for s in body["slots"]] == [
        ("Sunday", 3, a),
        ("Monday", 2, b),
    ]
    assert [(s["day"], s["period"]) for s in client.get("/api/class-schedules/11/1").json()] == [("Monday", 2)]


def test_snake_case_body_is_accepted(client):
    a = _teacher(client, "A")

    resp = client.patch(
        "/api/class-schedules/12/7",
        json={"slots": [{"day": "Thursday", "period": 7, "teacher_id": a}], "is_partial": True},
    )

    assert resp.status_code == 200
    assert [s["teacher_id"] for s in client.get("/api/class-schedules/12/7").json()] == [a]


def test_empty_save_reports_no_changes(client):
    resp = client.patch("/api/class-schedules/10/1", json={"slots": [], "isPartial": True})

    assert resp.status_code == 200
    assert resp.json()["status"] == "NO_CHANGES"
    assert resp.json()["slots"] == []


def test_full_replacement_is_refused(client):
    resp = client.patch("/api/class-schedules/10/1", json={"slots": [], "isPartial": False})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "PARTIAL_UPDATE_REQUIRED"


def test_invalid_cell_is_rejected(client):
    resp = client.patch(
        "/api/class-schedules/10/1",
        json={"slots": [{"day": "Friday", "period": 1, "teacherId": ""}], "isPartial": True},
    )

    assert resp.status_code == 422


def test_conflict_preview_does_not_persist(client):
    a, b = _teacher(client, "A"), _teacher(client, "B")
    _slot(client, a, 11, 4, "Wednesday", 6)

    resp = client.post(
        "/api/class-schedules/11/5/conflicts",
        json={
            "slots": [
                {"day": "Wednesday", "period": 6, "teacherId": a},
                {"day": "Wednesday", "period": 5, "teacherId": b},
            ]
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["has_conflicts"] is True
    assert body["conflicts"] == [
        {"day": "Wednesday", "period": 6, "descriptions": ["A (conflicts with class 11/4)"]}
    ]
    assert client.get("/api/class-schedules/11/5").json() == []


def test_saving_twice_is_idempotent(client):
    a = _teacher(client, "A")
    payload = {"slots": [{"day": "Tuesday", "period": 2, "teacherId": a}], "isPartial": True}

    first = client.patch("/api/class-schedules/10/3", json=payload).json()
    second = client.patch("/api/class-schedules/10/3", json=payload).json()

    assert [s["id"] for s in first["slots"]] == [s["id"] for s in second["slots"]]
    assert len(_all_slots(client)) == 1


def test_cell_taken_by_a_concurrent_save_returns_409(client, session_factory, monkeypatch):
    a, b = _teacher(client, "A"), _teacher(client, "B")
    original_create = storage.create_schedule_slot

    def create_after_competing_write(db, **kwargs):
        # Another request for the same class commits this cell first.
        with session_factory() as other:
            other.add(
                ScheduleSlot(
                    id=uuid.uuid4(),
                    teacher_id=uuid.UUID(b),
                    grade=10,
                    section=4,
                    day="Monday",
                    period=1,
                )
            )
            other.commit()
        monkeypatch.setattr(storage, "create_schedule_slot", original_create)
        return original_create(db, **kwargs)

    monkeypatch.setattr(storage, "create_schedule_slot", create_after_competing_write)

    resp = client.patch(
        "/api/class-schedules/10/4",
        json={
            "slots": [
                {"day": "Monday", "period": 1, "teacherId": a},
                {"day": "Monday", "period": 2, "teacherId": a},
            ],
            "isPartial": True,
        },
    )

    assert resp.status_code == 409
    assert resp.json()["detail"] == "SLOT_ALREADY_OCCUPIED"
    assert [(s["day"], s["period"], s["teacher_id"]) for s in client.get("/api/class-schedules/10/4").json()] == [
        ("Monday", 1, b)
    ]
