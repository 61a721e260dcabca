from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.models.wish_model import AttendingStatus
from app.models.wish_orm import Wish
from app.routes.wishes import count_wishes


def test_create_wish_returns_generated_id_and_timestamp(client):
    response = client.post("/wishes", json={"name": "Ana", "message": "Congrats!", "attending": "ATTENDING"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert isinstance(body["data"]["id"], int)
    assert body["data"]["timestamp"]
    assert body["data"]["name"] == "Ana"
    assert body["data"]["message"] == "Congrats!"
    assert body["data"]["attending"] == "ATTENDING"


def test_get_wish_returns_identical_record(client, make_wish):
    created = make_wish()

    response = client.get(f"/wishes/{created['id']}")

    assert response.json() == {"success": True, "data": created}


def test_create_wish_with_short_name_fails_validation(client, db_session):
    response = client.post("/wishes", json={"name": "A", "message": "Congrats!", "attending": "ATTENDING"})

    assert response.status_code == 422
    assert db_session.scalar(select(func.count()).select_from(Wish)) == 0


def test_create_wish_rejects_unknown_attendance(client):
    response = client.post("/wishes", json={"name": "Ana", "message": "Congrats!", "attending": "PROBABLY"})

    assert response.status_code == 422


def test_create_wish_rejects_blank_message(client):
    response = client.post("/wishes", json={"name": "Ana", "message": "   ", "attending": "MAYBE"})

    assert response.status_code == 422


def test_create_wish_trims_whitespace(client):
    response = client.post("/wishes", json={"name": "  Budi ", "message": " Selamat! ", "attending": "MAYBE"})

    data = response.json()["data"]
    assert data["name"] == "Budi"
    assert data["message"] == "Selamat!"


def test_list_wishes_most_recent_first(client, make_wish):
    first = make_wish(name="First")
    second = make_wish(name="Second")
    third = make_wish(name="Third")

    response = client.get("/wishes")

    body = response.json()
    assert body["success"] is True
    assert [wish["id"] for wish in body["data"]] == [third["id"], second["id"], first["id"]]


def test_list_wishes_empty(client):
    assert client.get("/wishes").json() == {"success": True, "data": []}


def test_get_missing_wish(client):
    response = client.get("/wishes/999")

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Wish not found"}


def test_get_wish_with_non_numeric_id(client):
    assert client.get("/wishes/abc").status_code == 422


def test_update_wish_attendance(client, make_wish):
    created = make_wish(attending="MAYBE")

    response = client.put(
        f"/wishes/{created['id']}",
        json={"name": created["name"], "message": created["message"], "attending": "NOT_ATTENDING"},
    )
    assert response.json()["success"] is True

    fetched = client.get(f"/wishes/{created['id']}").json()["data"]
    assert fetched["attending"] == "NOT_ATTENDING"
    assert fetched["timestamp"] == created["timestamp"]


def test_update_wish_requires_full_body(client, make_wish):
    created = make_wish()

    response = client.put(f"/wishes/{created['id']}", json={"attending": "MAYBE"})

    assert response.status_code == 422


def test_update_wish_rejects_unknown_attendance(client, make_wish):
    created = make_wish()

    response = client.put(
        f"/wishes/{created['id']}",
        json={"name": "Ana", "message": "Congrats!", "attending": "SOMETIMES"},
    )

    assert response.status_code == 422


def test_update_missing_wish(client):
    response = client.put("/wishes/42", json={"name": "Ana", "message": "Congrats!", "attending": "MAYBE"})

    assert response.json() == {"success": False, "error": "Failed to update wish"}


def test_delete_wish(client, make_wish):
    created = make_wish()

    response = client.delete(f"/wishes/{created['id']}")
    assert response.json() == {"success": True, "message": "Wish deleted successfully"}

    fetched = client.get(f"/wishes/{created['id']}").json()
    assert fetched["success"] is False


def test_delete_missing_wish(client):
    assert client.delete("/wishes/7").json() == {"success": False, "error": "Failed to delete wish"}


def test_wish_stats(client, make_wish):
    make_wish(name="Ana", attending="ATTENDING")
    make_wish(name="Budi", attending="ATTENDING")
    make_wish(name="Citra", attending="MAYBE")
    make_wish(name="Dewi", attending="NOT_ATTENDING")

    response = client.get("/wishes/stats")

    assert response.json() == {
        "success": True,
        "data": {"total": 4, "attending": 2, "notAttending": 1, "maybe": 1},
    }


def test_wish_stats_empty(client):
    data = client.get("/wishes/stats").json()["data"]

    assert data == {"total": 0, "attending": 0, "notAttending": 0, "maybe": 0}


def test_storage_failure_returns_generic_error(client, monkeypatch):
    def broken_scalars(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(Session, "scalars", broken_scalars)

    response = client.get("/wishes")

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Failed to fetch wishes"}


def test_wish_timestamp_is_utc(client, make_wish):
    created = make_wish()

    fetched = client.get(f"/wishes/{created['id']}").json()["data"]

    assert created["timestamp"].endswith(("Z", "+00:00"))
    assert fetched["timestamp"] == created["timestamp"]


def test_count_wishes_with_and_without_filter(make_wish, db_session):
    make_wish(name="Ana", attending="MAYBE")
    make_wish(name="Budi", attending="ATTENDING")

    assert count_wishes(db_session) == 2
    assert count_wishes(db_session, None) == 2
    assert count_wishes(db_session, AttendingStatus.MAYBE) == 1
