from fastapi.testclient import TestClient

from vetrecords.api.routes.stats import group_severe_allergies
from vetrecords.main import create_app


def test_stats_empty_database(client):
    response = client.get("/api/stats")
    assert response.status_code == 200
    assert response.json() == {
        "totalPets": 0,
        "petsByType": [],
        "totalVaccines": 0,
        "totalAllergies": 0,
        "upcomingVaccines": [],
        "severeAllergies": [],
    }


def test_stats_counts(client, make_pet, make_record):
    dog = make_pet(name="Rex", animal_type="Dog")
    make_pet(name="Fido", animal_type="Dog")
    cat = make_pet(name="Tom", animal_type="Cat")
    make_record(dog["id"], record_type="vaccine", name="Rabies", date_administered="2024-01-01")
    make_record(cat["id"], record_type="vaccine", name="FVRCP", date_administered="2024-01-01")
    make_record(cat["id"], record_type="allergy", name="Fish", severity="mild")

    stats = client.get("/api/stats").json()
    assert stats["totalPets"] == 3
    assert sorted((r["animal_type"], r["count"]) for r in stats["petsByType"]) == [("Cat", 1), ("Dog", 2)]
    assert stats["totalVaccines"] == 2
    assert stats["totalAllergies"] == 1


def test_upcoming_vaccine_window(client, pet, make_record, due_in):
    make_record(pet["id"], record_type="vaccine", name="Edge", next_due_date=due_in(60))
    make_record(pet["id"], record_type="vaccine", name="Beyond", next_due_date=due_in(61))
    make_record(pet["id"], record_type="vaccine", name="Overdue", next_due_date=due_in(-5))
    make_record(pet["id"], record_type="vaccine", name="Given", date_administered=due_in(-100))

    upcoming = client.get("/api/stats").json()["upcomingVaccines"]
    assert [v["name"] for v in upcoming] == ["Overdue", "Edge"]
    assert upcoming[0]["pet_name"] == pet["name"]
    assert upcoming[0]["pet_id"] == pet["id"]
    assert upcoming[0]["next_due_date"] == due_in(-5)


def test_upcoming_vaccines_capped_and_sorted(client, pet, make_record, due_in):
    for offset in [30, 5, 12, 1, 40, 22, 8, 50, 3, 17, 9, 45]:
        make_record(pet["id"], record_type="vaccine", name=f"Vax {offset}", next_due_date=due_in(offset))

    upcoming = client.get("/api/stats").json()["upcomingVaccines"]
    assert len(upcoming) == 10
    dates = [v["next_due_date"] for v in upcoming]
    assert dates == sorted(dates)
    assert upcoming[0]["name"] == "Vax 1"
    assert "Vax 50" not in [v["name"] for v in upcoming]


def test_severe_allergies_grouped_by_pet(client, make_pet, make_record):
    zed = make_pet(name="Zed")
    amy = make_pet(name="Amy")
    make_record(zed["id"], record_type="allergy", name="Pollen", severity="severe")
    make_record(zed["id"], record_type="allergy", name="Peanuts", severity="severe", reactions="Hives")
    make_record(zed["id"], record_type="allergy", name="Dust", severity="mild")
    make_record(amy["id"], record_type="allergy", name="Beef", severity="severe", reactions="Vomiting")

    severe = client.get("/api/stats").json()["severeAllergies"]
    assert severe == [
        {"pet_id": amy["id"], "pet_name": "Amy", "allergies": [{"name": "Beef", "reactions": "Vomiting"}]},
        {
            "pet_id": zed["id"],
            "pet_name": "Zed",
            "allergies": [
                {"name": "Peanuts", "reactions": "Hives"},
                {"name": "Pollen", "reactions": None},
            ],
        },
    ]


def test_group_severe_allergies_keeps_first_seen_order():
    rows = [
        {"pet_id": 2, "pet_name": "Bo", "allergy_name": "A", "reactions": None},
        {"pet_id": 1, "pet_name": "Cy", "allergy_name": "B", "reactions": "x"},
        {"pet_id": 2, "pet_name": "Bo", "allergy_name": "C", "reactions": "y"},
    ]
    grouped = group_severe_allergies(rows)
    assert [g["pet_id"] for g in grouped] == [2, 1]
    assert [a["name"] for a in grouped[0]["allergies"]] == ["A", "C"]
    assert group_severe_allergies([]) == []


def test_window_follows_settings(settings, due_in):
    settings.upcoming_vaccine_window_days = 7
    settings.upcoming_vaccine_limit = 1
    with TestClient(create_app(settings)) as client:
        pet_id = client.post("/api/pets", json={
            "name": "Kit", "animal_type": "Cat", "owner_name": "Ana", "date_of_birth": "2020-01-01",
        }).json()["id"]
        for name, days in [("Soon", 7), ("Sooner", 2), ("Later", 8)]:
            client.post(f"/api/pets/{pet_id}/records", json={
                "record_type": "vaccine", "name": name, "next_due_date": due_in(days),
            })

        upcoming = client.get("/api/stats").json()["upcomingVaccines"]
    assert [v["name"] for v in upcoming] == ["Sooner"]
