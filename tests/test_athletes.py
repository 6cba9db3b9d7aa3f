from helpers import make_race


def register(client, ibu_id, given_name, family_name, gender="M", nationality="NOR"):
    response = client.post("/athletes/", json={
        "ibu_id": ibu_id,
        "given_name": given_name,
        "family_name": family_name,
        "nationality": nationality,
        "gender": gender,
    })
    assert response.status_code == 200, response.text
    return response.json()


def test_register_athlete_then_update_by_ibu_id(client):
    created = register(client, "BTNOR11605199301", "Johannes", "Boe", nationality=" nor")
    assert created["nationality"] == "NOR"

    updated = register(client, "BTNOR11605199301", "Johannes Thingnes", "Bø")

    assert updated["id"] == created["id"]
    assert updated["given_name"] == "Johannes Thingnes"
    assert updated["family_name"] == "Bø"
    assert len(client.get("/athletes/search", params={"q": "Johannes"}).json()) == 1


def test_search_needs_two_characters(client):
    register(client, "A1", "Sturla", "Laegreid")

    assert client.get("/athletes/search").json() == []
    assert client.get("/athletes/search", params={"q": "L"}).json() == []


def test_search_matches_given_or_family_name(client):
    register(client, "A1", "Sturla", "Laegreid")
    register(client, "A2", "Tarjei", "Boe")
    register(client, "A3", "Emilien", "Jacquelin")

    by_family = client.get("/athletes/search", params={"q": "laeg"}).json()
    by_given = client.get("/athletes/search", params={"q": "TARJ"}).json()

    assert [a["ibu_id"] for a in by_family] == ["A1"]
    assert [a["ibu_id"] for a in by_given] == ["A2"]


def test_search_filters_by_gender_and_orders_by_family_name(client):
    register(client, "M1", "Ole", "Zeitler")
    register(client, "M2", "Ola", "Andersen")
    register(client, "W1", "Olena", "Bilosiuk", gender="W")

    men = client.get("/athletes/search", params={"q": "Ol", "gender": "M"}).json()
    everyone = client.get("/athletes/search", params={"q": "Ol"}).json()

    assert [a["ibu_id"] for a in men] == ["M2", "M1"]
    assert [a["family_name"] for a in everyone] == ["Andersen", "Bilosiuk", "Zeitler"]


def test_search_returns_at_most_ten(client):
    for i in range(12):
        register(client, f"A{i}", "Nils", f"Family{i:02d}")

    found = client.get("/athletes/search", params={"q": "Nils"}).json()

    assert len(found) == 10
    assert found[0]["family_name"] == "Family00"


def test_registered_athlete_names_prediction_targets(client):
    for i in range(1, 6):
        register(client, f"A{i}", f"Given{i}", f"Family{i}")
    race = make_race(client)
    body = {"targets": [
        {"target_number": n, "athlete_id": f"A{n}", "predicted_position": n, "extra_rounds": 2}
        for n in range(1, 6)
    ]}

    response = client.post(f"/predictions/{race['id']}", json=body, headers={"X-User-Id": "1"})

    assert response.status_code == 200, response.text
    assert response.json()["targets"][2]["subject"]["display_name"] == "Given3 Family3"
