from datetime import datetime, timedelta, timezone

from biathlon_targets.schemas.prediction import AthleteSubject, CountrySubject, TargetIn


def make_race(client, short_description="Men 10 km Sprint", hours_to_start=24, external_id="BT2526SWRLCP01SMSP"):
    start = datetime.now(timezone.utc) + timedelta(hours=hours_to_start)
    response = client.post("/races/", json={
        "external_id": external_id,
        "name": "World Cup Östersund",
        "short_description": short_description,
        "location": "Östersund",
        "start_time": start.isoformat(),
    })
    assert response.status_code == 200, response.text
    return response.json()


def athlete_targets(ids, positions, rounds):
    return [
        TargetIn(
            target_number=n,
            subject=AthleteSubject(athlete_id=i),
            predicted_position=p,
            extra_rounds=r,
        )
        for n, (i, p, r) in enumerate(zip(ids, positions, rounds), start=1)
    ]


def country_targets(codes, positions, rounds):
    return [
        TargetIn(
            target_number=n,
            subject=CountrySubject(country_code=c),
            predicted_position=p,
            extra_rounds=r,
        )
        for n, (c, p, r) in enumerate(zip(codes, positions, rounds), start=1)
    ]
