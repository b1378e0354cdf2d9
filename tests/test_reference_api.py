from attendance_api.utils.seed_data import CAMPUSES, LEVELS, run_seed


async def test_reference_lists(client, school):
    departments = (await client.get("/departments")).json()
    campuses = (await client.get("/campuses")).json()
    levels = (await client.get("/levels")).json()

    assert departments["success"] is True
    assert [d["name"] for d in departments["data"]] == ["Software Engineering", "Nursing"]
    assert campuses["data"][1] == {"id": 2, "name": "Yaounde", "address": "Yaounde Central"}
    assert [lv["level"] for lv in levels["data"]] == ["100", "200"]


async def test_seed_is_idempotent(test_db):
    async with test_db.get_session() as session:
        first = await run_seed(session)
    async with test_db.get_session() as session:
        second = await run_seed(session)

    assert first["campuses"] == len(CAMPUSES)
    assert first["levels"] == len(LEVELS)
    assert second == {"campuses": 0, "departments": 0, "levels": 0}
