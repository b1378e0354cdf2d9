from factories import add_records, fetch_records, record

NEW_STUDENT = {
    "matricule": "CM00010",
    "name": "Dora Fon",
    "level": "300",
    "address": "Bamenda",
    "contact": "670000010",
    "departmentId": 2,
    "campusId": 1,
}


async def test_list_students_sorted_by_name(client, school):
    res = await client.get("/students")

    assert res.status_code == 200
    names = [s["name"] for s in res.json()["data"]]
    assert names == ["Alice Mbah", "Bob Nkem", "Carol Tabi"]
    assert res.json()["data"][0]["departmentCategory"] == "Engineering"


async def test_get_student(client, school):
    res = await client.get("/students/2")

    assert res.status_code == 200
    assert res.json()["data"]["campusName"] == "Yaounde"

    missing = await client.get("/students/99")
    assert missing.status_code == 404


async def test_create_student(client, school):
    res = await client.post("/students", json=NEW_STUDENT)

    assert res.status_code == 201
    data = res.json()["data"]
    assert data["matricule"] == "CM00010"
    assert data["departmentName"] == "Nursing"


async def test_duplicate_matricule_is_a_conflict(client, school):
    duplicate = {**NEW_STUDENT, "matricule": "CM00001"}

    res = await client.post("/students", json=duplicate)

    assert res.status_code == 409
    assert res.json()["success"] is False
    listing = (await client.get("/students")).json()["data"]
    assert [s["matricule"] for s in listing].count("CM00001") == 1


async def test_create_student_missing_field(client, school):
    incomplete = {k: v for k, v in NEW_STUDENT.items() if k != "contact"}

    res = await client.post("/students", json=incomplete)

    assert res.status_code == 400
    assert res.json()["success"] is False


async def test_update_student_patches_given_fields(client, school):
    res = await client.put("/students/1", json={"level": "200", "campusId": 2})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["level"] == "200"
    assert data["campusName"] == "Yaounde"
    assert data["name"] == "Alice Mbah"


async def test_update_to_taken_matricule_is_a_conflict(client, school):
    res = await client.put("/students/1", json={"matricule": "CM00002"})

    assert res.status_code == 409


async def test_update_keeping_own_matricule(client, school):
    res = await client.put("/students/1", json={"matricule": "CM00001", "name": "Alice M."})

    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Alice M."


async def test_update_missing_student(client, school):
    res = await client.put("/students/99", json={"name": "Ghost"})

    assert res.status_code == 404


async def test_delete_student_keeps_attendance(client, school):
    await add_records(school, record(3, "1"))

    res = await client.delete("/students", params={"id": "3"})

    assert res.status_code == 200
    assert (await client.get("/students/3")).status_code == 404
    assert len(await fetch_records(school, student_id=3)) == 1

    rows = (await client.get("/attendance")).json()["data"]
    assert 3 not in {r["studentId"] for r in rows}


async def test_delete_student_errors(client, school):
    assert (await client.delete("/students")).status_code == 400
    assert (await client.delete("/students", params={"id": "99"})).status_code == 404


async def test_create_student_with_unknown_department(client, school):
    res = await client.post("/students", json={**NEW_STUDENT, "departmentId": 99})

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Department 99 does not exist"}
    listing = (await client.get("/students")).json()["data"]
    assert "CM00010" not in [s["matricule"] for s in listing]


async def test_update_student_with_unknown_campus(client, school):
    res = await client.put("/students/1", json={"campusId": 99})

    assert res.status_code == 400
    assert res.json()["message"] == "Campus 99 does not exist"
    assert (await client.get("/students/1")).json()["data"]["campusId"] == 1
