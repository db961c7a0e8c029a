from app.models.domain import School


def _body(**overrides):
    body = {"name": "Pine Academy", "address": "22 Elm Road", "latitude": "0", "longitude": "1.5"}
    body.update(overrides)
    return body


class TestRoutes:

    def test_routes_registered(self) -> None:
        from app.main import app

        routes = {getattr(route, "path", None) for route in app.routes}
        for path in ("/", "/addSchool", "/listSchools", "/healthz", "/readyz", "/metrics"):
            assert path in routes

    def test_root(self, client) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["message"] == "School Management API is running"

    def test_healthz_does_not_touch_db(self, client) -> None:
        assert client.get("/healthz").json() == {"service": "school-locator", "ok": True}


class TestAddSchool:

    def test_created(self, client, store) -> None:
        resp = client.post("/addSchool", json=_body(name="  Pine Academy "))

        assert resp.status_code == 201
        payload = resp.json()
        assert payload["status"] == "success"
        assert payload["message"] == "School added successfully"
        assert payload["data"] == {
            "schoolId": 2,
            "name": "Pine Academy",
            "address": "22 Elm Road",
            "latitude": 0.0,
            "longitude": 1.5,
        }
        assert store.schools[-1].name == "Pine Academy"

    def test_invalid_name(self, client, store) -> None:
        resp = client.post("/addSchool", json=_body(name="Oa"))

        assert resp.status_code == 400
        assert resp.json() == {
            "status": "error",
            "message": "Validation failed",
            "error": "Name is required and must be at least 3 characters long",
            "kind": "InvalidName",
        }
        assert len(store.schools) == 1

    def test_missing_coordinates(self, client) -> None:
        body = _body()
        del body["latitude"]

        resp = client.post("/addSchool", json=body)

        assert resp.status_code == 400
        assert resp.json()["kind"] == "MissingField"

    def test_out_of_range(self, client) -> None:
        resp = client.post("/addSchool", json=_body(longitude=-181))

        assert resp.status_code == 400
        assert resp.json()["kind"] == "OutOfRange"

    def test_duplicate(self, client, store) -> None:
        resp = client.post("/addSchool", json=_body(name="Oak School ", address=" 1 Main St"))

        assert resp.status_code == 400
        assert resp.json()["kind"] == "DuplicateRecord"
        assert len(store.schools) == 1

    def test_store_down_is_503(self, client, store) -> None:
        store.down = True

        resp = client.post("/addSchool", json=_body())

        assert resp.status_code == 503
        assert resp.json() == {
            "status": "error",
            "message": "Service unavailable",
            "error": "Error checking for duplicates",
            "kind": "StoreUnavailable",
        }

    def test_no_body_is_invalid_name(self, client, store) -> None:
        resp = client.post("/addSchool")

        assert resp.status_code == 400
        assert resp.json() == {
            "status": "error",
            "message": "Validation failed",
            "error": "Name is required and must be at least 3 characters long",
            "kind": "InvalidName",
        }
        assert len(store.schools) == 1

    def test_non_object_body_is_invalid_name(self, client) -> None:
        for body in ([], [_body()], "Oak School", 42):
            resp = client.post("/addSchool", json=body)

            assert resp.status_code == 400
            assert resp.json()["kind"] == "InvalidName"

    def test_undecodable_json_is_invalid_name(self, client) -> None:
        resp = client.post(
            "/addSchool", content=b"{\"name\": ", headers={"Content-Type": "application/json"}
        )

        assert resp.status_code == 400
        assert resp.json()["status"] == "error"
        assert resp.json()["kind"] == "InvalidName"


class TestListSchools:

    def test_sorted_by_proximity(self, client, store) -> None:
        store.schools = [
            School(id=1, name="Far", address="2 Far Lane", latitude=0, longitude=2),
            School(id=2, name="Mid", address="1 Mid Lane", latitude=0, longitude=1),
            School(id=3, name="Near", address="0 Near Lane", latitude=0, longitude=0),
        ]

        resp = client.get("/listSchools", params={"latitude": "0", "longitude": " 0 "})

        assert resp.status_code == 200
        payload = resp.json()
        assert payload["status"] == "success"
        assert payload["userLocation"] == {"latitude": 0.0, "longitude": 0.0}
        assert payload["totalSchools"] == 3
        assert [s["id"] for s in payload["schools"]] == [3, 2, 1]
        assert [s["distance"] for s in payload["schools"]] == [0.0, 111.19, 222.39]
        assert payload["schools"][0] == {
            "id": 3,
            "name": "Near",
            "address": "0 Near Lane",
            "latitude": 0.0,
            "longitude": 0.0,
            "distance": 0.0,
        }

    def test_radius_and_limit(self, client, store) -> None:
        store.schools.append(School(id=2, name="Mid", address="1 Mid Lane", latitude=0, longitude=1))

        within_radius = client.get("/listSchools", params={"latitude": 0, "longitude": 0, "radius": 50}).json()
        limited = client.get("/listSchools", params={"latitude": 0, "longitude": 0, "limit": 1}).json()

        assert [s["id"] for s in within_radius["schools"]] == [1]
        assert within_radius["totalSchools"] == 1
        assert [s["id"] for s in limited["schools"]] == [1]

    def test_empty_store(self, client, store) -> None:
        store.schools = []

        payload = client.get("/listSchools", params={"latitude": 10, "longitude": 10}).json()

        assert payload["totalSchools"] == 0
        assert payload["schools"] == []

    def test_missing_query_params(self, client) -> None:
        resp = client.get("/listSchools", params={"latitude": "10"})

        assert resp.status_code == 400
        assert resp.json()["kind"] == "MissingField"

    def test_empty_latitude_is_missing_not_nan(self, client) -> None:
        resp = client.get("/listSchools?latitude=&longitude=10")

        assert resp.status_code == 400
        assert resp.json()["kind"] == "MissingField"

    def test_not_a_number(self, client) -> None:
        resp = client.get("/listSchools", params={"latitude": "north", "longitude": "10"})

        assert resp.status_code == 400
        assert resp.json()["kind"] == "NotANumber"

    def test_store_down_is_503(self, client, store) -> None:
        store.down = True

        resp = client.get("/listSchools", params={"latitude": 0, "longitude": 0})

        assert resp.status_code == 503
        assert resp.json()["kind"] == "StoreUnavailable"

    def test_bad_filters_use_error_envelope(self, client) -> None:
        cases = [
            ({"radius": "-1"}, "OutOfRange"),
            ({"radius": "0"}, "OutOfRange"),
            ({"radius": "far"}, "NotANumber"),
            ({"limit": "0"}, "OutOfRange"),
            ({"limit": "two"}, "NotANumber"),
        ]
        for extra, kind in cases:
            resp = client.get("/listSchools", params={"latitude": 0, "longitude": 0, **extra})

            assert resp.status_code == 400, extra
            payload = resp.json()
            assert payload["status"] == "error"
            assert payload["message"] == "Validation failed"
            assert payload["kind"] == kind
