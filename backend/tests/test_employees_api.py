"""
Employee API — HTTP Endpoint Tests
===================================

What:  Tests for /employees and /health through the full FastAPI stack.
How:   HTTPX AsyncClient over ASGITransport (no server); the app uses the
       per-test EmployeeStore from conftest.py.

What we test:
    ✅ Create → 201 {"id": n}; lookup → 200; unknown id → 404 with empty body
    ✅ Name and salary filters on GET /employees
    ✅ Blank/missing required fields and malformed values → 400
    ✅ X-Request-ID propagation (unsafe client values replaced)
    ✅ /health reports degraded after a failed write
    ✅ Access log lines, including the storage=degraded marker
"""

import logging
from unittest.mock import patch

import pytest


class TestEmployeeScenario:
    """The canonical create → get → list → miss flow."""

    @pytest.mark.asyncio
    async def test_ada_lovelace_flow(self, test_client, ada_payload):
        response = await test_client.post("/employees", json=ada_payload)
        assert response.status_code == 201
        assert response.json() == {"id": 1}

        response = await test_client.get("/employees/1")
        assert response.status_code == 200
        assert response.json() == {
            "id": 1,
            "firstName": "Ada",
            "lastName": "Lovelace",
            "dateOfBirth": None,
            "salary": 90000.0,
            "joinDate": None,
            "department": "Engineering",
        }

        response = await test_client.get("/employees", params={"name": "ada"})
        assert response.status_code == 200
        assert [e["id"] for e in response.json()] == [1]

        response = await test_client.get("/employees/2")
        assert response.status_code == 404
        assert response.content == b""


class TestCreateEmployee:
    """Tests for POST /employees."""

    @pytest.mark.asyncio
    async def test_ids_increment(self, test_client, ada_payload):
        first = await test_client.post("/employees", json=ada_payload)
        second = await test_client.post("/employees", json=ada_payload)

        assert first.json() == {"id": 1}
        assert second.json() == {"id": 2}

    @pytest.mark.asyncio
    async def test_dates_round_trip_as_iso_strings(self, test_client, ada_payload):
        ada_payload.update({"dateOfBirth": "1815-12-10", "joinDate": "1843-07-01"})
        await test_client.post("/employees", json=ada_payload)

        body = (await test_client.get("/employees/1")).json()

        assert body["dateOfBirth"] == "1815-12-10"
        assert body["joinDate"] == "1843-07-01"

    @pytest.mark.asyncio
    async def test_client_id_is_ignored(self, test_client, ada_payload):
        ada_payload["id"] = 42
        response = await test_client.post("/employees", json=ada_payload)

        assert response.json() == {"id": 1}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["firstName", "lastName", "department"])
    async def test_blank_required_field_rejected(self, test_client, ada_payload, field):
        ada_payload[field] = "   "
        response = await test_client.post("/employees", json=ada_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert any(field in error["field"] for error in body["details"]["errors"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["firstName", "lastName", "department"])
    async def test_missing_required_field_rejected(self, test_client, ada_payload, field):
        del ada_payload[field]
        response = await test_client.post("/employees", json=ada_payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value",
        [
            ("dateOfBirth", "10/12/1815"),
            ("joinDate", "2024-13-01"),
            ("salary", 1234567),      # 7 integer digits
            ("salary", 100.1234),     # 4 fractional digits
            ("salary", "lots"),
        ],
    )
    async def test_malformed_optional_field_rejected(self, test_client, ada_payload, field, value):
        ada_payload[field] = value
        response = await test_client.post("/employees", json=ada_payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_nothing_stored_on_rejection(self, test_client, store, ada_payload):
        ada_payload["department"] = ""
        await test_client.post("/employees", json=ada_payload)

        assert store.count == 0


class TestListEmployees:
    """Tests for GET /employees filters."""

    async def _seed(self, client):
        people = [
            ("John", "Smith", 55000),
            ("Ada", "Lovelace", 90000),
            ("Jane", "Smithers", 80000),
            ("Alan", "Turing", None),
        ]
        for first, last, salary in people:
            payload = {"firstName": first, "lastName": last, "department": "R&D"}
            if salary is not None:
                payload["salary"] = salary
            await client.post("/employees", json=payload)

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_array(self, test_client):
        response = await test_client.get("/employees")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_no_filters_returns_all_in_order(self, test_client):
        await self._seed(test_client)

        response = await test_client.get("/employees")

        assert [e["id"] for e in response.json()] == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_name_filter_case_insensitive(self, test_client):
        await self._seed(test_client)

        response = await test_client.get("/employees", params={"name": "SMITH"})

        assert [e["lastName"] for e in response.json()] == ["Smith", "Smithers"]

    @pytest.mark.asyncio
    async def test_salary_range_inclusive(self, test_client):
        await self._seed(test_client)

        response = await test_client.get(
            "/employees", params={"fromSalary": "50000", "toSalary": "80000"}
        )

        assert [e["id"] for e in response.json()] == [1, 3]

    @pytest.mark.asyncio
    async def test_combined_filters(self, test_client):
        await self._seed(test_client)

        response = await test_client.get(
            "/employees", params={"name": "smith", "fromSalary": "60000"}
        )

        assert [e["firstName"] for e in response.json()] == ["Jane"]

    @pytest.mark.asyncio
    async def test_non_numeric_salary_bound_rejected(self, test_client):
        response = await test_client.get("/employees", params={"fromSalary": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestGetEmployee:
    """Tests for GET /employees/{id}."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("employee_id", ["0", "-1", "2"])
    async def test_unknown_ids_are_404(self, test_client, ada_payload, employee_id):
        await test_client.post("/employees", json=ada_payload)

        response = await test_client.get(f"/employees/{employee_id}")

        assert response.status_code == 404
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_non_integer_id_rejected(self, test_client):
        response = await test_client.get("/employees/abc")

        assert response.status_code == 400


class TestRequestId:
    """Tests for X-Request-ID handling."""

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/employees")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_value_echoed(self, test_client):
        response = await test_client.get("/employees", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_included_in_error_body(self, test_client):
        response = await test_client.post(
            "/employees", json={}, headers={"X-Request-ID": "trace-400"}
        )

        assert response.json()["request_id"] == "trace-400"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["has spaces", "x" * 65, "semi;colon"])
    async def test_unsafe_client_value_replaced(self, test_client, header):
        response = await test_client.get("/employees", headers={"X-Request-ID": header})

        rid = response.headers["X-Request-ID"]
        assert rid != header
        assert len(rid) == 8


class TestHealth:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_healthy_when_persisting(self, test_client, ada_payload):
        await test_client.post("/employees", json=ada_payload)

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "persisted"
        assert body["employee_count"] == 1

    @pytest.mark.asyncio
    async def test_degraded_after_failed_write(self, test_client, ada_payload):
        """A failed write still returns 201, and health reports the divergence."""
        with patch("aiofiles.open", side_effect=OSError("read-only file system")):
            response = await test_client.post("/employees", json=ada_payload)

        assert response.status_code == 201
        assert response.json() == {"id": 1}

        body = (await test_client.get("/health")).json()
        assert body["status"] == "degraded"
        assert body["storage"] == "degraded"
        assert body["employee_count"] == 1

        # The record is still served from memory
        assert (await test_client.get("/employees/1")).status_code == 200


class TestAccessLog:
    """Tests for the per-request access log line."""

    @staticmethod
    def _access_records(caplog):
        return [r for r in caplog.records if r.name == "employee_api.access"]

    @pytest.mark.asyncio
    async def test_request_logged_with_status_and_id(self, test_client, ada_payload, caplog):
        caplog.set_level(logging.INFO, logger="employee_api.access")

        await test_client.post("/employees", json=ada_payload, headers={"X-Request-ID": "log-1"})

        (record,) = self._access_records(caplog)
        assert record.levelno == logging.INFO
        message = record.getMessage()
        assert message.startswith("POST /employees 201 ")
        assert "[log-1]" in message
        assert "storage=degraded" not in message

    @pytest.mark.asyncio
    async def test_health_and_docs_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="employee_api.access")

        await test_client.get("/health")
        await test_client.get("/docs")

        assert self._access_records(caplog) == []

    @pytest.mark.asyncio
    async def test_degraded_store_marked_in_log(self, test_client, ada_payload, caplog):
        caplog.set_level(logging.INFO, logger="employee_api")

        with patch("aiofiles.open", side_effect=OSError("read-only file system")):
            await test_client.post("/employees", json=ada_payload)

        (record,) = self._access_records(caplog)
        assert record.levelno == logging.WARNING
        assert record.getMessage().endswith("storage=degraded")

        route_warnings = [
            r for r in caplog.records
            if r.name == "employee_api.routes.employees" and r.levelno == logging.WARNING
        ]
        assert len(route_warnings) == 1
        assert "Employee 1 accepted but held in memory only" in route_warnings[0].getMessage()
