"""Tests for resource services with a mocked transport."""

import sys
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from celigo_connector.api_clients import Transport, TransportResponse
from celigo_connector.core import ConnectionService, ExportService, IntegrationService
from celigo_connector.exceptions import TransportError

from payloads import connection, export, integration


def create_mock_transport(*responses):
    """Transport whose request() returns the given responses in order."""
    transport = MagicMock(spec=Transport)
    transport.request = AsyncMock(side_effect=list(responses))
    return transport


@pytest.mark.asyncio
class TestConnectionService:
    """Connection create/update/get/list."""

    async def test_create_posts_validated_payload(self):
        transport = create_mock_transport(TransportResponse(201, {"_id": "c1", "type": "http", "name": "Shop API"}))
        service = ConnectionService(transport)

        response = await service.create(connection("http"))

        assert response.success is True
        assert response.get("_id") == "c1"
        method, path, payload = transport.request.call_args.args
        assert (method, path) == ("POST", "connections")
        assert payload["http"]["baseURI"] == "https://api.example.com/v2"

    async def test_invalid_create_never_sends(self):
        transport = create_mock_transport()
        service = ConnectionService(transport)

        response = await service.create({"type": "netsuite", "name": "NetSuite - Prod", "sandbox": False})

        assert response.success is False
        assert response.errors[0].field == "netsuite"
        assert response.errors[0].message == "netsuite subschema not defined"
        transport.request.assert_not_called()

    async def test_update_with_known_type(self):
        transport = create_mock_transport(TransportResponse(200, {"_id": "c1"}))
        service = ConnectionService(transport)

        response = await service.update("c1", connection("ftp"), current_type="ftp")

        assert response.success is True
        method, path, _ = transport.request.call_args.args
        assert (method, path) == ("PUT", "connections/c1")

    async def test_update_reads_existing_type(self):
        transport = create_mock_transport(
            TransportResponse(200, {"_id": "c1", "type": "salesforce"}),
            TransportResponse(200, {"_id": "c1"}),
        )
        service = ConnectionService(transport)

        response = await service.update("c1", connection("salesforce"))

        assert response.success is True
        calls = [call.args[:2] for call in transport.request.call_args_list]
        assert calls == [("GET", "connections/c1"), ("PUT", "connections/c1")]

    async def test_update_cannot_change_type(self):
        transport = create_mock_transport(TransportResponse(200, {"_id": "c1", "type": "netsuite"}))
        service = ConnectionService(transport)

        response = await service.update("c1", connection("http"))

        assert response.success is False
        assert response.errors[0].field == "type"
        assert transport.request.call_count == 1

    async def test_update_of_missing_resource(self):
        transport = create_mock_transport(TransportResponse(404, {"message": "Object not found"}))
        service = ConnectionService(transport)

        response = await service.update("nope", connection("http"))

        assert response.success is False
        assert response.errors[0].message == "Object not found"

    async def test_empty_id(self):
        transport = create_mock_transport()
        service = ConnectionService(transport)

        for response in (await service.get(""), await service.update("", connection("http"))):
            assert response.success is False
            assert response.errors[0].field == "_id"
            assert response.errors[0].code == "missing_required_field"
        transport.request.assert_not_called()

    async def test_transport_failure_becomes_error_arm(self):
        transport = create_mock_transport(TransportError("GET connections timed out"))
        service = ConnectionService(transport)

        response = await service.list()

        assert response.success is False
        assert response.errors[0].field == "request"
        assert response.errors[0].code == "transport_error"
        assert "timed out" in response.errors[0].message

    async def test_get_by_id(self):
        transport = create_mock_transport(TransportResponse(200, {"_id": "c1", "name": "Shop API"}))
        service = ConnectionService(transport)

        response = await service.get("c1")

        assert response.get("name") == "Shop API"
        assert transport.request.call_args.args[:2] == ("GET", "connections/c1")

    async def test_list_with_filters(self):
        transport = create_mock_transport(TransportResponse(200, [{"_id": "c1", "type": "http"}]))
        service = ConnectionService(transport)

        response = await service.list(type="http", limit=10, offset=20)

        assert response.get("items") == [{"_id": "c1", "type": "http"}]
        assert transport.request.call_args.args[:2] == ("GET", "connections?type=http&limit=10&offset=20")

    async def test_list_without_filters(self):
        transport = create_mock_transport(TransportResponse(200, []))
        service = ConnectionService(transport)

        await service.list(type="", offset=None)

        assert transport.request.call_args.args[:2] == ("GET", "connections")

    async def test_delete(self):
        transport = create_mock_transport(TransportResponse(204, None))
        service = ConnectionService(transport)

        response = await service.delete("c1")

        assert response.to_dict() == {"success": True}
        assert transport.request.call_args.args == ("DELETE", "connections/c1", None)

    async def test_delete_missing_resource(self):
        transport = create_mock_transport(TransportResponse(404, None))
        service = ConnectionService(transport)

        response = await service.delete("nope")

        assert response.success is False
        assert "not found" in response.errors[0].message.lower()

    async def test_delete_empty_id(self):
        transport = create_mock_transport()
        service = ConnectionService(transport)

        response = await service.delete("")

        assert response.errors[0].field == "_id"
        assert response.errors[0].code == "missing_required_field"
        transport.request.assert_not_called()


@pytest.mark.asyncio
class TestExportService:
    """Export specifics."""

    async def test_list_is_simplified(self):
        transport = create_mock_transport(TransportResponse(200, [
            {"_id": "e1", "name": "Orders", "adaptorType": "HTTPExport", "http": {}},
            {"_id": "e2", "name": "Customers", "adaptorType": "NetSuiteExport"},
        ]))
        service = ExportService(transport)

        response = await service.list()

        assert response.get("items") == [
            {"_id": "e1", "name": "Orders"},
            {"_id": "e2", "name": "Customers"},
        ]

    async def test_list_error_passes_through(self):
        transport = create_mock_transport(TransportResponse(401, None))
        service = ExportService(transport)

        response = await service.list()

        assert response.success is False

    async def test_list_filters_passed_through(self):
        transport = create_mock_transport(TransportResponse(200, [{"_id": "e1", "name": "Orders"}]))
        service = ExportService(transport)

        response = await service.list(limit=5)

        assert response.get("items") == [{"_id": "e1", "name": "Orders"}]
        assert transport.request.call_args.args[:2] == ("GET", "exports?limit=5")

    async def test_non_string_criteria_operator_returned_as_data(self):
        transport = create_mock_transport()
        service = ExportService(transport)
        payload = export("NetSuiteExport")
        payload["netsuite"]["restlet"]["criteria"] = [{"field": "x", "operator": ["equals"]}]

        response = await service.create(payload)

        assert response.success is False
        assert response.errors[0].field == "netsuite.restlet.criteria.0.operator"
        transport.request.assert_not_called()

    async def test_conditional_violation_returned_as_data(self):
        transport = create_mock_transport()
        service = ExportService(transport)

        response = await service.create(export("NetSuiteExport", oneToMany=True, isLookup=False))

        assert response.to_dict() == {
            "success": False,
            "errors": [{
                "field": "pathToMany",
                "code": "missing_required_field",
                "message": "pathToMany is required when oneToMany is true and isLookup is false",
            }],
        }

    async def test_create_applies_defaults(self):
        transport = create_mock_transport(TransportResponse(201, {"_id": "e1"}))
        service = ExportService(transport)

        await service.create(export("HTTPExport"))

        payload = transport.request.call_args.args[2]
        assert payload["asynchronous"] is True
        assert payload["oneToMany"] is False
        assert payload["_connectionId"] == "5f1c0ffee0000000000000a1"


@pytest.mark.asyncio
class TestIntegrationService:
    """Integrations have no discriminant, so updates are not pinned."""

    async def test_update_sends_directly(self):
        transport = create_mock_transport(TransportResponse(200, {"_id": "i1"}))
        service = IntegrationService(transport)

        response = await service.update("i1", integration())

        assert response.success is True
        assert transport.request.call_count == 1
        assert transport.request.call_args.args[:2] == ("PUT", "integrations/i1")

    async def test_extra_key_rejected(self):
        transport = create_mock_transport()
        service = IntegrationService(transport)

        response = await service.create(integration(description="not allowed"))

        assert response.success is False
        assert response.errors[0].field == "description"
