"""Command line entry point.

    celigo-connector validate connection payload.yaml
    celigo-connector schema create_export
    celigo-connector submit export payload.json --id 64f0c0ffee
"""

import argparse
import asyncio
import json
import sys
from typing import Dict, List, Optional, Type

from .api_clients.base import Transport
from .api_clients.celigo import CeligoClient
from .config.loader import ConfigLoader
from .config.settings import get_settings
from .core import ConnectionService, ExportService, IntegrationService, ResourceService, TaggedResourceService
from .exceptions import CeligoConnectorError, ConfigValidationError
from .models.responses import ApiResponse, failure, success
from .schema.registry import OPERATION_DEFINITIONS
from .utils.logging import get_logger, setup_logging


SERVICES: Dict[str, Type[ResourceService]] = {
    "connection": ConnectionService,
    "export": ExportService,
    "integration": IntegrationService,
}


class _OfflineTransport(Transport):
    """Placeholder transport for local-only validation; never sends anything."""

    async def request(self, method, path, payload=None):
        raise CeligoConnectorError("Offline transport cannot send requests")


def validate_payload(resource: str, payload, current_type: Optional[str] = None) -> ApiResponse:
    """Validate a payload locally and return the envelope the service would produce."""
    service = SERVICES[resource](_OfflineTransport())
    try:
        if current_type is not None and isinstance(service, TaggedResourceService):
            model = service.schemas.validate_update(current_type, payload)
        else:
            model = service.validate_create(payload)
    except ConfigValidationError as e:
        return failure(e.errors)
    return success(model.to_payload())


async def submit_payload(
    resource: str,
    payload,
    resource_id: Optional[str] = None,
    current_type: Optional[str] = None,
) -> ApiResponse:
    """Create (or, with an ID, update) a resource on the platform."""
    async with CeligoClient() as client:
        service = SERVICES[resource](client)
        if resource_id:
            return await service.update(resource_id, payload, current_type=current_type)
        return await service.create(payload)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="celigo-connector", description=settings.name)
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--version", action="version", version=f"%(prog)s {settings.version}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate a payload file without sending it")
    validate.add_argument("resource", choices=sorted(SERVICES))
    validate.add_argument("file", help="JSON or YAML payload")
    validate.add_argument("--current-type", default=None, help="Validate as an update of this variant")

    schema = subparsers.add_parser("schema", help="Print the schema of an operation")
    schema.add_argument("operation", nargs="?", choices=sorted(OPERATION_DEFINITIONS))
    schema.add_argument("--list", action="store_true", help="List operation names")

    submit = subparsers.add_parser("submit", help="Validate and send a payload")
    submit.add_argument("resource", choices=sorted(SERVICES))
    submit.add_argument("file", help="JSON or YAML payload")
    submit.add_argument("--id", dest="resource_id", default=None, help="Update this resource instead of creating")
    submit.add_argument("--current-type", default=None, help="Known variant of the resource being updated")

    return parser


def _print_response(response: ApiResponse) -> int:
    print(json.dumps(response.to_dict(), indent=2))
    return 0 if response.success else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level)
    logger = get_logger("main")

    if args.command == "schema":
        if args.list or not args.operation:
            for name, definition in OPERATION_DEFINITIONS.items():
                print(f"{name}: {definition['description']}")
            return 0
        print(json.dumps(OPERATION_DEFINITIONS[args.operation], indent=2))
        return 0

    try:
        payload = ConfigLoader().load_payload(args.file)

        if args.command == "validate":
            return _print_response(validate_payload(args.resource, payload, args.current_type))

        response = asyncio.run(submit_payload(args.resource, payload, args.resource_id, args.current_type))
        return _print_response(response)
    except CeligoConnectorError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
