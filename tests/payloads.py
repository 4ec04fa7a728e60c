"""Minimal valid payloads shared by the test modules."""

import copy


MICRO_SERVICES = {
    "disableNetSuiteWebServices": False,
    "disableRdbms": False,
    "disableDataWarehouse": False,
}

CONNECTIONS = {
    "http": {
        "type": "http",
        "name": "Shop API",
        "sandbox": False,
        "http": {
            "formType": "http",
            "mediaType": "json",
            "baseURI": "https://api.example.com/v2",
            "auth": {
                "type": "basic",
                "basic": {"username": "integrator", "password": "s3cret"},
            },
        },
        "microServices": MICRO_SERVICES,
    },
    "ftp": {
        "type": "ftp",
        "name": "Warehouse SFTP",
        "sandbox": False,
        "ftp": {
            "type": "sftp",
            "hostURI": "sftp.example.com",
            "username": "warehouse",
            "password": "s3cret",
        },
        "microServices": MICRO_SERVICES,
    },
    "salesforce": {
        "type": "salesforce",
        "name": "Salesforce - Prod",
        "sandbox": False,
        "salesforce": {"oauth2FlowType": "refreshToken"},
        "microServices": MICRO_SERVICES,
    },
    "netsuite": {
        "type": "netsuite",
        "name": "NetSuite - Prod",
        "sandbox": False,
        "netsuite": {"wsdlVersion": "2020.2"},
        "microServices": {"disableRdbms": False},
    },
}

EXPORTS = {
    "HTTPExport": {
        "adaptorType": "HTTPExport",
        "name": "Orders",
        "_connectionId": "5f1c0ffee0000000000000a1",
        "apiIdentifier": "e1a2b3c4d5",
        "http": {"relativeURI": "/orders", "method": "GET", "formType": "http"},
    },
    "RDBMSExport": {
        "adaptorType": "RDBMSExport",
        "name": "Customers table",
        "_connectionId": "5f1c0ffee0000000000000a2",
        "apiIdentifier": "e2a2b3c4d5",
        "asynchronous": True,
        "oneToMany": False,
        "sandbox": False,
        "rdbms": {"query": "SELECT id, email FROM customers"},
    },
    "SalesforceExport": {
        "adaptorType": "SalesforceExport",
        "name": "Accounts",
        "_connectionId": "5f1c0ffee0000000000000a3",
        "apiIdentifier": "e3a2b3c4d5",
        "asynchronous": True,
        "oneToMany": False,
        "sandbox": False,
        "salesforce": {
            "type": "soql",
            "api": "rest",
            "soql": {"query": "SELECT Id, Name FROM Account"},
        },
    },
    "NetSuiteExport": {
        "adaptorType": "NetSuiteExport",
        "name": "Customers",
        "_connectionId": "5f1c0ffee0000000000000a4",
        "apiIdentifier": "e4a2b3c4d5",
        "netsuite": {
            "type": "restlet",
            "restlet": {"recordType": "customer", "searchId": "1234"},
        },
    },
}

INTEGRATION = {
    "name": "Order to cash",
    "flowGroupings": [{"name": "Inbound"}, {"name": "Outbound"}],
}


def connection(kind, **overrides):
    """Deep copy of a minimal connection with top-level overrides applied."""
    payload = copy.deepcopy(CONNECTIONS[kind])
    payload.update(overrides)
    return payload


def export(adaptor_type, **overrides):
    payload = copy.deepcopy(EXPORTS[adaptor_type])
    payload.update(overrides)
    return payload


def integration(**overrides):
    payload = copy.deepcopy(INTEGRATION)
    payload.update(overrides)
    return payload


def without(payload, path):
    """Copy of ``payload`` with the dotted ``path`` removed."""
    payload = copy.deepcopy(payload)
    *parents, leaf = path.split(".")
    target = payload
    for key in parents:
        target = target[key]
    del target[leaf]
    return payload
