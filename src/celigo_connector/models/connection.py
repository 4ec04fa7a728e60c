"""Connection models: one variant per connector kind, tagged by ``type``."""

import json
import re
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import Field, StrictBool, StrictInt

from .shared import CeligoModel, MicroServices, NetSuiteMicroServices, Queue
from .responses import CeligoError, ErrorCode
from ..exceptions import ShapeMismatch


class ConnectionType(str, Enum):
    """Connector kinds, in create precedence order."""
    HTTP = "http"
    FTP = "ftp"
    SALESFORCE = "salesforce"
    NETSUITE = "netsuite"


# HTTP

class HttpAuthType(str, Enum):
    BASIC = "basic"
    COOKIE = "cookie"
    DIGEST = "digest"
    TOKEN = "token"


class BasicAuth(CeligoModel):
    """Credentials for basic and digest auth."""
    username: str
    password: str


class CookieAuth(CeligoModel):
    uri: str
    method: Literal["GET", "POST"]


class TokenAuth(CeligoModel):
    token: str
    location: Literal["body", "header", "url"]
    header_name: str
    scheme: Literal["Bearer", "custom", "mac", "None", " "]
    param_name: str


class HttpAuth(CeligoModel):
    type: HttpAuthType
    basic: Optional[BasicAuth] = None
    cookie: Optional[CookieAuth] = None
    token: Optional[TokenAuth] = None


class HttpPing(CeligoModel):
    relative_uri: Optional[str] = Field(None, alias="relativeURI")
    method: Optional[str] = None


class HttpSettings(CeligoModel):
    form_type: Literal["http", "graph_ql"]
    media_type: Literal["json"]
    base_uri: str = Field(..., alias="baseURI")
    unencrypted: Optional[Dict[str, Any]] = None
    encrypted: Optional[str] = None
    auth: HttpAuth
    ping: Optional[HttpPing] = None


# FTP

class FtpSettings(CeligoModel):
    type: Literal["ftp", "sftp"]
    host_uri: str = Field(..., alias="hostURI")
    username: str
    password: str
    port: Optional[StrictInt] = Field(None, ge=1, le=65535)
    use_passive_mode: Optional[StrictBool] = None
    user_directory_is_root: Optional[StrictBool] = None
    use_implicit_ftps: Optional[StrictBool] = None
    require_socket_re_use: Optional[StrictBool] = None


# Salesforce

class SalesforceSettings(CeligoModel):
    oauth2_flow_type: str
    sandbox: Optional[StrictBool] = None
    packaged_oauth: Optional[StrictBool] = Field(None, alias="packagedOAuth")
    scope: Optional[List[str]] = None
    concurrency_level: Optional[StrictInt] = Field(None, ge=0)


# NetSuite

class NetSuiteSettings(CeligoModel):
    # Opaque version string such as "2020.2"; the format is not checked
    wsdl_version: str
    concurrency_level: StrictInt = Field(1, ge=0)


# Variants

class BaseConnection(CeligoModel):
    """Fields every connection variant carries."""

    name: str = Field(..., min_length=1, description="Connection name")
    offline: Optional[StrictBool] = Field(None, description="Whether the connection is offline")
    sandbox: StrictBool = Field(..., description="Whether to use the sandbox environment")


class HttpConnection(BaseConnection):
    type: Literal["http"]
    http: HttpSettings
    micro_services: MicroServices
    queues: Optional[List[Queue]] = None


class FtpConnection(BaseConnection):
    type: Literal["ftp"]
    ftp: FtpSettings
    micro_services: MicroServices


class SalesforceConnection(BaseConnection):
    type: Literal["salesforce"]
    salesforce: SalesforceSettings
    micro_services: MicroServices
    queues: Optional[List[Queue]] = None


class NetSuiteConnection(BaseConnection):
    type: Literal["netsuite"]
    netsuite: NetSuiteSettings
    micro_services: NetSuiteMicroServices


ConnectionConfig = Union[HttpConnection, FtpConnection, SalesforceConnection, NetSuiteConnection]


# Cross-field rules, checked once the shape is accepted

HEADER_TOKEN_SCHEMES = ("Bearer", "custom", "mac", "None")


def check_http_auth(connection: HttpConnection) -> List[CeligoError]:
    """Each auth type needs its own credential block."""
    auth = connection.http.auth
    errors: List[CeligoError] = []

    required_block = {
        HttpAuthType.BASIC: "basic",
        HttpAuthType.DIGEST: "basic",
        HttpAuthType.COOKIE: "cookie",
        HttpAuthType.TOKEN: "token",
    }[auth.type]

    if getattr(auth, required_block) is None:
        errors.append(CeligoError.build(
            f"http.auth.{required_block}",
            ErrorCode.MISSING_REQUIRED_FIELD,
            f"http.auth.{required_block} is required when http.auth.type is '{auth.type.value}'",
        ))

    token = auth.token
    if auth.type == HttpAuthType.TOKEN and token is not None:
        if token.location == "header" and token.scheme not in HEADER_TOKEN_SCHEMES:
            errors.append(CeligoError.build(
                "http.auth.token.scheme",
                ErrorCode.ENUM,
                f"scheme must be one of {', '.join(HEADER_TOKEN_SCHEMES)} when location is 'header'",
            ))
        elif token.location == "body" and token.scheme != " ":
            errors.append(CeligoError.build(
                "http.auth.token.scheme",
                ErrorCode.ENUM,
                "scheme must be a single space when location is 'body'",
            ))

    return errors


# A backtick-quoted key or string value: directly after an opening bracket,
# comma or colon and directly before a colon, comma or closing bracket
BACKTICK_TOKEN = re.compile(r'(?<=[{\[,:])(\s*)`([^`"\\]*)`(?=\s*[:,}\]])')


def coerce_connection_payload(candidate: Mapping[str, Any]) -> Dict[str, Any]:
    """Accept an ``http`` block sent as a JSON string.

    Valid JSON is parsed as is. Otherwise keys and string values quoted
    with backticks, as some tool callers send them, are requoted with
    double quotes before a second parse. Backticks inside double-quoted
    strings are never rewritten.
    """
    payload = dict(candidate)
    raw = payload.get("http")
    if isinstance(raw, str):
        try:
            payload["http"] = json.loads(raw)
        except json.JSONDecodeError:
            try:
                payload["http"] = json.loads(BACKTICK_TOKEN.sub(r'\1"\2"', raw))
            except json.JSONDecodeError:
                raise ShapeMismatch([CeligoError.build(
                    "http",
                    ErrorCode.INVALID_FIELD,
                    "Invalid http property: must be an object or valid JSON string",
                )])
    return payload
