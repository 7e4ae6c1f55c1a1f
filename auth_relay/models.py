"""
Auth Relay Data Models
"""

from enum import Enum
from typing import Optional, Dict, Any, Mapping, Union, Literal

from pydantic import BaseModel, Field, ValidationError

from .exceptions import (
    ErrorCode,
    InvalidArgumentsError,
    UnsupportedMethodError,
)


class RelayMethod(str, Enum):
    """Method names accepted on the relay channel"""

    GET_AUTH_ME = "getAuthMe"
    FETCH = "fetch"
    POST = "post"

    @property
    def http_method(self) -> str:
        return "POST" if self is RelayMethod.POST else "GET"


class MethodCall(BaseModel):
    """Incoming invocation: method name plus argument map"""

    method: str
    arguments: Dict[str, Any] = Field(default_factory=dict)

    def argument(self, key: str) -> Optional[Any]:
        return self.arguments.get(key)

    @classmethod
    def from_raw(cls, method: Any, arguments: Any) -> "MethodCall":
        """
        Build a call from whatever the transport delivered.

        The method name is checked before the arguments, so an unknown
        method is reported as such whatever arguments came with it.

        Raises:
            UnsupportedMethodError: If the method name is not recognised
            InvalidArgumentsError: If the arguments are not a string-keyed map
        """
        if not isinstance(method, str) or method not in {m.value for m in RelayMethod}:
            raise UnsupportedMethodError(method)

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidArgumentsError("arguments must be a map", field="arguments")

        try:
            return cls(method=method, arguments=dict(arguments))
        except ValidationError:
            raise InvalidArgumentsError("arguments must be a map", field="arguments")


class RelayRequest(BaseModel):
    """Validated request ready to be sent"""

    relay_method: RelayMethod
    url: str
    token: str
    body: Optional[str] = None

    @property
    def method(self) -> str:
        return self.relay_method.http_method

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Connection": "close",
        }

    @classmethod
    def from_call(cls, call: MethodCall) -> "RelayRequest":
        """
        Validate a method call and build the request.

        Args:
            call: Incoming method call

        Returns:
            RelayRequest

        Raises:
            UnsupportedMethodError: If the method name is not recognised
            InvalidArgumentsError: If url, token or body is missing
        """
        try:
            relay_method = RelayMethod(call.method)
        except ValueError:
            raise UnsupportedMethodError(call.method)

        url = call.argument("url")
        if url is None:
            raise InvalidArgumentsError("url required", field="url")

        token = call.argument("token")
        if token is None:
            raise InvalidArgumentsError("token required", field="token")

        body = None
        if relay_method is RelayMethod.POST:
            body = call.argument("body")
            if body is None:
                raise InvalidArgumentsError("body required", field="body")
            body = str(body)

        return cls(relay_method=relay_method, url=str(url), token=str(token), body=body)


class Success(BaseModel):
    """Completed HTTP exchange, whatever the status code"""

    kind: Literal["success"] = "success"
    status_code: int
    body: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body}


class Failure(BaseModel):
    """Terminal error reported to the caller"""

    kind: Literal["failure"] = "failure"
    code: ErrorCode
    message: str = ""


Outcome = Union[Success, Failure]
