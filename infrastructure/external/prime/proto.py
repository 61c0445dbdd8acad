"""Protocol buffer messages and stubs for ``PrimeService``.

This module is the only definition of the schema:

    package proto;
    service PrimeService { rpc Get(Request) returns (Response) {} }
    message Request  { int64 query  = 1; }
    message Response { int64 answer = 1; }

The descriptors are registered at import time in a private pool, so no
protoc step is needed to talk to the backend.
"""
from __future__ import annotations

from typing import Any

import grpc
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory


PROTO_PACKAGE = "proto"
DEFAULT_SERVICE = f"{PROTO_PACKAGE}.PrimeService"

_F = descriptor_pb2.FieldDescriptorProto


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name="prime.proto",
        package=PROTO_PACKAGE,
        syntax="proto3",
    )
    for message_name, field_name in (("Request", "query"), ("Response", "answer")):
        msg = fdp.message_type.add(name=message_name)
        msg.field.add(
            name=field_name,
            json_name=field_name,
            number=1,
            type=_F.TYPE_INT64,
            label=_F.LABEL_OPTIONAL,
        )
    svc = fdp.service.add(name="PrimeService")
    svc.method.add(
        name="Get",
        input_type=f".{PROTO_PACKAGE}.Request",
        output_type=f".{PROTO_PACKAGE}.Response",
    )
    return fdp


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())

Request = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PROTO_PACKAGE}.Request"))
Response = message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PROTO_PACKAGE}.Response"))


def method_path(service: str = DEFAULT_SERVICE) -> str:
    return f"/{service}/Get"


class PrimeServiceStub:
    """Client stub, shaped like a protoc-generated ``*_pb2_grpc`` stub."""

    def __init__(self, channel: grpc.aio.Channel, service: str = DEFAULT_SERVICE) -> None:
        self.Get = channel.unary_unary(
            method_path(service),
            request_serializer=Request.SerializeToString,
            response_deserializer=Response.FromString,
        )


class PrimeServiceServicer:
    """Server base class; subclasses implement ``Get``."""

    async def Get(self, request: Any, context: grpc.aio.ServicerContext) -> Any:
        await context.abort(grpc.StatusCode.UNIMPLEMENTED, "Method not implemented!")


def add_PrimeServiceServicer_to_server(
    servicer: PrimeServiceServicer,
    server: grpc.aio.Server,
    service: str = DEFAULT_SERVICE,
) -> None:
    handlers = {
        "Get": grpc.unary_unary_rpc_method_handler(
            servicer.Get,
            request_deserializer=Request.FromString,
            response_serializer=Response.SerializeToString,
        ),
    }
    server.add_generic_rpc_handlers((grpc.method_handlers_generic_handler(service, handlers),))


__all__ = [
    "DEFAULT_SERVICE",
    "Request",
    "Response",
    "PrimeServiceStub",
    "PrimeServiceServicer",
    "add_PrimeServiceServicer_to_server",
    "method_path",
]
