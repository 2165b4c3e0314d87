"""
Runtime protobuf bindings for ``crypto.proto``.

The file descriptor is assembled once at import time and registered in the
default descriptor pool. The resulting message classes are module-level
constants and are never mutated afterwards.
"""

from google.protobuf import descriptor_pb2 as _descriptor_pb2
from google.protobuf import descriptor_pool as _descriptor_pool
from google.protobuf.internal import builder as _builder

_PROTO_FILE_NAME = "peer_id/crypto/pb/crypto.proto"
_PROTO_PACKAGE = "peer_id.crypto.pb"

_Field = _descriptor_pb2.FieldDescriptorProto


def _build_file_descriptor() -> _descriptor_pb2.FileDescriptorProto:
    file_proto = _descriptor_pb2.FileDescriptorProto(
        name=_PROTO_FILE_NAME,
        package=_PROTO_PACKAGE,
    )

    key_type = file_proto.enum_type.add(name="KeyType")
    key_type.value.add(name="RSA", number=0)

    # PublicKey and PrivateKey share one wire layout
    for message_name in ("PublicKey", "PrivateKey"):
        message = file_proto.message_type.add(name=message_name)
        message.field.add(
            name="Type",
            number=1,
            label=_Field.LABEL_REQUIRED,
            type=_Field.TYPE_ENUM,
            type_name=f".{_PROTO_PACKAGE}.KeyType",
        )
        message.field.add(
            name="Data",
            number=2,
            label=_Field.LABEL_REQUIRED,
            type=_Field.TYPE_BYTES,
        )

    return file_proto


DESCRIPTOR = _descriptor_pool.Default().AddSerializedFile(
    _build_file_descriptor().SerializeToString()
)

_globals = globals()
_builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, _globals)
_builder.BuildTopDescriptorsAndMessages(
    DESCRIPTOR, "peer_id.crypto.pb.crypto_pb2", _globals
)
