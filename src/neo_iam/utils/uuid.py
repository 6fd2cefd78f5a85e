"""UUID utilities for neo-iam."""

import time
import uuid


def generate_uuid_v7() -> str:
    """
    Generate a UUIDv7 with time-based ordering.

    UUIDv7 keeps identifiers roughly insertion-ordered, which keeps
    junction and aggregate table indexes compact.

    Returns:
        String representation of UUIDv7
    """
    timestamp_ms = int(time.time() * 1000)
    timestamp_bytes = timestamp_ms.to_bytes(6, byteorder='big')

    # Remaining 80 bits are random
    random_bytes = uuid.uuid4().bytes[6:]
    uuid_bytes = timestamp_bytes + random_bytes

    # Version 7 in the high nibble of byte 6, RFC 4122 variant in byte 8
    uuid_bytes = uuid_bytes[:6] + bytes([(uuid_bytes[6] & 0x0f) | 0x70]) + uuid_bytes[7:]
    uuid_bytes = uuid_bytes[:8] + bytes([(uuid_bytes[8] & 0x3f) | 0x80]) + uuid_bytes[9:]

    return str(uuid.UUID(bytes=uuid_bytes))
