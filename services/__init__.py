from errors import InvalidArgument

# Ids are stored in 64-bit signed integer columns
MAX_ID = 2**63 - 1


def parse_id(value, field):
    """
    Turn an id taken from a JSON body or query string into an int.

    Only integers and digit-only strings are accepted; floats are rejected
    rather than truncated. Raises InvalidArgument otherwise.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument(f"{field} is required")

    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid {field}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isdecimal():
        parsed = int(value.strip())
    else:
        raise InvalidArgument(f"Invalid {field}")

    if not 0 < parsed <= MAX_ID:
        raise InvalidArgument(f"Invalid {field}")
    return parsed
