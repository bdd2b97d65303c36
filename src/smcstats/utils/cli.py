from __future__ import annotations

import click

__all__ = ["parse_list", "parse_list_floats"]


def parse_list(ctx, param, value) -> list[str] | None:
    """
    Click callback to parse the input value into a list of strings.
    Supports single strings and comma-separated strings.

    :param ctx: Click context
    :param param: Click parameter
    :param value: The input value to parse
    :return: List of parsed strings
    """
    if value is None:
        return None

    if isinstance(value, str) and "," in value:
        # Handle comma-separated strings
        return [item.strip() for item in value.split(",") if item.strip()]

    if isinstance(value, str):
        # Handle single string
        return [value.strip()]

    # Fall back to returning as a single-item list
    return [value]


def parse_list_floats(ctx, param, value) -> list[float] | None:
    """
    Click callback to parse the input value into a list of floats.

    :param ctx: Click context
    :param param: Click parameter
    :param value: The input value to parse
    :return: List of parsed floats
    :raises click.BadParameter: If any item is not a valid float
    """
    str_list = parse_list(ctx, param, value)
    if str_list is None:
        return None

    floats = []
    for item in str_list:
        try:
            floats.append(float(item))
        except ValueError as err:
            raise click.BadParameter(
                f"Input '{value}' is not a valid comma-separated list "
                f"of floats/ints. Failed on {item!r}: {err}"
            ) from err

    return floats
