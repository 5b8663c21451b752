"""
Helper functions to assist in the API feature of the application
"""

import json


PAGINATION_ARGS = ("start", "limit")


def make_list_api_response(values: list, start: int, limit: int,
                           is_last: bool, filter_str: str, total_count: int) -> dict:
    """
    make_list_api_response A single location to make the response object
    that all multi document GETs should return

    :param values: List of values to be the payload of the dict
    :param start: That start value used to generate the values
    :param limit: The value the results were limited to
    :param is_last: Boolean to describe if the return data is the last avaiable
    :param filter_str: String containing the filters used to generate the data
    :param total_count: The total number of documents that can be returned
    :return A python dict that is proper API format
    """

    data = {
        "size": len(values),
        "total_count": total_count,
        "limit": limit,
        "isLastPage": is_last,
        "values": values,
        "start": start,
        "filter": filter_str,
        "nextPageStart": None if is_last else start + limit
    }

    return data


def make_api_message(status, message: str) -> dict:
    """
    make_api_message Makes the status return object

    :param status: The status of the message
    :param message: The message to set
    :return The dict message object
    """

    data = {
        "status": status,
        "message": message
    }

    return data


def parse_arg_value(value: str):
    """
    parse_arg_value Convert a query string value to a JSON scalar if it is one

    :param value: The raw query string value
    :return int, float, bool or None for JSON scalars, the string otherwise
    """

    try:
        parsed = json.loads(value)
    except ValueError:
        return value

    if parsed is None or isinstance(parsed, (bool, int, float)):
        return parsed
    return value


def arg_matches(value, raw: str) -> bool:
    """
    arg_matches Check a document value against a raw query string value

    The stored value decides how the query value is read, so a string
    property holding "123" matches ?prop=123 and a number property holding
    123 matches it too.

    :param value: The document value
    :param raw: The raw query string value
    :return True if the values are equal
    """

    if isinstance(value, str):
        return value == raw

    parsed = parse_arg_value(raw)
    if value is None or isinstance(value, bool):
        return parsed is value
    if isinstance(value, (int, float)):
        return not isinstance(parsed, bool) and isinstance(parsed, (int, float)) and parsed == value
    return False


def get_arg_predicate(request_args, current_filter):
    """
    get_arg_predicate Build an equality predicate from the URL Args

    Pagination arguments are skipped. A repeated argument keeps its last value.
    Values stay raw strings, see arg_matches.

    :param request_args: The request args
    :param current_filter: Current filter string values
    :return Tuple with the predicate dict and the filter string
    """

    predicate = {}
    filter_parts = [] if not current_filter else [current_filter]

    for search_key in request_args:
        if search_key in PAGINATION_ARGS:
            continue

        search_value = request_args.getlist(search_key)[-1]
        predicate[search_key] = search_value
        filter_parts.append(f"{search_key}={search_value}")

    return predicate, "&".join(filter_parts)


def get_start_limit(request_args, *, start_default, limit_default, current_filter):
    """
    get_start_limit Get the 'start' and 'limit' value from the request args

    :param request_args: The request args
    :param start_default: The default for 'start'
    :param limit_default: The default for 'limit'
    :param current_filter: Current filter string values
    :return Tuple with the start, limit, and filter values
    """

    # Setup default
    start = start_default
    limit = limit_default
    filter_str = current_filter

    # Load start int
    if "start" in request_args:
        try:
            start = int(request_args["start"])
        except ValueError as ex:
            raise ValueError("Could not convert 'start' query parameters to int.") from ex

        filter_str = "" if filter_str is None else filter_str
        set_filter = f"start={start}"
        filter_str = set_filter if len(filter_str) == 0 else filter_str + "&" + set_filter

    # Load limit int
    if "limit" in request_args:
        try:
            limit = int(request_args["limit"])
        except ValueError as ex:
            raise ValueError("Could not convert 'limit' query parameters to int.") from ex

        filter_str = "" if filter_str is None else filter_str
        set_filter = f"limit={limit}"
        filter_str = set_filter if len(filter_str) == 0 else filter_str + "&" + set_filter

    if start < 0:
        raise ValueError("Start parameter must be non-negative")
    if limit <= 0:
        raise ValueError("Limit parameter must be positive")

    return start, limit, filter_str
