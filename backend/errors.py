class WorkerSearchError(Exception):
    code = "search_error"


class InvalidSearchRequest(WorkerSearchError):
    """Base for requests rejected before any search work is done."""
    code = "invalid_request"


class InvalidCoordinate(InvalidSearchRequest):
    code = "invalid_coordinate"


class InvalidRadius(InvalidSearchRequest):
    code = "invalid_radius"


class InvalidLimit(InvalidSearchRequest):
    code = "invalid_limit"


class UpstreamUnavailable(WorkerSearchError):
    """The catalog read failed; the engine never retries."""
    code = "upstream_unavailable"
