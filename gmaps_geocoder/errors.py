class GeocodingError(Exception):
    """Base class for every failure raised by the geocoder"""


class ConfigurationError(GeocodingError):
    pass


class BlankRequestError(GeocodingError, ValueError):
    pass


class MalformedQueryError(GeocodingError, TypeError):
    pass


class NoAPIKeyError(GeocodingError):
    pass


class RequestTimeoutError(GeocodingError, TimeoutError):
    def __init__(self, message: str, timeout: float):
        super().__init__(message)
        self.timeout = timeout


class ResponseParseError(GeocodingError, ValueError):
    pass


class APIError(GeocodingError):
    """The service answered, but reported a failure status"""

    def __init__(self, message: str, status: int, url: str):
        super().__init__(message)
        self.status = status
        self.url = url


class APIMalformedRequestError(APIError):
    pass


class APIGeocodingError(APIError):
    pass
