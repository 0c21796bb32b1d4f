class CIError(Exception):
    pass


class CIClientError(CIError):
    @property
    def code(self):
        return self._code

    @property
    def response_data(self):
        return self._response_data


class CIClientGeneralError(CIClientError):
    def __init__(self, status_code, response_data, message):
        super().__init__(status_code, response_data, message)
        self._code = status_code
        self._response_data = response_data
        self.message = message


class CIObjectNotFoundError(CIClientError):
    def __init__(self, response_data, message):
        super().__init__(response_data, message)
        self._code = 404
        self._response_data = response_data
        self.message = message


class CIUnauthorizedError(CIClientError):
    def __init__(self, status_code, response_data, message):
        super().__init__(status_code, response_data, message)
        self._code = status_code
        self._response_data = response_data
        self.message = message


class CIResponseParseError(CIError):
    pass


class CIServerFailureError(CIError):
    pass


class CIServerUnreachableError(CIServerFailureError):
    pass


class CIServer5xxCodeError(CIServerFailureError):
    pass
