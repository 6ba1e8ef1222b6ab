class EmulatorError(Exception):
    status_code: int = 500


class ValidationError(EmulatorError):
    status_code = 400


class NotRunningError(EmulatorError):
    status_code = 409


class SpawnError(EmulatorError):
    status_code = 500


class PollTimeout(EmulatorError):
    status_code = 504

    def __init__(self, message: str, timeout: float):
        self.timeout = timeout
        super().__init__(message)


class StartTimeoutError(PollTimeout):
    pass


class StopTimeoutError(PollTimeout):
    pass


class TransportError(EmulatorError):
    status_code = 502

    def __init__(self, message: str, response_status: int | None = None):
        self.response_status = response_status
        super().__init__(message)
