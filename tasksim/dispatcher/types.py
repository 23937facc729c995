class DispatcherError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class DispatcherClosedError(DispatcherError):
    def __init__(self, name: str):
        super().__init__(f"Application is stopped, task '{name}' not accepted.")
        self.name = name


class TaskExecutionFailure(DispatcherError):
    def __init__(self, name: str, index: int, cause: BaseException):
        detail = str(cause) or type(cause).__name__
        super().__init__(f"Task '{name}' ({index}) failed: {detail}")
        self.name = name
        self.index = index
        self.cause = cause
